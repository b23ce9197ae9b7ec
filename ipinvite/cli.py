"""
Command line interface for creating, reading and testing invites.

Examples:
    ipinvite encode 203.0.113.7 60000 --format words
    ipinvite decode 7F000001C350
    ipinvite host --local --port 60000
    ipinvite connect 203.0.113.7:60000 --message "hi"
"""
import base64
import time

import click

from ipinvite.core import NETWORK, STUN, InviteError, StunError
from ipinvite.core.logging import set_log_level
from ipinvite.data import Endpoint
from ipinvite.invite import InviteFormat, InviteRegistry, default_registry
from ipinvite.network import InviteHost, get_local_ip, get_public_ip, send_to_invite

FORMAT_CHOICES = [f.value for f in InviteFormat if f is not InviteFormat.UNKNOWN] + ["all"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _endpoint(ip: str, port: int) -> Endpoint:
    try:
        return Endpoint(ip, port)
    except InviteError as e:
        raise click.ClickException(str(e))


def _words():
    return default_registry().converter(InviteFormat.WORDS)


def text_invites(endpoint: Endpoint, dictionary_id: int = 0,
                 registry: InviteRegistry | None = None) -> dict[InviteFormat, str]:
    """Every invite that can be typed or read aloud, in detection order"""
    registry = registry or default_registry()
    return {f: registry.encode(endpoint, f, dictionary_id) for f in registry.formats if f is not InviteFormat.QR_IMAGE}


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None,
              help="Override IPINVITE_LOG_LEVEL")
def cli(log_level: str | None):
    """Share an IPv4 endpoint as a short invite"""
    if log_level:
        set_log_level(log_level)


@cli.command("encode")
@click.argument("ip", type=str)
@click.argument("port", type=int)
@click.option("--format", "fmt", type=click.Choice(FORMAT_CHOICES, case_sensitive=False), default="all",
              show_default=True)
@click.option("--dictionary", "dictionary_id", type=int, default=0, show_default=True,
              help="Dictionary id for the words format")
@click.option("--png", type=click.Path(writable=True, dir_okay=False), default=None,
              help="Also write the QR image to this file")
def encode_cmd(ip: str, port: int, fmt: str, dictionary_id: int, png: str | None):
    endpoint = _endpoint(ip, port)
    registry = default_registry()
    try:
        if fmt == "all":
            invites = registry.encode_all(endpoint, dictionary_id)
        else:
            invite_format = InviteFormat.from_name(fmt)
            invites = {invite_format: registry.encode(endpoint, invite_format, dictionary_id)}
    except InviteError as e:
        raise click.ClickException(str(e))

    for invite_format, invite in invites.items():
        click.echo(f"{invite_format.value}: {invite}" if len(invites) > 1 else invite)

    if png is not None:
        try:
            qr_invite = invites.get(InviteFormat.QR_IMAGE) or registry.encode(endpoint, InviteFormat.QR_IMAGE)
            with open(png, "wb") as f:
                f.write(base64.b64decode(qr_invite))
        except InviteError as e:
            raise click.ClickException(str(e))
        except OSError as e:
            raise click.ClickException(f"Unable to write {png}: {e}")
        click.echo(f"Wrote QR image: {png}", err=True)


@cli.command("encode-address")
@click.argument("ip", type=str)
@click.option("--dictionary", "dictionary_id", type=int, default=0, show_default=True)
def encode_address_cmd(ip: str, dictionary_id: int):
    """Encode an IPv4 address without a port as five words"""
    try:
        click.echo(_words().encode_address(ip, dictionary_id))
    except InviteError as e:
        raise click.ClickException(str(e))


@cli.command("decode")
@click.argument("invite", type=str)
def decode_cmd(invite: str):
    """Detect the format of an invite and print the endpoint"""
    try:
        result = default_registry().detect(invite)
    except InviteError as e:
        raise click.ClickException(str(e))
    if not result.ok:
        click.echo("unknown", err=True)
        raise SystemExit(1)
    click.echo(f"{result.format.value}: {result.endpoint}")


@cli.command("decode-address")
@click.argument("invite", type=str)
def decode_address_cmd(invite: str):
    """Decode a five word invite made without a port"""
    try:
        ip, dictionary_id = _words().decode_address(invite)
    except InviteError as e:
        raise click.ClickException(str(e))
    click.echo(f"{ip} (dictionary {dictionary_id})")


@cli.command("public-ip")
@click.option("--server", type=str, default=STUN.SERVER, show_default=True)
@click.option("--port", type=int, default=STUN.PORT, show_default=True)
def public_ip_cmd(server: str, port: int):
    try:
        click.echo(str(get_public_ip(server, port)))
    except StunError as e:
        raise click.ClickException(str(e))


@cli.command("host")
@click.option("--port", type=int, default=NETWORK.DEFAULT_PORT, show_default=True)
@click.option("--ip", "ip", type=str, default=None, help="Address to advertise in the invite")
@click.option("--public/--local", default=False, help="Advertise the STUN-discovered or the local address")
@click.option("--dictionary", "dictionary_id", type=int, default=0, show_default=True)
def host_cmd(port: int, ip: str | None, public: bool, dictionary_id: int):
    """Listen for connections and print the invites that reach this host"""
    try:
        advertised = ip or str(get_public_ip() if public else get_local_ip())
    except StunError as e:
        raise click.ClickException(str(e))

    def show(message):
        click.echo(f"[{message.peer[0]}:{message.peer[1]}] {message.text}")

    host = InviteHost(port=port, on_message=show)
    try:
        host.start()
    except OSError as e:
        raise click.ClickException(f"Unable to listen on port {port}: {e}")

    try:
        endpoint = _endpoint(advertised, host.port)
        for invite_format, invite in text_invites(endpoint, dictionary_id).items():
            click.echo(f"{invite_format.value}: {invite}")
        click.echo("Waiting for connections. Press Ctrl+C to stop.")
        while host.is_running:
            time.sleep(NETWORK.ACCEPT_POLL)
    except KeyboardInterrupt:
        pass
    except InviteError as e:
        raise click.ClickException(str(e))
    finally:
        host.stop()


@cli.command("connect")
@click.argument("invite", type=str)
@click.option("--message", type=str, default=NETWORK.DEFAULT_MESSAGE, show_default=True)
@click.option("--timeout", type=float, default=NETWORK.CONNECT_TIMEOUT, show_default=True)
def connect_cmd(invite: str, message: str, timeout: float):
    """Send a message to the host behind an invite"""
    try:
        result = send_to_invite(invite, message, timeout)
    except (InviteError, ConnectionError) as e:
        raise click.ClickException(str(e))
    click.echo(f"Sent to {result.endpoint} ({result.format.value})")


if __name__ == "__main__":
    cli()
