"""
A demonstration TCP host and client for checking that an invite is reachable.

The host accepts connections on a background thread and reads each one to EOF. The client decodes any invite format,
connects with a timeout and sends a single UTF-8 message.
"""
import ipaddress as IP
import socket
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from ipinvite.core import NETWORK, MalformedInviteError
from ipinvite.core.logging import get_logger
from ipinvite.invite import DecodeResult, InviteRegistry, default_registry

__all__ = ["ReceivedMessage", "InviteHost", "open_connection", "send_to_invite", "get_local_ip"]

logger = get_logger(__name__)

RECV_BYTES = 4096


@dataclass(frozen=True)
class ReceivedMessage:
    peer: tuple[str, int]
    text: str


def get_local_ip() -> IP.IPv4Address:
    """
    The IPv4 address of the interface used for outbound traffic, loopback if there is none
    """
    # Connecting a UDP socket sends nothing; it only selects the route
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            sock.connect(NETWORK.PROBE_ADDRESS)
            return IP.IPv4Address(sock.getsockname()[0])
        except OSError:
            return IP.IPv4Address("127.0.0.1")


class InviteHost:
    """
    Listens for connections made from an invite and records every message received
    """

    def __init__(self, port: int = NETWORK.DEFAULT_PORT, bind_ip: str = "0.0.0.0",
                 on_message: Optional[Callable[[ReceivedMessage], None]] = None):
        self.bind_ip = bind_ip
        self.port = port
        self.on_message = on_message
        self.messages: list[ReceivedMessage] = []

        self._sock: Optional[socket.socket] = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._received = threading.Condition()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "InviteHost":
        if self.is_running:
            return self
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.bind_ip, self.port))
            sock.listen()
        except OSError:
            sock.close()
            raise
        sock.settimeout(NETWORK.ACCEPT_POLL)

        # Port 0 asks the OS for a free port
        self.port = sock.getsockname()[1]
        self._sock = sock
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._serve, name=f"invite-host-{self.port}", daemon=True)
        self._thread.start()
        logger.info(f"Host listening on {self.bind_ip}:{self.port}")
        return self

    def stop(self, timeout: float = NETWORK.CONNECT_TIMEOUT) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout)
        self._thread = None
        if self._sock is not None:
            self._sock.close()
            self._sock = None
        logger.info("Host stopped")

    def wait_for_messages(self, count: int = 1, timeout: float = NETWORK.CONNECT_TIMEOUT) -> list[ReceivedMessage]:
        """
        Block until at least count messages were received or the timeout elapsed
        """
        with self._received:
            self._received.wait_for(lambda: len(self.messages) >= count, timeout)
            return list(self.messages)

    def _serve(self) -> None:
        while not self._stop_event.is_set():
            try:
                conn, peer = self._sock.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if not self._stop_event.is_set():
                    logger.error(f"Listener error: {e}")
                break
            with conn:
                self._receive(conn, peer)

    def _receive(self, conn: socket.socket, peer: tuple) -> None:
        conn.settimeout(NETWORK.CONNECT_TIMEOUT)
        chunks = []
        try:
            while True:
                chunk = conn.recv(RECV_BYTES)
                if not chunk:
                    break
                chunks.append(chunk)
        except OSError as e:
            logger.warning(f"Connection from {peer[0]}:{peer[1]} failed: {e}")
            return

        message = ReceivedMessage((peer[0], peer[1]), b"".join(chunks).decode("utf-8", errors="replace").strip())
        logger.info(f"Request from {peer[0]}:{peer[1]}: \"{message.text}\"")
        # Callback runs before the message is visible to wait_for_messages
        if self.on_message is not None:
            try:
                self.on_message(message)
            except Exception:
                logger.exception(f"on_message callback failed for message from {peer[0]}:{peer[1]}")
        with self._received:
            self.messages.append(message)
            self._received.notify_all()

    def __enter__(self) -> "InviteHost":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()


def open_connection(ip_addr: str, port: int, timeout: float = NETWORK.CONNECT_TIMEOUT) -> socket.socket:
    """Open a TCP connection to the host behind an invite"""
    try:
        logger.debug(f"Connecting to {ip_addr}:{port}...")
        sock = socket.create_connection((ip_addr, port), timeout=timeout)
    except socket.timeout as e:
        raise ConnectionError(f"Connection to {ip_addr}:{port} timed out after {timeout}s") from e
    except OSError as e:
        raise ConnectionError(f"Failed to connect to {ip_addr}:{port}: {e}") from e
    logger.debug("Connected!")
    return sock


def send_to_invite(invite: str, message: str = NETWORK.DEFAULT_MESSAGE, timeout: float = NETWORK.CONNECT_TIMEOUT,
                   registry: InviteRegistry | None = None) -> DecodeResult:
    """
    Decode the invite, connect to it and send the message. Returns the decode result.
    """
    registry = registry or default_registry()
    result = registry.detect(invite)
    if not result.ok:
        raise MalformedInviteError(f"Unrecognised invite: {invite!r}")

    endpoint = result.endpoint
    with open_connection(str(endpoint.ip), endpoint.port, timeout) as sock:
        try:
            sock.sendall(message.encode("utf-8"))
        except OSError as e:
            raise ConnectionError(f"Failed to send to {endpoint}: {e}") from e
    logger.info(f"Sent \"{message}\" to {endpoint} ({result.format.value} invite)")
    return result
