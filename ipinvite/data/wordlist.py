"""
Loads the word dictionaries used by the mnemonic codec.

Dictionary ids run from 0 to 2^ID_BITS - 1. For each id we look for a bundled resource first, then for a file named
words_{id}.txt in the source directory. A list is accepted only if it holds at least the required number of words and,
once truncated to exactly that many, every word is unique (case-insensitive) and starts with enough ASCII letters to
carry capitalization metadata. An unreadable or invalid resource falls back to the directory file. An id with no
usable list is skipped with a warning; a missing id past 0 ends the scan.
"""
import threading
from importlib import resources
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ipinvite.core import WORDS, CONFIG, NoDictionaryError, UnknownDictionaryError, WordNotFoundError
from ipinvite.core.logging import get_logger

__all__ = ["Dictionary", "DictionarySet", "read_wordlist", "load_wordlist", "load_dictionaries",
           "default_dictionaries"]

logger = get_logger(__name__)


class Dictionary:
    """
    A fixed-size, read-only list of unique lower-case words with a case-insensitive reverse index
    """
    __slots__ = ("dictionary_id", "words", "_index")

    def __init__(self, dictionary_id: int, words: Iterable[str]):
        self.dictionary_id = dictionary_id
        self.words = tuple(w.lower() for w in words)
        self._index = {w: i for i, w in enumerate(self.words)}
        if len(self._index) != len(self.words):
            raise ValueError(f"Dictionary {dictionary_id} contains duplicate words")

    def word(self, index: int) -> str:
        return self.words[index]

    def find(self, word: str) -> Optional[int]:
        return self._index.get(word.lower())

    def index(self, word: str) -> int:
        i = self.find(word)
        if i is None:
            raise WordNotFoundError(word.lower(), self.dictionary_id)
        return i

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: str) -> bool:
        return self.find(word) is not None

    def __repr__(self) -> str:
        return f"Dictionary(id={self.dictionary_id}, words={len(self.words)})"


class DictionarySet:
    """
    The loaded dictionaries, keyed and iterated by id
    """

    def __init__(self, dictionaries: Iterable[Dictionary]):
        self._by_id = {d.dictionary_id: d for d in sorted(dictionaries, key=lambda d: d.dictionary_id)}

    def get(self, dictionary_id: int) -> Dictionary:
        try:
            return self._by_id[dictionary_id]
        except KeyError:
            raise UnknownDictionaryError(dictionary_id, len(self._by_id)) from None

    @property
    def ids(self) -> list[int]:
        return list(self._by_id)

    def __iter__(self) -> Iterator[Dictionary]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, dictionary_id: int) -> bool:
        return dictionary_id in self._by_id


# --- Reading --- #

def read_wordlist(lines: Iterable[str]) -> list[str]:
    """Trim and lower-case every line, dropping blanks"""
    return [line.strip().lower() for line in lines if line.strip()]


def load_wordlist(wordlist_file: Path) -> list[str]:
    """Return the words of a newline-separated wordlist file."""
    with wordlist_file.open(encoding="utf-8") as f:
        return read_wordlist(f)


def _load_resource(package: str, name: str) -> Optional[list[str]]:
    try:
        resource = resources.files(package).joinpath(name)
    except ModuleNotFoundError:
        return None
    if not resource.is_file():
        return None
    return read_wordlist(resource.read_text(encoding="utf-8").splitlines())


def _load_file(path: Path) -> Optional[list[str]]:
    return load_wordlist(path) if path.is_file() else None


def _validate(words: list[str], required_word_count: int, cased_prefix: int) -> Optional[str]:
    """
    Return the reason a truncated wordlist is unusable, or None if it's fine
    """
    if len(words) < required_word_count:
        return f"has {len(words)} words, {required_word_count} required"
    if len(set(words)) != len(words):
        return "contains duplicate words"
    for word in words:
        prefix = word[:cased_prefix]
        if len(prefix) < cased_prefix or not (prefix.isascii() and prefix.isalpha()):
            return f"word '{word}' doesn't start with {cased_prefix} ASCII letters"
    return None


def load_dictionaries(source_dir: Optional[str | Path] = None, required_word_count: int = WORDS.DICTIONARY_SIZE,
                      id_bits: int = WORDS.ID_BITS, resource_package: Optional[str] = WORDS.RESOURCE_PACKAGE,
                      cased_prefix: int = WORDS.PORT_META_BITS) -> DictionarySet:
    """
    Load every available dictionary. Raises NoDictionaryError if none could be loaded.

    Each id tries the bundled resource, then the source directory file. The first candidate that reads and
    validates wins; an unreadable or invalid candidate is skipped with a warning and the next one is tried.
    """
    source_dir = Path(source_dir) if source_dir is not None else None
    dictionaries = []

    for dictionary_id in range(1 << id_bits):
        name = WORDS.FILE_TEMPLATE.format(dictionary_id)
        candidates = []
        if resource_package:
            candidates.append((f"resource {resource_package}/{name}",
                               lambda n=name: _load_resource(resource_package, n)))
        if source_dir is not None:
            path = source_dir / name
            candidates.append((str(path), lambda p=path: _load_file(p)))

        found = False
        for origin, load in candidates:
            try:
                words = load()
            except (OSError, UnicodeDecodeError) as e:
                found = True
                logger.warning(f"Error loading wordlist {origin}: {e}. Skipped.")
                continue
            if words is None:
                continue

            found = True
            words = words[:required_word_count]
            reason = _validate(words, required_word_count, cased_prefix)
            if reason:
                logger.warning(f"Wordlist {origin} {reason}. Skipped.")
                continue

            dictionaries.append(Dictionary(dictionary_id, words))
            logger.debug(f"Loaded dictionary {dictionary_id} from {origin}")
            break

        # Ids are contiguous past 0
        if not found and dictionary_id > 0:
            logger.warning(f"Wordlist '{name}' not found. Stopping search at id {dictionary_id}.")
            break

    if not dictionaries:
        raise NoDictionaryError("No valid word list was loaded. Check the bundled resources or the wordlist directory.")
    return DictionarySet(dictionaries)


# --- Process-wide cache --- #

_default_lock = threading.Lock()
_default: Optional[DictionarySet] = None


def default_dictionaries() -> DictionarySet:
    """
    The dictionaries shared by the whole process, loaded once on first use
    """
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = load_dictionaries(CONFIG.WORDLIST_DIR)
    return _default
