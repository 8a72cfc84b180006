"""
Properties-file implementation of StoreProtocol.
Keeps the whole file in a dict[str, str] and writes it back on every commit.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Generic, Iterator, Optional, TypeVar

from ..config import get_settings
from ..services import json_codec, properties_format
from ..services.files import create_new_file
from .base import StoreProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _parse_bool(text: str) -> bool:
    return text.lower() == "true"


# Exact-type lookup: bool must not fall through to int
_PARSERS: Dict[type, Callable[[str], Any]] = {
    str: str,
    bool: _parse_bool,
    int: int,
    float: float,
}


def _to_text(value: Any) -> str:
    """String form of a value as it is stored in the file."""
    if isinstance(value, bool):
        return "true" if value else "false"
    # exact types only: str/int mixin enums go through JSON to read back
    if type(value) in (str, int, float):
        return str(value)
    try:
        return json_codec.to_json(value)
    except json_codec.CODEC_ERRORS as e:
        logger.debug("Storing %r as plain text, not JSON: %s", type(value), e)
        return str(value)


class Editor:
    """Batches put/remove/clear on a store's entries; commit() writes them once."""

    def __init__(self, entries: Dict[str, str], store: "PropertiesStore"):
        self._entries = entries
        self._store = store

    def put(self, key: str, value: Any) -> "Editor":
        if not key:
            return self
        if value is None:
            return self.remove(key)
        self._entries[key] = _to_text(value)
        return self

    def remove(self, key: str) -> "Editor":
        if key:
            self._entries.pop(key, None)
        return self

    def clear(self) -> "Editor":
        self._entries.clear()
        return self

    def commit(self, comments: Optional[str] = None) -> None:
        """Overwrite the backing file with the full current mapping."""
        self._store._write(comments)

    def __enter__(self) -> "Editor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()


class PropertiesStore:
    """Typed key-value access over a single properties file."""

    def __init__(self, path: Path, encoding: Optional[str] = None):
        settings = get_settings()
        self.path = Path(path)
        self.encoding = encoding or settings.PROPSTORE_ENCODING
        self.timestamp = settings.PROPSTORE_TIMESTAMP
        self._entries: Dict[str, str] = {}
        create_new_file(self.path)
        self.reload()

    def reload(self) -> None:
        """Re-read the file into the existing dict so live editors see the change."""
        entries = properties_format.load(self.path, self.encoding)
        self._entries.clear()
        self._entries.update(entries)

    def _write(self, comments: Optional[str] = None) -> None:
        properties_format.dump(
            self._entries,
            self.path,
            encoding=self.encoding,
            comments=comments,
            timestamp=self.timestamp,
        )

    # Reads
    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._entries.get(key, default)

    def get(self, key: str, default: T, type_: Any = None) -> T:
        """
        Read key parsed as type_ (or the default's type, or str when the
        default is None). Absent, blank or unparsable values give default.
        """
        text = self.get_string(key)
        if text is None or not text.strip():
            return default
        if type_ is None:
            type_ = str if default is None else type(default)
        parser = _PARSERS.get(type_)
        if parser is not None:
            try:
                return parser(text)
            except ValueError:
                logger.debug("Value of %r is not a valid %s: %r", key, type_.__name__, text)
                return default
        try:
            return json_codec.from_json(text, type_)
        except json_codec.CODEC_ERRORS as e:
            logger.debug("Could not decode %r as %r: %s", key, type_, e)
            return default

    def contains(self, key: str) -> bool:
        return bool(key) and key in self._entries

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def keys(self) -> list[str]:
        return list(self._entries)

    def to_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    # Writes
    def edit(self) -> Editor:
        return Editor(self._entries, self)

    def put(self, key: str, value: Any) -> None:
        self.edit().put(key, value).commit()

    def remove(self, key: str) -> None:
        if not key:
            return
        self.edit().remove(key).commit()

    def clear(self) -> None:
        self.edit().clear().commit()

    # Field accessors
    def field(self, default: T, type_: Any = None) -> "StoredField[T]":
        """Class attribute stored under the attribute's own name."""
        return StoredField(self, default, type_=type_)

    def field_by_key(self, key: str, default: T, type_: Any = None) -> "StoredField[T]":
        """Class attribute stored under an explicit key."""
        return StoredField(self, default, key=key, type_=type_)

    def __repr__(self) -> str:
        return f"PropertiesStore({str(self.path)!r}, entries={len(self._entries)})"


class StoredField(Generic[T]):
    """
    Descriptor reading through store.get and writing through store.put.

        prefs = PropertiesStore("app.properties")

        class AppPrefs:
            retries = prefs.field(3)
            theme = prefs.field_by_key("ui.theme", "light")
    """

    def __init__(
        self,
        store: StoreProtocol,
        default: T,
        key: Optional[str] = None,
        type_: Any = None,
    ):
        self.store = store
        self.default = default
        self.key = key
        self.type_ = type_

    def __set_name__(self, owner, name):
        if self.key is None:
            self.key = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return self.store.get(self.key, self.default, self.type_)

    def __set__(self, instance, value: T) -> None:
        self.store.put(self.key, value)

    def __delete__(self, instance) -> None:
        self.store.remove(self.key)


def open_store(path: Path, encoding: Optional[str] = None) -> PropertiesStore:
    """Open (creating if needed) the properties file at path."""
    return PropertiesStore(path, encoding=encoding)
