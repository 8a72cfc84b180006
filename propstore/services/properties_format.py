"""
Reader/writer for the Java-style properties text format.

  # comment            ! comment
  key=value            key:value            key value
  multi=first \\
        second         (continued lines drop their leading whitespace)
  path=C:\\\\temp        (backslash escapes, \\uXXXX for non-ASCII)

Duplicate keys: the last entry wins.
"""

import codecs
import logging
import re
import time
from pathlib import Path
from typing import Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

_NEWLINE = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SPECIALS = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


class PropertiesError(Exception):
    """Base for properties store failures."""


class PropertiesFormatError(PropertiesError, ValueError):
    """Raised when a properties file holds a malformed \\uXXXX escape."""

    def __init__(self, message: str, line: int = 0):
        self.message = message
        self.line = line
        super().__init__(f"line {line}: {message}" if line else message)


# ── Reading ────────────────────────────────────────────────────────────

def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield (line number, logical line) with continuations joined."""
    pending = None
    start = 0
    for number, natural in enumerate(_NEWLINE.split(text), 1):
        line = natural.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
            start = number
            pending = ""
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2:
            pending += line[:-1]
            continue
        yield start, pending + line
        pending = None
    if pending is not None:
        # a continuation backslash on the last line is dropped
        yield start, pending


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into raw (still escaped) key and value."""
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1
    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(raw: str, line: int) -> str:
    if "\\" not in raw:
        return raw
    out = []
    index = 0
    length = len(raw)
    while index < length:
        char = raw[index]
        index += 1
        if char != "\\":
            out.append(char)
            continue
        if index >= length:
            break
        char = raw[index]
        index += 1
        if char == "u":
            digits = raw[index:index + 4]
            if len(digits) != 4 or any(c not in "0123456789abcdefABCDEF" for c in digits):
                raise PropertiesFormatError(f"Malformed \\uxxxx encoding: \\u{digits}", line)
            out.append(chr(int(digits, 16)))
            index += 4
        else:
            out.append(_ESCAPES.get(char, char))
    value = "".join(out)
    if any("\ud800" <= c <= "\udfff" for c in value):
        # recombine UTF-16 surrogate pairs written by \uD83D\uDE00 style escapes
        value = value.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return value


def loads(text: str) -> dict[str, str]:
    """Parse properties text into a dict."""
    entries: dict[str, str] = {}
    for number, line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        entries[_unescape(raw_key, number)] = _unescape(raw_value, number)
    return entries


def load(path: Path, encoding: str = "latin-1") -> dict[str, str]:
    """Read and parse a properties file. OSError propagates."""
    text = Path(path).read_text(encoding=encoding)
    entries = loads(text)
    logger.debug("Loaded %d properties from %s", len(entries), path)
    return entries


# ── Writing ────────────────────────────────────────────────────────────

def _escape(text: str, is_key: bool, escape_unicode: bool) -> str:
    out = []
    for index, char in enumerate(text):
        if char == " ":
            out.append("\\ " if is_key or index == 0 else " ")
        elif char in _SPECIALS:
            out.append(_SPECIALS[char])
        elif escape_unicode and not (" " < char <= "~"):
            for unit in _utf16_units(char):
                out.append(f"\\u{unit:04X}")
        else:
            out.append(char)
    return "".join(out)


def _utf16_units(char: str) -> list[int]:
    data = char.encode("utf-16-be", "surrogatepass")
    return [int.from_bytes(data[i:i + 2], "big") for i in range(0, len(data), 2)]


def _comment_lines(comments: str, escape_unicode: bool) -> list[str]:
    lines = []
    for line in comments.splitlines() or [""]:
        if escape_unicode:
            line = "".join(
                c if c <= "~" else "".join(f"\\u{u:04X}" for u in _utf16_units(c))
                for c in line
            )
        if not line.startswith(("#", "!")):
            line = "#" + line
        lines.append(line)
    return lines


def dumps(
    entries: Mapping[str, str],
    comments: Optional[str] = None,
    timestamp: bool = True,
    escape_unicode: bool = True,
) -> str:
    """Serialize a mapping to properties text, one entry per line."""
    lines = []
    if comments is not None:
        lines.extend(_comment_lines(comments, escape_unicode))
    if timestamp:
        lines.append("#" + time.strftime("%a %b %d %H:%M:%S %Z %Y"))
    for key, value in entries.items():
        lines.append(
            _escape(str(key), True, escape_unicode)
            + "="
            + _escape(str(value), False, escape_unicode)
        )
    return "".join(line + "\n" for line in lines)


def needs_unicode_escapes(encoding: str) -> bool:
    """True for byte encodings that cannot hold arbitrary characters."""
    name = codecs.lookup(encoding).name
    return not name.startswith("utf")


def dump(
    entries: Mapping[str, str],
    path: Path,
    encoding: str = "latin-1",
    comments: Optional[str] = None,
    timestamp: bool = True,
) -> None:
    """Write entries to path through a sibling .tmp file, then replace."""
    path = Path(path)
    text = dumps(entries, comments, timestamp, needs_unicode_escapes(encoding))
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding=encoding, newline="\n") as f:
            f.write(text)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d properties to %s", len(entries), path)
