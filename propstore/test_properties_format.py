"""
Tests for the properties text reader/writer.
Run: pytest propstore/test_properties_format.py
"""

import pytest

from propstore.services.properties_format import (
    PropertiesError,
    PropertiesFormatError,
    dump,
    dumps,
    load,
    loads,
    needs_unicode_escapes,
)


def test_separators_and_whitespace():
    text = "a=1\nb:2\nc 3\n  d   =   4\ne\t:\t5\nf\n"
    assert loads(text) == {"a": "1", "b": "2", "c": "3", "d": "4", "e": "5", "f": ""}


def test_only_first_separator_is_consumed():
    assert loads("a==b\nc=:d\n") == {"a": "=b", "c": ":d"}


def test_comments_and_blank_lines_are_skipped():
    text = "# comment\n! other comment\n\n   \n   # indented comment\nkey=value\n"
    assert loads(text) == {"key": "value"}


def test_line_endings():
    assert loads("a=1\r\nb=2\rc=3\n") == {"a": "1", "b": "2", "c": "3"}


def test_continuation_lines():
    text = "fruits=apple, \\\n        banana, \\\n        pear\nnext=1\n"
    assert loads(text) == {"fruits": "apple, banana, pear", "next": "1"}


def test_even_backslashes_do_not_continue():
    assert loads("path=c:\\\\\nnext=1\n") == {"path": "c:\\", "next": "1"}


def test_continuation_on_last_line_is_dropped():
    assert loads("a=1\\") == {"a": "1"}


def test_hash_inside_continuation_is_data():
    assert loads("a=x\\\n#y\n") == {"a": "x#y"}


def test_escapes():
    text = "tab=a\\tb\nnl=a\\nb\ncr=a\\rb\nff=a\\fb\nother=\\q\\=\\:\n"
    assert loads(text) == {
        "tab": "a\tb",
        "nl": "a\nb",
        "cr": "a\rb",
        "ff": "a\fb",
        "other": "q=:",
    }


def test_escaped_separator_in_key():
    assert loads("my\\ key\\=x=value\n") == {"my key=x": "value"}


def test_unicode_escapes():
    assert loads("name=caf\\u00e9\nsmile=\\uD83D\\uDE00\n") == {
        "name": "café",
        "smile": "\U0001F600",
    }


def test_malformed_unicode_escape_raises():
    with pytest.raises(PropertiesFormatError) as info:
        loads("ok=1\nbad=\\u12G4\n")
    assert info.value.line == 2
    assert isinstance(info.value, ValueError)
    assert isinstance(info.value, PropertiesError)


def test_duplicate_keys_last_wins():
    assert loads("a=1\na=2\n") == {"a": "2"}


def test_dumps_escaping():
    text = dumps(
        {"key with space": " leading", "sym": "a=b:c#d!e\\f", "ctl": "\t\n\r\f"},
        timestamp=False,
    )
    assert text.splitlines() == [
        "key\\ with\\ space=\\ leading",
        "sym=a\\=b\\:c\\#d\\!e\\\\f",
        "ctl=\\t\\n\\r\\f",
    ]


def test_dumps_unicode():
    entries = {"name": "café", "smile": "\U0001F600"}
    assert dumps(entries, timestamp=False) == "name=caf\\u00E9\nsmile=\\uD83D\\uDE00\n"
    assert dumps(entries, timestamp=False, escape_unicode=False) == "name=café\nsmile=\U0001F600\n"


def test_dumps_header_lines():
    text = dumps({"a": "1"}, comments="first\nsecond", timestamp=True)
    lines = text.splitlines()
    assert lines[0] == "#first"
    assert lines[1] == "#second"
    assert lines[2].startswith("#")
    assert lines[3] == "a=1"


def test_dumps_then_loads_preserves_tricky_values():
    entries = {
        " padded key ": "  padded value  ",
        "=:#!": "#not a comment",
        "empty": "",
        "unicode ключ": "значение ✓",
    }
    assert loads(dumps(entries)) == entries


def test_needs_unicode_escapes():
    assert needs_unicode_escapes("latin-1")
    assert needs_unicode_escapes("ascii")
    assert not needs_unicode_escapes("utf-8")
    assert not needs_unicode_escapes("UTF8")


def test_dump_and_load_file(tmp_path):
    path = tmp_path / "x.properties"
    dump({"a": "é"}, path, encoding="latin-1", timestamp=False)
    assert path.read_bytes() == b"a=\\u00E9\n"
    assert load(path, "latin-1") == {"a": "é"}


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "missing.properties")
