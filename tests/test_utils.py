import os
from pathlib import Path

import pytest

from translint.core.models import SourceText
from translint.core.utils import collapse_whitespace, is_likely_binary, read_source, write_source


def test_read_source_splits_on_newline_and_keeps_trailing_empty_line(tmp_path: Path):
    p = tmp_path / "a.jinja"
    p.write_bytes(b"one\ntwo\n")
    source = read_source(p)
    assert source is not None
    assert source.lines == ["one", "two", ""]
    assert source.encoding == "utf-8"
    assert source.text == "one\ntwo\n"


def test_round_trip_preserves_crlf(tmp_path: Path):
    p = tmp_path / "crlf.jinja"
    p.write_bytes(b"one\r\ntwo\r\n")
    source = read_source(p)
    assert source.lines == ["one\r", "two\r", ""]
    assert write_source(source)
    assert p.read_bytes() == b"one\r\ntwo\r\n"


def test_utf8_non_latin_text_is_not_binary(tmp_path: Path):
    p = tmp_path / "ja.jinja"
    p.write_text('{{ _("カートに追加する") }}\n' * 20, encoding="utf-8")
    source = read_source(p)
    assert source is not None
    assert "カート" in source.text


def test_binary_file_is_skipped(tmp_path: Path):
    p = tmp_path / "blob.jinja"
    p.write_bytes(b"\x00\x01\x02" + os.urandom(256))
    assert read_source(p) is None


def test_missing_file_is_skipped(tmp_path: Path):
    assert read_source(tmp_path / "nope.jinja") is None


def test_oversized_file_is_skipped(tmp_path: Path):
    p = tmp_path / "big.jinja"
    p.write_text("x" * 50)
    assert read_source(p, max_bytes=10) is None


def test_is_likely_binary():
    assert not is_likely_binary(b"")
    assert not is_likely_binary(b"plain text\n")
    assert is_likely_binary(b"abc\x00def")


def test_write_source_without_path_raises():
    with pytest.raises(ValueError):
        write_source(SourceText.from_text("x"))


def test_collapse_whitespace():
    assert collapse_whitespace("  add \n\t to   cart  ") == "add to cart"
