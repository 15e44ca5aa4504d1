from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Optional, Tuple

import chardet  # type: ignore

from .models import SourceText

_LOG = logging.getLogger("translint.io")

BINARY_BYTES = bytes(range(0, 32)) + b"\x7f"
WHITESPACE_RE = re.compile(r"\s+")


def is_likely_binary(
    data: bytes, control_threshold: float = 0.30, high_bit_threshold: float = 0.60
) -> bool:
    if not data:
        return False
    total = len(data)
    if 0 in data:
        return True
    control = sum(1 for b in data if b in BINARY_BYTES and b not in (9, 10, 13))
    if (control / total) > control_threshold:
        return True
    try:
        data.decode('utf-8', errors='strict')
        return False
    except UnicodeDecodeError:
        pass
    # not UTF-8: only text if chardet recognises a legacy encoding
    high = sum(1 for b in data if b >= 0x80)
    if (high / total) > high_bit_threshold:
        return True
    return chardet.detect(data).get("encoding") is None


def decode_text(data: bytes) -> Optional[Tuple[str, str]]:
    """Decode ``data`` and return ``(text, encoding)``, or None if nothing fits.

    UTF-8 is tried first so plain ASCII/UTF-8 templates are written back as
    UTF-8; otherwise the encoding guessed by chardet is used.
    """
    candidates = ['utf-8']
    enc = chardet.detect(data).get("encoding")
    if enc and enc.lower() not in ('utf-8', 'ascii'):
        candidates.append(enc)
    for candidate in candidates:
        try:
            return data.decode(candidate, errors='strict'), candidate
        except (LookupError, UnicodeDecodeError):
            continue
    return None


def read_source(path: Path, max_bytes: int = 20_000_000) -> Optional[SourceText]:
    """Load a whole file as a SourceText; None when it is binary, too big or unreadable."""
    try:
        with path.open("rb") as f:
            data = f.read(max_bytes + 1)
    except OSError as exc:
        _LOG.warning("Unable to read %s: %s", path, exc)
        return None
    if len(data) > max_bytes:
        _LOG.warning("Skipping %s: larger than %d bytes", path, max_bytes)
        return None
    if is_likely_binary(data):
        _LOG.warning("Skipping %s: looks like a binary file", path)
        return None
    decoded = decode_text(data)
    if decoded is None:
        _LOG.warning("Skipping %s: unable to detect text encoding", path)
        return None
    text, encoding = decoded
    return SourceText.from_text(text, path=path, encoding=encoding)


def write_source(source: SourceText) -> bool:
    if source.path is None:
        raise ValueError("cannot write a SourceText without a path")
    try:
        with source.path.open("w", encoding=source.encoding, newline="") as f:
            f.write(source.text)
    except (OSError, UnicodeEncodeError) as exc:
        _LOG.warning("Unable to write %s: %s", source.path, exc)
        return False
    return True


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()
