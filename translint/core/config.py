from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".jinja",)
DEFAULT_EXCLUDE_DIRS: Tuple[str, ...] = ("node_modules", ".git", "libraries", "dist", "build")
DEFAULT_MARKER = "_("
DEFAULT_LOOKAHEAD = 10  # opening line plus nine following lines
DEFAULT_MAX_PASSES = 2
DEFAULT_MAX_FILE_SIZE = 5_000_000


@dataclass(frozen=True)
class LintConfig:
    root: Path = Path(".")
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    marker: str = DEFAULT_MARKER
    lookahead: int = DEFAULT_LOOKAHEAD
    fix: bool = False
    stage: bool = False
    max_passes: int = DEFAULT_MAX_PASSES
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


def split_csv(value: str) -> Tuple[str, ...]:
    return tuple(t.strip() for t in (value or "").split(",") if t.strip())


def normalize_extensions(values: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(v if v.startswith(".") else f".{v}" for v in values)
