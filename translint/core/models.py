from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class SourceText:
    """Lines of one file, split on ``\\n`` so that joining restores the content."""
    lines: List[str]
    path: Optional[Path] = None
    encoding: str = "utf-8"

    @classmethod
    def from_text(cls, text: str, path: Optional[Path] = None, encoding: str = "utf-8") -> "SourceText":
        return cls(lines=text.split("\n"), path=path, encoding=encoding)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def file_location(self) -> str:
        return str(self.path) if self.path is not None else "<string>"

    def copy(self) -> "SourceText":
        return SourceText(lines=list(self.lines), path=self.path, encoding=self.encoding)


@dataclass(frozen=True)
class Finding:
    file_location: str  # string path for JSON serializable output
    start_line: int
    end_line: int
    quote_char: str
    text: str  # reconstructed single-line argument
    content: str  # original spanned lines, for reporting


@dataclass
class FixResult:
    file_location: str
    applied: int = 0
    skipped: List[Finding] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.applied > 0
