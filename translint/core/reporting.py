from __future__ import annotations
import json
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO

from .models import Finding


class Reporter:
    """User-facing output: the run's messages and the optional report files."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr

    def info(self, message: str) -> None:
        print(message, file=self.out)

    def success(self, message: str) -> None:
        print(message, file=self.out)

    def warning(self, message: str) -> None:
        print(message, file=self.err)

    def error(self, message: str) -> None:
        print(message, file=self.err)

    def report_findings(self, findings: List[Finding]) -> None:
        self.error(f"\nFound {len(findings)} multi-line translation string(s):\n")
        for index, f in enumerate(findings, start=1):
            self.info(f"{index}. {f.file_location}:{f.start_line}-{f.end_line}")
            self.info("   Content:")
            for offset, line in enumerate(f.content.split("\n")):
                self.warning(f"   {f.start_line + offset}: {line}")
            self.info("")

    def write_outputs(self, out_dir: Path, findings: Iterable[Finding]) -> Dict[str, int]:
        out_dir.mkdir(parents=True, exist_ok=True)
        items = list(findings)
        data = [f.__dict__ for f in items]
        (out_dir / "findings.json").write_text(json.dumps(data, indent=2), encoding="utf-8")

        lines = ["# Multi-line Translation Strings", ""]
        if not items:
            lines.append("No findings.")
        for f in items:
            lines.append(f"- **file**: {f.file_location}  ")
            lines.append(f"  **lines**: {f.start_line}-{f.end_line}  ")
            lines.append(f"  **single-line text**: `{f.text}`  ")
            lines.append("")
            lines.append("  ```")
            lines.extend(f"  {line}" for line in f.content.split("\n"))
            lines.append("  ```")
            lines.append("")
        (out_dir / "findings.md").write_text("\n".join(lines), encoding="utf-8")
        return {"findings": len(items), "artifacts": 2}
