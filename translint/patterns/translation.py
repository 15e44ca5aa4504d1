from __future__ import annotations
import logging
import re
from typing import Iterable, Iterator, List, Optional

from .base import LinePattern
from ..core.config import DEFAULT_LOOKAHEAD, DEFAULT_MARKER
from ..core.models import Finding, FixResult, SourceText
from ..core.utils import collapse_whitespace


class MultiLineStringRewriter(LinePattern):
    """Detect and merge translation calls whose string spans several lines.

    A candidate is the first ``_("`` or ``_('`` on a line. When the matching
    ``")`` / ``')`` is not on the same line, up to ``lookahead - 1`` following
    lines are searched and the first line containing it closes the span.
    Escaped quotes and nested parentheses are not understood: the first
    closing sequence wins, even inside the intended text.
    """
    NAME = "translation"
    EXAMPLE = '{{ _("add to cart") }} instead of {{ _("add\\n to cart") }}'

    def __init__(
        self,
        marker: str = DEFAULT_MARKER,
        lookahead: int = DEFAULT_LOOKAHEAD,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger=logger)
        if lookahead < 2:
            raise ValueError("lookahead must cover at least two lines")
        self.marker = marker
        self.lookahead = lookahead
        self.open_re = re.compile(re.escape(marker) + r"([\"'])")

    def _open(self, quote: str) -> str:
        return f"{self.marker}{quote}"

    @staticmethod
    def _close(quote: str) -> str:
        return f"{quote})"

    def scan(self, source: SourceText) -> Iterator[Finding]:
        lines = source.lines
        for i, line in enumerate(lines):
            m = self.open_re.search(line)
            if m is None:
                continue
            quote = m.group(1)
            close = self._close(quote)
            after_open = line[m.end():]
            if close in after_open:
                continue

            end = None
            for j in range(i + 1, min(len(lines), i + self.lookahead)):
                if close in lines[j]:
                    end = j
                    break
            if end is None:
                self.logger.debug(
                    "%s:%d: no closing %s within %d lines; ignored",
                    source.file_location, i + 1, close, self.lookahead,
                )
                continue

            end_line = lines[end]
            parts = [after_open, *lines[i + 1:end], end_line[:end_line.index(close)]]
            yield Finding(
                file_location=source.file_location,
                start_line=i + 1,
                end_line=end + 1,
                quote_char=quote,
                text=collapse_whitespace(" ".join(parts)),
                content="\n".join(lines[i:end + 1]).strip(),
            )

    def fix(self, source: SourceText, findings: Iterable[Finding]) -> FixResult:
        """Merge every finding's span into its first line, in place.

        Spans are processed bottom-up so pending (earlier) spans keep their
        line numbers. A finding that is out of range, ends on a line deleted by
        a span merged earlier in this call, or no longer matches its lines is
        skipped.
        """
        lines = source.lines
        result = FixResult(file_location=source.file_location)
        merged_from: Optional[int] = None  # lowest start index merged so far

        for finding in sorted(findings, key=lambda f: f.start_line, reverse=True):
            start, end = finding.start_line - 1, finding.end_line - 1
            if start >= len(lines) or end >= len(lines):
                self.logger.debug("%s:%d-%d: stale finding skipped",
                                  source.file_location, finding.start_line, finding.end_line)
                result.skipped.append(finding)
                continue
            # a close on the line where the later span opens sits before that
            # span's marker, so sharing that line is safe
            if merged_from is not None and end > merged_from:
                self.logger.debug("%s:%d-%d: overlaps a merged span; left for the next pass",
                                  source.file_location, finding.start_line, finding.end_line)
                result.skipped.append(finding)
                continue

            open_seq = self._open(finding.quote_char)
            close_seq = self._close(finding.quote_char)
            open_idx = lines[start].find(open_seq)
            close_idx = lines[end].find(close_seq)
            if open_idx == -1 or close_idx == -1:
                result.skipped.append(finding)
                continue

            before = lines[start][:open_idx]
            after = lines[end][close_idx + len(close_seq):]
            lines[start] = f"{before}{open_seq}{finding.text}{close_seq}{after}"
            del lines[start + 1:end + 1]
            merged_from = start
            result.applied += 1

        return result


def merge_multiline_strings(text: str, **kwargs) -> str:
    """Return ``text`` with every detectable multi-line translation string merged.

    Fix passes repeat until a re-scan is clean or a pass changes nothing.
    """
    rewriter = MultiLineStringRewriter(**kwargs)
    source = SourceText.from_text(text)
    while True:
        findings = rewriter.findings(source)
        if not findings or not rewriter.fix(source, findings).changed:
            return source.text


def find_multiline_strings(text: str, **kwargs) -> List[Finding]:
    return MultiLineStringRewriter(**kwargs).findings(SourceText.from_text(text))
