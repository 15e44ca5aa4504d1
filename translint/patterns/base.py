from __future__ import annotations
import logging
from typing import Iterable, Iterator, List, Optional

from ..core.models import Finding, FixResult, SourceText


class LinePattern:
    """
    Base class for line patterns. Subclasses set NAME (and EXAMPLE, the expected form) and
    implement ``scan`` (detect) and ``fix`` (rewrite). Both work on a whole
    SourceText because a match may span several lines.
    """
    NAME: str = "base"
    EXAMPLE: str = ""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        base_logger = logger or logging.getLogger("translint")
        self.logger = base_logger.getChild(self.NAME)

    def scan(self, source: SourceText) -> Iterator[Finding]:
        raise NotImplementedError("scan must be implemented in subclasses")

    def fix(self, source: SourceText, findings: Iterable[Finding]) -> FixResult:
        raise NotImplementedError("fix must be implemented in subclasses")

    def findings(self, source: SourceText) -> List[Finding]:
        return list(self.scan(source))
