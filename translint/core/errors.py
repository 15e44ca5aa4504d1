"""Exceptions raised by translint.

Per-file problems (unreadable files, malformed candidates) never raise; they
are logged and the run continues. Only the conditions below escape a
component.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from .models import Finding


class TranslintError(Exception):
    """Base exception for all translint errors."""

    error_code: str = "TRANSLINT_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        response: Dict[str, Any] = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class UnfixableResidueError(TranslintError):
    """Fix mode ran but multi-line strings remain."""

    error_code = "UNFIXABLE_RESIDUE"

    def __init__(self, findings: List[Finding], passes: int):
        files = sorted({f.file_location for f in findings})
        super().__init__(
            f"{len(findings)} multi-line translation string(s) remain after {passes} fix pass(es)",
            details={"files": files, "passes": passes},
        )
        self.findings = list(findings)
        self.passes = passes


class StagingError(TranslintError):
    """Staging fixed files with the version-control tool failed."""

    error_code = "STAGING_FAILED"

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not stage {path}: {reason}", details={"path": path, "reason": reason})
        self.path = path
        self.reason = reason
