"""Run orchestration: scan, report, and optionally fix in a bounded loop."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .config import LintConfig
from .errors import StagingError, UnfixableResidueError
from .models import Finding
from .reporting import Reporter
from .scanner import DEFAULT_LOGGER_NAME, BaseScanner, FindingsByFile
from .utils import write_source
from .vcs import stage_files

Stager = Callable[[Iterable[Path]], List[Path]]


def flatten(by_file: FindingsByFile) -> List[Finding]:
    return [f for findings in by_file.values() for f in findings]


class LintRun:
    def __init__(
        self,
        scanner: BaseScanner,
        config: LintConfig,
        reporter: Optional[Reporter] = None,
        *,
        stager: Optional[Stager] = None,
        out_dir: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.scanner = scanner
        self.pattern = scanner.pattern
        self.config = config
        self.reporter = reporter or Reporter()
        self.stager = stager or self._git_stager
        self.out_dir = out_dir
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def run(self) -> int:
        """Return the exit status; raises UnfixableResidueError when fixing cannot converge."""
        if self.config.stage:
            self.reporter.info("Running translation strings check (pre-push hook)...\n")
        else:
            self.reporter.info("Checking for multi-line translation strings...\n")

        by_file = self.scanner.scan()
        if not by_file:
            self._finish([])
            self.reporter.success("All translation strings are on single lines!")
            return 0

        self.reporter.report_findings(flatten(by_file))
        if not self.config.fix:
            self._finish(flatten(by_file))
            self.reporter.error("Please fix these translation strings to be on a single line.")
            self.reporter.error(f"Example: {self.pattern.EXAMPLE}")
            self.reporter.error("Or run with --fix to auto-fix them.")
            return 1

        self.fix_until_clean(by_file)
        self._finish([])
        self.reporter.success("All translation strings are on single lines!")
        return 0

    def fix_until_clean(self, by_file: FindingsByFile) -> None:
        for pass_no in range(1, self.config.max_passes + 1):
            self.reporter.info("Attempting to auto-fix...\n")
            changed = self.fix_files(by_file)
            if not changed:
                self._finish(flatten(by_file))
                raise UnfixableResidueError(flatten(by_file), pass_no)

            self.reporter.info(f"\nAuto-fixed {len(changed)} file(s). Re-running check...\n")
            if self.config.stage:
                self.stage(changed)

            by_file = self.scanner.scan()
            if not by_file:
                self.logger.info("Converged after %d fix pass(es)", pass_no)
                return
            self.reporter.report_findings(flatten(by_file))

        self._finish(flatten(by_file))
        raise UnfixableResidueError(flatten(by_file), self.config.max_passes)

    def fix_files(self, by_file: FindingsByFile) -> List[Path]:
        changed: List[Path] = []
        for path, findings in by_file.items():
            source = self.scanner.load(path)
            if source is None:
                continue
            result = self.pattern.fix(source, findings)
            if result.skipped:
                self.logger.info("%s: %d finding(s) left for a later pass", path, len(result.skipped))
            if result.changed and write_source(source):
                changed.append(path)
                self.reporter.success(f"Fixed: {path}")
        return changed

    def _git_stager(self, paths: Iterable[Path]) -> List[Path]:
        root = self.config.root
        return stage_files(paths, cwd=root if root.is_dir() else root.parent)

    def stage(self, paths: List[Path]) -> None:
        try:
            self.stager(paths)
        except StagingError as exc:
            self.logger.debug("staging failed: %s", exc.to_dict())
            self.reporter.warning(f"Could not stage files automatically ({exc.message}). Please stage them manually.\n")
        else:
            self.reporter.info("Staged fixed files for commit.\n")

    def _finish(self, findings: List[Finding]) -> None:
        if self.out_dir is not None:
            self.reporter.write_outputs(self.out_dir, findings)
