from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from .config import LintConfig
from .discovery import exclude_names, iter_files
from .models import Finding, SourceText
from .utils import read_source
from ..patterns.base import LinePattern


DEFAULT_LOGGER_NAME = "translint"
SLOW_SCAN_THRESHOLD_SECONDS = 2.0

FindingsByFile = Dict[Path, List[Finding]]


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    This helper ensures the scanner has a configured logger even in script usage
    where ``logging.basicConfig`` was not called. ``verbose`` elevates the level
    from WARNING to INFO.
    """

    logger = logging.getLogger(logger_name)
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


class BaseScanner:
    """Runs a pattern over a set of files and groups findings per file."""

    def __init__(
        self,
        pattern: LinePattern,
        config: LintConfig,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.pattern = pattern
        self.config = config
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def iter_paths(self) -> Iterable[Path]:
        raise NotImplementedError

    def load(self, path: Path) -> Optional[SourceText]:
        return read_source(path, max_bytes=self.config.max_file_size)

    def scan_file(self, path: Path) -> List[Finding]:
        source = self.load(path)
        if source is None:
            return []
        start_time = time.perf_counter()
        findings = self.pattern.findings(source)
        duration = time.perf_counter() - start_time
        if duration >= SLOW_SCAN_THRESHOLD_SECONDS:
            self.logger.debug("Slow scan for %s took %.2fs (%d lines)", path, duration, len(source.lines))
        if findings:
            self.logger.info("%s: %d finding(s)", path, len(findings))
        return findings

    def scan(self) -> FindingsByFile:
        by_file: FindingsByFile = {}
        for path in self.iter_paths():
            findings = self.scan_file(path)
            if findings:
                by_file[path] = findings
        return by_file


class DirectoryScanner(BaseScanner):
    def __init__(
        self,
        pattern: LinePattern,
        config: LintConfig,
        *,
        logger: Optional[logging.Logger] = None,
        show_progress: bool = True,
        progress_desc: str = "Scanning templates",
    ) -> None:
        super().__init__(pattern, config, logger=logger)
        self.show_progress = bool(show_progress)
        self.progress_desc = progress_desc

    def iter_paths(self) -> Iterable[Path]:
        return iter_files(
            self.config.root,
            self.config.extensions,
            exclude=exclude_names(self.config.exclude_dirs),
            max_file_size=self.config.max_file_size,
        )

    def scan(self) -> FindingsByFile:
        files = list(self.iter_paths())
        self.logger.info("Discovered %d file(s) to scan under %s", len(files), self.config.root)

        by_file: FindingsByFile = {}
        progress_bar = None
        if self.show_progress and files:
            progress_bar = tqdm(total=len(files), desc=self.progress_desc, unit="file", leave=False)
        try:
            for path in files:
                if progress_bar is not None:
                    progress_bar.set_postfix_str(self._format_display_path(path), refresh=False)
                findings = self.scan_file(path)
                if findings:
                    by_file[path] = findings
                if progress_bar is not None:
                    progress_bar.update(1)
        finally:
            if progress_bar is not None:
                progress_bar.close()
        return by_file

    def _format_display_path(self, path: Path) -> str:
        try:
            label = str(path.relative_to(self.config.root))
        except ValueError:
            label = str(path)
        if len(label) > 60:
            label = f"...{label[-57:]}"
        return label


class SingleFileScanner(BaseScanner):
    def __init__(
        self,
        file_path: Path,
        pattern: LinePattern,
        config: LintConfig,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(pattern, config, logger=logger)
        self.file_path = file_path

    def iter_paths(self) -> Iterable[Path]:
        return [self.file_path]
