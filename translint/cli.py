import argparse
from pathlib import Path
from typing import List, Optional

from .core.config import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_EXTENSIONS,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_PASSES,
    LintConfig,
    normalize_extensions,
    split_csv,
)
from .core.errors import UnfixableResidueError
from .core.reporting import Reporter
from .core.runner import LintRun
from .core.scanner import BaseScanner, DirectoryScanner, SingleFileScanner, configure_logging
from .patterns.translation import MultiLineStringRewriter


def _add_discovery_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--ext", default=",".join(DEFAULT_EXTENSIONS), help="File extensions to check, comma-separated.")
    p.add_argument("--exclude", default=",".join(DEFAULT_EXCLUDE_DIRS), help="Dir names to exclude, comma-separated.")
    p.add_argument("--max-file-size", type=int, default=DEFAULT_MAX_FILE_SIZE, help="Max file size in bytes to check (default 5MB).")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar during directory scans.")


def _add_common_options(p: argparse.ArgumentParser, fix: bool = True) -> None:
    if fix:
        p.add_argument("--fix", action="store_true", help="Merge multi-line translation strings in place.")
    p.add_argument("--max-passes", type=int, default=DEFAULT_MAX_PASSES, help="Fix/re-check passes before giving up.")
    p.add_argument("--out", type=Path, default=None, help="Also write findings.json and findings.md to this directory.")
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging output.")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="translint",
        description="Find and fix translation strings _(\"...\") split across multiple lines.",
    )
    sub = p.add_subparsers(dest="mode", required=True)

    # dir mode
    d = sub.add_parser("dir", help="Check a directory recursively.")
    d.add_argument("path", type=Path, help="Directory to check recursively.")
    _add_discovery_options(d)
    _add_common_options(d)

    # file mode
    f = sub.add_parser("file", help="Check a single file.")
    f.add_argument("path", type=Path, help="File to check.")
    _add_common_options(f)

    # pre-push hook mode
    h = sub.add_parser("prepush", help="Pre-push hook: check, fix and stage fixed files with git.")
    h.add_argument("path", type=Path, nargs="?", default=Path("."), help="Directory to check (default: current).")
    _add_discovery_options(h)
    _add_common_options(h, fix=False)

    return p


def _config_from_args(args: argparse.Namespace) -> LintConfig:
    prepush = args.mode == "prepush"
    kwargs = dict(
        root=args.path,
        fix=prepush or args.fix,
        stage=prepush,
        max_passes=args.max_passes,
    )
    if args.mode != "file":
        kwargs.update(
            extensions=normalize_extensions(split_csv(args.ext)),
            exclude_dirs=split_csv(args.exclude),
            max_file_size=args.max_file_size,
        )
    return LintConfig(**kwargs)


def run(args: argparse.Namespace, reporter: Optional[Reporter] = None) -> int:
    reporter = reporter or Reporter()
    if args.max_passes < 1:
        reporter.error("--max-passes must be at least 1.")
        return 2

    logger = configure_logging(verbose=args.verbose)
    config = _config_from_args(args)
    pattern = MultiLineStringRewriter(marker=config.marker, lookahead=config.lookahead, logger=logger)

    scanner: BaseScanner
    if args.mode == "file":
        if not args.path.is_file():
            reporter.error(f"Not a file: {args.path}")
            return 2
        scanner = SingleFileScanner(args.path, pattern, config, logger=logger)
    else:
        if not args.path.is_dir():
            reporter.error(f"Not a directory: {args.path}")
            return 2
        if not config.extensions:
            reporter.error("No file extensions selected. Exiting.")
            return 2
        scanner = DirectoryScanner(pattern, config, logger=logger, show_progress=not args.no_progress)

    try:
        return LintRun(scanner, config, reporter, out_dir=args.out, logger=logger).run()
    except UnfixableResidueError as exc:
        reporter.error(f"Could not auto-fix all errors ({exc.message}). Please fix manually.")
        reporter.error(f"Example: {pattern.EXAMPLE}")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.mode in ("dir", "file", "prepush"):
        return run(args)
    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
