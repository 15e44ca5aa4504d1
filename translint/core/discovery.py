from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

_LOG = logging.getLogger("translint.discovery")

ExcludePredicate = Callable[[str], bool]


def exclude_names(names: Iterable[str]) -> ExcludePredicate:
    excluded = set(names)
    return lambda name: name in excluded


def iter_files(
    root: Path,
    extensions: Iterable[str],
    exclude: Optional[ExcludePredicate] = None,
    max_file_size: Optional[int] = None,
) -> Iterator[Path]:
    """Yield files under ``root`` whose name ends with one of ``extensions``.

    Directories for which ``exclude(name)`` is true are not descended into.
    Files are yielded in a stable (sorted) order.
    """
    suffixes = tuple(extensions)
    for dirpath, dirnames, filenames in os.walk(root):
        # prune in place so os.walk skips excluded trees
        dirnames[:] = sorted(d for d in dirnames if not (exclude and exclude(d)))
        for name in sorted(filenames):
            if not name.endswith(suffixes):
                continue
            p = Path(dirpath) / name
            if max_file_size is not None:
                try:
                    if p.stat().st_size > max_file_size:
                        _LOG.warning("Skipping %s: larger than %d bytes", p, max_file_size)
                        continue
                except OSError as exc:
                    _LOG.warning("Unable to stat %s: %s", p, exc)
                    continue
            yield p
