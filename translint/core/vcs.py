from __future__ import annotations

import logging
import subprocess  # nosec

# Reason: commands go through safe_run, which checks the executable against an allow list
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .errors import StagingError

_LOG = logging.getLogger("translint.vcs")

_ALLOWED_EXECUTABLES = {"git", "git.exe"}


def _ensure_allowed(cmd: Sequence[str]) -> Sequence[str]:
    if not cmd:
        raise ValueError("empty command passed to safe subprocess wrapper")
    executable = Path(cmd[0]).name.lower()
    if executable not in _ALLOWED_EXECUTABLES:
        raise ValueError(f"executable {cmd[0]!r} is not permitted by allow list")
    return cmd


def safe_run(
    cmd: Sequence[str],
    *,
    cwd: Optional[str] = None,
    timeout: Optional[float] = None,
) -> subprocess.CompletedProcess:
    _ensure_allowed(cmd)
    _LOG.debug("safe_run executing cmd=%s cwd=%s timeout=%s", list(cmd), cwd, timeout)
    return subprocess.run(  # nosec
        list(cmd),
        cwd=cwd,
        timeout=timeout,
        capture_output=True,
        text=True,
        check=False,
    )


def stage_files(paths: Iterable[Path], *, git: str = "git", cwd: Optional[Path] = None) -> List[Path]:
    """Run ``git add`` for each path; raise StagingError on the first failure."""
    staged: List[Path] = []
    for path in paths:
        try:
            # absolute, since git runs from cwd rather than the caller's directory
            proc = safe_run([git, "add", "--", str(Path(path).resolve())], cwd=str(cwd) if cwd else None, timeout=30)
        except (OSError, subprocess.SubprocessError) as exc:
            raise StagingError(str(path), str(exc)) from exc
        if proc.returncode != 0:
            raise StagingError(str(path), (proc.stderr or "").strip() or f"exit status {proc.returncode}")
        staged.append(path)
    return staged
