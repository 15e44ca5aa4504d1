import io
import os
import subprocess
import sys
from pathlib import Path

import pytest

from translint.core.reporting import Reporter

ROOT = Path(__file__).resolve().parents[1]

SCENARIO = (
    '{{ _("add\n'
    ' to cart") }}\n'
    '{{ _("done") }}\n'
    '{{ _("buy\n'
    'now\n'
    'please") }}\n'
)

FIXED_SCENARIO = (
    '{{ _("add to cart") }}\n'
    '{{ _("done") }}\n'
    '{{ _("buy now please") }}\n'
)


def run_cli(args, cwd=None, timeout=60):
    """
    Run the CLI as a subprocess: python -m translint.cli <args>
    Returns CompletedProcess with stdout/stderr text captured.
    """
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(ROOT), env.get("PYTHONPATH", "")) if p)
    cmd = [sys.executable, "-m", "translint.cli"] + list(map(str, args))
    return subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True, timeout=timeout)


class CapturingReporter(Reporter):
    def __init__(self) -> None:
        super().__init__(out=io.StringIO(), err=io.StringIO())

    @property
    def stdout(self) -> str:
        return self.out.getvalue()

    @property
    def stderr(self) -> str:
        return self.err.getvalue()


@pytest.fixture()
def reporter() -> CapturingReporter:
    return CapturingReporter()


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """A small template tree with one multi-line string per kind of file."""
    root = tmp_path / "project"
    (root / "templates").mkdir(parents=True)
    (root / "templates" / "cart.jinja").write_text(SCENARIO, encoding="utf-8")
    (root / "templates" / "ok.jinja").write_text('<p>{{ _("fine") }}</p>\n', encoding="utf-8")
    for excluded in ("node_modules", ".git", "libraries", "dist", "build"):
        (root / excluded).mkdir()
        (root / excluded / "vendored.jinja").write_text('{{ _("a\nb") }}\n', encoding="utf-8")
    (root / "templates" / "notes.html").write_text('{{ _("not\nchecked") }}\n', encoding="utf-8")
    return root
