#!/usr/bin/env python3
"""Run the Numerus quality gates.

Usage:
    python scripts/run_gates.py                 # every gate, in order
    python scripts/run_gates.py lint test       # selected gates only

Gates: format, lint, typecheck, test, smoke. The first failing gate stops
the run and its exit code becomes the script's exit code.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent

GATES: dict[str, list[str]] = {
    "format": ["ruff", "format", "--check", "."],
    "lint": ["ruff", "check", "."],
    "typecheck": [sys.executable, "-m", "mypy", "src/numerus"],
    "test": [sys.executable, "-m", "pytest", "-q"],
    "smoke": [sys.executable, "-m", "numerus", "backends"],
}


def run_gate(name: str) -> int:
    """Run one gate and return its exit code."""
    cmd = GATES[name]
    print(f"[{name}] {' '.join(cmd)}", flush=True)
    returncode = subprocess.run(cmd, cwd=REPO_ROOT, check=False).returncode
    print(f"[{name}] {'ok' if returncode == 0 else f'failed ({returncode})'}")
    return returncode


def main(argv: list[str] | None = None) -> int:
    """Run the named gates, or all of them when none are named."""
    names = [name.lower() for name in (sys.argv[1:] if argv is None else argv)]
    unknown = [name for name in names if name not in GATES]
    if unknown:
        print(f"unknown gate(s): {', '.join(unknown)}; choose from {', '.join(GATES)}")
        return 2

    for name in names or GATES:
        returncode = run_gate(name)
        if returncode != 0:
            return returncode
    return 0


if __name__ == "__main__":
    sys.exit(main())
