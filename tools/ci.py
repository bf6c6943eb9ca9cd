#!/usr/bin/env python3
# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, tests, build, and the example project."""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str], str]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"], "."),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"], "."),
    ("Tests", ["uv", "run", "pytest", "--cov=classgen", "--cov-report=term-missing"], "."),
    ("Build", ["uv", "build"], "."),
    ("Example", ["uv", "run", "classgen", "generate"], "example"),
]


def main() -> int:
    """Run all CI steps and report results."""
    results: list[tuple[str, bool, float]] = []
    root = _repo_root()

    for name, cmd, directory in STEPS:
        _banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=root / directory)
        results.append((name, proc.returncode == 0, time.monotonic() - start))

    _banner("  Summary")
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))

    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> Path:
    return Path(__file__).parent.parent


if __name__ == "__main__":
    sys.exit(main())
