#!/usr/bin/env python3
"""
Run the CI checks for fullname_parser locally, in the ACTIVE virtual environment.

Steps (same order as CI):
  1) pip install -e .[dev]               (skip with --no-install)
  2) black --check, line length 120      (fullname_parser, tests, scripts)
  3) mypy fullname_parser
  4) pytest tests/ with coverage, PYTHONPATH=.

All commands run from the repo root (the directory holding pyproject.toml).
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path


def repo_root() -> Path:
    here = Path(__file__).resolve().parent
    for d in [here] + list(here.parents):
        if (d / "pyproject.toml").exists():
            return d
    return here


REPO = repo_root()
PACKAGE = "fullname_parser"
COVERAGE_FLOOR = 90


def run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    print(">>>", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=str(REPO), env=env)


def python_module(module: str, *args: str) -> list[str]:
    return [sys.executable, "-m", module, *args]


def install() -> None:
    run(python_module("pip", "install", "-e", ".[dev]"))


def check_formatting() -> None:
    targets = [PACKAGE, "tests"] + [str(p.relative_to(REPO)) for p in sorted((REPO / "scripts").glob("*.py"))]
    run(python_module("black", *targets, "--check", "--line-length", "120"))


def check_types() -> None:
    run(python_module("mypy", PACKAGE, "--ignore-missing-imports"))


def run_tests() -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO)
    run(
        python_module(
            "pytest",
            "tests/",
            f"--cov={PACKAGE}",
            "--cov-report=term-missing",
            f"--cov-fail-under={COVERAGE_FLOOR}",
        ),
        env=env,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Run fullname_parser CI checks locally.")
    parser.add_argument("--no-install", action="store_true", help="Do not reinstall the package before checking.")
    parser.add_argument("--tests-only", action="store_true", help="Skip black and mypy, only run pytest.")
    args = parser.parse_args()

    if not args.no_install:
        install()
    if not args.tests_only:
        check_formatting()
        check_types()
    run_tests()

    print("\nALL CHECKS PASSED")


if __name__ == "__main__":
    try:
        main()
    except subprocess.CalledProcessError as e:
        print(f"\nCommand failed with exit code {e.returncode}", file=sys.stderr)
        sys.exit(e.returncode)
