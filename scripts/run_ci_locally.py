#!/usr/bin/env python3
"""
Run the CI checks locally using the ACTIVE virtual environment.

Order (matches CI):
  1) uv sync --all-extras [--frozen if uv.lock exists]
  2) black --check on korean_names/, scripts/ and tests/
  3) mypy on korean_names/ and scripts/
  4) pytest tests/ with coverage on korean_names

All commands run from the repo root (the directory holding pyproject.toml).
"""

import os
import sys
import shutil
import subprocess
from pathlib import Path

BLACK_VERSION = "24.8.0"
LINE_LENGTH = "120"
COVERAGE_FLOOR = "80"


def repo_root() -> Path:
    here = Path(__file__).resolve().parent
    for d in [here] + list(here.parents):
        if (d / "pyproject.toml").exists():
            return d
    return here


REPO = repo_root()


def uv_command() -> list[str]:
    uv_path = shutil.which("uv")
    if uv_path:
        return [uv_path]
    print("ERROR: 'uv' not found on PATH. Install uv first.", file=sys.stderr)
    sys.exit(2)


def run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    print(">>>", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=str(REPO), env=env)


def python_targets(*directories: str) -> list[str]:
    targets = []
    for directory in directories:
        if sorted((REPO / directory).glob("*.py")):
            targets.append(directory)
    return targets


def main() -> None:
    uv = uv_command()

    sync_args = ["sync", "--active", "--all-extras"]
    if (REPO / "uv.lock").exists():
        sync_args.append("--frozen")
    run(uv + sync_args)

    uvx = shutil.which("uvx")
    black = [uvx, "--from", f"black=={BLACK_VERSION}", "black"] if uvx else uv + ["run", "--active", "black"]
    run(black + python_targets("korean_names", "scripts", "tests") + ["--check", "--line-length", LINE_LENGTH])

    run(uv + ["run", "--active", "mypy"] + python_targets("korean_names", "scripts") + ["--ignore-missing-imports"])

    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO)
    run(
        uv
        + [
            "run",
            "--active",
            "pytest",
            "tests/",
            "--cov=korean_names",
            "--cov-report=term-missing",
            f"--cov-fail-under={COVERAGE_FLOOR}",
        ],
        env=env,
    )

    print("\nALL CHECKS PASSED")


if __name__ == "__main__":
    try:
        main()
    except subprocess.CalledProcessError as e:
        print(f"\nCommand failed with exit code {e.returncode}", file=sys.stderr)
        sys.exit(e.returncode)
