#!/usr/bin/env -S uv run
# /// script
# requires-python = ">=3.10"
# dependencies = []
# ///
"""Git pre-commit hook that blocks committing large or vendored files.

Rejects the commit when any staged file is larger than 10 MB or lives inside
a node_modules directory.  If the staged files cannot be listed (git missing,
not a repository), the commit is allowed through with a warning.
"""

import os
import stat
import subprocess
import sys
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import NamedTuple

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
EXCLUDED_SEGMENT = "node_modules"
STAGED_FILES_COMMAND = ["git", "diff", "--cached", "--name-only", "--diff-filter=ACM"]
PREFIX = "[pre-commit]"


class Violation(NamedTuple):
    path: str
    reason: str


def warn(message: str) -> None:
    print(f"{PREFIX} {message}", file=sys.stderr)


def format_mb(size: int) -> str:
    """Render a byte count in MB, two decimals at most (ties round up), no trailing zeros."""
    mb = (Decimal(size) / (1024 * 1024)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{mb:f}".rstrip("0").rstrip(".")


def list_staged_paths() -> list[str]:
    """Return added, copied and modified paths from the index, or [] on failure."""
    try:
        result = subprocess.run(
            STAGED_FILES_COMMAND,
            capture_output=True,
            text=True,
            check=True,
        )
    except (subprocess.CalledProcessError, OSError):
        warn("warning: failed to list staged files, skipping size checks")
        return []

    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def is_excluded(path: str) -> bool:
    # git always reports "/", os.sep may differ, so check both
    return EXCLUDED_SEGMENT in path.split(os.sep) or path.startswith(EXCLUDED_SEGMENT + "/")


def evaluate(paths: list[str]) -> list[Violation]:
    violations: list[Violation] = []
    if not paths:
        return violations

    cwd = Path.cwd()
    for path in paths:
        if is_excluded(path):
            violations.append(Violation(path, f"Committed path is inside {EXCLUDED_SEGMENT}"))
            continue

        # Removed after staging, or a submodule: nothing to measure
        try:
            info = (cwd / path).stat()
        except (FileNotFoundError, OSError):
            continue

        if stat.S_ISREG(info.st_mode) and info.st_size > MAX_BYTES:
            violations.append(
                Violation(
                    path,
                    f"File size {format_mb(info.st_size)} MB exceeds {format_mb(MAX_BYTES)} MB",
                )
            )

    return violations


def report(violations: list[Violation]) -> int:
    """Print blocked files to stderr and return the hook's exit status."""
    if not violations:
        return 0

    lines = ["", f"{PREFIX} The following staged files are blocked:"]
    for violation in violations:
        lines.append(f" - {violation.path}: {violation.reason}")
    lines.append("")
    lines.append(
        f"{PREFIX} To proceed, unstage or remove these files "
        "(e.g. `git restore --staged <file>`), add them to .gitignore, or reduce their size."
    )
    print("\n".join(lines), file=sys.stderr)
    return 1


def main() -> int:
    return report(evaluate(list_staged_paths()))


if __name__ == "__main__":
    raise SystemExit(main())
