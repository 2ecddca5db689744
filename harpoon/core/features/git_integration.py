"""Pure-function git helpers.

Every function in this module is stateless — it takes explicit parameters
and returns a value.
"""

from __future__ import annotations

import os
import subprocess

from ..constants import GIT_TIMEOUT


def run_git(*args: str, cwd: str | None = None) -> tuple[bool, str]:
    """Run a git command and return *(success, output)*."""
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=GIT_TIMEOUT,
            cwd=cwd or os.getcwd(),
        )
        return (
            result.returncode == 0,
            result.stdout.strip() or result.stderr.strip(),
        )
    except FileNotFoundError:
        return False, "git not found"
    except subprocess.TimeoutExpired:
        return False, "git command timed out"
    except (OSError, ValueError) as exc:
        return False, str(exc)


def current_branch(cwd: str | None = None) -> str | None:
    """Return the checked-out branch name, or None outside a git work tree."""
    ok, output = run_git("rev-parse", "--abbrev-ref", "HEAD", cwd=cwd)
    if not ok or not output:
        return None
    return output


def toplevel(cwd: str | None = None) -> str | None:
    """Return the work tree root containing *cwd*, or None."""
    ok, output = run_git("rev-parse", "--show-toplevel", cwd=cwd)
    if not ok or not output:
        return None
    return output
