"""Read the local git context used to find the pull request for a checkout."""
from __future__ import annotations

import subprocess
from pathlib import Path

from .errors import GitError


def _run_git(cwd: Path | str, args: list[str], operation: str) -> str:
    try:
        result = subprocess.run(
            ["git", "-C", str(cwd), *args],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise GitError(f"Failed to {operation}: {exc}") from exc

    if result.returncode != 0:
        detail = result.stderr.strip() or f"git exited with status {result.returncode}"
        raise GitError(f"Failed to {operation} in {cwd}: {detail}")
    return result.stdout.strip()


def get_remote_url(cwd: Path | str, remote: str = "origin") -> str:
    return _run_git(cwd, ["config", "--get", f"remote.{remote}.url"], f"read remote '{remote}' URL")


def get_current_branch(cwd: Path | str) -> str:
    return _run_git(cwd, ["rev-parse", "--abbrev-ref", "HEAD"], "read current branch")
