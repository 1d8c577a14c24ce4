"""Work out which pull request the user means.

Three inputs are understood: a pull request URL, an explicit
``owner,repo,number`` triple, and a local checkout whose ``origin`` remote
points at GitHub.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from . import git
from .errors import InvalidIdentity, NoMatchingPullRequest

if TYPE_CHECKING:
    from .client import GitHubClient

GITHUB_HOST = "github.com"
_SSH_PREFIX = f"git@{GITHUB_HOST}:"
_HTTPS_PREFIX = f"https://{GITHUB_HOST}/"
_MAX_NUMBER = 2**32 - 1
_NAME_PATTERN = re.compile(r"[A-Za-z0-9._-]+")


@dataclass(frozen=True)
class PullRequestIdentity:
    owner: str
    repo: str
    number: int
    branch: str | None = None


def _validate_name(name: str, kind: str) -> str:
    if not _NAME_PATTERN.fullmatch(name) or name in (".", ".."):
        raise InvalidIdentity(f"Invalid {kind} name: {name!r}")
    return name


def parse_number(text: str) -> int:
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidIdentity(f"Invalid pull request number: {text!r}")
    number = int(text)
    if not 1 <= number <= _MAX_NUMBER:
        raise InvalidIdentity(f"Pull request number out of range: {number}")
    return number


def parse_pull_request_url(url: str) -> PullRequestIdentity:
    """Parse ``https://github.com/<owner>/<repo>/pull/<number>``."""
    segments = url.strip().split("#")[0].split("?")[0].split("/")
    try:
        host_index = segments.index(GITHUB_HOST)
    except ValueError:
        raise InvalidIdentity(f"Not a GitHub pull request URL: {url!r}") from None

    repo_parts = segments[host_index + 1 : host_index + 3]
    if len(repo_parts) != 2 or not all(repo_parts):
        raise InvalidIdentity(f"Invalid GitHub PR URL format: {url!r}")

    tail = [segment for segment in segments[host_index + 3 :] if segment]
    if not tail:
        raise InvalidIdentity(f"No pull request number in URL: {url!r}")
    owner, repo = repo_parts
    return PullRequestIdentity(
        owner=_validate_name(owner, "owner"),
        repo=_validate_name(repo, "repository"),
        number=parse_number(tail[-1]),
    )


def parse_explicit_identity(text: str) -> PullRequestIdentity:
    """Parse ``owner,repo,number``."""
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 3:
        raise InvalidIdentity(f"Expected OWNER,REPO,NUMBER but got {text!r}")
    owner, repo, number = parts
    if not owner:
        raise InvalidIdentity("Owner not provided")
    if not repo:
        raise InvalidIdentity("Repository not provided")
    if not number:
        raise InvalidIdentity("No PR number provided. Please provide a PR number.")
    return PullRequestIdentity(
        owner=_validate_name(owner, "owner"),
        repo=_validate_name(repo, "repository"),
        number=parse_number(number),
    )


def parse_remote_url(url: str) -> tuple[str, str]:
    """Return ``(owner, repo)`` for SSH or HTTPS GitHub remote URLs."""
    url = url.strip()
    if url.startswith(_SSH_PREFIX):
        path = url[len(_SSH_PREFIX) :]
    elif url.startswith(_HTTPS_PREFIX):
        path = url[len(_HTTPS_PREFIX) :]
    elif GITHUB_HOST in url:
        raise InvalidIdentity(f"Unsupported GitHub URL format: {url!r}")
    else:
        raise InvalidIdentity(f"Only GitHub repositories are supported: {url!r}")

    path = path.rstrip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    parts = path.split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise InvalidIdentity(f"Could not extract owner and repo from {url!r}")
    return _validate_name(parts[0], "owner"), _validate_name(parts[1], "repository")


def resolve_from_worktree(cwd: Path | str, client: GitHubClient) -> PullRequestIdentity:
    owner, repo = parse_remote_url(git.get_remote_url(cwd))
    branch = git.get_current_branch(cwd)

    prs = client.fetch_open_pull_requests(owner, repo, branch)
    if not prs:
        raise NoMatchingPullRequest(f"No open pull request for branch {branch!r} in {owner}/{repo}")
    # Several matches are possible (e.g. forks sharing a branch name); the first wins.
    return PullRequestIdentity(owner=owner, repo=repo, number=prs[0].number, branch=branch)
