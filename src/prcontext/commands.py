from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .client import GitHubClient
from .document import assemble
from .errors import InvalidIdentity, UnknownCommand
from .fragments import build_fragments
from .identity import (
    PullRequestIdentity,
    parse_explicit_identity,
    parse_pull_request_url,
    resolve_from_worktree,
)
from .models import AssembledDocument

Handler = Callable[[Sequence[str], GitHubClient, Path | str | None], AssembledDocument]


@dataclass(frozen=True)
class Completion:
    label: str
    new_text: str


def pull_request_document(client: GitHubClient, identity: PullRequestIdentity) -> AssembledDocument:
    """Fetch a pull request and its review comments and assemble them."""
    pr = client.fetch_pull_request(identity.owner, identity.repo, identity.number)
    comments = client.fetch_comments(identity.owner, identity.repo, identity.number)
    return assemble(build_fragments(pr, comments))


def _first_arg(args: Sequence[str], missing: str) -> str:
    if not args or not args[0].strip():
        raise InvalidIdentity(missing)
    return args[0]


def pr_link(args: Sequence[str], client: GitHubClient, cwd: Path | str | None = None) -> AssembledDocument:
    url = _first_arg(args, "No URL provided. Please provide a GitHub pull request URL.")
    return pull_request_document(client, parse_pull_request_url(url))


def pr_open(args: Sequence[str], client: GitHubClient, cwd: Path | str | None = None) -> AssembledDocument:
    text = _first_arg(args, "Expected OWNER,REPO,NUMBER")
    return pull_request_document(client, parse_explicit_identity(text))


def pr_current(args: Sequence[str], client: GitHubClient, cwd: Path | str | None = None) -> AssembledDocument:
    if cwd is None:
        raise InvalidIdentity("No working directory to read the git remote from")
    return pull_request_document(client, resolve_from_worktree(cwd, client))


COMMANDS: dict[str, Handler] = {
    "pr-link": pr_link,
    "pr-open": pr_open,
    "pr-current": pr_current,
}


def run_command(
    name: str,
    args: Sequence[str],
    client: GitHubClient,
    cwd: Path | str | None = None,
) -> AssembledDocument:
    handler = COMMANDS.get(name)
    if handler is None:
        raise UnknownCommand(f'unknown command: "{name}"')
    return handler(args, client, cwd)


def complete_open_pull_requests(
    client: GitHubClient,
    owner: str,
    repo: str,
    branch: str | None = None,
) -> list[Completion]:
    """Argument completions for ``pr-open``: one per open pull request."""
    return [
        Completion(label=f"#{pr.number}: {pr.title}", new_text=f"{owner},{repo},{pr.number}")
        for pr in client.fetch_open_pull_requests(owner, repo, branch)
    ]
