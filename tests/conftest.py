"""Shared factories and fixtures for the test suite."""
from __future__ import annotations

import pytest

from prcontext.models import Comment, PullRequest, User

API_URL = "https://api.github.com"

# ---------------------------------------------------------------------------
# REST payload factories: raw dicts that mirror API responses
# ---------------------------------------------------------------------------


def user_json(login: str = "alice", id: int = 1, avatar_url: str | None = None) -> dict:
    return {
        "login": login,
        "id": id,
        "avatar_url": avatar_url or f"https://avatars.githubusercontent.com/u/{id}",
        "type": "User",
    }


def pr_json(
    number: int = 1,
    title: str = "Fix bug",
    state: str = "open",
    body: str | None = "Fixes the bug.",
    login: str = "alice",
    head_ref: str | None = "fix-bug",
) -> dict:
    data = {
        "number": number,
        "title": title,
        "state": state,
        "html_url": f"https://github.com/owner/repo/pull/{number}",
        "body": body,
        "user": user_json(login),
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
        "draft": False,
    }
    if head_ref is not None:
        data["head"] = {"ref": head_ref, "sha": "abc123"}
    return data


def comment_json(
    id: int = 100,
    body: str = "Fix this",
    login: str = "reviewer",
    path: str = "src/foo.py",
    diff_hunk: str = "@@ -1,3 +1,4 @@\n context\n+new line",
    in_reply_to_id: int | None = None,
) -> dict:
    data = {
        "id": id,
        "body": body,
        "user": user_json(login, id=2),
        "created_at": "2024-01-01T11:00:00Z",
        "updated_at": "2024-01-01T11:00:00Z",
        "html_url": f"https://github.com/owner/repo/pull/1#discussion_r{id}",
        "path": path,
        "diff_hunk": diff_hunk,
    }
    if in_reply_to_id is not None:
        data["in_reply_to_id"] = in_reply_to_id
    return data


# ---------------------------------------------------------------------------
# Model object factories: typed model instances
# ---------------------------------------------------------------------------


def make_user(login: str = "alice", id: int = 1) -> User:
    return User(login=login, id=id, avatar_url=f"https://avatars.githubusercontent.com/u/{id}")


def make_pull_request(
    number: int = 1,
    title: str = "Fix bug",
    state: str = "open",
    body: str | None = "Fixes the bug.",
    login: str = "alice",
    head_ref: str | None = "fix-bug",
) -> PullRequest:
    return PullRequest(
        number=number,
        title=title,
        state=state,
        url=f"https://github.com/owner/repo/pull/{number}",
        body=body,
        author=make_user(login),
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-02T00:00:00Z",
        head_ref=head_ref,
    )


def make_comment(
    id: int = 100,
    body: str = "Fix this",
    login: str = "reviewer",
    diff_excerpt: str = "@@ -1,3 +1,4 @@\n context\n+new line",
    in_reply_to_id: int | None = None,
) -> Comment:
    return Comment(
        id=id,
        body=body,
        author=make_user(login, id=2),
        created_at="2024-01-01T11:00:00Z",
        updated_at="2024-01-01T11:00:00Z",
        url=f"https://github.com/owner/repo/pull/1#discussion_r{id}",
        path="src/foo.py",
        diff_excerpt=diff_excerpt,
        in_reply_to_id=in_reply_to_id,
    )


# ---------------------------------------------------------------------------
# Autouse fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def no_dotenv(mocker):
    """Prevent tests from loading a real .env file."""
    mocker.patch("prcontext.cli.load_dotenv")
