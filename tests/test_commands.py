"""Tests for the command dispatch table and the shared document pipeline."""
from __future__ import annotations

import dataclasses
from unittest.mock import MagicMock

import pytest

from prcontext.commands import (
    COMMANDS,
    Completion,
    complete_open_pull_requests,
    pull_request_document,
    run_command,
)
from prcontext.errors import ApiError, InvalidIdentity, UnknownCommand
from prcontext.identity import PullRequestIdentity

from .conftest import make_comment, make_pull_request


@pytest.fixture
def client():
    mock_client = MagicMock()
    mock_client.fetch_pull_request.return_value = make_pull_request(number=42, title="Fix bug", body="desc")
    mock_client.fetch_comments.return_value = [
        make_comment(id=1, login="bob", body="nice", diff_excerpt="foo"),
        make_comment(id=2, login="alice", body="thanks", in_reply_to_id=1),
    ]
    return mock_client


class TestPullRequestDocument:
    def test_fetches_pr_then_comments(self, client):
        pull_request_document(client, PullRequestIdentity("owner", "repo", 42))
        client.fetch_pull_request.assert_called_once_with("owner", "repo", 42)
        client.fetch_comments.assert_called_once_with("owner", "repo", 42)

    def test_document_sections(self, client):
        document = pull_request_document(client, PullRequestIdentity("owner", "repo", 42))
        assert [s.label for s in document.sections] == [
            "PR #42: Fix bug",
            "Comment by @bob",
            "↪ Reply to comment by @alice",
        ]
        assert document.text.startswith("desc\n\n```diff\nfoo\n```\n\nnice\n\n")
        assert document.section_text(document.sections[2]).endswith("thanks")

    def test_comment_failure_aborts(self, client):
        client.fetch_comments.side_effect = ApiError("Server Error", 500)
        with pytest.raises(ApiError):
            pull_request_document(client, PullRequestIdentity("owner", "repo", 42))


class TestDispatch:
    def test_table_lists_every_command(self):
        assert set(COMMANDS) == {"pr-link", "pr-open", "pr-current"}

    def test_pr_link(self, client):
        document = run_command("pr-link", ["https://github.com/owner/repo/pull/42"], client)
        client.fetch_pull_request.assert_called_once_with("owner", "repo", 42)
        assert document.sections[0].label == "PR #42: Fix bug"

    def test_pr_link_without_url(self, client):
        with pytest.raises(InvalidIdentity, match="No URL provided"):
            run_command("pr-link", [], client)
        client.fetch_pull_request.assert_not_called()

    def test_pr_open(self, client):
        run_command("pr-open", ["owner,repo,42"], client)
        client.fetch_pull_request.assert_called_once_with("owner", "repo", 42)

    def test_pr_open_invalid_number(self, client):
        with pytest.raises(InvalidIdentity):
            run_command("pr-open", ["owner,repo,abc"], client)

    def test_pr_open_owner_with_slash_never_reaches_api(self, client):
        with pytest.raises(InvalidIdentity):
            run_command("pr-open", ["evil/x,repo,1"], client)
        client.fetch_pull_request.assert_not_called()
        client.fetch_comments.assert_not_called()

    def test_pr_current_resolves_from_worktree(self, client, mocker):
        resolve = mocker.patch(
            "prcontext.commands.resolve_from_worktree",
            return_value=PullRequestIdentity("owner", "repo", 42, branch="feature"),
        )
        run_command("pr-current", [], client, cwd="/work")
        resolve.assert_called_once_with("/work", client)
        client.fetch_pull_request.assert_called_once_with("owner", "repo", 42)

    def test_pr_current_needs_cwd(self, client):
        with pytest.raises(InvalidIdentity):
            run_command("pr-current", [], client)

    def test_unknown_command(self, client):
        with pytest.raises(UnknownCommand, match="pr-nope"):
            run_command("pr-nope", [], client)


class TestCompletions:
    def test_one_completion_per_open_pr(self):
        client = MagicMock()
        client.fetch_open_pull_requests.return_value = [
            make_pull_request(number=1, title="First"),
            make_pull_request(number=2, title="Second"),
        ]
        completions = complete_open_pull_requests(client, "owner", "repo")
        assert completions == [
            Completion(label="#1: First", new_text="owner,repo,1"),
            Completion(label="#2: Second", new_text="owner,repo,2"),
        ]
        client.fetch_open_pull_requests.assert_called_once_with("owner", "repo", None)

    def test_branch_is_forwarded(self):
        client = MagicMock()
        client.fetch_open_pull_requests.return_value = []
        assert complete_open_pull_requests(client, "owner", "repo", "main") == []
        client.fetch_open_pull_requests.assert_called_once_with("owner", "repo", "main")

    def test_completion_carries_label_and_text_only(self):
        assert [f.name for f in dataclasses.fields(Completion)] == ["label", "new_text"]
