from __future__ import annotations

from collections.abc import Sequence

from .models import Comment, Fragment, PullRequest

NO_DESCRIPTION = "No description provided."
REPLY_MARKER = "↪"


def pull_request_fragment(pr: PullRequest) -> Fragment:
    body = pr.body if pr.body is not None else NO_DESCRIPTION
    return Fragment(label=f"PR #{pr.number}: {pr.title}", content=body)


def comment_fragment(comment: Comment) -> Fragment:
    login = comment.author.login
    if comment.is_reply:
        # The parent is not resolved; the marker only signals threading.
        label = f"{REPLY_MARKER} Reply to comment by @{login}"
    else:
        label = f"Comment by @{login}"
    content = f"```diff\n{comment.diff_excerpt}\n```\n\n{comment.body}"
    return Fragment(label=label, content=content)


def build_fragments(pr: PullRequest, comments: Sequence[Comment]) -> list[Fragment]:
    """Return the PR description fragment followed by one fragment per comment.

    Comments keep the order the API returned them in.
    """
    return [pull_request_fragment(pr), *(comment_fragment(c) for c in comments)]
