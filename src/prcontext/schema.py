"""Strict payload models for the GitHub REST responses prcontext consumes.

Field names mirror the REST API; values are never coerced, so a string where
an integer is expected is rejected rather than converted.
API Reference: https://docs.github.com/en/rest/pulls
"""
from __future__ import annotations

from typing import Annotated, Any, TypeVar

from pydantic import AfterValidator, BaseModel, StrictInt, StrictStr, ValidationError

from .errors import MalformedResponse
from .models import Comment, PullRequest, User

_Payload = TypeVar("_Payload", bound=BaseModel)


def _encodable(value: str) -> str:
    # JSON allows lone surrogate escapes such as "\ud83d"; they cannot be encoded as UTF-8.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"string is not valid unicode: {exc.reason}") from exc
    return value


Text = Annotated[StrictStr, AfterValidator(_encodable)]


class UserPayload(BaseModel):
    login: Text
    id: StrictInt
    avatar_url: Text

    def to_model(self) -> User:
        return User(login=self.login, id=self.id, avatar_url=self.avatar_url)


class BranchPayload(BaseModel):
    ref: Text


class PullRequestPayload(BaseModel):
    number: StrictInt
    title: Text
    state: Text
    html_url: Text
    body: Text | None = None
    user: UserPayload
    created_at: Text
    updated_at: Text
    head: BranchPayload | None = None

    def to_model(self) -> PullRequest:
        return PullRequest(
            number=self.number,
            title=self.title,
            state=self.state,
            url=self.html_url,
            body=self.body,
            author=self.user.to_model(),
            created_at=self.created_at,
            updated_at=self.updated_at,
            head_ref=self.head.ref if self.head else None,
        )


class ReviewCommentPayload(BaseModel):
    id: StrictInt
    body: Text
    user: UserPayload
    created_at: Text
    updated_at: Text
    html_url: Text
    path: Text
    diff_hunk: Text
    in_reply_to_id: StrictInt | None = None

    def to_model(self) -> Comment:
        return Comment(
            id=self.id,
            body=self.body,
            author=self.user.to_model(),
            created_at=self.created_at,
            updated_at=self.updated_at,
            url=self.html_url,
            path=self.path,
            diff_excerpt=self.diff_hunk,
            in_reply_to_id=self.in_reply_to_id,
        )


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        problems.append(f"{location} ({error['msg']})")
    return "; ".join(problems)


def decode(payload_type: type[_Payload], data: Any, what: str) -> _Payload:
    """Validate ``data`` against ``payload_type`` or raise MalformedResponse."""
    try:
        return payload_type.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponse(f"Malformed {what}: {_describe(exc)}") from exc
