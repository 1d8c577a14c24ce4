from __future__ import annotations


class PrContextError(Exception):
    """Base class for all prcontext errors."""


class TransportError(PrContextError):
    """The request never produced an HTTP response."""


class ApiError(PrContextError):
    """GitHub answered with an HTTP status of 400 or above."""

    def __init__(self, message: str, status: int, operation: str = "") -> None:
        self.message = message
        self.status = status
        self.operation = operation
        prefix = f"Error {operation}: " if operation else ""
        super().__init__(f"{prefix}GitHub API error: {message} ({status})")


class NotFoundError(ApiError):
    pass


class MalformedResponse(PrContextError):
    """A response body is not JSON or lacks a required field."""


class InvalidIdentity(PrContextError):
    """User input does not name an owner, repository and pull request number."""


class NoMatchingPullRequest(PrContextError):
    pass


class GitError(PrContextError):
    """A local git command failed."""


class UnknownCommand(PrContextError):
    pass
