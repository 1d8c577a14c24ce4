from __future__ import annotations

from typing import Any

import httpx
from rich.console import Console
from rich.markup import escape

from .config import Config, CredentialLookup
from .errors import ApiError, MalformedResponse, NotFoundError, TransportError
from .models import Comment, PullRequest
from .schema import PullRequestPayload, ReviewCommentPayload, decode

_API_URL = "https://api.github.com"
_USER_AGENT = "prcontext"
_UNKNOWN_API_ERROR = "Unknown GitHub API error"
_stderr = Console(stderr=True)


class GitHubClient:
    def __init__(self, lookup: CredentialLookup | None = None) -> None:
        config = Config.from_lookup(lookup)
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": _USER_AGENT,
        }
        if config.github_token:
            headers["Authorization"] = f"Bearer {config.github_token}"

        self._client = httpx.Client(
            base_url=_API_URL,
            headers=headers,
            timeout=httpx.Timeout(30.0),
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self._client.close()

    def get(self, path: str, operation: str, params: dict[str, str] | None = None) -> Any:
        """Issue one GET and return the decoded JSON body.

        There is a single attempt per call; any failure aborts the caller.
        """
        try:
            response = self._client.get(path, params=params)
        except httpx.RequestError as exc:
            raise TransportError(f"Error {operation}: {exc}") from exc

        if response.status_code >= 400:
            message = _error_message(response)
            if response.status_code == 404:
                raise NotFoundError(message, response.status_code, operation)
            raise ApiError(message, response.status_code, operation)

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Error {operation}: response body is not valid JSON") from exc

    def fetch_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        operation = f"fetching pull request {owner}/{repo}#{number}"
        data = self.get(f"/repos/{owner}/{repo}/pulls/{number}", operation)
        return decode(PullRequestPayload, data, f"pull request {owner}/{repo}#{number}").to_model()

    def fetch_comments(self, owner: str, repo: str, number: int) -> list[Comment]:
        # Review comments rather than issue comments, so outdated diff comments are kept.
        operation = f"fetching review comments for {owner}/{repo}#{number}"
        data = self.get(f"/repos/{owner}/{repo}/pulls/{number}/comments", operation)
        if not isinstance(data, list):
            raise MalformedResponse(f"Error {operation}: expected a JSON array")
        return [
            decode(ReviewCommentPayload, item, f"review comment #{index} of {owner}/{repo}#{number}").to_model()
            for index, item in enumerate(data)
        ]

    def fetch_open_pull_requests(
        self,
        owner: str,
        repo: str,
        branch: str | None = None,
    ) -> list[PullRequest]:
        operation = f"listing open pull requests for {owner}/{repo}"
        data = self.get(f"/repos/{owner}/{repo}/pulls", operation, params={"state": "open"})
        if not isinstance(data, list):
            raise MalformedResponse(f"Error {operation}: expected a JSON array")

        result: list[PullRequest] = []
        for index, item in enumerate(data):
            try:
                pr = decode(PullRequestPayload, item, f"pull request entry #{index}").to_model()
            except MalformedResponse as exc:
                _stderr.print(f"[yellow]Warning:[/yellow] skipping entry while {operation}: {escape(str(exc))}")
                continue
            # The API's head filter expects "user:ref", so match the branch here.
            if branch is not None and pr.head_ref != branch:
                continue
            result.append(pr)
        return result


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return _UNKNOWN_API_ERROR
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return _UNKNOWN_API_ERROR
