from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass

ENV_GITHUB_TOKEN = "GITHUB_TOKEN"

# Looks up a named value in the caller's environment; None when unset.
CredentialLookup = Callable[[str], str | None]


def environ_lookup(name: str) -> str | None:
    return os.environ.get(name)


@dataclass(frozen=True)
class Config:
    github_token: str | None = None

    @classmethod
    def from_lookup(cls, lookup: CredentialLookup | None) -> Config:
        if lookup is None:
            return cls()
        # An empty variable counts as unset; requests go out unauthenticated.
        return cls(github_token=lookup(ENV_GITHUB_TOKEN) or None)
