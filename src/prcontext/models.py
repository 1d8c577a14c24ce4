from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from functools import cached_property


@dataclass(frozen=True)
class User:
    login: str
    id: int
    avatar_url: str


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    state: str
    url: str
    body: str | None
    author: User
    created_at: str
    updated_at: str
    head_ref: str | None = None


@dataclass(frozen=True)
class Comment:
    id: int
    body: str
    author: User
    created_at: str
    updated_at: str
    url: str
    path: str
    diff_excerpt: str
    in_reply_to_id: int | None = None

    @property
    def is_reply(self) -> bool:
        return bool(self.in_reply_to_id)


@dataclass(frozen=True)
class Fragment:
    label: str
    content: str


@dataclass(frozen=True)
class Section:
    label: str
    start: int
    end: int


@dataclass(frozen=True)
class AssembledDocument:
    """Concatenated fragment text plus one labeled range per fragment.

    Offsets count unicode code points, so ``text[section.start:section.end]``
    is the fragment content. Use :meth:`byte_sections` for hosts that address
    buffers by encoded byte.
    """

    text: str
    sections: tuple[Section, ...] = ()

    @cached_property
    def _starts(self) -> list[int]:
        return [section.start for section in self.sections]

    def section_text(self, section: Section) -> str:
        return self.text[section.start : section.end]

    def section_at(self, position: int) -> Section | None:
        """Return the section covering ``position``, or None inside a separator."""
        if not 0 <= position < len(self.text):
            raise IndexError(f"position {position} is outside the document (length {len(self.text)})")
        index = bisect_right(self._starts, position) - 1
        if index < 0:
            return None
        section = self.sections[index]
        return section if position < section.end else None

    def byte_sections(self, encoding: str = "utf-8") -> tuple[Section, ...]:
        converted: list[Section] = []
        for section in self.sections:
            start = len(self.text[: section.start].encode(encoding))
            end = start + len(self.section_text(section).encode(encoding))
            converted.append(Section(label=section.label, start=start, end=end))
        return tuple(converted)
