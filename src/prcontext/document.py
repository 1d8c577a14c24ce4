from __future__ import annotations

from collections.abc import Iterable

from .models import AssembledDocument, Fragment, Section

DEFAULT_SEPARATOR = "\n\n"


def assemble(fragments: Iterable[Fragment], separator: str = DEFAULT_SEPARATOR) -> AssembledDocument:
    """Concatenate fragment contents and record where each one landed.

    A separator goes between consecutive fragments only. Its span belongs to
    no section, so every section is exactly as long as its fragment content.
    """
    parts: list[str] = []
    sections: list[Section] = []
    offset = 0

    for index, fragment in enumerate(fragments):
        if index:
            parts.append(separator)
            offset += len(separator)
        end = offset + len(fragment.content)
        sections.append(Section(label=fragment.label, start=offset, end=end))
        parts.append(fragment.content)
        offset = end

    return AssembledDocument(text="".join(parts), sections=tuple(sections))
