from __future__ import annotations

from ..models import AssembledDocument


def format_markdown(document: AssembledDocument) -> str:
    lines: list[str] = []

    for section in document.sections:
        lines.append(f"## {section.label}")
        lines.append(f"> Range: {section.start}..{section.end}")
        lines.append("")
        lines.append(document.section_text(section))
        lines.append("")

    return "\n".join(lines)
