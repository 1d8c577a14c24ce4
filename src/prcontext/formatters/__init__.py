from __future__ import annotations

from collections.abc import Callable

from .json_fmt import format_json
from .markdown_fmt import format_markdown
from ..models import AssembledDocument

FORMATS = ("text", "json", "markdown")


def format_text(document: AssembledDocument) -> str:
    return document.text


def get_formatter(fmt: str, *, byte_offsets: bool = False) -> Callable[[AssembledDocument], str]:
    if fmt == "text":
        return format_text
    if fmt == "json":
        return lambda document: format_json(document, byte_offsets=byte_offsets)
    if fmt == "markdown":
        return format_markdown
    raise ValueError(f"Unknown format: {fmt!r}")
