from __future__ import annotations

import dataclasses
import json

from ..models import AssembledDocument


def format_json(document: AssembledDocument, byte_offsets: bool = False) -> str:
    sections = document.byte_sections() if byte_offsets else document.sections
    payload = {
        "text": document.text,
        "offset_unit": "utf-8 bytes" if byte_offsets else "code points",
        "sections": [dataclasses.asdict(section) for section in sections],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)
