"""Canonical serialization of a Document back to its stored shape"""

import json
from typing import Any

from memofiche.core.models import ContentBlock, Document, Section
from memofiche.core.normalize import CUSTOM_KEY, HIDDEN_KEY, MEMO_KEY, ORDER_KEY, VARIANT_KEY


def _blocks(blocks: list[ContentBlock]) -> list[dict[str, str]]:
    return [b.model_dump(mode="json") for b in blocks]


def _entry(section: Section) -> dict[str, Any]:
    """Stored form of a memo/custom section."""
    return {"id": section.id, "title": section.title, "content": _blocks(section.blocks)}


def to_storage(document: Document) -> dict[str, Any]:
    """Return the canonical stored dict: passthrough keys, then variant and section data.

    Schema sections are written under their own id as typed block lists; legacy
    scalar and string-list shapes are never written.
    """
    data: dict[str, Any] = dict(document.extra)
    data[VARIANT_KEY] = document.variant
    for section_id, section in document.schema_fields.items():
        data[section_id] = _blocks(section.blocks)
    data[MEMO_KEY] = [_entry(s) for s in document.memo_sections]
    data[CUSTOM_KEY] = [_entry(s) for s in document.custom_sections]
    data[ORDER_KEY] = list(document.section_order)
    data[HIDDEN_KEY] = list(document.hidden_sections)
    return data


def dump_json(data: Any, indent: int = 2) -> str:
    """Serialize stored data as UTF-8 friendly JSON."""
    return json.dumps(data, indent=indent or None, ensure_ascii=False)
