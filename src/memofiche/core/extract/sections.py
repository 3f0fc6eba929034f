"""Section construction from stored values and user-section id assignment"""

import logging
from typing import Any

from memofiche.core.extract.blocks import decode_legacy_content
from memofiche.core.models import Section


logger = logging.getLogger(__name__)


def to_section(section_id: str, title: str, raw: Any) -> Section:
    """Build a Section from any stored content shape."""
    return Section(id=section_id, title=title, blocks=decode_legacy_content(raw))


def is_empty(section: Section) -> bool:
    """True when a section has no blocks or only blank ones (display policy only)."""
    return all(b.is_blank() for b in section.blocks)


def _stored_id(entry: Any) -> str | None:
    if isinstance(entry, dict) and isinstance(entry.get("id"), str) and entry["id"].strip():
        return entry["id"]
    return None


def _unique(candidate: str, taken: set[str]) -> str:
    """Return candidate, or candidate-2, candidate-3, ... whichever is free."""
    if candidate not in taken:
        return candidate
    n = 2
    while f"{candidate}-{n}" in taken:
        n += 1
    return f"{candidate}-{n}"


def assign_section_ids(entries: list, prefix: str, taken: set[str]) -> list[str]:
    """Return one id per stored entry, unique against taken (updated in place).

    Stored ids are claimed first, in order; a stored id already taken is
    re-keyed rather than dropped. Entries without an id then get
    '<prefix>-<index>'. Deterministic, so normalizing twice yields the same ids.
    """
    ids: list[str | None] = []
    for entry in entries:
        stored = _stored_id(entry)
        if stored is None:
            ids.append(None)
            continue
        new_id = _unique(stored, taken)
        if new_id != stored:
            logger.warning("Duplicate section id %r re-keyed to %r", stored, new_id)
        taken.add(new_id)
        ids.append(new_id)

    for i, entry_id in enumerate(ids):
        if entry_id is None:
            ids[i] = _unique(f"{prefix}-{i}", taken)
            taken.add(ids[i])
    return ids


def section_from_entry(section_id: str, entry: Any) -> Section:
    """Build a user Section from a stored {id?, title, content} entry.

    A bare string entry is taken as content; other non-mapping entries give an
    empty section so the slot stays addressable.
    """
    if isinstance(entry, dict):
        title = entry.get("title")
        return to_section(section_id, title if isinstance(title, str) else "", entry.get("content"))
    if isinstance(entry, str):
        return to_section(section_id, "", entry)
    logger.debug("Unrecognized user section entry %s", type(entry).__name__)
    return Section(id=section_id)


def user_sections(raw: Any, prefix: str, taken: set[str]) -> list[Section]:
    """Normalize a stored memoSections/customSections value to a list of Sections."""
    if raw is None:
        return []
    entries = list(raw) if isinstance(raw, (list, tuple)) else [raw]
    ids = assign_section_ids(entries, prefix, taken)
    return [section_from_entry(i, e) for i, e in zip(ids, entries)]
