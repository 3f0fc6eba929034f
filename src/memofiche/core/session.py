"""Editing-session mutations on a normalized Document.

Every operation takes a Document and returns a new one; the input is never
mutated. The order is a list of ids, so moves are index swaps that never touch
section content.
"""

from typing import Any, Callable, Optional
from uuid import uuid4

from memofiche.core.extract.sections import to_section
from memofiche.core.models import Document, SectionKind
from memofiche.core.order import move_down, move_up
from memofiche.core.variants import DEFAULT_TABLE, VariantTable, uses_custom_sections, uses_memo_sections


IdFactory = Callable[[SectionKind], str]

DEFAULT_TITLE = "Nouvelle Section"


def new_section_id(kind: SectionKind, taken: set[str], token_length: int = 8) -> str:
    """Return '<kind>-<random hex>' not present in taken."""
    while True:
        candidate = f"{kind.value}-{uuid4().hex[:token_length]}"
        if candidate not in taken:
            return candidate


def _index_of(document: Document, section_id: str) -> int:
    try:
        return document.section_order.index(section_id)
    except ValueError:
        raise ValueError(f"Section {section_id!r} is not in the section order") from None


def move_section_up(document: Document, section_id: str) -> Document:
    """Swap a section with its predecessor; no-op for the first section."""
    order = move_up(document.section_order, _index_of(document, section_id))
    return document.model_copy(update={"section_order": order}, deep=True)


def move_section_down(document: Document, section_id: str) -> Document:
    """Swap a section with its successor; no-op for the last section."""
    order = move_down(document.section_order, _index_of(document, section_id))
    return document.model_copy(update={"section_order": order}, deep=True)


def add_section(
    document: Document,
    kind: SectionKind | str,
    title: str = DEFAULT_TITLE,
    content: Any = None,
    id_factory: Optional[IdFactory] = None,
    table: VariantTable = DEFAULT_TABLE,
    token_length: int = 8,
    ) -> tuple[Document, str]:
    """Append a new memo or custom section and its id to the order.

    Returns (document, new_id). Raises ValueError for schema sections, for a
    kind the document's variant does not support, or for a colliding id.
    """
    kind = SectionKind(kind)
    if kind == SectionKind.schema:
        raise ValueError("Schema sections are defined by the variant and cannot be added")
    if kind == SectionKind.memo and not uses_memo_sections(document.variant, table):
        raise ValueError(f"Variant {document.variant!r} does not support memo sections")
    if kind == SectionKind.custom and not uses_custom_sections(document.variant, table):
        raise ValueError(f"Variant {document.variant!r} does not support custom sections")

    taken = set(document.sections()) | set(document.section_order) | set(document.hidden_sections)
    new_id = id_factory(kind) if id_factory else new_section_id(kind, taken, token_length)
    if new_id in taken:
        raise ValueError(f"Section id {new_id!r} already exists")

    doc = document.model_copy(deep=True)
    bucket = doc.memo_sections if kind == SectionKind.memo else doc.custom_sections
    bucket.append(to_section(new_id, title, content))
    doc.section_order.append(new_id)
    return doc, new_id


def remove_section(document: Document, section_id: str) -> Document:
    """Take a section out of the order.

    Memo/custom sections are deleted outright. Schema sections keep their data
    and get a tombstone so later normalization does not re-append them.
    Raises ValueError if the id is neither ordered nor a known section.
    """
    kind = document.kind_of(section_id)
    if kind is None and section_id not in document.section_order:
        raise ValueError(f"Unknown section {section_id!r}")

    doc = document.model_copy(deep=True)
    doc.section_order = [i for i in doc.section_order if i != section_id]
    if kind == SectionKind.memo:
        doc.memo_sections = [s for s in doc.memo_sections if s.id != section_id]
    elif kind == SectionKind.custom:
        doc.custom_sections = [s for s in doc.custom_sections if s.id != section_id]
    elif kind == SectionKind.schema and section_id not in doc.hidden_sections:
        doc.hidden_sections.append(section_id)
    return doc


def restore_section(document: Document, section_id: str) -> Document:
    """Clear a schema section's tombstone and append it to the end of the order."""
    if section_id not in document.hidden_sections:
        raise ValueError(f"Section {section_id!r} is not hidden")
    doc = document.model_copy(deep=True)
    doc.hidden_sections = [i for i in doc.hidden_sections if i != section_id]
    if section_id not in doc.section_order:
        doc.section_order.append(section_id)
    return doc
