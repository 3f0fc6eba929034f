"""Raw stored document -> canonical Document"""

import logging
from typing import Any

from memofiche.core.extract.blocks import decode_legacy_content
from memofiche.core.extract.sections import is_empty, to_section, user_sections
from memofiche.core.models import Document
from memofiche.core.order import coerce_order, reconcile
from memofiche.core.variants import (
    DEFAULT_TABLE, SchemaField, VariantTable, resolve_variant, schema_fields,
)


logger = logging.getLogger(__name__)

VARIANT_KEY = "type"
MEMO_KEY = "memoSections"
CUSTOM_KEY = "customSections"
ORDER_KEY = "sectionOrder"
HIDDEN_KEY = "hiddenSections"
# Index ids for user sections stored without an id; older stored orders use these.
CUSTOM_ID_PREFIX = "customSection"
MEMO_ID_PREFIX = "memoSection"
RESERVED_KEYS = {VARIANT_KEY, MEMO_KEY, CUSTOM_KEY, ORDER_KEY, HIDDEN_KEY}


def _lookup(raw: dict, path: str) -> Any:
    """Resolve a dotted path ('recommendations.mainTreatment') in nested mappings."""
    node: Any = raw
    for part in path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node


def _field_value(raw: dict, field: SchemaField) -> Any:
    """Stored value of a schema field: canonical key first, then its legacy sources.

    A canonical value with no content (None, "", []) falls through to the sources.
    """
    value = raw.get(field.id)
    for source in field.sources:
        if decode_legacy_content(value):
            break
        candidate = _lookup(raw, source)
        if candidate is not None:
            value = candidate
    return value


def normalize_document(raw: Any, table: VariantTable = DEFAULT_TABLE) -> Document:
    """Normalize a stored document of any historical shape. Never raises on content.

    Idempotent: normalize_document(to_storage(d)) == d for any normalized d.
    """
    if not isinstance(raw, dict):
        logger.warning("Expected a mapping document, got %s; normalizing an empty one", type(raw).__name__)
        raw = {}

    variant = resolve_variant(raw.get(VARIANT_KEY), table)
    fields = schema_fields(variant, table)
    schema = {f.id: to_section(f.id, f.title, _field_value(raw, f)) for f in fields}

    taken = set(schema)
    custom = user_sections(raw.get(CUSTOM_KEY), CUSTOM_ID_PREFIX, taken)
    memo = user_sections(raw.get(MEMO_KEY), MEMO_ID_PREFIX, taken)
    user_ids = [s.id for s in custom] + [s.id for s in memo]

    # Tombstones only ever hide schema sections; user sections are deleted instead.
    hidden = [i for i in coerce_order(raw.get(HIDDEN_KEY), HIDDEN_KEY) if i not in user_ids]

    return Document(
        variant=variant,
        schema_fields=schema,
        memo_sections=memo,
        custom_sections=custom,
        section_order=reconcile(list(schema), user_ids, raw.get(ORDER_KEY), hidden),
        hidden_sections=hidden,
        extra={k: v for k, v in raw.items() if k not in RESERVED_KEYS and k not in schema},
    )


def display_order(document: Document) -> list[str]:
    """Ordered ids the renderer should show: existing, non-empty sections only."""
    sections = document.sections()
    return [i for i in document.section_order if i in sections and not is_empty(sections[i])]
