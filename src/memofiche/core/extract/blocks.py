"""Legacy content decoding: any stored section value to a canonical ContentBlock list"""

import logging
from typing import Any

from memofiche.core.models import ContentBlock, ContentKind


logger = logging.getLogger(__name__)

KIND_MAP: dict[str, ContentKind] = {k.value: k for k in ContentKind}


def _coerce_value(value: Any) -> str:
    """Missing value -> '', strings unchanged, anything else stringified."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _coerce_kind(kind: Any) -> ContentKind:
    """Map a stored type tag to ContentKind; unknown or missing tags become text."""
    if isinstance(kind, str):
        return KIND_MAP.get(kind.strip().lower(), ContentKind.text)
    return ContentKind.text


def _is_typed_block(raw: dict) -> bool:
    return "type" in raw or "value" in raw


def _decode_block(raw: dict) -> ContentBlock:
    return ContentBlock(type=_coerce_kind(raw.get("type")), value=_coerce_value(raw.get("value")))


def _decode_entry(entry: Any) -> list[ContentBlock]:
    """Decode one list entry; blank strings and unrecognized entries yield nothing."""
    if isinstance(entry, str):
        return [ContentBlock(value=entry)] if entry.strip() else []
    if isinstance(entry, dict):
        if _is_typed_block(entry):
            return [_decode_block(entry)]
        if "content" in entry:
            return decode_legacy_content(entry["content"])
    logger.debug("Skipping unrecognized content entry of type %s", type(entry).__name__)
    return []


def decode_legacy_content(raw: Any) -> list[ContentBlock]:
    """Convert a stored section value to an ordered ContentBlock list. Never raises.

    Recognized shapes:
      None                     -> []
      str                      -> one text block ([] when blank)
      list[str | block | ...]  -> one block per non-blank entry, in order
      {type, value}            -> one block
      {content: ...}           -> decoded content (legacy wrapper object)
    Anything else degrades to [].
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        return [ContentBlock(value=raw)] if raw.strip() else []
    if isinstance(raw, (list, tuple)):
        return [block for entry in raw for block in _decode_entry(entry)]
    if isinstance(raw, dict):
        if _is_typed_block(raw):
            return [_decode_block(raw)]
        if "content" in raw:
            return decode_legacy_content(raw["content"])
    logger.debug("Unrecognized content shape %s; decoding to no blocks", type(raw).__name__)
    return []
