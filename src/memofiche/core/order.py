"""Section order reconciliation and index-based reordering"""

import logging
from typing import Any, Iterable


logger = logging.getLogger(__name__)


def _dedupe(ids: Iterable[str]) -> list[str]:
    """Drop repeated ids, first occurrence wins."""
    return list(dict.fromkeys(ids))


def coerce_order(raw: Any, label: str = "sectionOrder") -> list[str]:
    """Return a stored id list as list[str], or [] when malformed.

    Anything but a list/tuple of non-blank strings is discarded whole.
    Repeated ids in an otherwise valid list are collapsed.
    """
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        logger.warning("Discarding %s: expected a list, got %s", label, type(raw).__name__)
        return []
    if not all(isinstance(i, str) and i.strip() for i in raw):
        logger.warning("Discarding %s: contains non-string or blank entries", label)
        return []
    return _dedupe(raw)


def reconcile(
    mandatory_ids: Iterable[str],
    user_ids: Iterable[str],
    persisted_order: Any = None,
    hidden: Iterable[str] = (),
    ) -> list[str]:
    """Merge required ids with a previously persisted order into one total order.

    known = mandatory ++ user ids, deduplicated. An empty persisted order yields
    known verbatim. Otherwise the persisted order is kept in full (dangling ids
    included) and each known id it lacks is appended in known order.
    Hidden ids (tombstones) are never appended and are dropped from the result.
    """
    known = _dedupe([*mandatory_ids, *user_ids])
    persisted = coerce_order(persisted_order)
    tombstones = set(hidden)

    placed = set(persisted)
    order = persisted + [i for i in known if i not in placed]
    return [i for i in order if i not in tombstones]


def move(order: list[str], index: int, offset: int) -> list[str]:
    """Return a copy of order with the entry at index swapped with index+offset.

    Out-of-range targets (first entry up, last entry down) return an unchanged copy.
    """
    result = list(order)
    target = index + offset
    if 0 <= index < len(result) and 0 <= target < len(result):
        result[index], result[target] = result[target], result[index]
    return result


def move_up(order: list[str], index: int) -> list[str]:
    return move(order, index, -1)


def move_down(order: list[str], index: int) -> list[str]:
    return move(order, index, 1)
