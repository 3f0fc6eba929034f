"""SHA-256 fingerprints of stored documents for change detection"""

import hashlib
import json
from typing import Any


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def fingerprint(data: Any) -> str:
    """Hash of data's key-sorted JSON form, so key order does not count as a change."""
    return sha256(json.dumps(data, sort_keys=True, ensure_ascii=False, default=str))
