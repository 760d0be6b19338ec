"""
Canonical JSON serialization and hashing helpers.

Provides a single canonical JSON policy and SHA-256 helpers so that batch digests
are stable across runs and consumers. Zero-IO, stdlib only.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - Hashing is performed over the UTF-8 encoded canonical JSON string.
    - Digests are for logging and audit trails; they are not idempotence tokens.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

__all__ = [
    "json_dumps_canonical",
    "hash_payload",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: Canonical JSON string with sort_keys=True, compact separators,
        and ensure_ascii=False.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _sha256_hexdigest(s: str) -> str:
    """Compute SHA-256 hex digest of a UTF-8 string."""
    h = hashlib.sha256()
    h.update(s.encode("utf-8"))
    return h.hexdigest()


def hash_payload(payload: Any) -> str:
    """
    Hash a wire payload (list of commands or {"nftables": [...]}) by its canonical JSON.

    Examples:
        >>> from nftkit.core.hashing import hash_payload
        >>> hash_payload({"a": 1, "b": 2}) == hash_payload({"b": 2, "a": 1})
        True
    """
    return _sha256_hexdigest(json_dumps_canonical(payload))
