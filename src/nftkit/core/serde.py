"""
Wire JSON helpers for nftables payloads.

Unlike the canonical policy (sorted keys, used for hashing), wire JSON keeps key
insertion order: command specs are emitted in registry order and nft reads them
as given.

Notes:
    - `json_dumps_wire` is compact and non-ASCII safe.
    - `json_loads` is a thin wrapper over the stdlib decoder.
"""

from __future__ import annotations

import json
from typing import Any

# Re-export canonical dumps to keep a single canonicalization policy.
from .hashing import json_dumps_canonical  # noqa: F401

__all__ = [
    "json_loads",
    "json_dumps_wire",
    "json_dumps_canonical",
]


def json_dumps_wire(obj: Any) -> str:
    """Serialize a payload to compact JSON, preserving key order."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def json_loads(s: str | bytes) -> Any:
    """
    Deserialize a JSON string to Python objects using the stdlib json module.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON.
    """
    return json.loads(s)
