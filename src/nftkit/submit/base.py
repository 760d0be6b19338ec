"""
Submitter protocol and payload helpers.

A submitter takes a serialized batch ({"nftables": [...]}, a command list, a
Batch or JSON text) and returns a SubmitResult. Whatever runs behind it (local
nft, a remote agent, an audit log, a test capture) is invisible to the builder.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..core.batch import WIRE_ROOT, Batch
from ..core.serde import json_dumps_wire, json_loads
from ..core.typing import JsonDict
from .result import SubmitResult

__all__ = ["Submitter", "payload_to_map", "payload_to_json"]


@runtime_checkable
class Submitter(Protocol):
    """Anything that can deliver a serialized batch."""

    def submit(self, payload: Any, *, timeout: float | None = None) -> SubmitResult: ...


def payload_to_map(payload: Any) -> JsonDict:
    """
    Normalize a Batch, command list, {"nftables": [...]} mapping or JSON text to the
    API map.

    Raises:
        TypeError: If the payload (or the decoded JSON text) has none of those shapes.
        json.JSONDecodeError: If JSON text cannot be decoded.
    """
    if isinstance(payload, (str, bytes)):
        payload = json_loads(payload)
    if isinstance(payload, Batch):
        return payload.to_map()
    if isinstance(payload, list):
        return {WIRE_ROOT: payload}
    if isinstance(payload, dict) and WIRE_ROOT in payload:
        return payload
    raise TypeError(f"cannot submit payload of type {type(payload).__name__}")


def payload_to_json(payload: Any) -> str:
    """Encode a payload as wire JSON; strings are passed through untouched."""
    if isinstance(payload, str):
        return payload
    return json_dumps_wire(payload_to_map(payload))
