"""
Low-level constructors for nftables JSON expression fragments.

Each helper returns a fresh dict shaped exactly as `nft -j` expects; the family
modules (ip, port, ct, layer2, actions, nat, verdicts) compose these.

Examples:
    >>> from nftkit.expr.fragments import match, payload
    >>> match(payload("tcp", "dport"), 22)
    {'match': {'op': '==', 'left': {'payload': {'protocol': 'tcp', 'field': 'dport'}}, 'right': 22}}
"""

from __future__ import annotations

from typing import Any

from ..core.typing import Fragment

__all__ = [
    "match",
    "payload",
    "meta",
    "ct",
    "prefix",
    "value_range",
    "anonymous_set",
    "set_reference",
    "statement",
]


def match(left: Any, right: Any, op: str = "==") -> Fragment:
    return {"match": {"op": op, "left": left, "right": right}}


def payload(protocol: str, field: str) -> Fragment:
    return {"payload": {"protocol": protocol, "field": field}}


def meta(key: str) -> Fragment:
    return {"meta": {"key": key}}


def ct(key: str) -> Fragment:
    return {"ct": {"key": key}}


def prefix(addr: str, length: int) -> Fragment:
    return {"prefix": {"addr": addr, "len": length}}


def value_range(first: Any, last: Any) -> Fragment:
    return {"range": [first, last]}


def anonymous_set(values: list[Any]) -> Fragment:
    return {"set": list(values)}


def set_reference(name: str) -> str:
    """Named-set lookup operand ("@name")."""
    return name if name.startswith("@") else f"@{name}"


def statement(name: str, body: Any = None) -> Fragment:
    """Statement or verdict keyed by `name`, e.g. {"accept": None}."""
    return {name: body}
