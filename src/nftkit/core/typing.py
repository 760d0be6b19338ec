"""
Lightweight typing aliases used across the builder core.

Notes:
    - No runtime logic beyond the ExpressionHandle protocol, zero-IO.
    - ExpressionHandle is what rule bodies may be besides a raw list of fragments;
      nftkit.expr.Expr satisfies it without the core importing nftkit.expr.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "JsonDict",
    "FieldBag",
    "Fragment",
    "ExpressionHandle",
]

# JSON-like mapping alias for wire payloads.
JsonDict = dict[str, Any]

# Keyword arguments of a single builder call.
FieldBag = Mapping[str, Any]

# One nftables JSON expression/statement, e.g. {"accept": None}.
Fragment = dict[str, Any]


@runtime_checkable
class ExpressionHandle(Protocol):
    """Anything that can resolve itself into an ordered list of rule fragments."""

    def to_list(self) -> list[Fragment]: ...
