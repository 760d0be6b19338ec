"""
Context store: the ambient scope carried between builder calls.

Context is an immutable pydantic model. Every update returns a new instance:

- merge(fields): partial update from context-kind entries of a field bag
  (`table`, `chain`, `set`/`map` -> collection, `collection`, `collection_type`).
  None values leave the slot untouched.
- enter(kind, value, fields): record the main object of a successful call when it
  is itself a scope object (table, chain, set or map).
- set(**fields): explicit overwrite or clear (None) of any slot, validated.

Notes:
    - Clearing a slot is never rejected here; the missing-context error surfaces at
      the next call that needs the slot.
    - Zero-IO (stdlib + pydantic only).

Examples:
    >>> from nftkit.core.context import Context
    >>> ctx = Context().merge({"table": "filter"}).merge({"chain": "input"})
    >>> (ctx.family, ctx.table, ctx.chain)
    ('inet', 'filter', 'input')
    >>> ctx.set(chain=None).chain is None
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .constants import DEFAULT_FAMILY
from .errors import InvalidFieldError
from .grammar import Kind, family_from_value
from .kinds import IDENTIFYING_KEYS
from .typing import JsonDict

__all__ = ["Context", "CONTEXT_FIELDS"]

CONTEXT_FIELDS: tuple[str, ...] = ("family", "table", "chain", "collection", "collection_type")

# Field-bag keys that update a context slot when they appear as context fields.
_MERGE_KEYS: dict[str, str] = {
    "table": "table",
    "chain": "chain",
    "set": "collection",
    "map": "collection",
    "collection": "collection",
    "collection_type": "collection_type",
}

_NAME_SLOTS = ("table", "chain", "collection")


class Context(BaseModel):
    """
    Ambient scope for command construction.

    Attributes:
        family (str): Address family token (default "inet").
        table (str | None): Current table.
        chain (str | None): Current chain.
        collection (str | None): Current set or map (for element commands).
        collection_type (Any): Type declared with the current collection, if any.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    family: str = DEFAULT_FAMILY
    table: str | None = None
    chain: str | None = None
    collection: str | None = None
    collection_type: Any = None

    @field_validator("family", mode="before")
    @classmethod
    def _normalize_family(cls, v: Any) -> str:
        """Normalize family via grammar.family_from_value (raises InvalidEnumError)."""
        return family_from_value(v).value

    def merge(self, fields: Mapping[str, Any]) -> Context:
        """
        Partially update the context from context-kind entries.

        Args:
            fields (Mapping[str, Any]): Context fields extracted by the classifier (or
                any mapping using the same keys). Keys that identify no object are
                ignored.

        Returns:
            Context: Updated copy (self when nothing changes).

        Raises:
            InvalidFieldError: If a table/chain/collection value is not a string, or an
                object key with no context slot (rule, counter, ...) is present.
        """
        update: JsonDict = {}
        for key, value in fields.items():
            slot = _MERGE_KEYS.get(key)
            if slot is None and key in IDENTIFYING_KEYS:
                raise InvalidFieldError(
                    key, "names an object that cannot scope another; pass it in its own call"
                )
            if slot is None or value is None:
                continue
            if slot in _NAME_SLOTS and not isinstance(value, str):
                raise InvalidFieldError(key, f"expected a name, got {value!r}")
            update[slot] = value
        return self.model_copy(update=update) if update else self

    def enter(self, kind: Kind, value: Any, fields: Mapping[str, Any]) -> Context:
        """
        Make the main object of a successful call the current scope where it is one.

        Table and chain update their slot; set and map update collection together
        with the `type` given in the same call. Other kinds leave the context as is.
        """
        if not isinstance(value, str):
            return self
        if kind is Kind.TABLE:
            return self.model_copy(update={"table": value})
        if kind is Kind.CHAIN:
            return self.model_copy(update={"chain": value})
        if kind in (Kind.SET, Kind.MAP):
            return self.model_copy(update={"collection": value, "collection_type": fields.get("type")})
        return self

    def set(self, **fields: Any) -> Context:
        """
        Overwrite or clear context slots explicitly.

        Args:
            **fields: Any of family, table, chain, collection, collection_type. None
                clears a slot (family None resets to the default family).

        Returns:
            Context: Updated copy.

        Raises:
            InvalidFieldError: Unknown field or non-string name.
            InvalidEnumError: Family outside the family enumeration.
        """
        update: JsonDict = {}
        for key, value in fields.items():
            if key not in CONTEXT_FIELDS:
                raise InvalidFieldError(
                    key, f"unknown context field; valid fields: {', '.join(CONTEXT_FIELDS)}"
                )
            if key == "family":
                update[key] = DEFAULT_FAMILY if value is None else family_from_value(value).value
            elif key in _NAME_SLOTS and value is not None and not isinstance(value, str):
                raise InvalidFieldError(key, f"expected a string or None, got {value!r}")
            else:
                update[key] = value
        return self.model_copy(update=update)

    def to_dict(self) -> JsonDict:
        return self.model_dump()
