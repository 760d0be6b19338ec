"""
Pydantic model for normalized commands.

A Command is one operation against one kind with its normalized wire spec. The
spec's key order is fixed by the kind registry, so two structurally equal commands
always serialize identically. The spec is deep-copied on construction and on
to_wire(), so a built command never shares nested lists or maps with callers.

Wire form:
    {"<operation>": {"<kind>": {...spec...}}}

Examples:
    >>> from nftkit.core.schema import Command
    >>> cmd = Command(operation="add", kind="table", spec={"family": "inet", "name": "filter"})
    >>> cmd.to_wire()
    {'add': {'table': {'family': 'inet', 'name': 'filter'}}}
    >>> Command.from_wire(cmd.to_wire()) == cmd
    True
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import InvalidFieldError
from .grammar import Kind, Operation, kind_from_value, operation_from_value
from .typing import JsonDict

__all__ = ["Command"]


class Command(BaseModel):
    """
    One normalized nftables command.

    Attributes:
        operation (Operation): Command verb.
        kind (Kind): Targeted kind.
        spec (dict[str, Any]): Normalized spec in registry field order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    operation: Operation
    kind: Kind
    spec: dict[str, Any]

    @field_validator("operation", mode="before")
    @classmethod
    def _parse_operation(cls, v: Any) -> Operation:
        return operation_from_value(v)

    @field_validator("kind", mode="before")
    @classmethod
    def _parse_kind(cls, v: Any) -> Kind:
        return kind_from_value(v)

    @field_validator("spec", mode="before")
    @classmethod
    def _own_spec(cls, v: Any) -> Any:
        """Deep-copy the spec so no caller keeps a handle on nested lists or maps."""
        return copy.deepcopy(dict(v)) if isinstance(v, Mapping) else v

    def to_wire(self) -> JsonDict:
        """Return the operation-tagged, kind-tagged wire mapping."""
        return {self.operation.value: {self.kind.value: copy.deepcopy(self.spec)}}

    @classmethod
    def from_wire(cls, item: Mapping[str, Any]) -> Command:
        """
        Parse one wire item back into a Command.

        Raises:
            InvalidFieldError: If the item is not a single-operation, single-kind mapping.
            InvalidEnumError: If the operation or kind token is unknown.
        """
        if not isinstance(item, Mapping) or len(item) != 1:
            raise InvalidFieldError("command", f"expected a single-operation mapping, got {item!r}")
        ((op_token, body),) = item.items()
        if not isinstance(body, Mapping) or len(body) != 1:
            raise InvalidFieldError("command", f"expected a single-kind mapping, got {body!r}")
        ((kind_token, spec),) = body.items()
        if not isinstance(spec, Mapping):
            raise InvalidFieldError("spec", f"expected a mapping, got {spec!r}")
        return cls(
            operation=operation_from_value(op_token),
            kind=kind_from_value(kind_token),
            spec=dict(spec),
        )
