"""
Batch: ordered, append-only sequence of Commands plus the context current at its end.

Batches are frozen; `append`/`extend` return new instances, so a batch handed to a
submitter can never change underneath it.

Wire form:
    serialize() -> [{"add": {"table": {...}}}, ...]
    to_map()    -> {"nftables": serialize()}
    to_json()   -> compact JSON of to_map(), keys in registry order

`Batch.from_wire` accepts any of those forms and reproduces a structurally equal
command sequence (the context is not part of the wire form).

Examples:
    >>> from nftkit.core.batch import Batch
    >>> from nftkit.core.schema import Command
    >>> b = Batch().append(Command(operation="add", kind="table", spec={"family": "inet", "name": "t"}))
    >>> b.to_map()
    {'nftables': [{'add': {'table': {'family': 'inet', 'name': 't'}}}]}
    >>> Batch.from_wire(b.to_json()).commands == b.commands
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from .context import Context
from .errors import InvalidFieldError
from .hashing import hash_payload
from .schema import Command
from .serde import json_dumps_wire, json_loads
from .typing import JsonDict

__all__ = ["Batch", "WIRE_ROOT"]

WIRE_ROOT = "nftables"


@dataclass(frozen=True)
class Batch:
    """
    Immutable batch of commands.

    Attributes:
        commands (tuple[Command, ...]): Commands in call order.
        context (Context): Context snapshot after the last command.
    """

    commands: tuple[Command, ...] = ()
    context: Context = field(default_factory=Context)

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def append(self, command: Command, context: Context | None = None) -> Batch:
        """Return a new batch with `command` appended (and `context` if given)."""
        return Batch(self.commands + (command,), context if context is not None else self.context)

    def extend(self, commands: Iterable[Command], context: Context | None = None) -> Batch:
        """Return a new batch with all `commands` appended in order."""
        return Batch(self.commands + tuple(commands), context if context is not None else self.context)

    def with_context(self, context: Context) -> Batch:
        return Batch(self.commands, context)

    def serialize(self) -> list[JsonDict]:
        """Ordered list of operation-tagged, kind-tagged command mappings."""
        return [command.to_wire() for command in self.commands]

    def to_map(self) -> JsonDict:
        """Payload for the nftables JSON API."""
        return {WIRE_ROOT: self.serialize()}

    def to_json(self) -> str:
        return json_dumps_wire(self.to_map())

    def digest(self) -> str:
        """SHA-256 over the canonical JSON of the payload."""
        return hash_payload(self.to_map())

    @classmethod
    def from_wire(cls, payload: Any, context: Context | None = None) -> Batch:
        """
        Parse a serialized batch.

        Args:
            payload (Any): JSON text, {"nftables": [...]} mapping, or a list of
                command mappings.
            context (Context | None): Context to attach (default: empty context).

        Returns:
            Batch: Batch with structurally equal commands.

        Raises:
            InvalidFieldError: If the payload shape is not a command list.
            json.JSONDecodeError: If JSON text cannot be decoded.
        """
        if isinstance(payload, (str, bytes)):
            payload = json_loads(payload)
        if isinstance(payload, Mapping):
            if WIRE_ROOT not in payload:
                raise InvalidFieldError(WIRE_ROOT, f"missing top-level {WIRE_ROOT!r} key")
            payload = payload[WIRE_ROOT]
        if not isinstance(payload, list):
            raise InvalidFieldError(WIRE_ROOT, f"expected a list of commands, got {type(payload).__name__}")
        commands = tuple(Command.from_wire(item) for item in payload)
        return cls(commands, context if context is not None else Context())
