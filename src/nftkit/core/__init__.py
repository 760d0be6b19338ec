"""
nftkit.core: command construction and context tracking for nftables batches.

Public surface
- Grammar (enums and parsers): Family, Operation, Kind, ChainType, ChainHook,
  ChainPolicy, FlowtableHook, RateUnit, CtState, CtStatus, PortProtocol.
- Errors: BuilderError and its subclasses (NoObjectError, AmbiguousObjectError,
  MissingContextError, MissingFieldError, RangeError, InvalidFieldError,
  InvalidEnumError, UnsupportedOperationError).
- Kind registry: get_kind, list_kinds, priority_of, schema_of, IDENTIFYING_KEYS.
- Classifier: classify -> Classification.
- Context store: Context (immutable pydantic model).
- Command factory: build_commands, flush_ruleset_command.
- Batch and wire helpers: Command, Batch, json_dumps_canonical, hash_payload.

Import DAG discipline
- nftkit.core depends only on the stdlib and pydantic.
- It never imports nftkit.submit, nftkit.expr or nftkit.builder.

Examples
--------
Classify a bag, build its command and append it to a batch:

>>> from nftkit.core import Batch, Context, build_commands, classify
>>> bag = {"table": "filter"}
>>> cmds = build_commands("add", classify(bag), bag, Context())
>>> Batch().extend(cmds).serialize()
[{'add': {'table': {'family': 'inet', 'name': 'filter'}}}]
"""

from __future__ import annotations

from .batch import Batch
from .classify import Classification, classify
from .context import Context
from .errors import (
    AmbiguousObjectError,
    BuilderError,
    InvalidEnumError,
    InvalidFieldError,
    MissingContextError,
    MissingFieldError,
    NoObjectError,
    RangeError,
    UnsupportedOperationError,
)
from .factory import build_commands, flush_ruleset_command, resolve_scope
from .grammar import (
    ChainHook,
    ChainPolicy,
    ChainType,
    CtState,
    CtStatus,
    Family,
    FlowtableHook,
    Kind,
    Operation,
    PortProtocol,
    RateUnit,
)
from .hashing import hash_payload, json_dumps_canonical
from .kinds import IDENTIFYING_KEYS, get_kind, list_kinds, priority_of, schema_of
from .schema import Command

__all__ = [
    # grammar
    "Family",
    "Operation",
    "Kind",
    "ChainType",
    "ChainHook",
    "ChainPolicy",
    "FlowtableHook",
    "RateUnit",
    "CtState",
    "CtStatus",
    "PortProtocol",
    # errors
    "BuilderError",
    "NoObjectError",
    "AmbiguousObjectError",
    "MissingContextError",
    "MissingFieldError",
    "RangeError",
    "InvalidFieldError",
    "InvalidEnumError",
    "UnsupportedOperationError",
    # registry
    "IDENTIFYING_KEYS",
    "get_kind",
    "list_kinds",
    "priority_of",
    "schema_of",
    # pipeline
    "Classification",
    "classify",
    "Context",
    "build_commands",
    "flush_ruleset_command",
    "resolve_scope",
    "Command",
    "Batch",
    # serde
    "json_dumps_canonical",
    "hash_payload",
]
