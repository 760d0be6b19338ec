"""
Builder session: the public facade over classify -> context -> factory -> batch.

A Builder is a frozen value. Every call returns a new Builder carrying the grown
batch and the updated context; nothing is shared or mutated, so builders can be
forked and reused freely.

Examples
--------
>>> from nftkit.builder import Builder
>>> from nftkit.expr import expr
>>> b = (
...     Builder.new()
...     .add(table="filter")
...     .add(chain="INPUT", hook="input", policy="drop")
...     .add(rule=expr().tcp().dport(22).accept())
... )
>>> [next(iter(c)) for c in b.serialize()]
['add', 'add', 'add']
>>> b.serialize()[2]["add"]["rule"]["chain"]
'INPUT'

Context flow
------------
- Context fields of a call (lower-priority identifying keys such as `table=`
  next to `chain=`) are merged before the command is built.
- A successful table/chain/set/map call then makes that object the current one.
- Failures raise a BuilderError and leave the builder unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from .core.batch import Batch
from .core.classify import classify
from .core.constants import DEFAULT_FAMILY
from .core.context import Context
from .core.errors import InvalidFieldError
from .core.factory import build_commands, flush_ruleset_command
from .core.grammar import Operation
from .core.schema import Command
from .core.typing import JsonDict
from .submit.base import Submitter
from .submit.config import SubmitSettings
from .submit.errors import NoSubmitterError
from .submit.local import LocalSubmitter
from .submit.result import SubmitResult

__all__ = ["Builder"]

logger = logging.getLogger(__name__)

# Fields that set() refuses: commands are only recorded through operations.
_READ_ONLY_FIELDS = ("batch", "commands")


def _listed(entry: Mapping[str, Any], **sources: str) -> JsonDict:
    """Pick bag keys from a listing entry, skipping absent or null values."""
    return {key: entry[src] for key, src in sources.items() if entry.get(src) is not None}


@dataclass(frozen=True)
class Builder:
    """
    Immutable batch-building session.

    Attributes:
        batch (Batch): Commands recorded so far plus the current context.
        submitter (Submitter | None): Default submitter used by submit().
    """

    batch: Batch = field(default_factory=Batch)
    submitter: Submitter | None = None

    @classmethod
    def new(cls, family: Any = DEFAULT_FAMILY, submitter: Submitter | None = None, **context: Any) -> Builder:
        """
        Start an empty session.

        Args:
            family (Any): Default family (e.g. "inet", Family.IP6).
            submitter (Submitter | None): Default submitter.
            **context: Initial table/chain/collection/collection_type.
        """
        return cls(Batch(context=Context().set(family=family, **context)), submitter)

    @classmethod
    def from_settings(cls, settings: SubmitSettings | None = None) -> Builder:
        """Start a session submitting to local nft with `settings` (default: load())."""
        settings = settings or SubmitSettings.load()
        return cls.new(family=settings.default_family, submitter=LocalSubmitter(settings))

    # Context accessors

    @property
    def context(self) -> Context:
        return self.batch.context

    @property
    def commands(self) -> tuple[Command, ...]:
        return self.batch.commands

    @property
    def family(self) -> str:
        return self.context.family

    @property
    def table(self) -> str | None:
        return self.context.table

    @property
    def chain(self) -> str | None:
        return self.context.chain

    @property
    def collection(self) -> str | None:
        return self.context.collection

    @property
    def collection_type(self) -> Any:
        return self.context.collection_type

    def __len__(self) -> int:
        return len(self.batch)

    # Operations

    def apply(self, operation: Operation | str, fields: Mapping[str, Any]) -> Builder:
        """
        Record one operation described by a field bag.

        Raises:
            BuilderError: Any classification, context or validation failure.
        """
        classification = classify(fields)
        context = self.context.merge(classification.context_fields)
        commands = build_commands(operation, classification, fields, context)
        context = context.enter(classification.kind, classification.value, fields)
        for command in commands:
            logger.debug("recorded %s %s", command.operation.value, command.kind.value)
        return replace(self, batch=self.batch.extend(commands, context))

    def add(self, **fields: Any) -> Builder:
        return self.apply(Operation.ADD, fields)

    def delete(self, **fields: Any) -> Builder:
        return self.apply(Operation.DELETE, fields)

    def flush(self, **fields: Any) -> Builder:
        return self.apply(Operation.FLUSH, fields)

    def insert(self, **fields: Any) -> Builder:
        return self.apply(Operation.INSERT, fields)

    def replace(self, **fields: Any) -> Builder:
        return self.apply(Operation.REPLACE, fields)

    def rename(self, **fields: Any) -> Builder:
        return self.apply(Operation.RENAME, fields)

    def flush_ruleset(self, family: Any = None) -> Builder:
        """Flush the whole ruleset, or only `family` when given."""
        return replace(self, batch=self.batch.append(flush_ruleset_command(family)))

    def add_rules(self, rules: Iterable[Any], **fields: Any) -> Builder:
        """Add several rule bodies sharing table/chain/family."""
        return self.add(rules=list(rules), **fields)

    # Explicit context

    def set(self, **fields: Any) -> Builder:
        """
        Overwrite or clear context fields, or change the default submitter.

        Args:
            **fields: family, table, chain, collection, collection_type, submitter.

        Raises:
            InvalidFieldError: Unknown or read-only field, or wrong value type.
            InvalidEnumError: Unknown family.
        """
        for name in _READ_ONLY_FIELDS:
            if name in fields:
                raise InvalidFieldError(name, "commands can only be recorded through add/delete/flush/...")
        builder = self
        if "submitter" in fields:
            fields = dict(fields)
            builder = builder.set_submitter(fields.pop("submitter"))
        if not fields:
            return builder
        return replace(builder, batch=builder.batch.with_context(builder.context.set(**fields)))

    def set_family(self, family: Any) -> Builder:
        return self.set(family=family)

    def set_submitter(self, submitter: Submitter | None) -> Builder:
        if submitter is not None and not isinstance(submitter, Submitter):
            raise InvalidFieldError("submitter", f"expected an object with submit(), got {submitter!r}")
        return replace(self, submitter=submitter)

    # Import of decoded listings (`nft -j list ...` entries)

    def import_table(self, table: Mapping[str, Any]) -> Builder:
        """Re-create a listed table; its family becomes the builder family."""
        builder = self.set(family=table["family"]) if table.get("family") is not None else self
        return builder.add(table=table["name"])

    def import_chain(self, chain: Mapping[str, Any]) -> Builder:
        """Re-create a listed chain (base-chain attributes included)."""
        bag: JsonDict = {"table": chain["table"], "chain": chain["name"]}
        bag.update(_listed(chain, family="family", type="type", hook="hook", priority="prio", policy="policy"))
        return self.add(**bag)

    def import_rule(self, rule: Mapping[str, Any]) -> Builder:
        bag: JsonDict = {"table": rule["table"], "chain": rule["chain"], "rule": rule["expr"]}
        bag.update(_listed(rule, family="family", comment="comment"))
        return self.add(**bag)

    def import_set(self, set_: Mapping[str, Any]) -> Builder:
        bag: JsonDict = {"table": set_["table"], "set": set_["name"]}
        bag.update(
            _listed(
                set_,
                type="type",
                family="family",
                flags="flags",
                timeout="timeout",
                gc_interval="gc-interval",
                size="size",
            )
        )
        return self.add(**bag)

    # Output

    def serialize(self) -> list[JsonDict]:
        return self.batch.serialize()

    def to_map(self) -> JsonDict:
        return self.batch.to_map()

    def to_json(self) -> str:
        return self.batch.to_json()

    def submit(self, submitter: Submitter | None = None, *, timeout: float | None = None) -> SubmitResult:
        """
        Hand the batch to a submitter.

        Args:
            submitter (Submitter | None): Overrides the builder's submitter.
            timeout (float | None): Wait bound forwarded to the submitter.

        Returns:
            SubmitResult: SubmitOk or SubmitFailure (never raised, never retried).

        Raises:
            NoSubmitterError: If neither an override nor a builder submitter exists.
        """
        target = submitter if submitter is not None else self.submitter
        if target is None:
            raise NoSubmitterError()
        logger.info("submitting %d commands (digest %s)", len(self.batch), self.batch.digest()[:12])
        result = target.submit(self.to_map(), timeout=timeout)
        if not result.ok:
            logger.warning("submission failed: %s", result.reason.value)
        return result
