"""
Object classifier: pick the main object of a field bag.

Algorithm
- Intersect the bag's keys with the registry's identifying keys (aliases such as
  `rules` resolve to their kind first).
- No match raises NoObjectError.
- Take the group at the highest priority present; more than one key in that group
  raises AmbiguousObjectError (this includes `rule` together with `rules`).
- Every lower-priority identifying entry becomes a context field.

The result does not depend on the insertion order of the bag.

Examples:
    >>> from nftkit.core.classify import classify
    >>> c = classify({"rule": [], "table": "filter", "chain": "input"})
    >>> c.kind.value, sorted(c.context_fields)
    ('rule', ['chain', 'table'])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import AmbiguousObjectError, NoObjectError
from .grammar import Kind
from .kinds import IDENTIFYING_KEYS, RULES_KEY, priority_of
from .typing import FieldBag

__all__ = ["Classification", "classify"]


@dataclass(frozen=True, slots=True)
class Classification:
    """
    Outcome of classifying one field bag.

    Attributes:
        kind (Kind): Main object kind.
        key (str): Bag key that named it ("rule" or "rules" for rules).
        value (Any): Main object value (name, rule body, elements ...).
        context_fields (dict[str, Any]): Lower-priority identifying entries.
    """

    kind: Kind
    key: str
    value: Any
    context_fields: dict[str, Any] = field(default_factory=dict)

    @property
    def plural(self) -> bool:
        return self.key == RULES_KEY


def classify(fields: FieldBag) -> Classification:
    """
    Classify a field bag into its main object and context fields.

    Args:
        fields (Mapping[str, Any]): Keyword arguments of one builder call.

    Returns:
        Classification: Main kind, key, value and context fields.

    Raises:
        NoObjectError: If no identifying key is present.
        AmbiguousObjectError: If several keys tie at the top priority.
    """
    found = {key: IDENTIFYING_KEYS[key] for key in fields if key in IDENTIFYING_KEYS}
    if not found:
        raise NoObjectError(sorted(fields), sorted(IDENTIFYING_KEYS))

    top = max(priority_of(kind) for kind in found.values())
    candidates = sorted(key for key, kind in found.items() if priority_of(kind) == top)
    if len(candidates) > 1:
        raise AmbiguousObjectError(candidates)

    key = candidates[0]
    context_fields = {k: fields[k] for k, kind in found.items() if priority_of(kind) < top}
    return Classification(kind=found[key], key=key, value=fields[key], context_fields=context_fields)
