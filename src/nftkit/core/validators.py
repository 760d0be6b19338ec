"""
Field validators shared by the kind descriptors and the expression builders.

A validator is a small frozen object with a `check(field, value)` method that
returns the (possibly normalized) value or raises a typed BuilderError:

- RangeValidator: integers within inclusive bounds (booleans are rejected).
- EnumValidator: members of a grammar enum, returned as wire tokens.
- BoolValidator / StringValidator / StringListValidator: plain type checks.

Shared instances cover the bounds used throughout nftables JSON:

| Name           | Accepts                       |
|----------------|-------------------------------|
| PORT           | [0, 65535]                    |
| VLAN_ID        | [0, 4095]                     |
| VLAN_PCP       | [0, 7]                        |
| DSCP           | [0, 63]                       |
| TTL            | [0, 255]                      |
| MARK           | [0, 4294967295]               |
| NON_NEGATIVE   | >= 0                          |
| CHAIN_PRIORITY | signed 32-bit integer         |

Examples:
    >>> from nftkit.core.validators import PORT
    >>> PORT.check("dport", 65535)
    65535
    >>> PORT.describe()
    '[0, 65535]'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from .constants import (
    DSCP_MAX,
    MARK_MAX,
    PORT_MAX,
    PORT_MIN,
    PRIORITY_MAX,
    PRIORITY_MIN,
    TTL_MAX,
    VLAN_ID_MAX,
    VLAN_PCP_MAX,
)
from .errors import InvalidFieldError, RangeError
from .grammar import (
    ChainHook,
    ChainPolicy,
    ChainType,
    Family,
    FlowtableHook,
    RateUnit,
    parse_enum,
)

__all__ = [
    "Validator",
    "RangeValidator",
    "EnumValidator",
    "BoolValidator",
    "StringValidator",
    "StringListValidator",
    "PORT",
    "VLAN_ID",
    "VLAN_PCP",
    "DSCP",
    "TTL",
    "MARK",
    "NON_NEGATIVE",
    "CHAIN_PRIORITY",
    "FAMILY",
    "CHAIN_TYPE",
    "CHAIN_HOOK",
    "CHAIN_POLICY",
    "FLOWTABLE_HOOK",
    "RATE_UNIT",
    "BOOLEAN",
    "NAME",
    "STRING_LIST",
    "DEVICE_LIST",
    "check_port_range",
]


class Validator(Protocol):
    """Structural type of every validator."""

    def check(self, field: str, value: Any) -> Any: ...

    def describe(self) -> str: ...


@dataclass(frozen=True, slots=True)
class RangeValidator:
    """
    Integer validator with optional inclusive bounds.

    Attributes:
        minimum (int | None): Lower bound, or None for unbounded.
        maximum (int | None): Upper bound, or None for unbounded.
    """

    minimum: int | None = None
    maximum: int | None = None

    def describe(self) -> str:
        if self.minimum is not None and self.maximum is not None:
            return f"[{self.minimum}, {self.maximum}]"
        if self.minimum is not None:
            return f">= {self.minimum}"
        if self.maximum is not None:
            return f"<= {self.maximum}"
        return "an integer"

    def check(self, field: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidFieldError(field, f"expected an integer, got {value!r}")
        if self.minimum is not None and value < self.minimum:
            raise RangeError(field, self.describe(), value)
        if self.maximum is not None and value > self.maximum:
            raise RangeError(field, self.describe(), value)
        return value


@dataclass(frozen=True, slots=True)
class EnumValidator:
    """Validator accepting members (or tokens) of a grammar enum; returns the token."""

    enum: type[Enum]

    def describe(self) -> str:
        return "one of " + ", ".join(str(m.value) for m in self.enum)

    def check(self, field: str, value: Any) -> str:
        return str(parse_enum(self.enum, value, field).value)


@dataclass(frozen=True, slots=True)
class BoolValidator:
    def describe(self) -> str:
        return "a boolean"

    def check(self, field: str, value: Any) -> bool:
        if not isinstance(value, bool):
            raise InvalidFieldError(field, f"expected a boolean, got {value!r}")
        return value


@dataclass(frozen=True, slots=True)
class StringValidator:
    """Non-empty string validator."""

    def describe(self) -> str:
        return "a non-empty string"

    def check(self, field: str, value: Any) -> str:
        if not isinstance(value, str) or not value:
            raise InvalidFieldError(field, f"expected a non-empty string, got {value!r}")
        return value


@dataclass(frozen=True, slots=True)
class StringListValidator:
    """
    List-of-strings validator. A single string is promoted to a one-item list
    unless `allow_scalar` is False.
    """

    non_empty: bool = False
    allow_scalar: bool = True

    def describe(self) -> str:
        return "a non-empty list of strings" if self.non_empty else "a list of strings"

    def check(self, field: str, value: Any) -> list[str]:
        if isinstance(value, (str, Enum)) and self.allow_scalar:
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise InvalidFieldError(field, f"expected {self.describe()}, got {value!r}")
        items = [str(v.value) if isinstance(v, Enum) else v for v in value]
        if not all(isinstance(v, str) and v for v in items):
            raise InvalidFieldError(field, f"expected {self.describe()}, got {value!r}")
        if self.non_empty and not items:
            raise InvalidFieldError(field, "must not be empty")
        return items


PORT = RangeValidator(PORT_MIN, PORT_MAX)
VLAN_ID = RangeValidator(0, VLAN_ID_MAX)
VLAN_PCP = RangeValidator(0, VLAN_PCP_MAX)
DSCP = RangeValidator(0, DSCP_MAX)
TTL = RangeValidator(0, TTL_MAX)
MARK = RangeValidator(0, MARK_MAX)
NON_NEGATIVE = RangeValidator(0, None)
CHAIN_PRIORITY = RangeValidator(PRIORITY_MIN, PRIORITY_MAX)

FAMILY = EnumValidator(Family)
CHAIN_TYPE = EnumValidator(ChainType)
CHAIN_HOOK = EnumValidator(ChainHook)
CHAIN_POLICY = EnumValidator(ChainPolicy)
FLOWTABLE_HOOK = EnumValidator(FlowtableHook)
RATE_UNIT = EnumValidator(RateUnit)

BOOLEAN = BoolValidator()
NAME = StringValidator()
STRING_LIST = StringListValidator()
# Flowtable devices must be given explicitly as a list.
DEVICE_LIST = StringListValidator(non_empty=True, allow_scalar=False)


def check_port_range(field: str, first: Any, last: Any) -> tuple[int, int]:
    """
    Validate a port range: both ends are ports and first <= last.

    Raises:
        InvalidFieldError: If either end is not an integer.
        RangeError: If an end is out of bounds or first > last.
    """
    lo = PORT.check(field, first)
    hi = PORT.check(field, last)
    if lo > hi:
        raise RangeError(field, "a range with first <= last", (lo, hi))
    return lo, hi
