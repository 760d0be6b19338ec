"""
Canonical nftkit grammar: operations, object kinds, families and the small
enumerations that appear in nftables JSON commands.

Responsibilities
- Define the enums whose serialized values are the nftables JSON wire tokens.
- Provide parsing helpers that turn free-form strings (or enum members) into
  canonical members, raising InvalidEnumError with the allowed values.

Naming standard
---------------
- Enum classes: PascalCase
- Enum member names: UPPER_SNAKE
- Enum serialized values: the exact token nftables expects on the wire
  (lower case; e.g. "inet", "add", "prerouting")

Kind priorities
---------------
Priorities live in nftkit.core.kinds (one descriptor per kind). For reference:

| Kind                                    | Priority | Identifying key   |
|-----------------------------------------|----------|-------------------|
| table                                   | 0        | table             |
| chain                                   | 1        | chain             |
| rule                                    | 2        | rule (alias rules)|
| set, map, flowtable, counter, quota, limit | 3     | same as kind      |
| element                                 | 4        | element           |

`ruleset` is a wire kind only; it is produced by Builder.flush_ruleset and is
never inferred from a field bag.

Examples
--------
>>> from nftkit.core.grammar import Family, family_from_value, operation_from_value
>>> family_from_value("INET") is Family.INET
True
>>> operation_from_value("flush").value
'flush'
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from .errors import InvalidEnumError

__all__ = [
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
    "enum_values",
    "parse_enum",
    "family_from_value",
    "operation_from_value",
    "kind_from_value",
]

E = TypeVar("E", bound=Enum)


class Family(Enum):
    """
    nftables address families.

    Notes:
      `inet` (dual-stack IPv4/IPv6) is the default family for new builders.
    """

    INET = "inet"
    IP = "ip"
    IP6 = "ip6"
    ARP = "arp"
    BRIDGE = "bridge"
    NETDEV = "netdev"


class Operation(Enum):
    """
    Command verbs accepted by the nftables JSON API.

    Notes:
      Validity per kind is declared by the kind descriptors in nftkit.core.kinds.
    """

    ADD = "add"
    DELETE = "delete"
    FLUSH = "flush"
    INSERT = "insert"
    REPLACE = "replace"
    RENAME = "rename"


class Kind(Enum):
    """Object kinds a command can target (wire token = JSON object key)."""

    TABLE = "table"
    CHAIN = "chain"
    RULE = "rule"
    SET = "set"
    MAP = "map"
    ELEMENT = "element"
    FLOWTABLE = "flowtable"
    COUNTER = "counter"
    QUOTA = "quota"
    LIMIT = "limit"
    RULESET = "ruleset"


class ChainType(Enum):
    """Base chain types."""

    FILTER = "filter"
    NAT = "nat"
    ROUTE = "route"


class ChainHook(Enum):
    """Netfilter hooks a base chain may attach to."""

    PREROUTING = "prerouting"
    INPUT = "input"
    FORWARD = "forward"
    OUTPUT = "output"
    POSTROUTING = "postrouting"
    INGRESS = "ingress"
    EGRESS = "egress"


class ChainPolicy(Enum):
    """Default verdict of a base chain."""

    ACCEPT = "accept"
    DROP = "drop"


class FlowtableHook(Enum):
    """Hooks a flowtable may attach to (only ingress is supported by the kernel)."""

    INGRESS = "ingress"


class RateUnit(Enum):
    """Time units for limit objects and limit statements."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"


class CtState(Enum):
    """Connection tracking states usable in `ct state` matches."""

    NEW = "new"
    ESTABLISHED = "established"
    RELATED = "related"
    INVALID = "invalid"
    UNTRACKED = "untracked"


class CtStatus(Enum):
    """Connection tracking status bits usable in `ct status` matches."""

    EXPECTED = "expected"
    SEEN_REPLY = "seen-reply"
    ASSURED = "assured"
    CONFIRMED = "confirmed"
    SNAT = "snat"
    DNAT = "dnat"
    DYING = "dying"


class PortProtocol(Enum):
    """Transport protocols that carry source/destination ports."""

    TCP = "tcp"
    UDP = "udp"
    SCTP = "sctp"
    DCCP = "dccp"


def enum_values(enum: type[Enum]) -> tuple[str, ...]:
    """
    Return the serialized values of an enum in declaration order.

    Args:
      enum (type[Enum]): Enum class.

    Returns:
      tuple[str, ...]: Wire tokens.
    """
    return tuple(str(m.value) for m in enum)


def parse_enum(enum: type[E], value: Any, field: str) -> E:
    """
    Parse an enum member or a case-insensitive string into a member of `enum`.

    Args:
      enum (type[Enum]): Target enum class.
      value (Any): Member or string token.
      field (str): Field name used in the error message.

    Returns:
      Enum: Matching member.

    Raises:
      InvalidEnumError: If the value is not a member of the enumeration.
    """
    if isinstance(value, enum):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        for member in enum:
            if member.value == token:
                return member
    raise InvalidEnumError(field, enum_values(enum), value)


def family_from_value(value: Any) -> Family:
    """Parse a family token (e.g. "inet", "ip6") into a Family."""
    return parse_enum(Family, value, "family")


def operation_from_value(value: Any) -> Operation:
    """Parse an operation token (e.g. "add") into an Operation."""
    return parse_enum(Operation, value, "operation")


def kind_from_value(value: Any) -> Kind:
    """Parse a kind token (e.g. "chain") into a Kind."""
    return parse_enum(Kind, value, "kind")
