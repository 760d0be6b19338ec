"""
IPv4/IPv6 address matches.

The payload protocol (`ip` or `ip6`) follows the expression family when it is
single-stack and the address version otherwise (inet, bridge, netdev). Addresses
in CIDR notation become prefix matches.
"""

from __future__ import annotations

import ipaddress
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidFieldError
from ..core.validators import TTL
from .fragments import match, payload, prefix, set_reference

if TYPE_CHECKING:
    from .base import Expr

__all__ = ["address_operand", "source_ip", "dest_ip", "source_in_set", "dest_in_set", "ttl"]


def address_operand(field: str, family: str, address: Any) -> tuple[str, Any]:
    """
    Parse an address or network for a match.

    Returns:
        tuple[str, Any]: (payload protocol, right-hand operand).

    Raises:
        InvalidFieldError: Unparseable address, or version not matching the family.
    """
    text = str(address)
    try:
        network = ipaddress.ip_network(text, strict=False)
    except ValueError as exc:
        raise InvalidFieldError(field, f"invalid address {address!r}") from exc

    proto = "ip" if network.version == 4 else "ip6"
    if family in ("ip", "ip6") and family != proto:
        raise InvalidFieldError(field, f"{text} is not an {family} address")

    if "/" in text:
        return proto, prefix(str(network.network_address), network.prefixlen)
    return proto, str(network.network_address)


def _address_match(expr: Expr, field: str, wire_field: str, address: Any, negate: bool) -> Expr:
    proto, right = address_operand(field, expr.family, address)
    return expr.append(match(payload(proto, wire_field), right, "!=" if negate else "=="))


def source_ip(expr: Expr, address: Any, *, negate: bool = False) -> Expr:
    return _address_match(expr, "source_ip", "saddr", address, negate)


def dest_ip(expr: Expr, address: Any, *, negate: bool = False) -> Expr:
    return _address_match(expr, "dest_ip", "daddr", address, negate)


def _set_proto(expr: Expr, version: int) -> str:
    if expr.family in ("ip", "ip6"):
        return expr.family
    if version not in (4, 6):
        raise InvalidFieldError("version", f"expected 4 or 6, got {version!r}")
    return "ip" if version == 4 else "ip6"


def source_in_set(expr: Expr, set_name: str, *, version: int = 4) -> Expr:
    """Match the source address against a named set (`ip saddr @name`)."""
    return expr.append(match(payload(_set_proto(expr, version), "saddr"), set_reference(set_name)))


def dest_in_set(expr: Expr, set_name: str, *, version: int = 4) -> Expr:
    return expr.append(match(payload(_set_proto(expr, version), "daddr"), set_reference(set_name)))


def ttl(expr: Expr, value: int) -> Expr:
    # ip6 has no ttl; its equivalent is hoplimit.
    if expr.family == "ip6":
        return expr.append(match(payload("ip6", "hoplimit"), TTL.check("hoplimit", value)))
    return expr.append(match(payload("ip", "ttl"), TTL.check("ttl", value)))
