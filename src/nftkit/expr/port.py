"""
Transport protocol and port matches.

`l4proto` records the protocol on the expression; sport/dport read it back and
refuse to build without a port-carrying protocol (tcp, udp, sctp, dccp).

Port operands:
    22                 -> 22
    (1024, 2048)       -> {"range": [1024, 2048]}
    range(8000, 8011)  -> {"range": [8000, 8010]}
    [80, 443]          -> {"set": [80, 443]}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidFieldError, MissingContextError
from ..core.grammar import PortProtocol, enum_values
from ..core.validators import PORT, check_port_range
from .fragments import anonymous_set, match, meta, payload, set_reference, value_range

if TYPE_CHECKING:
    from .base import Expr

__all__ = ["PORT_PROTOCOLS", "l4proto", "port_operand", "sport", "dport", "dport_in_set"]

PORT_PROTOCOLS: tuple[str, ...] = enum_values(PortProtocol)


def l4proto(expr: Expr, proto: str) -> Expr:
    """Match the layer 4 protocol (`meta l4proto`) and make it the protocol context."""
    if not isinstance(proto, str) or not proto:
        raise InvalidFieldError("protocol", f"expected a protocol name, got {proto!r}")
    proto = proto.lower()
    return expr.append(match(meta("l4proto"), proto), protocol=proto)


def _require_protocol(expr: Expr, field: str) -> str:
    if expr.protocol not in PORT_PROTOCOLS:
        raise MissingContextError(
            "protocol",
            f"{field} requires a {'/'.join(PORT_PROTOCOLS)} match first, e.g. expr().tcp().{field}(22)",
        )
    return expr.protocol


def port_operand(field: str, value: Any) -> Any:
    """
    Validate a port, port range or list of ports and return the match operand.

    Raises:
        InvalidFieldError: Wrong type or empty list.
        RangeError: Port outside [0, 65535] or range with first > last.
    """
    if isinstance(value, range):
        if value.step != 1 or len(value) == 0:
            raise InvalidFieldError(field, f"expected a contiguous non-empty range, got {value!r}")
        return value_range(*check_port_range(field, value.start, value.stop - 1))
    if isinstance(value, tuple):
        if len(value) != 2:
            raise InvalidFieldError(field, f"port range must be (first, last), got {value!r}")
        return value_range(*check_port_range(field, value[0], value[1]))
    if isinstance(value, list):
        if not value:
            raise InvalidFieldError(field, "port list must not be empty")
        return anonymous_set([PORT.check(field, v) for v in value])
    return PORT.check(field, value)


def _port_match(expr: Expr, field: str, value: Any, negate: bool) -> Expr:
    proto = _require_protocol(expr, field)
    return expr.append(match(payload(proto, field), port_operand(field, value), "!=" if negate else "=="))


def sport(expr: Expr, value: Any, *, negate: bool = False) -> Expr:
    return _port_match(expr, "sport", value, negate)


def dport(expr: Expr, value: Any, *, negate: bool = False) -> Expr:
    return _port_match(expr, "dport", value, negate)


def dport_in_set(expr: Expr, set_name: str) -> Expr:
    proto = _require_protocol(expr, "dport")
    return expr.append(match(payload(proto, "dport"), set_reference(set_name)))
