"""Network address translation statements."""

from __future__ import annotations

import ipaddress
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidFieldError
from ..core.typing import JsonDict
from ..core.validators import PORT
from .fragments import statement

if TYPE_CHECKING:
    from .base import Expr

__all__ = ["snat", "dnat", "masquerade", "redirect"]


def _target(field: str, address: Any, port: int | None) -> JsonDict:
    try:
        addr = str(ipaddress.ip_address(str(address)))
    except ValueError as exc:
        raise InvalidFieldError(field, f"invalid address {address!r}") from exc
    body: JsonDict = {"addr": addr}
    if port is not None:
        body["port"] = PORT.check("port", port)
    return body


def snat(expr: Expr, address: Any, port: int | None = None) -> Expr:
    return expr.append(statement("snat", _target("snat", address, port)))


def dnat(expr: Expr, address: Any, port: int | None = None) -> Expr:
    return expr.append(statement("dnat", _target("dnat", address, port)))


def masquerade(expr: Expr) -> Expr:
    return expr.append(statement("masquerade"))


def redirect(expr: Expr, port: int) -> Expr:
    return expr.append(statement("redirect", {"port": PORT.check("port", port)}))
