"""Verdict statements; a verdict normally ends a rule body."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.errors import InvalidEnumError
from ..core.validators import NAME
from .fragments import statement

if TYPE_CHECKING:
    from .base import Expr

__all__ = ["REJECT_TYPES", "accept", "drop", "reject", "jump", "goto", "return_", "continue_", "notrack"]

REJECT_TYPES: tuple[str, ...] = ("tcp reset", "icmp", "icmpv6", "icmpx")


def accept(expr: Expr) -> Expr:
    return expr.append(statement("accept"))


def drop(expr: Expr) -> Expr:
    return expr.append(statement("drop"))


def reject(expr: Expr, kind: str | None = None) -> Expr:
    if kind is None:
        return expr.append(statement("reject"))
    if kind not in REJECT_TYPES:
        raise InvalidEnumError("reject", REJECT_TYPES, kind)
    return expr.append(statement("reject", {"type": kind}))


def jump(expr: Expr, chain: str) -> Expr:
    return expr.append(statement("jump", {"target": NAME.check("jump", chain)}))


def goto(expr: Expr, chain: str) -> Expr:
    return expr.append(statement("goto", {"target": NAME.check("goto", chain)}))


def return_(expr: Expr) -> Expr:
    return expr.append(statement("return"))


def continue_(expr: Expr) -> Expr:
    return expr.append(statement("continue"))


def notrack(expr: Expr) -> Expr:
    return expr.append(statement("notrack"))
