"""Non-terminal statements: counters, logging, rate limits and mark mangling."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidEnumError
from ..core.typing import JsonDict
from ..core.validators import MARK, NAME, NON_NEGATIVE, RATE_UNIT
from .fragments import meta, statement

if TYPE_CHECKING:
    from .base import Expr

__all__ = ["LOG_LEVELS", "counter", "named_counter", "log", "limit", "set_mark"]

LOG_LEVELS: tuple[str, ...] = ("emerg", "alert", "crit", "err", "warn", "notice", "info", "debug", "audit")


def counter(expr: Expr) -> Expr:
    """Anonymous counter statement."""
    return expr.append(statement("counter"))


def named_counter(expr: Expr, name: str) -> Expr:
    """Reference a named counter object."""
    return expr.append(statement("counter", NAME.check("counter", name)))


def log(expr: Expr, prefix: str | None = None, *, level: str | None = None) -> Expr:
    body: JsonDict = {}
    if prefix is not None:
        body["prefix"] = NAME.check("prefix", prefix)
    if level is not None:
        if level not in LOG_LEVELS:
            raise InvalidEnumError("level", LOG_LEVELS, level)
        body["level"] = level
    return expr.append(statement("log", body or None))


def limit(expr: Expr, rate: int, per: Any = "second", *, burst: int | None = None) -> Expr:
    body: JsonDict = {
        "rate": NON_NEGATIVE.check("rate", rate),
        "per": RATE_UNIT.check("per", per),
    }
    if burst is not None:
        body["burst"] = NON_NEGATIVE.check("burst", burst)
    return expr.append(statement("limit", body))


def set_mark(expr: Expr, value: int) -> Expr:
    return expr.append(statement("mangle", {"key": meta("mark"), "value": MARK.check("mark", value)}))
