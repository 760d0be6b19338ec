"""Connection tracking matches (`ct state`, `ct status`)."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidFieldError
from ..core.grammar import CtState, CtStatus, parse_enum
from .fragments import ct, match

if TYPE_CHECKING:
    from .base import Expr

__all__ = ["ct_state", "ct_status"]


def _tokens(enum: type[Enum], field: str, values: Any) -> list[str]:
    if isinstance(values, (str, Enum)):
        values = [values]
    if not isinstance(values, (list, tuple, set, frozenset)) or not values:
        raise InvalidFieldError(field, f"expected one or more {field} values, got {values!r}")
    return [str(parse_enum(enum, v, field).value) for v in values]


def ct_state(expr: Expr, states: Any) -> Expr:
    """
    Match connection tracking state, e.g. ct_state(["established", "related"]).

    Raises:
        InvalidEnumError: Unknown state.
    """
    return expr.append(match(ct("state"), _tokens(CtState, "ct_state", states), "in"))


def ct_status(expr: Expr, statuses: Any) -> Expr:
    return expr.append(match(ct("status"), _tokens(CtStatus, "ct_status", statuses), "in"))
