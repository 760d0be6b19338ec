"""Interface, VLAN, DSCP and packet mark matches."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.validators import DSCP, MARK, NAME, VLAN_ID, VLAN_PCP
from .fragments import match, meta, payload

if TYPE_CHECKING:
    from .base import Expr

__all__ = ["iif", "oif", "iifname", "oifname", "vlan_id", "vlan_pcp", "dscp", "mark"]


def _meta_match(expr: Expr, key: str, name: str) -> Expr:
    return expr.append(match(meta(key), NAME.check(key, name)))


def iif(expr: Expr, name: str) -> Expr:
    return _meta_match(expr, "iif", name)


def oif(expr: Expr, name: str) -> Expr:
    return _meta_match(expr, "oif", name)


def iifname(expr: Expr, name: str) -> Expr:
    return _meta_match(expr, "iifname", name)


def oifname(expr: Expr, name: str) -> Expr:
    return _meta_match(expr, "oifname", name)


def vlan_id(expr: Expr, value: int) -> Expr:
    return expr.append(match(payload("vlan", "id"), VLAN_ID.check("vlan_id", value)))


def vlan_pcp(expr: Expr, value: int) -> Expr:
    return expr.append(match(payload("vlan", "pcp"), VLAN_PCP.check("vlan_pcp", value)))


def dscp(expr: Expr, value: int) -> Expr:
    proto = "ip6" if expr.family == "ip6" else "ip"
    return expr.append(match(payload(proto, "dscp"), DSCP.check("dscp", value)))


def mark(expr: Expr, value: int) -> Expr:
    return expr.append(match(meta("mark"), MARK.check("mark", value)))
