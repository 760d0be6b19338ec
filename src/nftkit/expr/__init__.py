"""
nftkit.expr: fluent builder for rule bodies.

An `Expr` is an immutable, ordered list of nftables JSON fragments. Rule calls
accept either an Expr or a raw list of fragment mappings:

>>> from nftkit.expr import expr
>>> body = expr().tcp().dport(22).ct_state(["new"]).accept()
>>> [next(iter(f)) for f in body.to_list()]
['match', 'match', 'match', 'accept']

Fragment families live in their own modules (ip, port, ct, layer2, actions, nat,
verdicts) as plain functions taking and returning an Expr.
"""

from __future__ import annotations

from .base import Expr, expr

__all__ = ["Expr", "expr"]
