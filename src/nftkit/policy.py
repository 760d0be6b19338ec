"""
Common firewall rule presets composed on top of Builder.

Each preset takes a Builder and returns a new Builder with one or more rules
added, so presets chain like any other builder call and nothing is submitted:

>>> from nftkit.builder import Builder
>>> from nftkit import policy
>>> b = policy.stateful(Builder.new().add(table="filter").add(chain="INPUT"))
>>> b = policy.allow_ssh(b, rate_limit=10)
>>> len(b)
5

Options shared by every preset:
    table (str): Target table (default "filter").
    chain (str): Target chain (default "INPUT").
    family (str): Address family (default "inet").

The table and chain must exist in the batch or on the host; presets only add
rules. Because `table`/`chain` ride along as context fields, they also become the
builder's current table and chain.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .builder import Builder
from .core.constants import DEFAULT_FAMILY
from .core.errors import InvalidEnumError
from .expr import Expr, expr

__all__ = [
    "DEFAULT_TABLE",
    "DEFAULT_CHAIN",
    "SERVICES",
    "accept_loopback",
    "accept_established",
    "drop_invalid",
    "stateful",
    "allow_port",
    "allow_ssh",
    "allow_http",
    "allow_https",
    "allow_dns",
    "allow_services",
    "allow_any",
    "deny_all",
]

DEFAULT_TABLE = "filter"
DEFAULT_CHAIN = "INPUT"


def _add(builder: Builder | None, rule: Expr, table: str, chain: str, family: Any) -> Builder:
    builder = builder if builder is not None else Builder.new()
    return builder.add(rule=rule, table=table, chain=chain, family=family)


def accept_loopback(
    builder: Builder | None = None,
    *,
    table: str = DEFAULT_TABLE,
    chain: str = DEFAULT_CHAIN,
    family: Any = DEFAULT_FAMILY,
) -> Builder:
    """Accept everything arriving on the loopback interface."""
    return _add(builder, expr(family).iif("lo").accept(), table, chain, family)


def accept_established(
    builder: Builder | None = None,
    *,
    table: str = DEFAULT_TABLE,
    chain: str = DEFAULT_CHAIN,
    family: Any = DEFAULT_FAMILY,
) -> Builder:
    """Accept return traffic of established and related connections."""
    rule = expr(family).ct_state(["established", "related"]).accept()
    return _add(builder, rule, table, chain, family)


def drop_invalid(
    builder: Builder | None = None,
    *,
    table: str = DEFAULT_TABLE,
    chain: str = DEFAULT_CHAIN,
    family: Any = DEFAULT_FAMILY,
) -> Builder:
    """Drop packets whose conntrack state is invalid."""
    return _add(builder, expr(family).ct_state(["invalid"]).drop(), table, chain, family)


def stateful(builder: Builder | None = None, **options: Any) -> Builder:
    """accept_established followed by drop_invalid."""
    return drop_invalid(accept_established(builder, **options), **options)


def allow_port(
    builder: Builder | None,
    port: int,
    *,
    protocol: str = "tcp",
    rate_limit: int | None = None,
    log: bool = False,
    service: str | None = None,
    table: str = DEFAULT_TABLE,
    chain: str = DEFAULT_CHAIN,
    family: Any = DEFAULT_FAMILY,
) -> Builder:
    """
    Accept new traffic to a destination port.

    Args:
        builder (Builder | None): Builder to extend (default: a new one).
        port (int): Destination port.
        protocol (str): tcp, udp, sctp or dccp.
        rate_limit (int | None): Accept at most this many packets per minute.
        log (bool): Log accepted packets with a "<service>: " prefix.
        service (str | None): Log prefix label (default "PORT <port>").

    Raises:
        RangeError: Port outside [0, 65535].
    """
    rule = expr(family).protocol_match(protocol).dport(port)
    if rate_limit is not None:
        rule = rule.limit(rate_limit, "minute")
    if log:
        rule = rule.log(f"{service or f'PORT {port}'}: ")
    return _add(builder, rule.accept(), table, chain, family)


def allow_ssh(builder: Builder | None = None, **options: Any) -> Builder:
    """Accept SSH (tcp/22); takes allow_port's rate_limit and log options."""
    return allow_port(builder, 22, service="SSH", **options)


def allow_http(builder: Builder | None = None, **options: Any) -> Builder:
    return allow_port(builder, 80, service="HTTP", **options)


def allow_https(builder: Builder | None = None, **options: Any) -> Builder:
    return allow_port(builder, 443, service="HTTPS", **options)


def allow_dns(builder: Builder | None = None, **options: Any) -> Builder:
    """Accept DNS queries (udp/53 unless protocol= says otherwise)."""
    options.setdefault("protocol", "udp")
    return allow_port(builder, 53, service="DNS", **options)


SERVICES = {
    "ssh": allow_ssh,
    "http": allow_http,
    "https": allow_https,
    "dns": allow_dns,
}


def allow_services(builder: Builder | None, services: Iterable[str], **options: Any) -> Builder:
    """
    Apply the named service presets in order.

    Raises:
        InvalidEnumError: Unknown service name (nothing is added).
    """
    names = list(services)
    for name in names:
        if name not in SERVICES:
            raise InvalidEnumError("service", tuple(SERVICES), name)
    builder = builder if builder is not None else Builder.new()
    for name in names:
        builder = SERVICES[name](builder, **options)
    return builder


def allow_any(builder: Builder | None = None, *, log: bool = False, **options: Any) -> Builder:
    """Catch-all accept rule, optionally logged with "ALLOW ANY: "."""
    return _catch_all(builder, "accept", "ALLOW ANY: " if log else None, **options)


def deny_all(builder: Builder | None = None, *, log: bool = False, **options: Any) -> Builder:
    """Catch-all drop rule, optionally logged with "DENY ALL: "."""
    return _catch_all(builder, "drop", "DENY ALL: " if log else None, **options)


def _catch_all(
    builder: Builder | None,
    verdict: str,
    prefix: str | None,
    *,
    table: str = DEFAULT_TABLE,
    chain: str = DEFAULT_CHAIN,
    family: Any = DEFAULT_FAMILY,
) -> Builder:
    rule = expr(family)
    if prefix is not None:
        rule = rule.log(prefix)
    rule = rule.accept() if verdict == "accept" else rule.drop()
    return _add(builder, rule, table, chain, family)
