"""
Immutable expression handle for rule bodies.

`Expr` accumulates nftables JSON fragments in order. Every method returns a new
handle, so partially built expressions can be shared and extended safely:

>>> from nftkit.expr import expr
>>> ssh = expr().tcp().dport(22)
>>> ssh.accept().to_list()[-1]
{'accept': None}
>>> len(ssh)
2

Methods delegate to one module per fragment family (ip, port, ct, layer2,
actions, nat, verdicts); each module exposes plain functions taking an Expr.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from ..core.constants import DEFAULT_FAMILY
from ..core.grammar import family_from_value
from ..core.typing import Fragment
from . import actions, ct, ip, layer2, nat, port, verdicts

__all__ = ["Expr", "expr"]


@dataclass(frozen=True, slots=True)
class Expr:
    """
    Ordered, immutable list of rule fragments with its matching context.

    Attributes:
        family (str): Address family the rule lives in (drives ip vs ip6 payloads).
        protocol (str | None): Transport protocol selected by tcp()/udp()/...;
            required before port matches.
        fragments (tuple[dict, ...]): Fragments in rule order.
    """

    family: str = DEFAULT_FAMILY
    protocol: str | None = None
    fragments: tuple[Fragment, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.fragments)

    def to_list(self) -> list[Fragment]:
        return [dict(f) for f in self.fragments]

    def append(self, *fragments: Fragment, protocol: str | None = None) -> Expr:
        """Return a new handle with `fragments` appended (and protocol context set)."""
        return replace(
            self,
            fragments=self.fragments + tuple(fragments),
            protocol=protocol if protocol is not None else self.protocol,
        )

    def extend(self, fragments: Iterable[Fragment]) -> Expr:
        return replace(self, fragments=self.fragments + tuple(dict(f) for f in fragments))

    # protocol
    def protocol_match(self, proto: str) -> Expr:
        return port.l4proto(self, proto)

    def tcp(self) -> Expr:
        return port.l4proto(self, "tcp")

    def udp(self) -> Expr:
        return port.l4proto(self, "udp")

    def sctp(self) -> Expr:
        return port.l4proto(self, "sctp")

    def dccp(self) -> Expr:
        return port.l4proto(self, "dccp")

    def icmp(self) -> Expr:
        return port.l4proto(self, "icmp")

    def icmpv6(self) -> Expr:
        return port.l4proto(self, "ipv6-icmp")

    # ip
    def source_ip(self, address: str, *, negate: bool = False) -> Expr:
        return ip.source_ip(self, address, negate=negate)

    def dest_ip(self, address: str, *, negate: bool = False) -> Expr:
        return ip.dest_ip(self, address, negate=negate)

    def source_ip_in(self, set_name: str, *, version: int = 4) -> Expr:
        return ip.source_in_set(self, set_name, version=version)

    def dest_ip_in(self, set_name: str, *, version: int = 4) -> Expr:
        return ip.dest_in_set(self, set_name, version=version)

    def ttl(self, value: int) -> Expr:
        return ip.ttl(self, value)

    # ports
    def sport(self, value: Any, *, negate: bool = False) -> Expr:
        return port.sport(self, value, negate=negate)

    def dport(self, value: Any, *, negate: bool = False) -> Expr:
        return port.dport(self, value, negate=negate)

    def dport_in(self, set_name: str) -> Expr:
        return port.dport_in_set(self, set_name)

    # conntrack
    def ct_state(self, states: Any) -> Expr:
        return ct.ct_state(self, states)

    def ct_status(self, statuses: Any) -> Expr:
        return ct.ct_status(self, statuses)

    # layer 2 / meta
    def iif(self, name: str) -> Expr:
        return layer2.iif(self, name)

    def oif(self, name: str) -> Expr:
        return layer2.oif(self, name)

    def iifname(self, name: str) -> Expr:
        return layer2.iifname(self, name)

    def oifname(self, name: str) -> Expr:
        return layer2.oifname(self, name)

    def vlan_id(self, value: int) -> Expr:
        return layer2.vlan_id(self, value)

    def vlan_pcp(self, value: int) -> Expr:
        return layer2.vlan_pcp(self, value)

    def dscp(self, value: int) -> Expr:
        return layer2.dscp(self, value)

    def mark(self, value: int) -> Expr:
        return layer2.mark(self, value)

    # actions
    def counter(self) -> Expr:
        return actions.counter(self)

    def named_counter(self, name: str) -> Expr:
        return actions.named_counter(self, name)

    def log(self, prefix: str | None = None, *, level: str | None = None) -> Expr:
        return actions.log(self, prefix, level=level)

    def limit(self, rate: int, per: str = "second", *, burst: int | None = None) -> Expr:
        return actions.limit(self, rate, per, burst=burst)

    def set_mark(self, value: int) -> Expr:
        return actions.set_mark(self, value)

    # nat
    def snat(self, address: str, port_: int | None = None) -> Expr:
        return nat.snat(self, address, port_)

    def dnat(self, address: str, port_: int | None = None) -> Expr:
        return nat.dnat(self, address, port_)

    def masquerade(self) -> Expr:
        return nat.masquerade(self)

    def redirect(self, port_: int) -> Expr:
        return nat.redirect(self, port_)

    # verdicts
    def accept(self) -> Expr:
        return verdicts.accept(self)

    def drop(self) -> Expr:
        return verdicts.drop(self)

    def reject(self, kind: str | None = None) -> Expr:
        return verdicts.reject(self, kind)

    def jump(self, chain: str) -> Expr:
        return verdicts.jump(self, chain)

    def goto(self, chain: str) -> Expr:
        return verdicts.goto(self, chain)

    def return_(self) -> Expr:
        return verdicts.return_(self)

    def continue_(self) -> Expr:
        return verdicts.continue_(self)

    def notrack(self) -> Expr:
        return verdicts.notrack(self)


def expr(family: Any = DEFAULT_FAMILY) -> Expr:
    """
    Start an empty expression for `family`.

    Raises:
        InvalidEnumError: If the family is unknown.
    """
    return Expr(family=family_from_value(family).value)
