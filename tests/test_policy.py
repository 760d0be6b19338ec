from __future__ import annotations

import pytest

from nftkit import policy
from nftkit.builder import Builder
from nftkit.core.errors import InvalidEnumError, MissingContextError, RangeError


def _rules(b: Builder) -> list[dict]:
    return [item["add"]["rule"] for item in b.serialize() if "rule" in item.get("add", {})]


def _fragment_keys(rule: dict) -> list[str]:
    return [next(iter(frag)) for frag in rule["expr"]]


def test_presets_default_to_filter_input_inet() -> None:
    (rule,) = _rules(policy.accept_loopback())
    assert (rule["family"], rule["table"], rule["chain"]) == ("inet", "filter", "INPUT")
    assert rule["expr"] == [
        {"match": {"op": "==", "left": {"meta": {"key": "iif"}}, "right": "lo"}},
        {"accept": None},
    ]


def test_accept_established_and_drop_invalid() -> None:
    established, invalid = _rules(policy.stateful(Builder.new()))
    assert established["expr"][0] == {
        "match": {"op": "in", "left": {"ct": {"key": "state"}}, "right": ["established", "related"]}
    }
    assert established["expr"][-1] == {"accept": None}
    assert invalid["expr"][0]["match"]["right"] == ["invalid"]
    assert invalid["expr"][-1] == {"drop": None}


def test_presets_compose_on_an_existing_builder() -> None:
    base = Builder.new().add(table="filter").add(chain="INPUT", hook="input", policy="drop")
    b = policy.allow_https(policy.allow_http(policy.allow_ssh(policy.accept_loopback(base))))
    assert len(b) == 6
    assert len(base) == 2
    ports = [rule["expr"][1]["match"]["right"] for rule in _rules(b)[1:]]
    assert ports == [22, 80, 443]


def test_allow_ssh_with_rate_limit_and_log() -> None:
    (rule,) = _rules(policy.allow_ssh(rate_limit=10, log=True))
    assert _fragment_keys(rule) == ["match", "match", "limit", "log", "accept"]
    assert rule["expr"][2] == {"limit": {"rate": 10, "per": "minute"}}
    assert rule["expr"][3] == {"log": {"prefix": "SSH: "}}


def test_allow_dns_uses_udp_by_default() -> None:
    (udp,) = _rules(policy.allow_dns())
    assert udp["expr"][0]["match"]["right"] == "udp"
    assert udp["expr"][1]["match"]["left"] == {"payload": {"protocol": "udp", "field": "dport"}}
    (tcp,) = _rules(policy.allow_dns(protocol="tcp"))
    assert tcp["expr"][0]["match"]["right"] == "tcp"


def test_allow_port_labels_and_validation() -> None:
    (rule,) = _rules(policy.allow_port(None, 8080, log=True))
    assert rule["expr"][-2] == {"log": {"prefix": "PORT 8080: "}}
    with pytest.raises(RangeError):
        policy.allow_port(None, 70000)
    with pytest.raises(MissingContextError):
        policy.allow_port(None, 53, protocol="icmp")


def test_custom_table_chain_family() -> None:
    b = policy.drop_invalid(table="fw", chain="in", family="ip6")
    (rule,) = _rules(b)
    assert (rule["family"], rule["table"], rule["chain"]) == ("ip6", "fw", "in")
    assert (b.table, b.chain) == ("fw", "in")


def test_allow_services_applies_in_order() -> None:
    b = policy.allow_services(Builder.new(), ["dns", "ssh"], rate_limit=5)
    dns, ssh = _rules(b)
    assert dns["expr"][1]["match"]["right"] == 53
    assert ssh["expr"][1]["match"]["right"] == 22
    assert all(rule["expr"][2] == {"limit": {"rate": 5, "per": "minute"}} for rule in (dns, ssh))


def test_allow_services_rejects_unknown_names_before_adding() -> None:
    with pytest.raises(InvalidEnumError) as ei:
        policy.allow_services(Builder.new(), ["ssh", "gopher"])
    assert ei.value.value == "gopher"


@pytest.mark.parametrize(
    "preset,verdict,prefix",
    [(policy.allow_any, "accept", "ALLOW ANY: "), (policy.deny_all, "drop", "DENY ALL: ")],
)
def test_catch_all_presets(preset, verdict: str, prefix: str) -> None:
    (plain,) = _rules(preset())
    assert plain["expr"] == [{verdict: None}]
    (logged,) = _rules(preset(log=True, chain="FORWARD"))
    assert logged["chain"] == "FORWARD"
    assert logged["expr"] == [{"log": {"prefix": prefix}}, {verdict: None}]
