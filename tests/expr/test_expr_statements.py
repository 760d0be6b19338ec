from __future__ import annotations

import pytest

from nftkit.core.errors import InvalidEnumError, InvalidFieldError, RangeError
from nftkit.expr import expr


def test_verdicts() -> None:
    assert expr().accept().to_list() == [{"accept": None}]
    assert expr().drop().to_list() == [{"drop": None}]
    assert expr().reject().to_list() == [{"reject": None}]
    assert expr().reject("tcp reset").to_list() == [{"reject": {"type": "tcp reset"}}]
    assert expr().jump("services").to_list() == [{"jump": {"target": "services"}}]
    assert expr().goto("services").to_list() == [{"goto": {"target": "services"}}]
    assert expr().return_().continue_().notrack().to_list() == [{"return": None}, {"continue": None}, {"notrack": None}]
    with pytest.raises(InvalidEnumError):
        expr().reject("politely")
    with pytest.raises(InvalidFieldError):
        expr().jump("")


def test_counter_log_limit() -> None:
    e = expr().counter().log("SSH: ", level="info").limit(10, "minute", burst=5)
    assert e.to_list() == [
        {"counter": None},
        {"log": {"prefix": "SSH: ", "level": "info"}},
        {"limit": {"rate": 10, "per": "minute", "burst": 5}},
    ]
    assert expr().log().to_list() == [{"log": None}]
    assert expr().named_counter("ssh").to_list() == [{"counter": "ssh"}]
    with pytest.raises(InvalidEnumError):
        expr().log(level="loud")
    with pytest.raises(InvalidEnumError):
        expr().limit(10, "fortnight")


def test_set_mark() -> None:
    assert expr().set_mark(0x10).to_list() == [{"mangle": {"key": {"meta": {"key": "mark"}}, "value": 16}}]
    with pytest.raises(RangeError):
        expr().set_mark(-1)


def test_nat() -> None:
    assert expr().masquerade().to_list() == [{"masquerade": None}]
    assert expr().snat("203.0.113.1").to_list() == [{"snat": {"addr": "203.0.113.1"}}]
    assert expr().dnat("10.0.0.5", 8080).to_list() == [{"dnat": {"addr": "10.0.0.5", "port": 8080}}]
    assert expr().redirect(3128).to_list() == [{"redirect": {"port": 3128}}]
    with pytest.raises(InvalidFieldError):
        expr().dnat("10.0.0.0/8")
    with pytest.raises(RangeError):
        expr().dnat("10.0.0.5", 70000)


def test_full_rule_body_order() -> None:
    body = expr().tcp().dport(22).ct_state("new").counter().accept().to_list()
    assert [next(iter(f)) for f in body] == ["match", "match", "match", "counter", "accept"]
