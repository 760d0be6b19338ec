from __future__ import annotations

import json

import pytest

from nftkit.core.batch import Batch
from nftkit.core.context import Context
from nftkit.core.errors import InvalidEnumError, InvalidFieldError
from nftkit.core.hashing import hash_payload, json_dumps_canonical
from nftkit.core.schema import Command


def _cmd(op: str, kind: str, **spec: object) -> Command:
    return Command(operation=op, kind=kind, spec=spec)


def _batch() -> Batch:
    return (
        Batch()
        .append(_cmd("add", "table", family="inet", name="filter"))
        .append(_cmd("add", "chain", family="inet", table="filter", name="input", type="filter", hook="input", prio=0))
        .append(
            _cmd(
                "add",
                "rule",
                family="inet",
                table="filter",
                chain="input",
                expr=[{"match": {"op": "==", "left": {"payload": {"protocol": "tcp", "field": "dport"}}, "right": 22}}, {"accept": None}],
            )
        )
        .append(_cmd("flush", "ruleset"))
    )


def test_append_returns_new_batch() -> None:
    b0 = Batch()
    b1 = b0.append(_cmd("add", "table", family="inet", name="t"))
    assert len(b0) == 0
    assert len(b1) == 1


def test_append_keeps_or_replaces_context() -> None:
    ctx = Context(table="t")
    b = Batch(context=ctx).append(_cmd("add", "table", family="inet", name="u"))
    assert b.context is ctx
    assert b.append(_cmd("flush", "ruleset"), Context(table="u")).context.table == "u"


def test_serialize_shape_and_order() -> None:
    wire = _batch().serialize()
    assert [next(iter(item)) for item in wire] == ["add", "add", "add", "flush"]
    assert wire[0] == {"add": {"table": {"family": "inet", "name": "filter"}}}
    assert wire[3] == {"flush": {"ruleset": {}}}
    assert list(wire[1]["add"]["chain"]) == ["family", "table", "name", "type", "hook", "prio"]


def test_to_json_keeps_key_order() -> None:
    text = _batch().to_json()
    assert text.startswith('{"nftables":[{"add":{"table":{"family":"inet","name":"filter"}}}')
    assert json.loads(text) == _batch().to_map()


@pytest.mark.parametrize("form", ["json", "map", "list"])
def test_from_wire_round_trips(form: str) -> None:
    batch = _batch()
    payload = {"json": batch.to_json(), "map": batch.to_map(), "list": batch.serialize()}[form]
    parsed = Batch.from_wire(payload)
    assert parsed.commands == batch.commands
    assert parsed.serialize() == batch.serialize()


def test_from_wire_rejects_bad_shapes() -> None:
    with pytest.raises(InvalidFieldError):
        Batch.from_wire({"commands": []})
    with pytest.raises(InvalidFieldError):
        Batch.from_wire([{"add": {"table": {}}, "delete": {"table": {}}}])
    with pytest.raises(InvalidEnumError):
        Batch.from_wire([{"create": {"table": {"family": "inet", "name": "t"}}}])


def test_digest_is_stable_and_order_insensitive_within_specs() -> None:
    a = Batch().append(_cmd("add", "table", family="inet", name="t"))
    b = Batch().append(_cmd("add", "table", name="t", family="inet"))
    assert a.digest() == b.digest()
    assert a.digest() == hash_payload({"nftables": [{"add": {"table": {"name": "t", "family": "inet"}}}]})
    assert a.digest() != _batch().digest()


def test_canonical_json_sorts_keys() -> None:
    assert json_dumps_canonical({"b": 1, "a": [1, {"d": 2, "c": 3}]}) == '{"a":[1,{"c":3,"d":2}],"b":1}'


def test_structurally_equal_commands_serialize_identically() -> None:
    c1 = _cmd("add", "counter", family="inet", table="t", name="c", packets=0, bytes=0)
    c2 = Command.from_wire(c1.to_wire())
    assert c1 == c2
    assert json_dumps_canonical(c1.to_wire()) == json_dumps_canonical(c2.to_wire())


def test_command_owns_its_spec() -> None:
    body = [{"match": {"op": "==", "left": {"meta": {"key": "iifname"}}, "right": "lo"}}]
    cmd = _cmd("add", "rule", family="inet", table="t", chain="c", expr=body)

    body[0]["match"]["right"] = "eth0"
    body.append({"drop": None})
    cmd.to_wire()["add"]["rule"]["expr"].clear()

    assert cmd.spec["expr"] == [{"match": {"op": "==", "left": {"meta": {"key": "iifname"}}, "right": "lo"}}]


def test_from_wire_does_not_share_input() -> None:
    wire = _batch().serialize()
    parsed = Batch.from_wire(wire)
    wire[2]["add"]["rule"]["expr"].pop()
    assert parsed.serialize() == _batch().serialize()
