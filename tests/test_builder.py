from __future__ import annotations

import json

import pytest

from nftkit.builder import Builder
from nftkit.core.batch import Batch
from nftkit.core.errors import (
    AmbiguousObjectError,
    InvalidEnumError,
    InvalidFieldError,
    MissingContextError,
    NoObjectError,
    RangeError,
    UnsupportedOperationError,
)
from nftkit.expr import expr
from nftkit.submit.capture import CaptureSubmitter
from nftkit.submit.errors import NoSubmitterError
from nftkit.submit.result import FailureReason, SubmitFailure, SubmitOk


def _firewall() -> Builder:
    return (
        Builder.new()
        .add(table="filter")
        .add(chain="INPUT", hook="input", policy="drop")
        .add(rule=[{"accept": None}])
    )


def test_context_carry_produces_three_commands_in_order() -> None:
    b = _firewall()
    wire = b.serialize()
    assert len(b) == 3
    assert [list(item["add"]) for item in wire] == [["table"], ["chain"], ["rule"]]
    rule = wire[2]["add"]["rule"]
    assert rule["table"] == "filter"
    assert rule["chain"] == "INPUT"
    assert wire[1]["add"]["chain"] == {
        "family": "inet",
        "table": "filter",
        "name": "INPUT",
        "type": "filter",
        "hook": "input",
        "prio": 0,
        "policy": "drop",
    }


def test_builders_are_values() -> None:
    base = Builder.new().add(table="filter")
    one = base.add(chain="a")
    two = base.add(chain="b")
    assert len(base) == 1
    assert one.chain == "a"
    assert two.chain == "b"
    assert base.chain is None


def test_rule_without_context_fails() -> None:
    with pytest.raises(MissingContextError) as ei:
        Builder.new().add(rule=[{"accept": None}])
    assert ei.value.field == "table"


def test_set_and_map_in_one_call_is_ambiguous() -> None:
    with pytest.raises(AmbiguousObjectError):
        Builder.new().add(table="t").add(set="s1", map="m1", type="ipv4_addr")


def test_no_object() -> None:
    with pytest.raises(NoObjectError):
        Builder.new().add(family="inet")


def test_flush_element_unsupported() -> None:
    b = Builder.new().add(table="t").add(set="s", type="ipv4_addr")
    with pytest.raises(UnsupportedOperationError) as ei:
        b.flush(element=["10.0.0.1"])
    assert ei.value.valid_operations == ("add", "delete")


def test_failed_call_leaves_builder_unchanged() -> None:
    b = Builder.new().add(table="t")
    with pytest.raises(RangeError):
        b.add(counter="c", packets=-1, chain="never")
    # the chain= context field of the failed call was not committed
    assert b.chain is None
    assert len(b) == 1


def test_context_fields_in_bag_update_context() -> None:
    b = Builder.new().add(table="a").add(rule=[{"drop": None}], table="b", chain="x")
    assert (b.table, b.chain) == ("b", "x")
    assert b.serialize()[1]["add"]["rule"]["table"] == "b"


def test_main_object_only_call_does_not_touch_context() -> None:
    b = Builder.new().add(table="t").add(chain="c")
    after = b.add(counter="hits").add(rule=expr().counter().accept())
    assert after.context == b.context


def test_set_then_elements_use_collection() -> None:
    b = (
        Builder.new()
        .add(table="filter")
        .add(set="blocklist", type="ipv4_addr", flags=["interval"])
        .add(element=["10.0.0.1", "10.0.0.2"])
    )
    assert b.collection == "blocklist"
    assert b.collection_type == "ipv4_addr"
    assert b.serialize()[2] == {
        "add": {"element": {"family": "inet", "table": "filter", "name": "blocklist", "elem": ["10.0.0.1", "10.0.0.2"]}}
    }


def test_map_elements_become_pairs() -> None:
    b = (
        Builder.new()
        .add(table="nat")
        .add(map="ports", type=("inet_service", "verdict"))
        .add(element=[(22, {"accept": None}), (80, {"drop": None})])
    )
    assert b.collection_type == ("inet_service", "verdict")
    assert b.serialize()[2]["add"]["element"]["elem"] == [[22, {"accept": None}], [80, {"drop": None}]]


def test_clearing_context_fails_lazily() -> None:
    b = Builder.new().add(table="t").add(chain="c").set(chain=None)
    assert b.chain is None
    # the next chain-less rule call is what fails
    with pytest.raises(MissingContextError) as ei:
        b.add(rule=[{"accept": None}])
    assert ei.value.field == "chain"
    # table-scoped calls still work
    assert len(b.add(counter="c")) == 3


def test_set_validation() -> None:
    b = Builder.new()
    assert b.set(family="ip6", table="t").family == "ip6"
    with pytest.raises(InvalidEnumError):
        b.set(family="ipx")
    with pytest.raises(InvalidFieldError):
        b.set(table=7)
    with pytest.raises(InvalidFieldError):
        b.set(commands=[])
    with pytest.raises(InvalidFieldError):
        b.set(bogus=1)
    with pytest.raises(InvalidFieldError):
        b.set(submitter="not a submitter")


def test_rules_and_add_rules() -> None:
    b = Builder.new().add(table="filter").add(chain="input")
    bodies = [expr().tcp().dport(22).accept(), [{"drop": None}]]
    via_key = b.add(rules=bodies)
    via_helper = b.add_rules(bodies)
    assert via_key.serialize() == via_helper.serialize()
    assert len(via_key) == 4
    assert via_key.serialize()[3]["add"]["rule"]["expr"] == [{"drop": None}]


def test_operations_round() -> None:
    b = (
        Builder.new(family="ip")
        .add(table="t")
        .add(chain="old")
        .rename(chain="old", newname="new")
        .insert(rule=[{"accept": None}], chain="new", index=0)
        .replace(rule=[{"drop": None}], handle=4)
        .delete(rule=5)
        .flush(chain="new")
        .delete(table="t")
        .flush_ruleset(family="ip")
    )
    ops = [next(iter(item)) for item in b.serialize()]
    assert ops == ["add", "add", "rename", "insert", "replace", "delete", "flush", "delete", "flush"]
    assert b.serialize()[-1] == {"flush": {"ruleset": {"family": "ip"}}}
    assert all(
        spec["family"] == "ip" for item in b.serialize()[:-1] for body in item.values() for spec in body.values()
    )


def test_flush_ruleset_without_family() -> None:
    assert Builder.new().flush_ruleset().to_map() == {"nftables": [{"flush": {"ruleset": {}}}]}


def test_to_json_round_trips_through_batch() -> None:
    b = _firewall().add(counter="c").add(quota="q", bytes=100)
    text = b.to_json()
    assert json.loads(text) == b.to_map()
    assert Batch.from_wire(text).commands == b.commands


def test_imports_recreate_listed_objects() -> None:
    b = (
        Builder.new()
        .import_table({"family": "ip6", "name": "filter", "handle": 1})
        .import_chain({"family": "ip6", "table": "filter", "name": "input", "type": "filter", "hook": "input", "prio": 0, "policy": "accept"})
        .import_set({"family": "ip6", "table": "filter", "name": "allow", "type": "ipv6_addr", "flags": ["interval"]})
        .import_rule({"family": "ip6", "table": "filter", "chain": "input", "expr": [{"accept": None}], "comment": "ok"})
    )
    assert b.family == "ip6"
    wire = b.serialize()
    assert wire[0] == {"add": {"table": {"family": "ip6", "name": "filter"}}}
    assert wire[1]["add"]["chain"]["policy"] == "accept"
    assert wire[2]["add"]["set"]["flags"] == ["interval"]
    assert wire[3]["add"]["rule"]["comment"] == "ok"


def test_submit_uses_override_then_builder_submitter() -> None:
    own = CaptureSubmitter(response="own")
    override = CaptureSubmitter(response="override")
    b = _firewall().set(submitter=own)

    assert b.submit(timeout=1.5) == SubmitOk("own")
    assert own.payloads == [b.to_map()]
    assert own.timeouts == [1.5]

    assert b.submit(override) == SubmitOk("override")
    assert len(own.payloads) == 1


def test_submit_without_submitter_raises() -> None:
    with pytest.raises(NoSubmitterError):
        _firewall().submit()


def test_submit_failures_are_returned() -> None:
    failure = SubmitFailure(FailureReason.BACKEND, [{"error": "x"}])
    result = _firewall().submit(CaptureSubmitter(failure=failure))
    assert result is failure


def test_serialized_output_is_detached_from_recorded_commands() -> None:
    b = Builder.new().add(table="filter").add(chain="input").add(rule=expr().tcp().dport(22).accept())
    before = b.to_json()
    digest = b.batch.digest()
    fork = b.add(counter="c")

    wire = b.serialize()
    wire[2]["add"]["rule"]["expr"].append({"drop": None})
    wire[2]["add"]["rule"]["expr"][0]["match"]["right"] = "udp"

    assert b.to_json() == before
    assert b.batch.digest() == digest
    assert fork.serialize()[2] == json.loads(before)["nftables"][2]


def test_rule_fragments_are_copied_when_recorded() -> None:
    frag = {"match": {"op": "==", "left": {"meta": {"key": "l4proto"}}, "right": "tcp"}}
    b = Builder.new().add(table="filter").add(chain="input").add(rule=[frag, {"accept": None}])

    frag["match"]["right"] = "udp"

    assert b.serialize()[2]["add"]["rule"]["expr"][0]["match"]["right"] == "tcp"


def test_map_elements_are_copied_when_recorded() -> None:
    verdict = {"jump": {"target": "ssh"}}
    b = Builder.new().add(table="t").add(map="ports", type=("inet_service", "verdict")).add(element=[(22, verdict)])

    verdict["jump"]["target"] = "other"

    assert b.serialize()[2]["add"]["element"]["elem"] == [[22, {"jump": {"target": "ssh"}}]]


def test_object_keys_cannot_ride_along_as_context() -> None:
    b = Builder.new().add(table="t").add(set="s", type="ipv4_addr")
    with pytest.raises(InvalidFieldError) as ei:
        b.add(element=["10.0.0.1"], counter="c")
    assert ei.value.field == "counter"
    with pytest.raises(InvalidFieldError):
        b.add(counter="c", chain="input", rule=[{"accept": None}])
