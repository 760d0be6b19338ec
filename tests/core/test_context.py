from __future__ import annotations

import pytest
from pydantic import ValidationError

from nftkit.core.context import Context
from nftkit.core.errors import InvalidEnumError, InvalidFieldError
from nftkit.core.grammar import Family, Kind


def test_defaults() -> None:
    ctx = Context()
    assert ctx.family == "inet"
    assert (ctx.table, ctx.chain, ctx.collection, ctx.collection_type) == (None, None, None, None)


def test_merge_is_partial_and_skips_none() -> None:
    ctx = Context(table="filter", chain="input")
    ctx2 = ctx.merge({"chain": "forward", "table": None, "comment": "ignored"})
    assert ctx2.table == "filter"
    assert ctx2.chain == "forward"
    # receiver untouched
    assert ctx.chain == "input"


def test_merge_maps_set_and_map_to_collection() -> None:
    assert Context().merge({"set": "allow"}).collection == "allow"
    assert Context().merge({"map": "ports"}).collection == "ports"


def test_merge_rejects_non_string_names() -> None:
    with pytest.raises(InvalidFieldError):
        Context().merge({"table": 42})


@pytest.mark.parametrize("key", ["rule", "rules", "counter", "quota", "limit", "flowtable", "element"])
def test_merge_rejects_objects_without_a_slot(key: str) -> None:
    with pytest.raises(InvalidFieldError) as ei:
        Context(table="t").merge({key: "x"})
    assert ei.value.field == key


def test_merge_without_updates_returns_same_instance() -> None:
    ctx = Context(table="t")
    assert ctx.merge({}) is ctx
    assert ctx.merge({"handle": 3}) is ctx


def test_enter_updates_scope_kinds_only() -> None:
    ctx = Context()
    assert ctx.enter(Kind.TABLE, "filter", {}).table == "filter"
    assert ctx.enter(Kind.CHAIN, "input", {}).chain == "input"
    entered = ctx.enter(Kind.SET, "allow", {"type": "ipv4_addr"})
    assert (entered.collection, entered.collection_type) == ("allow", "ipv4_addr")
    entered = ctx.enter(Kind.MAP, "ports", {"type": ("inet_service", "verdict")})
    assert entered.collection_type == ("inet_service", "verdict")
    assert ctx.enter(Kind.COUNTER, "c", {}) == ctx
    assert ctx.enter(Kind.RULE, [{"accept": None}], {}) == ctx


def test_set_overwrites_and_clears() -> None:
    ctx = Context(table="filter", chain="input").set(chain=None, family=Family.IP6)
    assert ctx.chain is None
    assert ctx.table == "filter"
    assert ctx.family == "ip6"
    assert ctx.set(family=None).family == "inet"


def test_set_validates_family() -> None:
    with pytest.raises(InvalidEnumError) as ei:
        Context().set(family="ipx")
    assert ei.value.field == "family"
    assert "netdev" in ei.value.allowed
    # InvalidEnumError is an InvalidFieldError
    with pytest.raises(InvalidFieldError):
        Context().set(family="ipx")


@pytest.mark.parametrize("fields", [{"tabel": "x"}, {"commands": []}, {"table": 1}, {"chain": ["a"]}])
def test_set_rejects_unknown_fields_and_wrong_types(fields: dict) -> None:
    with pytest.raises(InvalidFieldError):
        Context().set(**fields)


def test_context_is_frozen() -> None:
    ctx = Context()
    with pytest.raises(ValidationError):
        ctx.table = "x"  # type: ignore[misc]
