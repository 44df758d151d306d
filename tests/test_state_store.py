from __future__ import annotations

import pytest

from pysolap.exceptions import InvalidRequestError
from pysolap.state.aggregate import aggregate_to_county
from pysolap.state.store import EnumUnitStore, collect_values, merge_records, paired_values

FIELD = "solap|demographics|total"


def test_merge_keeps_unrelated_fields_and_overwrites_conflicts() -> None:
    store = EnumUnitStore()
    store.merge("tract", {"27001010100": {"a": 1, "b": 2}})
    store.merge("tract", {"27001010100": {"b": 3, "c": 4}})

    assert store.tract["27001010100"] == {"a": 1, "b": 3, "c": 4}
    assert store.county == {}


def test_merge_copies_incoming_records() -> None:
    target: dict[str, dict[str, object]] = {}
    incoming = {"27001": {"values": [1, 2]}}
    merge_records(target, incoming)
    incoming["27001"]["values"].append(3)  # type: ignore[attr-defined]

    assert target["27001"]["values"] == [1, 2]


def test_unknown_level_rejected() -> None:
    with pytest.raises(InvalidRequestError):
        EnumUnitStore().level("state")


def test_collect_values_skips_missing_and_non_numeric() -> None:
    records = {
        "1": {FIELD: 10},
        "2": {FIELD: "5.5"},
        "3": {FIELD: "--"},
        "4": {"other": 1},
    }

    assert collect_values(records, FIELD) == [10.0, 5.5]


def test_paired_values_only_units_with_both_fields() -> None:
    records = {
        "1": {"x": 1, "y": 10},
        "2": {"x": 2},
        "3": {"x": 3, "y": 30},
    }

    assert paired_values(records, "x", "y") == ([1.0, 3.0], [10.0, 30.0])


def test_field_exists() -> None:
    store = EnumUnitStore()
    store.merge("county", {"27001": {FIELD: 1}})

    assert store.field_exists("county", FIELD)
    assert not store.field_exists("tract", FIELD)


def test_snapshot_is_independent() -> None:
    store = EnumUnitStore()
    store.merge("tract", {"27001010100": {FIELD: 1}})
    snapshot = store.snapshot("tract")
    snapshot["27001010100"][FIELD] = 99

    assert store.tract["27001010100"][FIELD] == 1


def test_reset_single_level_and_all() -> None:
    store = EnumUnitStore()
    store.merge("tract", {"27001010100": {FIELD: 1}})
    store.merge("county", {"27001": {FIELD: 1}})

    store.reset("tract")
    assert store.tract == {}
    assert store.county

    store.reset()
    assert store.county == {}


def test_aggregate_to_county_sums_by_prefix() -> None:
    tracts = {
        "27001010100": {FIELD: 10},
        "27001010200": {FIELD: 5},
        "27003010100": {FIELD: 7},
    }

    assert aggregate_to_county(tracts, FIELD) == {"27001": 15, "27003": 7}


def test_aggregate_sums_zero_valued_tracts() -> None:
    tracts = {
        "27001010100": {FIELD: 0},
        "27005010100": {FIELD: 3},
    }

    totals = aggregate_to_county(tracts, FIELD)

    assert totals["27001"] == 0
    assert totals["27005"] == 3


def test_roll_up_seeds_county_without_tracts_at_zero() -> None:
    store = EnumUnitStore()
    store.merge("county", {"27001": {"name": "Aitkin"}, "27099": {"name": "Mower"}})
    store.merge(
        "tract",
        {
            "27001010100": {FIELD: 10},
            "27099000100": {"other": 4},
        },
    )

    totals = store.roll_up(FIELD)

    assert totals == {"27001": 10, "27099": 0}
    assert store.county["27099"] == {"name": "Mower", FIELD: 0}


def test_aggregate_excludes_tracts_without_field() -> None:
    tracts = {
        "27001010100": {FIELD: 4},
        "27007010100": {"other": 9},
        "27009010100": {FIELD: None},
    }

    assert aggregate_to_county(tracts, FIELD) == {"27001": 4}


def test_roll_up_merges_into_county_store() -> None:
    store = EnumUnitStore()
    store.merge("county", {"27001": {"name": "Aitkin"}})
    store.merge(
        "tract",
        {
            "27001010100": {FIELD: 10},
            "27001010200": {FIELD: 5},
            "27003010100": {FIELD: 7},
        },
    )

    totals = store.roll_up(FIELD)

    assert totals == {"27001": 15, "27003": 7}
    assert store.county["27001"] == {"name": "Aitkin", FIELD: 15}
    assert store.county["27003"] == {FIELD: 7}
