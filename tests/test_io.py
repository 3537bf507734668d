import io
import json

import pytest

from walkin.io import (
    ASSIGNMENTS_SLOT,
    PROVIDERS_SLOT,
    MappingStore,
    read_roster_csv,
    roster_to_frame,
    state_from_records,
)
from walkin.state import AppState, Provider, ShiftAssignments


def test_missing_lock_flag_defaults_to_editable():
    state = state_from_records(
        [{"id": 1700000000000, "name": "Dr A", "patientsPerHour": 4}],
        {"opening": [1700000000000]},
    )
    p = state.get(1700000000000)
    assert not p.submitted
    assert p.patients_per_hour == 4
    assert state.assignments.opening == (1700000000000,)
    assert state.assignments.mid == ()
    assert state.assignments.close == ()


def test_load_drops_stale_and_duplicate_assignments():
    state = state_from_records(
        [{"id": 1, "name": "A", "patientsPerHour": 2, "submitted": True}],
        {"opening": [1, 1, 7], "mid": [7], "close": []},
    )
    assert state.assignments.opening == (1,)
    assert state.assignments.mid == ()


def test_mapping_store_round_trip_uses_browser_slots():
    slots = {}
    store = MappingStore(slots)
    state = AppState(
        providers=(Provider(id=1, name="A", patients_per_hour=2.5, submitted=True),),
        assignments=ShiftAssignments(close=(1,)),
    )
    store.save(state)

    assert json.loads(slots[PROVIDERS_SLOT]) == [
        {"id": 1, "name": "A", "patientsPerHour": 2.5, "submitted": True}
    ]
    assert json.loads(slots[ASSIGNMENTS_SLOT]) == {"opening": [], "mid": [], "close": [1]}
    assert store.load() == state


def test_empty_or_corrupt_slots_load_as_empty_state():
    assert MappingStore({}).load() == AppState()
    assert MappingStore({PROVIDERS_SLOT: "{not json", ASSIGNMENTS_SLOT: "null"}).load() == AppState()


def test_read_roster_csv():
    csv = io.StringIO("name,patients_per_hour,submitted\n Dr A ,4,true\nDr B,abc,0\n")
    roster = read_roster_csv(csv)
    assert [(p.id, p.name, p.patients_per_hour, p.submitted) for p in roster] == [
        (1, "Dr A", 4.0, True),
        (2, "Dr B", 0.0, False),
    ]


def test_read_roster_csv_requires_columns():
    with pytest.raises(ValueError, match="patients_per_hour"):
        read_roster_csv(io.StringIO("name\nDr A\n"))


def test_roster_to_frame():
    df = roster_to_frame(AppState(providers=(Provider(id=1, name="A", patients_per_hour=3),)))
    assert list(df.columns) == ["name", "patients_per_hour", "submitted"]
    assert df.loc[0, "name"] == "A"
    assert roster_to_frame(AppState()).empty


@pytest.mark.parametrize(
    "providers_raw, assignments_raw",
    [
        ('{"a": 1}', "null"),
        ('"oops"', '[1, 2]'),
        ("42", '{"opening": "1"}'),
    ],
)
def test_wrong_shaped_slots_load_as_empty_state(providers_raw, assignments_raw):
    store = MappingStore({PROVIDERS_SLOT: providers_raw, ASSIGNMENTS_SLOT: assignments_raw})
    assert store.load() == AppState()


def test_unreadable_records_and_ids_are_skipped():
    state = state_from_records(
        [
            {"name": "no id", "patientsPerHour": 3},
            "not a record",
            {"id": "abc", "name": "bad id"},
            {"id": "2", "name": "B", "patientsPerHour": 2},
            {"id": 2, "name": "B again"},
            {"id": 3.0, "name": "C"},
        ],
        {"opening": ["x", None, 2, "3"], "mid": [{"id": 2}], "close": [2.5, True]},
    )
    assert [(p.id, p.name) for p in state.providers] == [(2, "B"), (3, "C")]
    assert state.assignments.opening == (2, 3)
    assert state.assignments.mid == ()
    assert state.assignments.close == ()


def test_read_roster_csv_boolean_and_numeric_flags():
    roster = read_roster_csv(io.StringIO("name,patients_per_hour,submitted\nA,2,true\nB,3,false\n"))
    assert [p.submitted for p in roster] == [True, False]

    roster = read_roster_csv(io.StringIO("name,patients_per_hour,submitted\nA,2,1\nB,3,\n"))
    assert [p.submitted for p in roster] == [True, False]

    roster = read_roster_csv(io.StringIO("name,patients_per_hour,submitted\nA,2,Yes\nB,3,no\n"))
    assert [p.submitted for p in roster] == [True, False]
