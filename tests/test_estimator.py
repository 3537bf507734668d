from datetime import date

import pytest

from walkin.estimator import (
    LAST_HOUR_PATIENTS,
    EstimateContext,
    estimate,
    estimate_state,
    remaining_hours,
    remaining_patients_for_provider,
    result_to_dict,
    round_half_up,
)
from walkin.state import AppState, Provider, ShiftAssignments

MONDAY = date(2026, 10, 19)
THURSDAY = date(2026, 10, 22)


def _state(*providers, opening=(), mid=(), close=()):
    return AppState(
        providers=tuple(providers),
        assignments=ShiftAssignments(opening=tuple(opening), mid=tuple(mid), close=tuple(close)),
    )


def test_remaining_hours_before_start_is_full_window():
    for hour in range(0, 8):
        assert remaining_hours(hour, 59, 8, 18) == 10


def test_remaining_hours_at_or_after_end_is_zero():
    assert remaining_hours(18, 0, 8, 18) == 0
    assert remaining_hours(23, 59, 8, 18) == 0


def test_remaining_hours_inside_window():
    assert remaining_hours(8, 0, 8, 18) == 10
    assert remaining_hours(17, 30, 8, 18) == pytest.approx(0.5)
    assert remaining_hours(12, 15, 8, 18) == pytest.approx(5.75)


def test_remaining_hours_non_increasing_inside_window():
    values = [remaining_hours(h, m, 8, 18) for h in range(8, 18) for m in range(0, 60, 5)]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_partial_last_hour_ignores_rate():
    for rate in (0.0, 2.5, 40.0):
        p = Provider(id=1, name="A", patients_per_hour=rate)
        assert remaining_patients_for_provider(p, 0.01) == LAST_HOUR_PATIENTS
        assert remaining_patients_for_provider(p, 0.99) == LAST_HOUR_PATIENTS


def test_full_hours_use_rate_plus_last_hour():
    p = Provider(id=1, name="A", patients_per_hour=4)
    assert remaining_patients_for_provider(p, 1) == pytest.approx(1.8)
    assert remaining_patients_for_provider(p, 3.5) == pytest.approx(2.5 * 4 + 1.8)
    assert remaining_patients_for_provider(p, 0) == 0
    assert remaining_patients_for_provider(p, -1) == 0


def test_scenario_a_opening_at_8am():
    state = _state(Provider(id=1, name="Dr A", patients_per_hour=5), opening=[1])
    res = estimate_state(state, MONDAY, 8, 0)
    assert res.breakdown[0].remaining_hours == 10
    assert res.breakdown[0].remaining_patients == pytest.approx(46.8)
    assert res.total == 47


def test_scenario_b_half_hour_left():
    state = _state(Provider(id=1, name="Dr A", patients_per_hour=5), opening=[1])
    res = estimate_state(state, MONDAY, 17, 30)
    assert res.breakdown[0].remaining_hours == 0.5
    assert res.breakdown[0].remaining_patients == 1.8


def test_scenario_c_shift_over_leaves_no_breakdown():
    state = _state(Provider(id=1, name="Dr A", patients_per_hour=5), opening=[1])
    res = estimate_state(state, MONDAY, 18, 0, patients_in_lobby=3)
    assert res.breakdown == ()
    assert res.total == 3


def test_scenario_d_thursday_uses_uniform_windows():
    state = _state(Provider(id=1, name="Dr A", patients_per_hour=5), opening=[1], close=[1])
    res = estimate_state(state, THURSDAY, 8, 0)
    assert res.is_special_day
    # both shifts run 9-19 and have not started yet
    assert [item.remaining_hours for item in res.breakdown] == [10, 10]


def test_scenario_e_total_is_lobby_plus_all_shifts():
    state = _state(
        Provider(id=1, name="A", patients_per_hour=3),
        Provider(id=2, name="B", patients_per_hour=2.5),
        Provider(id=3, name="C", patients_per_hour=4),
        opening=[1],
        mid=[2],
        close=[3, 1],
    )
    res = estimate_state(state, MONDAY, 17, 30, patients_in_lobby=5)
    # opening 0.5h -> 1.8; mid 1.5h -> 0.5*2.5+1.8; close 2.5h -> 1.5*rate+1.8
    expected = 5 + 1.8 + (0.5 * 2.5 + 1.8) + (1.5 * 4 + 1.8) + (1.5 * 3 + 1.8)
    assert res.total == round(expected)
    assert [(i.provider_name, i.shift_name) for i in res.breakdown] == [
        ("A", "Opening"),
        ("B", "Mid"),
        ("C", "Close"),
        ("A", "Close"),
    ]


def test_stale_ids_are_ignored():
    state = _state(Provider(id=1, name="A", patients_per_hour=3), opening=[99, 1], mid=[42])
    res = estimate_state(state, MONDAY, 8, 0)
    assert len(res.breakdown) == 1
    assert res.breakdown[0].provider_name == "A"


def test_total_rounds_half_up():
    state = _state(Provider(id=1, name="A", patients_per_hour=0.7), opening=[1])
    # 1.5h left -> 0.5*0.7 + 1.8 = 2.15; lobby 0 -> 2; with rate 1.4 -> 2.5 -> 3
    assert estimate_state(state, MONDAY, 16, 30).total == 2
    state = _state(Provider(id=1, name="A", patients_per_hour=1.4), opening=[1])
    assert estimate_state(state, MONDAY, 16, 30).total == 3


def test_estimate_is_repeatable():
    state = _state(Provider(id=1, name="A", patients_per_hour=3), opening=[1], mid=[1])
    ctx = EstimateContext(
        selected_date=MONDAY,
        current_hour=13,
        current_minute=20,
        patients_in_lobby=4,
        providers=state.provider_map(),
        assignments=state.assignments,
    )
    assert estimate(ctx) == estimate(ctx)


def test_result_to_dict():
    state = _state(Provider(id=1, name="A", patients_per_hour=5), opening=[1])
    d = result_to_dict(estimate_state(state, MONDAY, 17, 30, patients_in_lobby=2))
    assert d["total"] == 4
    assert d["breakdown"] == [
        {"provider": "A", "shift": "Opening", "remaining_hours": 0.5, "remaining_patients": 1.8}
    ]


def test_negative_lobby_count_counts_as_zero():
    res = estimate_state(AppState(), MONDAY, 8, 0, patients_in_lobby=-5)
    assert res.total == 0
    assert res.patients_in_lobby == 0

    state = _state(Provider(id=1, name="A", patients_per_hour=5), opening=[1])
    assert estimate_state(state, MONDAY, 17, 30, patients_in_lobby=-5).total == 2


def test_non_numeric_lobby_count_counts_as_zero():
    ctx = EstimateContext(
        selected_date=MONDAY,
        current_hour=8,
        current_minute=0,
        patients_in_lobby="lots",
        providers={},
        assignments=ShiftAssignments(),
    )
    assert estimate(ctx).total == 0


def test_round_half_up_matches_browser_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.25, 1) == 2.3
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(46.8, 1) == 46.8
