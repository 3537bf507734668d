# src/walkin/estimator.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping, Tuple

from .shifts import SHIFTS, get_shift_windows, is_special_day
from .state import AppState, Provider, ShiftAssignments, coerce_lobby_count

logger = logging.getLogger(__name__)

# Patients seen in a provider's final (possibly partial) hour, whatever
# their normal rate. Clinic policy; keep as is.
LAST_HOUR_PATIENTS = 1.8


# -----------------------------
# Data models
# -----------------------------
@dataclass(frozen=True)
class EstimateContext:
    selected_date: date
    current_hour: int
    current_minute: int
    patients_in_lobby: int
    providers: Mapping[int, Provider]
    assignments: ShiftAssignments


@dataclass(frozen=True)
class BreakdownItem:
    provider_name: str
    shift_name: str
    remaining_hours: float  # rounded to 2 dp for display
    remaining_patients: float  # rounded to 1 dp for display


@dataclass(frozen=True)
class EstimationResult:
    total: int
    breakdown: Tuple[BreakdownItem, ...]
    patients_in_lobby: int
    is_special_day: bool


# -----------------------------
# Core arithmetic
# -----------------------------
def remaining_hours(current_hour: int, current_minute: int, window_start: float, window_end: float) -> float:
    """
    Hours of the window still ahead of the current time.
      - before the window opens: the full window counts
      - at or after the end: 0
    """
    t = current_hour + current_minute / 60
    if t < window_start:
        return window_end - window_start
    if t >= window_end:
        return 0
    return max(0, window_end - t)


def remaining_patients_for_provider(provider: Provider, remaining_hours: float) -> float:
    """
    Every hour but the last runs at the provider's rate; the last hour
    (or a lone partial hour) yields LAST_HOUR_PATIENTS.
    """
    if remaining_hours <= 0:
        return 0
    if remaining_hours < 1:
        return LAST_HOUR_PATIENTS
    return (remaining_hours - 1) * provider.patients_per_hour + LAST_HOUR_PATIENTS


def round_half_up(x: float, ndigits: int = 0) -> float:
    """Rounds halves up, like the browser's toFixed/Math.round. Inputs are never negative."""
    scale = 10 ** ndigits
    return math.floor(x * scale + 0.5) / scale


# -----------------------------
# Public API
# -----------------------------
def estimate(context: EstimateContext) -> EstimationResult:
    special = is_special_day(context.selected_date)
    windows = get_shift_windows(special)

    lobby = coerce_lobby_count(context.patients_in_lobby)
    total = float(lobby)
    breakdown = []

    for key, name in SHIFTS:
        window = windows[key]
        for provider_id in context.assignments.ids_for(key):
            provider = context.providers.get(provider_id)
            if provider is None:
                continue

            rh = remaining_hours(context.current_hour, context.current_minute, window.start, window.end)
            rp = remaining_patients_for_provider(provider, rh)
            total += rp

            if rp > 0:
                breakdown.append(
                    BreakdownItem(
                        provider_name=provider.name,
                        shift_name=name,
                        remaining_hours=round_half_up(rh, 2),
                        remaining_patients=round_half_up(rp, 1),
                    )
                )

    result = EstimationResult(
        total=int(round_half_up(total)),
        breakdown=tuple(breakdown),
        patients_in_lobby=lobby,
        is_special_day=special,
    )
    logger.debug(
        "Estimate for %s %02d:%02d: total=%s items=%s",
        context.selected_date,
        context.current_hour,
        context.current_minute,
        result.total,
        len(result.breakdown),
    )
    return result


def estimate_state(
    state: AppState,
    selected_date: date,
    current_hour: int,
    current_minute: int,
    patients_in_lobby: int = 0,
) -> EstimationResult:
    return estimate(
        EstimateContext(
            selected_date=selected_date,
            current_hour=current_hour,
            current_minute=current_minute,
            patients_in_lobby=patients_in_lobby,
            providers=state.provider_map(),
            assignments=state.assignments,
        )
    )


def result_to_dict(result: EstimationResult) -> Dict[str, Any]:
    return {
        "total": result.total,
        "patients_in_lobby": result.patients_in_lobby,
        "is_special_day": result.is_special_day,
        "breakdown": [
            {
                "provider": item.provider_name,
                "shift": item.shift_name,
                "remaining_hours": item.remaining_hours,
                "remaining_patients": item.remaining_patients,
            }
            for item in result.breakdown
        ],
    }


__all__ = [
    "LAST_HOUR_PATIENTS",
    "EstimateContext",
    "BreakdownItem",
    "EstimationResult",
    "remaining_hours",
    "remaining_patients_for_provider",
    "estimate",
    "estimate_state",
    "round_half_up",
    "result_to_dict",
]
