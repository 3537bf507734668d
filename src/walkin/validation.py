from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Tuple

import pandas as pd

from .errors import ValidationError
from .estimator import EstimateContext
from .state import AppState, coerce_lobby_count

MISSING_DATE_TIME_MESSAGE = "Please select a date and current time."


def parse_selected_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or not str(value).strip():
        raise ValidationError(MISSING_DATE_TIME_MESSAGE)

    parsed = pd.to_datetime(str(value).strip(), format="%Y-%m-%d", errors="coerce")
    if pd.isna(parsed):
        raise ValidationError(f"Invalid date '{value}'. Expected YYYY-MM-DD.")
    return parsed.date()


def parse_current_time(value: Any) -> Tuple[int, int]:
    """Returns (hour, minute) from a time/datetime or an 'HH:MM' string."""
    if isinstance(value, (datetime, time)):
        return value.hour, value.minute
    if value is None or not str(value).strip():
        raise ValidationError(MISSING_DATE_TIME_MESSAGE)

    parts = str(value).strip().split(":")
    # browsers may send HH:MM:SS; seconds are ignored
    if len(parts) not in (2, 3):
        raise ValidationError(f"Invalid time '{value}'. Expected HH:MM.")
    try:
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValidationError(f"Invalid time '{value}'. Expected HH:MM.") from None

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValidationError(f"Invalid time '{value}'. Expected HH:MM.")
    return hour, minute


def build_context(state: AppState, selected_date: Any, current_time: Any, patients_in_lobby: Any) -> EstimateContext:
    day = parse_selected_date(selected_date)
    hour, minute = parse_current_time(current_time)
    return EstimateContext(
        selected_date=day,
        current_hour=hour,
        current_minute=minute,
        patients_in_lobby=coerce_lobby_count(patients_in_lobby),
        providers=state.provider_map(),
        assignments=state.assignments,
    )
