# src/walkin/shifts.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Literal, Tuple, TypeAlias

ShiftKey: TypeAlias = Literal["opening", "mid", "close"]

# Display order matters: estimates and breakdowns follow it.
SHIFTS: List[Tuple[ShiftKey, str]] = [
    ("opening", "Opening"),
    ("mid", "Mid"),
    ("close", "Close"),
]
SHIFT_KEYS: Tuple[ShiftKey, ...] = tuple(key for key, _ in SHIFTS)

THURSDAY = 3  # date.weekday(): Monday == 0


@dataclass(frozen=True)
class ShiftWindow:
    """Start/end as decimal hour of day; end is exclusive."""
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


# -----------------------------
# Schedules
# -----------------------------
_SPECIAL_DAY_WINDOWS: Dict[ShiftKey, ShiftWindow] = {
    "opening": ShiftWindow(9, 19),
    "mid": ShiftWindow(9, 19),
    "close": ShiftWindow(9, 19),
}

_NORMAL_DAY_WINDOWS: Dict[ShiftKey, ShiftWindow] = {
    "opening": ShiftWindow(8, 18),
    "mid": ShiftWindow(9, 19),
    "close": ShiftWindow(10, 20),
}


def is_special_day(day: date) -> bool:
    """Thursdays run the uniform long-hours schedule."""
    return day.weekday() == THURSDAY


def get_shift_windows(special_day: bool) -> Dict[ShiftKey, ShiftWindow]:
    windows = _SPECIAL_DAY_WINDOWS if special_day else _NORMAL_DAY_WINDOWS
    return dict(windows)


def format_hour(hour: float) -> str:
    """8 -> '8am', 19 -> '7pm'. Whole hours only (all schedule boundaries are)."""
    h = int(hour)
    if h == 0 or h == 24:
        return "12am"
    if h == 12:
        return "12pm"
    return f"{h}am" if h < 12 else f"{h - 12}pm"


__all__ = [
    "ShiftKey",
    "SHIFTS",
    "SHIFT_KEYS",
    "ShiftWindow",
    "is_special_day",
    "get_shift_windows",
    "format_hour",
]
