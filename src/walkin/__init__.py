# src/walkin/__init__.py
from __future__ import annotations

# -----------------------------
# Shift model
# -----------------------------
from .shifts import (
    ShiftKey,
    SHIFTS,
    SHIFT_KEYS,
    ShiftWindow,
    is_special_day,
    get_shift_windows,
)

# -----------------------------
# State + commands
# -----------------------------
from .errors import WalkinError, ValidationError, ProviderLockedError, UnknownProviderError
from .state import (
    Provider,
    ShiftAssignments,
    AppState,
    dispatch,
)

# -----------------------------
# Estimation
# -----------------------------
from .estimator import (
    LAST_HOUR_PATIENTS,
    EstimateContext,
    BreakdownItem,
    EstimationResult,
    remaining_hours,
    remaining_patients_for_provider,
    estimate,
    estimate_state,
    result_to_dict,
)

__all__ = [
    # Shifts
    "ShiftKey",
    "SHIFTS",
    "SHIFT_KEYS",
    "ShiftWindow",
    "is_special_day",
    "get_shift_windows",
    # Errors
    "WalkinError",
    "ValidationError",
    "ProviderLockedError",
    "UnknownProviderError",
    # State
    "Provider",
    "ShiftAssignments",
    "AppState",
    "dispatch",
    # Estimation
    "LAST_HOUR_PATIENTS",
    "EstimateContext",
    "BreakdownItem",
    "EstimationResult",
    "remaining_hours",
    "remaining_patients_for_provider",
    "estimate",
    "estimate_state",
    "result_to_dict",
]
