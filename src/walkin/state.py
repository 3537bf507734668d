# src/walkin/state.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .errors import ProviderLockedError, UnknownProviderError, ValidationError
from .shifts import SHIFT_KEYS, ShiftKey

logger = logging.getLogger(__name__)


# -----------------------------
# Data models
# -----------------------------
@dataclass(frozen=True)
class Provider:
    id: int
    name: str = ""
    patients_per_hour: float = 0.0
    # Lock flag: submitted providers keep their name/rate until unlocked.
    submitted: bool = False


@dataclass(frozen=True)
class ShiftAssignments:
    """
    Provider ids per shift. Each tuple keeps assignment order and holds
    every id at most once.
    """
    opening: Tuple[int, ...] = ()
    mid: Tuple[int, ...] = ()
    close: Tuple[int, ...] = ()

    def ids_for(self, key: ShiftKey) -> Tuple[int, ...]:
        _check_shift_key(key)
        return getattr(self, key)

    def toggled(self, key: ShiftKey, provider_id: int) -> ShiftAssignments:
        ids = self.ids_for(key)
        if provider_id in ids:
            new_ids = tuple(pid for pid in ids if pid != provider_id)
        else:
            new_ids = ids + (provider_id,)
        return replace(self, **{key: new_ids})

    def without(self, provider_id: int) -> ShiftAssignments:
        return ShiftAssignments(
            **{key: tuple(pid for pid in self.ids_for(key) if pid != provider_id) for key in SHIFT_KEYS}
        )

    def as_dict(self) -> Dict[str, List[int]]:
        return {key: list(self.ids_for(key)) for key in SHIFT_KEYS}


@dataclass(frozen=True)
class AppState:
    providers: Tuple[Provider, ...] = ()
    assignments: ShiftAssignments = field(default_factory=ShiftAssignments)

    def provider_map(self) -> Dict[int, Provider]:
        return {p.id: p for p in self.providers}

    def get(self, provider_id: int) -> Provider:
        for p in self.providers:
            if p.id == provider_id:
                return p
        raise UnknownProviderError(provider_id)


# -----------------------------
# Internal helpers
# -----------------------------
def _check_shift_key(key: str) -> None:
    if key not in SHIFT_KEYS:
        raise ValidationError(f"Unsupported shift: {key}")


def _replace_provider(state: AppState, updated: Provider) -> AppState:
    providers = tuple(updated if p.id == updated.id else p for p in state.providers)
    return replace(state, providers=providers)


def _editable(state: AppState, provider_id: int) -> Provider:
    provider = state.get(provider_id)
    if provider.submitted:
        raise ProviderLockedError(f"{provider.name or 'Provider'} is submitted. Click Edit to change it.")
    return provider


def parse_rate(value: Any) -> float:
    """Loose number parsing for the rate field; anything unusable is 0."""
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(rate) or rate < 0:
        return 0.0
    return rate


def coerce_lobby_count(value: Any) -> int:
    """Integer part of the input; anything missing, non-numeric or negative is 0."""
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(n) or n < 0:
        return 0
    return int(n)


def next_provider_id(providers: Iterable[Provider]) -> int:
    return max((p.id for p in providers), default=0) + 1


# -----------------------------
# Commands: (state, id, value) -> new state
# -----------------------------
def add_provider(state: AppState, name: str = "", patients_per_hour: float = 0.0) -> AppState:
    """New providers start editable and go to the top of the list."""
    provider = Provider(
        id=next_provider_id(state.providers),
        name=name.strip(),
        patients_per_hour=parse_rate(patients_per_hour),
    )
    logger.debug("Added provider id=%s", provider.id)
    return replace(state, providers=(provider,) + state.providers)


def delete_provider(state: AppState, provider_id: int) -> AppState:
    state.get(provider_id)
    logger.debug("Deleted provider id=%s", provider_id)
    return AppState(
        providers=tuple(p for p in state.providers if p.id != provider_id),
        assignments=state.assignments.without(provider_id),
    )


def update_provider_name(state: AppState, provider_id: int, value: Optional[str]) -> AppState:
    provider = _editable(state, provider_id)
    name = "" if value is None else str(value).strip()
    return _replace_provider(state, replace(provider, name=name))


def update_provider_rate(state: AppState, provider_id: int, value: Any) -> AppState:
    provider = _editable(state, provider_id)
    return _replace_provider(state, replace(provider, patients_per_hour=parse_rate(value)))


def submit_provider(state: AppState, provider_id: int) -> AppState:
    provider = state.get(provider_id)
    if not provider.name.strip() or provider.patients_per_hour <= 0:
        logger.info("Rejected submit for provider id=%s", provider_id)
        raise ValidationError("Please enter a valid provider name and patients per hour before submitting.")
    logger.debug("Submitted provider id=%s", provider_id)
    return _replace_provider(state, replace(provider, submitted=True))


def unlock_provider(state: AppState, provider_id: int) -> AppState:
    provider = state.get(provider_id)
    logger.debug("Unlocked provider id=%s", provider_id)
    return _replace_provider(state, replace(provider, submitted=False))


def toggle_shift_assignment(state: AppState, shift_key: ShiftKey, provider_id: int) -> AppState:
    _check_shift_key(shift_key)
    state.get(provider_id)
    return replace(state, assignments=state.assignments.toggled(shift_key, provider_id))


def assigned_providers(state: AppState, shift_key: ShiftKey) -> List[Provider]:
    """Assigned providers in assignment order; stale ids are skipped."""
    by_id = state.provider_map()
    return [by_id[pid] for pid in state.assignments.ids_for(shift_key) if pid in by_id]


# -----------------------------
# Dispatch
# -----------------------------
Command = Callable[[AppState, Optional[int], Any], AppState]

COMMANDS: Dict[str, Command] = {
    "add": lambda s, _id, value: add_provider(s, **(value or {})),
    "delete": lambda s, pid, _v: delete_provider(s, pid),
    "rename": update_provider_name,
    "set_rate": update_provider_rate,
    "submit": lambda s, pid, _v: submit_provider(s, pid),
    "unlock": lambda s, pid, _v: unlock_provider(s, pid),
    "toggle_opening": lambda s, pid, _v: toggle_shift_assignment(s, "opening", pid),
    "toggle_mid": lambda s, pid, _v: toggle_shift_assignment(s, "mid", pid),
    "toggle_close": lambda s, pid, _v: toggle_shift_assignment(s, "close", pid),
}


def dispatch(state: AppState, action: str, provider_id: Optional[int] = None, value: Any = None) -> AppState:
    """
    Apply one user action. Returns the new state or raises ValidationError;
    the given state is never modified.
    """
    try:
        command = COMMANDS[action]
    except KeyError:
        raise ValidationError(f"Unsupported action: {action}") from None
    if action != "add" and provider_id is None:
        raise ValidationError(f"Action '{action}' needs a provider id")
    return command(state, provider_id, value)


__all__ = [
    "Provider",
    "ShiftAssignments",
    "AppState",
    "parse_rate",
    "coerce_lobby_count",
    "next_provider_id",
    "add_provider",
    "delete_provider",
    "update_provider_name",
    "update_provider_rate",
    "submit_provider",
    "unlock_provider",
    "toggle_shift_assignment",
    "assigned_providers",
    "COMMANDS",
    "dispatch",
]
