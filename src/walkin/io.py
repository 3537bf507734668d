from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, MutableMapping, Optional, Protocol, Tuple

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype

from .shifts import SHIFT_KEYS
from .state import AppState, Provider, ShiftAssignments, parse_rate

logger = logging.getLogger(__name__)

# Slot names match the browser version's localStorage keys.
PROVIDERS_SLOT = "chcProviders"
ASSIGNMENTS_SLOT = "chcShiftAssignments"

ROSTER_REQUIRED_COLUMNS = ["name", "patients_per_hour"]


# -----------------------------
# Records <-> state
# -----------------------------
def _as_id(raw: Any) -> Optional[int]:
    """Integer id from a stored value, or None when it cannot be one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def provider_from_record(record: Any) -> Optional[Provider]:
    """Provider from a stored record; None when the record has no usable id."""
    if not isinstance(record, dict):
        return None
    pid = _as_id(record.get("id"))
    if pid is None:
        return None

    # Older saves have no lock flag; treat them as editable.
    submitted = record.get("submitted")
    if submitted is None:
        submitted = False
    return Provider(
        id=pid,
        name=str(record.get("name") or ""),
        patients_per_hour=parse_rate(record.get("patientsPerHour", 0)),
        submitted=bool(submitted),
    )


def provider_to_record(provider: Provider) -> Dict[str, Any]:
    return {
        "id": provider.id,
        "name": provider.name,
        "patientsPerHour": provider.patients_per_hour,
        "submitted": provider.submitted,
    }


def state_from_records(provider_records: Any, assignment_records: Any) -> AppState:
    """
    Rebuilds AppState from stored records. Never raises on bad data:
      - missing lock flags default to False, missing shifts to empty
      - records that are not objects or lack an integer id are skipped
      - a slot of the wrong shape loads as empty
      - assignment ids that are malformed or match no provider are dropped
    """
    if provider_records is not None and not isinstance(provider_records, list):
        logger.warning("Ignoring providers slot of type %s", type(provider_records).__name__)
        provider_records = None
    if assignment_records is not None and not isinstance(assignment_records, dict):
        logger.warning("Ignoring assignments slot of type %s", type(assignment_records).__name__)
        assignment_records = None

    providers: List[Provider] = []
    known = set()
    for record in provider_records or []:
        provider = provider_from_record(record)
        if provider is None:
            logger.warning("Skipping unreadable provider record: %r", record)
            continue
        if provider.id in known:
            logger.warning("Skipping duplicate provider id=%s", provider.id)
            continue
        known.add(provider.id)
        providers.append(provider)

    shifts: Dict[str, Tuple[int, ...]] = {}
    for key in SHIFT_KEYS:
        raw_ids = (assignment_records or {}).get(key) or []
        if not isinstance(raw_ids, list):
            logger.warning("Ignoring %s assignments of type %s", key, type(raw_ids).__name__)
            raw_ids = []

        ids: List[int] = []
        for raw in raw_ids:
            pid = _as_id(raw)
            if pid is None:
                logger.warning("Dropping malformed %s assignment %r", key, raw)
                continue
            if pid not in known:
                logger.warning("Dropping stale %s assignment for provider id=%s", key, pid)
                continue
            if pid not in ids:
                ids.append(pid)
        shifts[key] = tuple(ids)

    return AppState(providers=tuple(providers), assignments=ShiftAssignments(**shifts))


def state_to_records(state: AppState) -> Tuple[List[Dict[str, Any]], Dict[str, List[int]]]:
    return [provider_to_record(p) for p in state.providers], state.assignments.as_dict()


# -----------------------------
# Stores
# -----------------------------
class StateStore(Protocol):
    def load(self) -> AppState: ...

    def save(self, state: AppState) -> None: ...


class MappingStore:
    """
    StateStore over a string key/value mapping, one JSON document per slot.
    Works with a plain dict or Streamlit's st.session_state.
    """

    def __init__(self, slots: MutableMapping[str, Any]) -> None:
        self._slots = slots

    def _read(self, slot: str) -> Any:
        raw = self._slots.get(slot)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable data in slot %s", slot)
            return None

    def load(self) -> AppState:
        return state_from_records(self._read(PROVIDERS_SLOT), self._read(ASSIGNMENTS_SLOT))

    def save(self, state: AppState) -> None:
        providers, assignments = state_to_records(state)
        self._slots[PROVIDERS_SLOT] = json.dumps(providers)
        self._slots[ASSIGNMENTS_SLOT] = json.dumps(assignments)


# -----------------------------
# Roster CSV
# -----------------------------
def read_roster_csv(file) -> Tuple[Provider, ...]:
    """
    Reads a provider roster CSV.
    Expected columns:
      name (str)
      patients_per_hour (float)
      submitted (optional, 0/1 or true/false)

    Ids are assigned 1..n in file order.
    """
    df = pd.read_csv(file)
    missing = [c for c in ROSTER_REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Required: {ROSTER_REQUIRED_COLUMNS}")

    df = df.copy()
    df["name"] = df["name"].fillna("").astype(str).str.strip()
    df["patients_per_hour"] = pd.to_numeric(df["patients_per_hour"], errors="coerce").fillna(0.0)

    if "submitted" not in df.columns:
        df["submitted"] = False
    elif is_bool_dtype(df["submitted"]) or is_numeric_dtype(df["submitted"]):
        df["submitted"] = df["submitted"].fillna(0).astype(bool)
    else:
        # object on pandas 2, str on pandas 3
        df["submitted"] = df["submitted"].astype(str).str.strip().str.lower().isin(["1", "true", "t", "yes", "y"])

    return tuple(
        Provider(
            id=i,
            name=row.name,
            patients_per_hour=parse_rate(row.patients_per_hour),
            submitted=bool(row.submitted),
        )
        for i, row in enumerate(df.itertuples(index=False), start=1)
    )


def roster_to_frame(state: AppState) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"name": p.name, "patients_per_hour": p.patients_per_hour, "submitted": p.submitted}
            for p in state.providers
        ],
        columns=["name", "patients_per_hour", "submitted"],
    )


__all__ = [
    "PROVIDERS_SLOT",
    "ASSIGNMENTS_SLOT",
    "provider_from_record",
    "provider_to_record",
    "state_from_records",
    "state_to_records",
    "StateStore",
    "MappingStore",
    "read_roster_csv",
    "roster_to_frame",
]
