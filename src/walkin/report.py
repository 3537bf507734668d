from __future__ import annotations

from typing import List

import pandas as pd

from .estimator import EstimationResult

NO_PROVIDERS_MESSAGE = "No providers assigned or all shifts completed."

BREAKDOWN_COLUMNS = ["provider", "shift", "remaining_hours", "remaining_patients"]


def breakdown_lines(result: EstimationResult) -> List[str]:
    if not result.breakdown:
        return [NO_PROVIDERS_MESSAGE]

    lines = [f"Lobby: {result.patients_in_lobby} patients"]
    for item in result.breakdown:
        lines.append(
            f"{item.provider_name} ({item.shift_name}): "
            f"{item.remaining_patients:.1f} patients ({item.remaining_hours:.2f} hrs remaining)"
        )
    return lines


def breakdown_to_frame(result: EstimationResult) -> pd.DataFrame:
    """One row per provider/shift with patients still to see."""
    return pd.DataFrame(
        [
            {
                "provider": item.provider_name,
                "shift": item.shift_name,
                "remaining_hours": item.remaining_hours,
                "remaining_patients": item.remaining_patients,
            }
            for item in result.breakdown
        ],
        columns=BREAKDOWN_COLUMNS,
    )


__all__ = ["NO_PROVIDERS_MESSAGE", "breakdown_lines", "breakdown_to_frame"]
