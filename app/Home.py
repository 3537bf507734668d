import pandas as pd
import streamlit as st

from walkin.config import load_settings
from walkin.logging_config import configure_logging
from walkin.shifts import SHIFTS, format_hour, get_shift_windows

settings = load_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Walk-in Clinic Remaining Patients", layout="wide")

st.title("Walk-in Clinic Remaining Patients")
st.write(
    """
Estimates how many patients the clinic can still see today.

Included:
- Providers (name + patients per hour, submit to lock)
- Shift assignments (Opening / Mid / Close)
- Remaining patients calculator (date, current time, lobby count)
"""
)

st.subheader("Shift schedule")
rows = []
for special in (False, True):
    windows = get_shift_windows(special)
    for key, name in SHIFTS:
        w = windows[key]
        rows.append(
            {
                "day": "Thursday" if special else "Other days",
                "shift": name,
                "hours": f"{format_hour(w.start)} - {format_hour(w.end)}",
            }
        )
st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)

st.info("Use the left sidebar to add providers, assign shifts, then calculate.")
