import streamlit as st

from walkin.config import load_settings
from walkin.logging_config import configure_logging
from walkin.errors import ValidationError
from walkin.estimator import estimate
from walkin.io import MappingStore
from walkin.report import breakdown_lines, breakdown_to_frame
from walkin.shifts import SHIFTS, is_special_day
from walkin.state import assigned_providers
from walkin.validation import build_context

settings = load_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Remaining Patients", layout="wide")
st.title("Remaining Patients")

store = MappingStore(st.session_state)
state = store.load()

now = settings.now()

# -----------------------------
# Inputs
# -----------------------------
c1, c2, c3 = st.columns(3)
with c1:
    selected_date = st.date_input("Date", value=now.date())
with c2:
    current_time = st.time_input("Current time", value=now.time().replace(second=0, microsecond=0), step=60)
with c3:
    patients_in_lobby = st.number_input("Patients in lobby", min_value=0, value=0, step=1)

# date_input can hand back a tuple in range mode; only a single date is valid here.
if isinstance(selected_date, (tuple, list)):
    selected_date = selected_date[0] if selected_date else None

if selected_date is not None and is_special_day(selected_date):
    st.info("Thursday schedule: all shifts run 9am - 7pm.")

with st.expander("Who is on shift", expanded=False):
    for key, name in SHIFTS:
        names = [p.name or "(unnamed)" for p in assigned_providers(state, key)]
        st.write(f"**{name}:** {', '.join(names) if names else 'nobody assigned'}")

if not st.button("Calculate", type="primary"):
    st.stop()

try:
    context = build_context(state, selected_date, current_time, patients_in_lobby)
except ValidationError as e:
    st.error(str(e))
    st.stop()

result = estimate(context)

# -----------------------------
# Results
# -----------------------------
st.metric("Estimated remaining patients", f"{result.total}")

st.subheader("Breakdown")
for line in breakdown_lines(result):
    st.write(line)

if result.breakdown:
    df = breakdown_to_frame(result)
    st.dataframe(df, hide_index=True, use_container_width=True)
    st.download_button(
        "Download breakdown (CSV)",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name=f"remaining_patients_{context.selected_date.isoformat()}.csv",
        mime="text/csv",
    )
