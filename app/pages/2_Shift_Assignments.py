import streamlit as st

from walkin.config import load_settings
from walkin.logging_config import configure_logging
from walkin.errors import ValidationError
from walkin.io import MappingStore
from walkin.shifts import SHIFTS, format_hour, get_shift_windows
from walkin.state import toggle_shift_assignment

settings = load_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Shift Assignments", layout="wide")
st.title("Shift Assignments")
st.caption("Tick every provider working each shift. A provider can work more than one shift.")

store = MappingStore(st.session_state)
state = store.load()

normal = get_shift_windows(False)
thursday = get_shift_windows(True)

columns = st.columns(len(SHIFTS))
for col, (key, name) in zip(columns, SHIFTS):
    with col:
        st.subheader(name)
        st.caption(
            f"{format_hour(normal[key].start)} - {format_hour(normal[key].end)} "
            f"(Thursday {format_hour(thursday[key].start)} - {format_hour(thursday[key].end)})"
        )

        if not state.providers:
            st.write("Add providers first")
            continue

        assigned = state.assignments.ids_for(key)
        for provider in state.providers:
            checked = st.checkbox(
                provider.name or "(unnamed)",
                value=provider.id in assigned,
                key=f"{key}_{provider.id}",
            )
            if checked != (provider.id in assigned):
                try:
                    state = toggle_shift_assignment(state, key, provider.id)
                except ValidationError as e:
                    st.error(str(e))
                else:
                    store.save(state)
