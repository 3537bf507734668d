import streamlit as st

from walkin.config import load_settings
from walkin.logging_config import configure_logging
from walkin.errors import ValidationError
from walkin.io import MappingStore, read_roster_csv, roster_to_frame
from walkin.state import AppState, add_provider, dispatch

settings = load_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Providers", layout="wide")
st.title("Providers")
st.caption("Enter each provider's name and patients per hour, then Submit to lock the row.")

store = MappingStore(st.session_state)
state = store.load()

# Always keep one row to type into.
if not state.providers:
    state = add_provider(state)
    store.save(state)


def _apply(action: str, provider_id=None, value=None) -> None:
    """Run one command; on failure show the message and keep the old state."""
    global state
    try:
        state = dispatch(state, action, provider_id, value)
    except ValidationError as e:
        st.error(str(e))
        return
    store.save(state)


if st.button("Add provider", type="primary"):
    _apply("add")
    st.rerun()

st.divider()

for provider in state.providers:
    pid = provider.id
    c1, c2, c3, c4 = st.columns([4, 2, 1, 1])

    with c1:
        name = st.text_input(
            "Provider name",
            value=provider.name,
            key=f"name_{pid}",
            placeholder="Provider name",
            disabled=provider.submitted,
            label_visibility="collapsed",
        )
    with c2:
        rate = st.number_input(
            "# per hour",
            min_value=0.0,
            step=0.1,
            value=float(provider.patients_per_hour),
            key=f"rate_{pid}",
            disabled=provider.submitted,
            label_visibility="collapsed",
        )

    # Edits are saved as they are typed, like the browser version's onchange.
    if not provider.submitted:
        if name.strip() != provider.name:
            _apply("rename", pid, name)
        if float(rate) != provider.patients_per_hour:
            _apply("set_rate", pid, rate)

    with c3:
        if provider.submitted:
            if st.button("Edit", key=f"edit_{pid}"):
                _apply("unlock", pid)
                st.rerun()
        else:
            if st.button("Submit", key=f"submit_{pid}", type="primary"):
                _apply("submit", pid)
                if state.get(pid).submitted:
                    st.rerun()
    with c4:
        if st.button("Delete", key=f"delete_{pid}"):
            _apply("delete", pid)
            st.rerun()


# -----------------------------
# Roster CSV
# -----------------------------
st.divider()
with st.expander("Roster CSV (import / export)", expanded=False):
    st.download_button(
        "Download roster (CSV)",
        data=roster_to_frame(state).to_csv(index=False).encode("utf-8"),
        file_name="providers.csv",
        mime="text/csv",
    )

    st.caption("Upload a CSV with columns: name, patients_per_hour, optional submitted. Replaces the roster and clears shift assignments.")
    uploaded = st.file_uploader("Roster CSV", type=["csv"])
    if uploaded is not None and st.button("Replace roster"):
        try:
            roster = read_roster_csv(uploaded)
        except Exception as e:
            st.error(f"Roster CSV error: {e}")
        else:
            state = AppState(providers=roster)
            store.save(state)
            st.success(f"Loaded {len(roster)} providers.")
            st.rerun()
