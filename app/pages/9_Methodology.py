import streamlit as st

from walkin.estimator import LAST_HOUR_PATIENTS

st.set_page_config(page_title="Methodology", layout="wide")
st.title("Methodology")

st.markdown(
    rf"""
### Remaining hours

For a shift window \([start, end)\) and current time \(t\) (decimal hours):

- \(t < start\): the whole shift is ahead, \(end - start\)
- \(t \ge end\): \(0\)
- otherwise: \(end - t\)

### Shift windows

| Shift | Other days | Thursday |
|---|---|---|
| Opening | 8am - 6pm | 9am - 7pm |
| Mid | 9am - 7pm | 9am - 7pm |
| Close | 10am - 8pm | 9am - 7pm |

### Patients per provider

The last hour of a shift always yields **{LAST_HOUR_PATIENTS}** patients, whatever the provider's rate.

- remaining hours \(\le 0\): \(0\)
- remaining hours \(< 1\): \({LAST_HOUR_PATIENTS}\)
- otherwise:
  \[
  (\text{{remaining}} - 1)\cdot \text{{patients per hour}} + {LAST_HOUR_PATIENTS}
  \]

### Total

\[
\text{{total}} = \text{{lobby}} + \sum_{{\text{{shift}},\ \text{{provider}}}} \text{{remaining patients}}
\]

rounded to the nearest whole patient.
"""
)
