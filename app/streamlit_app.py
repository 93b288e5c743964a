import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import io
import time

import streamlit as st

from lecturegrid.config import RunConfig
from lecturegrid.errors import ConfigurationError, ValidationError
from lecturegrid.io_utils import load_courses, load_unavailability, write_schedule_csv
from lecturegrid.render import timetable_frame, unassigned_frame
from lecturegrid.scheduling.engine import schedule_courses
from lecturegrid.scheduling.evaluation import summary

# ---------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------
st.set_page_config(page_title="LectureGrid – Scheduler", layout="wide")
st.title("LectureGrid – Lecture Timetable Scheduler")

with st.expander("Input format"):
    st.markdown(
        "- **Courses CSV**: `course,teacher,section,lectures,slots`; `section` and `slots` are "
        "comma separated, slots look like `2.3` (day 2, period 3). `lectures` defaults to 1.\n"
        "- **Unavailability CSV** (optional): `teacher,slots`.\n"
        "- Courses sharing a teacher or a section never share a slot."
    )

# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def _bytes_of(upload):
    if upload is None:
        return None
    return upload.getvalue()


def schedule_csv_text(result) -> str:
    buf = io.StringIO()
    write_schedule_csv(buf, result)
    return buf.getvalue()

# ---------------------------------------------------------------------
# Form Inputs
# ---------------------------------------------------------------------
with st.form("controls"):
    c1, c2 = st.columns(2)
    courses_file = c1.file_uploader("Courses CSV (course,teacher,section,lectures,slots)", type=["csv"])
    unavail_file = c2.file_uploader("(Optional) Unavailability CSV (teacher,slots)", type=["csv"])

    c3, c4, c5 = st.columns(3)
    days = c3.number_input("Days", 1, 7, 5, step=1)
    rooms = c4.number_input("Rooms (0 = unlimited)", 0, 1000, 0, step=1)
    periods_per_day = c5.number_input("Periods per day (0 = derive from slot budget)", 0, 1000, 0, step=1)

    submitted = st.form_submit_button("Run Scheduler")

# ---------------------------------------------------------------------
# Run on Submit
# ---------------------------------------------------------------------
if submitted:
    if courses_file is None:
        st.error("Please upload a courses CSV.")
        st.stop()

    cfg = RunConfig(
        days=int(days),
        rooms=int(rooms) or None,
        periods_per_day=int(periods_per_day) or None,
    )
    t0 = time.perf_counter()
    try:
        cfg.validate()
        courses = load_courses(io.BytesIO(_bytes_of(courses_file)))
        unavail_bytes = _bytes_of(unavail_file)
        unavail = load_unavailability(io.BytesIO(unavail_bytes)) if unavail_bytes is not None else None
        result = schedule_courses(courses, cfg, unavail)
    except (ConfigurationError, ValidationError) as e:
        st.error(f"Error processing files: {e}")
        st.stop()
    t1 = time.perf_counter()

    # -----------------------------------------------------------------
    # UI Output
    # -----------------------------------------------------------------
    if result.error:
        st.error(result.error)

    if result.grid is not None:
        st.subheader("Timetable")
        st.dataframe(timetable_frame(result, cfg.days), use_container_width=True)

    if result.unassigned:
        st.subheader("Unassigned Courses")
        st.dataframe(unassigned_frame(result), use_container_width=True)

    st.subheader("Summary")
    st.text(summary(result.graph, courses, cfg, result, unavail))
    st.caption(f"Scheduling time: {t1 - t0:.3f}s")

    if result.grid is not None:
        st.download_button("Download schedule.csv", schedule_csv_text(result),
                           file_name="schedule.csv", mime="text/csv")
    if not result.error:
        st.success("Scheduling complete.")
