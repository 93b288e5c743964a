from typing import Dict, List
import pandas as pd

from .models import Course, ScheduleResult, TimeSlot

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def slot_mapping(result: ScheduleResult) -> Dict[str, List[Course]]:
    """``{"day.period": [courses in placement order]}`` for every slot of the grid."""
    if result.grid is None:
        return {}
    return {slot.key: list(occupants) for slot, occupants in result.grid.items()}


def cell_label(course: Course) -> str:
    return f"{course.section_label()} - {course.name} ({course.teacher})"


def timetable_frame(result: ScheduleResult, days: int) -> pd.DataFrame:
    """Period rows by weekday columns, trimmed to the periods actually used."""
    columns = DAY_NAMES[:days]
    rows = []
    for period in range(1, result.periods + 1):
        row = {}
        for day in range(1, days + 1):
            occupants = result.grid.occupants_of(TimeSlot(day, period))
            row[columns[day - 1]] = "\n".join(cell_label(c) for c in occupants)
        rows.append(row)
    return pd.DataFrame(rows, columns=columns, index=pd.RangeIndex(1, result.periods + 1, name="Period"))


def unassigned_frame(result: ScheduleResult) -> pd.DataFrame:
    placed = result.grid.sessions_by_course() if result.grid is not None else {}
    return pd.DataFrame(
        [
            {
                "course": c.name,
                "teacher": c.teacher,
                "sections": c.section_label(),
                "required": c.required_sessions,
                "placed": placed.get(c.id, 0),
            }
            for c in result.unassigned
        ],
        columns=["course", "teacher", "sections", "required", "placed"],
    )
