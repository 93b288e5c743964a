import csv
import io
import os
import re
from typing import Dict, IO, Iterator, List, Optional, Set, Union

from .errors import ValidationError
from .models import Course, ScheduleResult, TimeSlot, Unavailability, parse_slot_list

TextOrPath = Union[str, os.PathLike, IO]

REQUIRED_COURSE_FIELDS = ("course", "teacher", "section")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a bytes buffer (uploads).
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', newline='', encoding='utf-8-sig')
        return f, True
    if isinstance(src, io.BytesIO):
        try:
            src.seek(0)
        except (OSError, ValueError):
            pass
        f = io.TextIOWrapper(src, encoding='utf-8-sig', newline='')
        return f, True
    if hasattr(src, 'read'):
        try:
            src.seek(0)
        except (OSError, ValueError, AttributeError):
            pass
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def _rows(src: TextOrPath) -> Iterator[Dict[str, str]]:
    """Yield non-blank CSV rows with trimmed, lower-cased header names."""
    f, should_close = _open_text(src)
    try:
        r = csv.DictReader(f)
        for row in r:
            clean = {}
            for k, v in row.items():
                if k is None:
                    continue
                clean[k.strip().lower()] = (v or '').strip()
            if any(clean.values()):
                yield clean
    finally:
        if should_close:
            f.close()


def parse_lectures(value: Optional[str], row_no: int = 0) -> int:
    """Leading-integer parse; blank, non-numeric or zero mean a single session."""
    m = _LEADING_INT.match(value or '')
    if not m:
        return 1
    n = int(m.group(1))
    if n < 0:
        raise ValidationError(f"Row {row_no}: lectures must not be negative (got {value!r})")
    return n or 1


def course_from_row(row: Dict[str, str], course_id: int, row_no: int = 0) -> Course:
    if not all(row.get(k) for k in REQUIRED_COURSE_FIELDS):
        raise ValidationError(
            f"Row {row_no}: missing required fields in course data. "
            "Required fields: course, teacher, section, lectures"
        )
    sections = [s.strip() for s in row['section'].split(',') if s.strip()]
    if not sections:
        raise ValidationError(f"Row {row_no}: section list is empty")
    try:
        prefs = parse_slot_list(row.get('slots'))
    except ValidationError as e:
        raise ValidationError(f"Row {row_no}: {e}") from None
    return Course(
        id=course_id,
        name=row['course'],
        teacher=row['teacher'],
        sections=frozenset(sections),
        required_sessions=parse_lectures(row.get('lectures'), row_no),
        priority_tier=1 if prefs else 2,
        preferred_slots=prefs,
    )


def load_courses(src: TextOrPath) -> List[Course]:
    """Read course rows (course, teacher, section[, lectures][, slots])."""
    courses: List[Course] = []
    for row_no, row in enumerate(_rows(src), start=1):
        courses.append(course_from_row(row, course_id=len(courses), row_no=row_no))
    return courses


def load_unavailability(src: Optional[TextOrPath]) -> Optional[Unavailability]:
    """Read teacher,slots rows. ``None`` when no source was given at all."""
    if src is None:
        return None
    merged: Dict[str, Set[TimeSlot]] = {}
    for row_no, row in enumerate(_rows(src), start=1):
        teacher, slots = row.get('teacher'), row.get('slots')
        if not teacher or not slots:
            continue
        try:
            parsed = parse_slot_list(slots)
        except ValidationError as e:
            raise ValidationError(f"Unavailability row {row_no}: {e}") from None
        merged.setdefault(teacher, set()).update(parsed)
    return {t: frozenset(s) for t, s in merged.items()}


def write_schedule_csv(f: IO, result: ScheduleResult):
    """Long-form rows, one per placed session, in grid order."""
    w = csv.writer(f)
    w.writerow(['slot', 'day', 'period', 'course', 'teacher', 'sections'])
    if result.grid is None:
        return
    for slot, occupants in result.grid.items():
        for c in occupants:
            w.writerow([slot.key, slot.day, slot.period, c.name, c.teacher, c.section_label()])


def save_schedule_csv(path: str, result: ScheduleResult):
    with open(path, 'w', newline='') as f:
        write_schedule_csv(f, result)


def save_unassigned_csv(path: str, result: ScheduleResult):
    placed = result.grid.sessions_by_course() if result.grid is not None else {}
    with open(path, 'w', newline='') as f:
        w = csv.writer(f)
        w.writerow(['course', 'teacher', 'sections', 'required', 'placed'])
        for c in result.unassigned:
            w.writerow([c.name, c.teacher, c.section_label(), c.required_sessions, placed.get(c.id, 0)])
