import csv
import io
import os
import tempfile
import unittest

from lecturegrid.config import RunConfig
from lecturegrid.errors import ValidationError
from lecturegrid.io_utils import (
    load_courses, load_unavailability, parse_lectures, save_schedule_csv, save_unassigned_csv,
    write_schedule_csv,
)
from lecturegrid.models import ScheduleResult, TimeSlot
from lecturegrid.scheduling.engine import schedule_courses

COURSES_CSV = """ Course ,Teacher,Section,Lectures,Slots
Math,Smith,"A, B",2,"1.1, 2.1"

Physics,Jones,C,,
,,,,
Chemistry,Smith,"A,,",abc,
"""


class LoadCoursesTests(unittest.TestCase):
    def test_rows_become_courses(self):
        courses = load_courses(io.StringIO(COURSES_CSV))
        self.assertEqual([c.name for c in courses], ["Math", "Physics", "Chemistry"])
        self.assertEqual([c.id for c in courses], [0, 1, 2])
        math, physics, chem = courses
        self.assertEqual(math.sections, frozenset({"A", "B"}))
        self.assertEqual(math.required_sessions, 2)
        self.assertEqual(math.preferred_slots, (TimeSlot(1, 1), TimeSlot(2, 1)))
        self.assertEqual(math.priority_tier, 1)
        self.assertEqual(physics.priority_tier, 2)
        self.assertEqual(physics.required_sessions, 1)
        self.assertEqual(chem.sections, frozenset({"A"}))
        self.assertEqual(chem.required_sessions, 1)

    def test_bytes_upload(self):
        courses = load_courses(io.BytesIO(COURSES_CSV.encode("utf-8")))
        self.assertEqual(len(courses), 3)

    def test_path_input(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "courses.csv")
            with open(path, "w", newline="") as f:
                f.write(COURSES_CSV)
            self.assertEqual(len(load_courses(path)), 3)

    def test_missing_required_field(self):
        text = "course,teacher,section\nMath,,A\n"
        with self.assertRaises(ValidationError) as ctx:
            load_courses(io.StringIO(text))
        self.assertIn("Required fields", str(ctx.exception))

    def test_missing_column(self):
        with self.assertRaises(ValidationError):
            load_courses(io.StringIO("course,teacher\nMath,Smith\n"))

    def test_blank_section_list(self):
        with self.assertRaises(ValidationError):
            load_courses(io.StringIO("course,teacher,section\nMath,Smith,\" , \"\n"))

    def test_malformed_slot_token(self):
        with self.assertRaises(ValidationError):
            load_courses(io.StringIO("course,teacher,section,slots\nMath,Smith,A,monday\n"))

    def test_parse_lectures(self):
        self.assertEqual(parse_lectures("3"), 3)
        self.assertEqual(parse_lectures(" 2 "), 2)
        self.assertEqual(parse_lectures("4abc"), 4)
        self.assertEqual(parse_lectures(""), 1)
        self.assertEqual(parse_lectures(None), 1)
        self.assertEqual(parse_lectures("x"), 1)
        self.assertEqual(parse_lectures("0"), 1)
        with self.assertRaises(ValidationError):
            parse_lectures("-2")


class LoadUnavailabilityTests(unittest.TestCase):
    def test_no_source(self):
        self.assertIsNone(load_unavailability(None))

    def test_rows_merge_per_teacher(self):
        text = "teacher,slots\nSmith,\"1.1, 1.2\"\nJones,\nSmith,2.1\n,3.3\n"
        unavail = load_unavailability(io.StringIO(text))
        self.assertEqual(set(unavail), {"Smith"})
        self.assertEqual(unavail["Smith"], frozenset({TimeSlot(1, 1), TimeSlot(1, 2), TimeSlot(2, 1)}))

    def test_header_only_file_is_an_empty_map(self):
        self.assertEqual(load_unavailability(io.StringIO("teacher,slots\n")), {})

    def test_malformed_token(self):
        with self.assertRaises(ValidationError):
            load_unavailability(io.StringIO("teacher,slots\nSmith,1-1\n"))


class WriterTests(unittest.TestCase):
    def test_schedule_and_unassigned_csv(self):
        courses = load_courses(io.StringIO(
            "course,teacher,section,lectures\nMath,Smith,A,2\nArt,Smith,B,2\n"
        ))
        result = schedule_courses(courses, RunConfig(days=1, periods_per_day=3))
        with tempfile.TemporaryDirectory() as d:
            sched_path = os.path.join(d, "schedule.csv")
            un_path = os.path.join(d, "unassigned.csv")
            save_schedule_csv(sched_path, result)
            save_unassigned_csv(un_path, result)
            with open(sched_path, newline="") as f:
                rows = list(csv.DictReader(f))
            with open(un_path, newline="") as f:
                missing = list(csv.DictReader(f))
        self.assertEqual([r["slot"] for r in rows], ["1.1", "1.2", "1.3"])
        self.assertEqual([r["course"] for r in rows], ["Math", "Math", "Art"])
        self.assertEqual(len(missing), 1)
        self.assertEqual(missing[0]["course"], "Art")
        self.assertEqual(missing[0]["required"], "2")
        self.assertEqual(missing[0]["placed"], "1")


class StreamWriterTests(unittest.TestCase):
    def test_write_schedule_csv_to_text_stream(self):
        courses = load_courses(io.StringIO("course,teacher,section\nMath,Smith,\"A,B\"\n"))
        result = schedule_courses(courses, RunConfig(days=2, periods_per_day=1))
        buf = io.StringIO()
        write_schedule_csv(buf, result)
        rows = list(csv.reader(io.StringIO(buf.getvalue())))
        self.assertEqual(rows, [
            ["slot", "day", "period", "course", "teacher", "sections"],
            ["1.1", "1", "1", "Math", "Smith", "A, B"],
        ])

    def test_failed_run_writes_header_only(self):
        buf = io.StringIO()
        write_schedule_csv(buf, ScheduleResult(error="boom"))
        self.assertEqual(buf.getvalue().splitlines(), ["slot,day,period,course,teacher,sections"])


if __name__ == "__main__":
    unittest.main()
