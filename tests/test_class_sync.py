"""Integration tests for the ClassCard schedule sync against a SQLite database."""

from datetime import time

import pytest
from sqlalchemy.exc import OperationalError

from extensions import db
from models import Class, ClassSchedule, ClassStudent
from utils import class_sync
from utils.class_sync import group_schedule_rows, import_classcard_schedule
from utils.csv_parser import ScheduleRow
from utils.import_result import MAX_REPORTED_ERRORS

pytestmark = pytest.mark.integration


def lesson(day="Monday", time_text="04:00 pm-05:00 pm (Asia/Dubai)", title="Y10 Maths - Group A",
           staff="Ava Patel", students="Liam Chen, Noor Haddad", subject=None):
    return ScheduleRow(day=day, time=time_text, class_title=title, staff=staff,
                       class_subject=subject, students=students, attendance_status="Marked")


def slots_of(class_record):
    return sorted(
        (s.day_of_week, s.start_time, s.end_time)
        for s in ClassSchedule.query.filter_by(class_id=class_record.id)
    )


def student_ids_of(class_record):
    return sorted(link.student_id for link in ClassStudent.query.filter_by(class_id=class_record.id))


class TestGrouping:

    def test_groups_by_title_and_staff_in_first_seen_order(self):
        rows = [
            lesson(title="Y10 Physics"),
            lesson(title="Y10 Maths - Group A"),
            lesson(title="Y10 Physics", day="Tuesday"),
            lesson(title="Y10 Physics", staff="Ben Ortiz"),
        ]
        groups = group_schedule_rows(rows)
        assert [(g.title, g.teacher_name, len(g.rows)) for g in groups] == [
            ("Y10 Physics", "Ava Patel", 2),
            ("Y10 Maths - Group A", "Ava Patel", 1),
            ("Y10 Physics", "Ben Ortiz", 1),
        ]

    def test_staff_name_case_does_not_split_a_group(self):
        rows = [lesson(staff="Ava Patel"), lesson(staff=" ava patel", day="Tuesday")]
        groups = group_schedule_rows(rows)
        assert [(g.teacher_name, len(g.rows)) for g in groups] == [("Ava Patel", 2)]


class TestScheduleSync:

    def test_new_class_is_created_with_roster_and_schedule(self, reference_data):
        rows = [lesson(), lesson(day="Wednesday", time_text="08:00 am-09:00 am")]
        summary, message = import_classcard_schedule(rows, created_by=None)

        assert summary["classesCreated"] == 1
        assert summary["classesUpdated"] == 0
        assert summary["schedulesCreated"] == 2
        assert summary["studentsLinked"] == 2
        assert summary.error_count == 0
        assert message == (
            "Sync completed: 1 classes created, 0 classes updated, "
            "2 schedules synced, 2 students linked, 0 errors"
        )

        class_record = Class.query.one()
        teacher = reference_data["teacher"]
        assert class_record.name == "Y10 Maths - Group A"
        assert class_record.teacher_id == teacher.id
        assert class_record.department_id == teacher.department_id
        assert class_record.subject_id == reference_data["subjects"]["Mathematics"].id
        assert class_record.year_group_id == reference_data["year_groups"]["Y10"].id
        assert slots_of(class_record) == [
            (1, time(16, 0), time(17, 0)),
            (3, time(8, 0), time(9, 0)),
        ]
        students = reference_data["students"]
        assert student_ids_of(class_record) == sorted(
            [students["Liam Chen"].id, students["Noor Haddad"].id]
        )

    def test_reimport_is_idempotent(self, reference_data):
        rows = [lesson(), lesson(day="Wednesday", time_text="08:00 am-09:00 am")]
        import_classcard_schedule(rows)
        summary, _ = import_classcard_schedule(rows)

        assert summary["classesCreated"] == 0
        assert summary["classesUpdated"] == 1
        assert Class.query.count() == 1
        assert ClassStudent.query.count() == 2
        assert ClassSchedule.query.count() == 2

    def test_reimport_replaces_instead_of_merging(self, reference_data):
        import_classcard_schedule([lesson(), lesson(day="Wednesday", time_text="08:00 am-09:00 am")])
        summary, _ = import_classcard_schedule([
            lesson(day="Thursday", time_text="10:00 am-11:00 am", students="Omar Farouk"),
        ])

        class_record = Class.query.one()
        assert summary["classesUpdated"] == 1
        assert slots_of(class_record) == [(4, time(10, 0), time(11, 0))]
        assert student_ids_of(class_record) == [reference_data["students"]["Omar Farouk"].id]

    def test_staff_spelling_variants_share_one_roster(self, reference_data):
        rows = [
            lesson(staff="Ava Patel", students="Liam Chen"),
            lesson(staff="AVA PATEL", day="Tuesday", students="Noor Haddad"),
        ]
        summary, _ = import_classcard_schedule(rows)

        class_record = Class.query.one()
        assert summary["classesCreated"] == 1
        assert summary["classesUpdated"] == 0
        assert len(slots_of(class_record)) == 2
        students = reference_data["students"]
        assert student_ids_of(class_record) == sorted(
            [students["Liam Chen"].id, students["Noor Haddad"].id]
        )

    def test_class_subject_column_overrides_title(self, reference_data):
        import_classcard_schedule([lesson(title="Y10 Set 3", subject="Physics")])
        class_record = Class.query.one()
        assert class_record.subject_id == reference_data["subjects"]["Physics"].id

    def test_duplicate_slots_and_names_collapse(self, reference_data):
        rows = [
            lesson(students="Liam Chen, Liam Chen"),
            lesson(students="liam chen, Noor Haddad"),
        ]
        summary, _ = import_classcard_schedule(rows)
        assert summary["schedulesCreated"] == 1
        assert summary["studentsLinked"] == 2
        assert ClassStudent.query.count() == 2

    def test_unknown_teacher_skips_only_that_class(self, reference_data):
        rows = [lesson(staff="Nobody Known"), lesson(title="Y11 Physics", students="Omar Farouk")]
        summary, _ = import_classcard_schedule(rows)

        assert summary["classesCreated"] == 1
        assert summary.errors == ['Teacher not found: "Nobody Known"']
        assert Class.query.one().name == "Y11 Physics"

    def test_unknown_subject_skips_the_class(self, reference_data):
        summary, _ = import_classcard_schedule([lesson(title="Y10 Art")])
        assert summary["classesCreated"] == 0
        assert summary.errors == ['Subject not found: "Art" (from class "Y10 Art")']
        assert Class.query.count() == 0

    def test_unknown_students_are_reported_but_class_is_kept(self, reference_data):
        summary, _ = import_classcard_schedule([lesson(students="Liam Chen, Zed Unknown")])
        assert summary["classesCreated"] == 1
        assert summary["studentsLinked"] == 1
        assert summary.errors == ['Student not found: "Zed Unknown" (in class "Y10 Maths - Group A")']

    def test_bad_day_and_time_skip_only_that_slot(self, reference_data):
        rows = [
            lesson(),
            lesson(day="Someday"),
            lesson(day="Tuesday", time_text="4-5pm"),
        ]
        summary, _ = import_classcard_schedule(rows)
        assert summary["classesCreated"] == 1
        assert summary["schedulesCreated"] == 1
        assert summary.errors == [
            'Invalid day: "Someday" (in class "Y10 Maths - Group A")',
            'Invalid time format: "4-5pm" (in class "Y10 Maths - Group A")',
        ]

    def test_class_without_year_token_has_no_year_group(self, reference_data):
        import_classcard_schedule([lesson(title="Physics Club")])
        assert Class.query.one().year_group_id is None

    def test_error_list_is_capped_but_count_is_exact(self, reference_data):
        names = ", ".join(f"Missing Student {n}" for n in range(MAX_REPORTED_ERRORS + 10))
        summary, message = import_classcard_schedule([lesson(students=names)])

        assert summary.error_count == MAX_REPORTED_ERRORS + 10
        assert len(summary.errors) == MAX_REPORTED_ERRORS
        assert summary.truncated
        assert message.endswith(f"{MAX_REPORTED_ERRORS + 10} errors")
        payload = summary.as_dict(message)
        assert payload["errorCount"] == MAX_REPORTED_ERRORS + 10
        assert len(payload["errors"]) == MAX_REPORTED_ERRORS

    def test_database_failure_keeps_earlier_classes(self, reference_data, monkeypatch):
        original = class_sync.find_existing_class
        calls = []

        def failing_lookup(name, teacher_id, subject_id):
            calls.append(name)
            if len(calls) == 2:
                raise OperationalError("SELECT", {}, Exception("connection lost"))
            return original(name, teacher_id, subject_id)

        monkeypatch.setattr(class_sync, "find_existing_class", failing_lookup)
        rows = [lesson(), lesson(title="Y11 Physics", students="Omar Farouk")]
        with pytest.raises(OperationalError):
            import_classcard_schedule(rows)
        db.session.rollback()

        assert [c.name for c in Class.query.all()] == ["Y10 Maths - Group A"]
        assert ClassStudent.query.count() == 2
