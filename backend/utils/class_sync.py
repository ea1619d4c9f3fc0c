"""Synchronise classes, rosters and weekly schedules from a ClassCard export.

Rows are grouped by (class title, staff name). Each group becomes one class,
looked up by its natural key (name, teacher, subject). An existing class has
its student links and schedule rows replaced by exactly what the file holds;
the file is the full picture for that class, not a patch.

Each group is committed on its own, so the delete and the re-insert for one
class land together. Groups committed before a database failure stay
committed.
"""
from collections import OrderedDict, namedtuple
from datetime import datetime
import logging

from extensions import db
from models import User, Student, Subject, YearGroup, Class, ClassStudent, ClassSchedule
from utils.entity_resolver import ImportContext, NameIndex, build_subject_index, build_year_group_index, normalize_name
from utils.import_result import ImportSummary
from utils.schedule_parser import (
    day_name_to_number,
    extract_subject,
    extract_year_group,
    parse_time_range,
    split_student_names,
)

logger = logging.getLogger(__name__)

ClassGroup = namedtuple('ClassGroup', ['title', 'teacher_name', 'rows'])
ScheduleSlot = namedtuple('ScheduleSlot', ['day_of_week', 'start', 'end'])


def load_import_context():
    """Fetch every teacher, student, subject and year group once for this call."""
    teachers = User.query.filter_by(role='teacher').order_by(User.id).all()
    students = db.session.query(Student.full_name, Student.id).order_by(Student.id).all()
    subjects = db.session.query(Subject.name, Subject.id).order_by(Subject.id).all()
    year_groups = db.session.query(YearGroup.name, YearGroup.id).order_by(YearGroup.id).all()
    return ImportContext(
        teachers=NameIndex((t.full_name, t.id) for t in teachers),
        students=NameIndex(students),
        subjects=build_subject_index(subjects),
        year_groups=build_year_group_index(year_groups),
        teacher_departments={t.id: t.department_id for t in teachers},
    )


def group_schedule_rows(rows):
    """One ClassGroup per distinct (class title, staff) pair, in first-seen order.

    Staff names are compared case-insensitively; the group keeps the first spelling seen.
    """
    groups = OrderedDict()
    for row in rows:
        key = (row.class_title, normalize_name(row.staff))
        if key not in groups:
            groups[key] = ClassGroup(row.class_title, row.staff, [])
        groups[key].rows.append(row)
    return list(groups.values())


def collect_student_names(rows):
    names = OrderedDict()
    for row in rows:
        for name in split_student_names(row.students):
            names.setdefault(name, None)
    return list(names)


def collect_schedule_slots(group, summary):
    """Parse each row's day and time; bad rows are reported and left out."""
    slots = OrderedDict()
    for row in group.rows:
        day_of_week = day_name_to_number(row.day)
        if day_of_week is None:
            summary.record_error(f'Invalid day: "{row.day}" (in class "{group.title}")')
            continue
        time_range = parse_time_range(row.time)
        if time_range is None:
            summary.record_error(f'Invalid time format: "{row.time}" (in class "{group.title}")')
            continue
        slot = ScheduleSlot(day_of_week, time_range.start, time_range.end)
        slots.setdefault(slot, None)
    return list(slots)


def resolve_student_ids(group, context, summary):
    student_ids = []
    for name in collect_student_names(group.rows):
        student_id = context.student_id(name)
        if student_id is None:
            summary.record_error(f'Student not found: "{name}" (in class "{group.title}")')
        elif student_id not in student_ids:
            student_ids.append(student_id)
    return student_ids


def find_existing_class(name, teacher_id, subject_id):
    return Class.query.filter_by(name=name, teacher_id=teacher_id, subject_id=subject_id).order_by(Class.id).first()


def _to_time(value):
    return datetime.strptime(value, '%H:%M').time()


def sync_class_group(group, context, summary, created_by=None):
    """Create or update the class for ``group``. Returns the Class, or None if skipped."""
    teacher_id = context.teacher_id(group.teacher_name)
    if teacher_id is None:
        summary.record_error(f'Teacher not found: "{group.teacher_name}"')
        return None

    first_row = group.rows[0]
    subject_name = extract_subject(first_row.class_title, first_row.class_subject)
    subject_id = context.subject_id(subject_name)
    if subject_id is None:
        summary.record_error(f'Subject not found: "{subject_name}" (from class "{group.title}")')
        return None

    year_group_name = extract_year_group(first_row.class_title)
    year_group_id = context.year_group_id(year_group_name) if year_group_name else None

    student_ids = resolve_student_ids(group, context, summary)
    slots = collect_schedule_slots(group, summary)

    class_record = find_existing_class(group.title, teacher_id, subject_id)
    if class_record is None:
        class_record = Class(
            name=group.title,
            teacher_id=teacher_id,
            subject_id=subject_id,
            year_group_id=year_group_id,
            department_id=context.teacher_departments.get(teacher_id),
            created_by=created_by,
        )
        db.session.add(class_record)
        db.session.flush()
        summary.add('classesCreated')
        logger.debug('Created class %s (%s)', class_record.id, group.title)
    else:
        if year_group_id and class_record.year_group_id != year_group_id:
            class_record.year_group_id = year_group_id
        ClassStudent.query.filter_by(class_id=class_record.id).delete(synchronize_session='fetch')
        ClassSchedule.query.filter_by(class_id=class_record.id).delete(synchronize_session='fetch')
        summary.add('classesUpdated')
        logger.debug('Replacing roster and schedule of class %s (%s)', class_record.id, group.title)

    db.session.add_all([ClassStudent(class_id=class_record.id, student_id=student_id) for student_id in student_ids])
    db.session.add_all([
        ClassSchedule(
            class_id=class_record.id,
            day_of_week=slot.day_of_week,
            start_time=_to_time(slot.start),
            end_time=_to_time(slot.end),
        )
        for slot in slots
    ])
    db.session.commit()
    summary.add('studentsLinked', len(student_ids))
    summary.add('schedulesCreated', len(slots))
    return class_record


def import_classcard_schedule(rows, created_by=None, context=None):
    """Run the schedule sync over already-filtered (marked) rows.

    Database errors propagate to the caller; everything else is recorded on
    the returned summary and the affected class or slot is skipped.
    """
    if context is None:
        context = load_import_context()
    summary = ImportSummary(classesCreated=0, classesUpdated=0, schedulesCreated=0, studentsLinked=0)
    groups = group_schedule_rows(rows)
    for group in groups:
        sync_class_group(group, context, summary, created_by=created_by)

    message = (
        f"Sync completed: {summary['classesCreated']} classes created, "
        f"{summary['classesUpdated']} classes updated, "
        f"{summary['schedulesCreated']} schedules synced, "
        f"{summary['studentsLinked']} students linked, "
        f"{summary.error_count} errors"
    )
    logger.info('%s (%d class groups%s)', message, len(groups),
                ', error list truncated' if summary.truncated else '')
    return summary, message
