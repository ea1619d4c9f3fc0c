"""Parsing and validation of the CSV files accepted by the import endpoints.

Every parser takes the decoded text of an upload and returns a list of row
objects in file order. The first non-blank line is the header row; header
names are compared case-insensitively and each column may accept a few
aliases (``Full Name``, ``FullName`` or ``Name``). Data rows missing a
required value are dropped silently; empty optional values become ``None``.

Validators never stop at the first problem: they return a
:class:`ValidationResult` carrying every message, each prefixed with the
row number as it appears in the file (first data row is ``Row 2``).
"""
import csv
import re
from collections import namedtuple
from dataclasses import dataclass
from typing import List, Optional

from exceptions import MalformedInputError

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
EMPTY_FILE_ERROR = 'CSV file is empty or contains no valid data'
_QUOTE_EDGES = re.compile(r'^"|"$')

ValidationResult = namedtuple('ValidationResult', ['valid', 'errors'])


@dataclass(frozen=True)
class ColumnSpec:
    field: str
    names: tuple
    header_required: bool = True
    value_required: bool = True


@dataclass
class TaxonomyRow:
    qualification: str
    exam_board: str
    subject: str
    topic: Optional[str] = None
    subtopic: Optional[str] = None


@dataclass
class TeacherRow:
    email: str
    full_name: str


@dataclass
class StudentRow:
    full_name: str
    year_group: str


@dataclass
class StaffRow:
    name: str
    email: str
    role: Optional[str] = None


@dataclass
class ClassCardStudentRow:
    name: str
    status: Optional[str] = None
    current_year_group: Optional[str] = None


@dataclass
class ScheduleRow:
    day: str
    time: str
    class_title: str
    staff: str
    date: Optional[str] = None
    class_subject: Optional[str] = None
    students: Optional[str] = None
    attendance_status: Optional[str] = None


TAXONOMY_COLUMNS = (
    ColumnSpec('qualification', ('qualification',)),
    ColumnSpec('exam_board', ('exam board',)),
    ColumnSpec('subject', ('subject',)),
    ColumnSpec('topic', ('topic',), header_required=False, value_required=False),
    ColumnSpec('subtopic', ('subtopic',), header_required=False, value_required=False),
)
TEACHER_COLUMNS = (
    ColumnSpec('email', ('email',)),
    ColumnSpec('full_name', ('full name', 'fullname', 'name')),
)
STUDENT_COLUMNS = (
    ColumnSpec('full_name', ('full name', 'fullname', 'name')),
    ColumnSpec('year_group', ('year group', 'yeargroup', 'year')),
)
STAFF_COLUMNS = (
    ColumnSpec('name', ('name',)),
    ColumnSpec('role', ('role',), value_required=False),
    ColumnSpec('email', ('email',)),
)
CLASSCARD_STUDENT_COLUMNS = (
    ColumnSpec('name', ('name',)),
    ColumnSpec('status', ('status',), header_required=False, value_required=False),
    ColumnSpec('current_year_group', ('current year group',), header_required=False, value_required=False),
)
SCHEDULE_COLUMNS = (
    ColumnSpec('date', ('date',), value_required=False),
    ColumnSpec('day', ('day',)),
    ColumnSpec('time', ('time',)),
    ColumnSpec('class_title', ('class title',)),
    ColumnSpec('class_subject', ('class subject',), value_required=False),
    ColumnSpec('students', ('students',), value_required=False),
    ColumnSpec('staff', ('staff',)),
    ColumnSpec('attendance_status', ('attendance status',), value_required=False),
)


def _clean_field(value):
    return _QUOTE_EDGES.sub('', value.strip()).strip()


def tokenize_csv(text):
    """Split ``text`` into lists of cleaned field values, one per non-blank line.

    Each line is read on its own, so a quoted field cannot span lines.
    Commas inside double quotes do not split and ``""`` is an escaped quote.
    Spaces after a comma are skipped, so ``a, "b, c"`` still reads as two fields.
    """
    records = []
    for line in text.splitlines():
        if not line.strip():
            continue
        try:
            values = next(csv.reader([line], skipinitialspace=True))
        except csv.Error as e:
            raise MalformedInputError(f'Could not read CSV line: {e}')
        records.append([_clean_field(value) for value in values])
    return records


def _find_column(header, names):
    for index, column in enumerate(header):
        if column in names:
            return index
    return None


def _parse_rows(text, columns, row_type, expected_message):
    records = tokenize_csv(text)
    if not records:
        return []
    header = [column.lower() for column in records[0]]
    positions = {}
    missing = []
    for column in columns:
        index = _find_column(header, column.names)
        if index is None and column.header_required:
            missing.append(column.names[0].title())
        positions[column.field] = index
    if missing:
        raise MalformedInputError(f'{expected_message} (missing: {", ".join(missing)})')

    rows = []
    for values in records[1:]:
        data = {}
        for column in columns:
            index = positions[column.field]
            value = values[index] if index is not None and index < len(values) else ''
            data[column.field] = value or None
        if any(not data[column.field] for column in columns if column.value_required):
            continue
        rows.append(row_type(**data))
    return rows


def parse_taxonomy_csv(text) -> List[TaxonomyRow]:
    return _parse_rows(text, TAXONOMY_COLUMNS, TaxonomyRow,
                       'CSV must contain columns: Qualification, Exam Board, Subject')


def parse_teacher_csv(text) -> List[TeacherRow]:
    return _parse_rows(text, TEACHER_COLUMNS, TeacherRow,
                       'CSV must contain columns: Email, Full Name (or Name)')


def parse_student_csv(text) -> List[StudentRow]:
    return _parse_rows(text, STUDENT_COLUMNS, StudentRow,
                       'CSV must contain columns: Full Name (or Name), Year Group (or Year)')


def parse_classcard_staff_csv(text) -> List[StaffRow]:
    return _parse_rows(text, STAFF_COLUMNS, StaffRow,
                       'CSV must contain columns: Name, Role, Email')


def parse_classcard_student_csv(text) -> List[ClassCardStudentRow]:
    return _parse_rows(text, CLASSCARD_STUDENT_COLUMNS, ClassCardStudentRow,
                       'CSV must contain columns: Name')


def parse_classcard_schedule_csv(text) -> List[ScheduleRow]:
    return _parse_rows(
        text, SCHEDULE_COLUMNS, ScheduleRow,
        'CSV must contain columns: Date, Day, Time, Class Title, Class Subject, Students, Staff, Attendance Status'
    )


def _blank(value):
    return not (value or '').strip()


def _validate(rows, required, email_field=None):
    """Collect required-field, e-mail format and duplicate e-mail problems.

    ``required`` maps a row attribute to the label used in messages.
    """
    errors = []
    if not rows:
        errors.append(EMPTY_FILE_ERROR)
    seen_emails = set()
    for index, row in enumerate(rows):
        row_num = index + 2
        for field, label in required.items():
            if field == email_field:
                continue
            if _blank(getattr(row, field, None)):
                errors.append(f'Row {row_num}: {label} is required')
        if email_field is None:
            continue
        email = (getattr(row, email_field, None) or '').strip()
        if not email:
            errors.append(f'Row {row_num}: Email is required')
        elif not EMAIL_PATTERN.match(email):
            errors.append(f'Row {row_num}: Invalid email format: {email}')
        elif email.lower() in seen_emails:
            errors.append(f'Row {row_num}: Duplicate email: {email}')
        else:
            seen_emails.add(email.lower())
    return ValidationResult(not errors, errors)


def validate_taxonomy_rows(rows):
    return _validate(rows, {'qualification': 'Qualification', 'exam_board': 'Exam Board', 'subject': 'Subject'})


def validate_teacher_rows(rows):
    return _validate(rows, {'email': 'Email', 'full_name': 'Full Name'}, email_field='email')


def validate_student_rows(rows):
    return _validate(rows, {'full_name': 'Full Name', 'year_group': 'Year Group'})


def validate_classcard_staff_rows(rows):
    return _validate(rows, {'name': 'Name', 'email': 'Email'}, email_field='email')


def validate_classcard_student_rows(rows):
    return _validate(rows, {'name': 'Name'})


def validate_classcard_schedule_rows(rows):
    return _validate(rows, {'class_title': 'Class Title', 'staff': 'Staff', 'day': 'Day', 'time': 'Time'})


def _field_equals(rows, field, expected):
    return [row for row in rows if (getattr(row, field) or '').strip().lower() == expected]


def filter_teacher_staff(rows):
    """ClassCard staff exports list every role; only teachers are imported."""
    return _field_equals(rows, 'role', 'teacher')


def filter_active_students(rows):
    return _field_equals(rows, 'status', 'active')


def filter_marked_rows(rows):
    """Keep only lessons whose attendance has been marked."""
    return _field_equals(rows, 'attendance_status', 'marked')
