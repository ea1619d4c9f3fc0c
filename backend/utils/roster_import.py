"""Create teacher accounts and student records from roster CSV rows."""
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from extensions import db
from models import User, Student, YearGroup
from utils.entity_resolver import build_year_group_index, resolve_year_group
from utils.import_result import ImportSummary
from utils.schedule_parser import extract_year_group

logger = logging.getLogger(__name__)


def _insert_in_batches(model, pending, batch_size, summary):
    """Insert ``(row_num, column values)`` pairs ``batch_size`` at a time.

    When a batch is rejected it is rolled back and retried one row at a
    time so the offending rows can be reported by number.
    """
    for start in range(0, len(pending), batch_size):
        batch = pending[start:start + batch_size]
        try:
            db.session.add_all([model(**values) for _, values in batch])
            db.session.commit()
            summary.add('successCount', len(batch))
        except IntegrityError:
            db.session.rollback()
            logger.warning('Batch insert of %s rows %d-%d failed, retrying row by row',
                           model.__name__, batch[0][0], batch[-1][0])
            for row_num, values in batch:
                try:
                    db.session.add(model(**values))
                    db.session.commit()
                    summary.add('successCount')
                except IntegrityError as e:
                    db.session.rollback()
                    summary.record_error(f'Row {row_num}: {e.orig}')


def import_teachers(rows, default_password, batch_size=100):
    """Create a teacher account per row, skipping e-mails that already exist.

    ``rows`` may be teacher roster rows (``full_name``) or ClassCard staff rows
    (``name``).
    """
    summary = ImportSummary(successCount=0)
    existing = {email for (email,) in db.session.query(func.lower(User.email))}
    # One hash for the shared first-login password
    password_hash = generate_password_hash(default_password)
    pending = []
    for row_num, row in enumerate(rows, start=2):
        email = row.email.strip().lower()
        if email in existing:
            summary.record_error(f'Row {row_num}: Email already exists: {row.email}')
            continue
        existing.add(email)
        full_name = getattr(row, 'full_name', None) or row.name
        pending.append((row_num, {
            'email': email,
            'full_name': full_name,
            'role': 'teacher',
            'password_hash': password_hash,
        }))
    _insert_in_batches(User, pending, batch_size, summary)
    message = f"Import completed: {summary['successCount']} teachers created, {summary.error_count} errors"
    logger.info(message)
    return summary, message


def _year_group_index():
    return build_year_group_index(db.session.query(YearGroup.name, YearGroup.id).order_by(YearGroup.id))


def import_students(rows, created_by=None, batch_size=100):
    """Roster import: every row must name a known year group."""
    summary = ImportSummary(successCount=0)
    year_groups = _year_group_index()
    pending = []
    for row_num, row in enumerate(rows, start=2):
        year_group_id = resolve_year_group(year_groups, row.year_group)
        if year_group_id is None:
            summary.record_error(f'Row {row_num}: Year group not found: {row.year_group}')
            continue
        pending.append((row_num, {
            'full_name': row.full_name,
            'year_group_id': year_group_id,
            'school_year_group': row.year_group,
            'created_by': created_by,
        }))
    _insert_in_batches(Student, pending, batch_size, summary)
    message = f"Import completed: {summary['successCount']} students created, {summary.error_count} errors"
    logger.info(message)
    return summary, message


def import_classcard_students(rows, created_by=None, batch_size=100):
    """ClassCard import of active students.

    A year group that cannot be matched is reported, but the student is still
    created without one.
    """
    summary = ImportSummary(successCount=0)
    year_groups = _year_group_index()
    pending = []
    for row_num, row in enumerate(rows, start=2):
        extracted = extract_year_group(row.current_year_group)
        year_group_id = None
        if extracted:
            year_group_id = resolve_year_group(year_groups, row.current_year_group)
            if year_group_id is None:
                summary.record_error(
                    f'Row {row_num}: Year group not found: "{extracted}" (from "{row.current_year_group}")'
                )
        pending.append((row_num, {
            'full_name': row.name,
            'year_group_id': year_group_id,
            'school_year_group': row.current_year_group or extracted or '',
            'created_by': created_by,
        }))
    _insert_in_batches(Student, pending, batch_size, summary)
    message = f"Import completed: {summary['successCount']} students created, {summary.error_count} errors"
    logger.info(message)
    return summary, message
