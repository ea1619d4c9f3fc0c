from flask import Blueprint, jsonify, current_app
from extensions import limiter
from decorators import admin_required, import_endpoint
from utils.csv_parser import parse_teacher_csv, validate_teacher_rows, parse_classcard_staff_csv, validate_classcard_staff_rows, filter_teacher_staff
from utils.upload_helper import read_csv_upload, parse_and_validate
from utils.roster_import import import_teachers
teachers_bp = Blueprint('teachers', __name__, url_prefix='/teachers')


@teachers_bp.route('/api/bulk-import', methods=['POST'])
@limiter.limit(lambda: current_app.config['IMPORT_RATE_LIMIT'])
@admin_required
@import_endpoint
def bulk_import():
    """Create teacher accounts from a CSV with 'Email' and 'Full Name' columns.

    New accounts get the configured default password.
    """
    text = read_csv_upload()
    if text is None:
        return (jsonify({'error': 'No file provided'}), 400)
    rows = parse_and_validate(text, parse_teacher_csv, validate_teacher_rows)
    summary, message = import_teachers(rows, current_app.config['DEFAULT_TEACHER_PASSWORD'], batch_size=current_app.config['IMPORT_BATCH_SIZE'])
    return jsonify(summary.as_dict(message))


@teachers_bp.route('/api/classcard-import', methods=['POST'])
@limiter.limit(lambda: current_app.config['IMPORT_RATE_LIMIT'])
@admin_required
@import_endpoint
def classcard_import():
    """Create teacher accounts for the 'Teacher' rows of a ClassCard staff export."""
    text = read_csv_upload()
    if text is None:
        return (jsonify({'error': 'No file provided'}), 400)
    rows = parse_and_validate(text, parse_classcard_staff_csv, validate_classcard_staff_rows)
    teacher_rows = filter_teacher_staff(rows)
    if not teacher_rows:
        return (jsonify({'error': 'No teachers found in CSV. Make sure Role column contains "Teacher"'}), 400)
    summary, message = import_teachers(teacher_rows, current_app.config['DEFAULT_TEACHER_PASSWORD'], batch_size=current_app.config['IMPORT_BATCH_SIZE'])
    return jsonify(summary.as_dict(message))
