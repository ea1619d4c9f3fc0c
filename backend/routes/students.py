from flask import Blueprint, jsonify, current_app
from flask_login import current_user
from extensions import limiter
from decorators import admin_required, import_endpoint
from utils.csv_parser import parse_student_csv, validate_student_rows, parse_classcard_student_csv, validate_classcard_student_rows, filter_active_students
from utils.upload_helper import read_csv_upload, parse_and_validate
from utils.roster_import import import_students, import_classcard_students
students_bp = Blueprint('students', __name__, url_prefix='/students')


@students_bp.route('/api/bulk-import', methods=['POST'])
@limiter.limit(lambda: current_app.config['IMPORT_RATE_LIMIT'])
@admin_required
@import_endpoint
def bulk_import():
    """Import students from a CSV with 'Full Name' and 'Year Group' columns."""
    text = read_csv_upload()
    if text is None:
        return (jsonify({'error': 'No file provided'}), 400)
    rows = parse_and_validate(text, parse_student_csv, validate_student_rows)
    summary, message = import_students(rows, created_by=current_user.id, batch_size=current_app.config['IMPORT_BATCH_SIZE'])
    return jsonify(summary.as_dict(message))


@students_bp.route('/api/classcard-import', methods=['POST'])
@limiter.limit(lambda: current_app.config['IMPORT_RATE_LIMIT'])
@admin_required
@import_endpoint
def classcard_import():
    """Import the active students of a ClassCard student export."""
    text = read_csv_upload()
    if text is None:
        return (jsonify({'error': 'No file provided'}), 400)
    rows = parse_and_validate(text, parse_classcard_student_csv, validate_classcard_student_rows)
    active_rows = filter_active_students(rows)
    if not active_rows:
        return (jsonify({'error': 'No active students found in CSV. Make sure Status column contains "Active"'}), 400)
    summary, message = import_classcard_students(active_rows, created_by=current_user.id, batch_size=current_app.config['IMPORT_BATCH_SIZE'])
    return jsonify(summary.as_dict(message))
