from flask import Blueprint, jsonify, current_app
from flask_login import current_user
from extensions import limiter
from decorators import admin_required, import_endpoint
from utils.csv_parser import parse_classcard_schedule_csv, validate_classcard_schedule_rows, filter_marked_rows
from utils.upload_helper import read_csv_upload, parse_and_validate
from utils.class_sync import import_classcard_schedule
classes_bp = Blueprint('classes', __name__, url_prefix='/classes')


@classes_bp.route('/api/classcard-schedule-import', methods=['POST'])
@limiter.limit(lambda: current_app.config['IMPORT_RATE_LIMIT'])
@admin_required
@import_endpoint
def classcard_schedule_import():
    """Sync classes, rosters and weekly schedules from a ClassCard schedule export.

    Only rows whose Attendance Status is "Marked" are used. Rows are grouped
    into one class per (Class Title, Staff) pair; an existing class has its
    students and schedule replaced by what the file contains.
    """
    text = read_csv_upload()
    if text is None:
        return (jsonify({'error': 'No file provided'}), 400)
    rows = parse_and_validate(text, parse_classcard_schedule_csv, validate_classcard_schedule_rows)
    marked_rows = filter_marked_rows(rows)
    if not marked_rows:
        return (jsonify({'error': 'No marked classes found in CSV. Make sure Attendance Status column contains "Marked"'}), 400)
    summary, message = import_classcard_schedule(marked_rows, created_by=current_user.id)
    return jsonify(summary.as_dict(message))
