from flask import Blueprint, jsonify, current_app
from extensions import limiter
from decorators import admin_required, import_endpoint
from utils.csv_parser import parse_taxonomy_csv, validate_taxonomy_rows
from utils.upload_helper import read_csv_upload, parse_and_validate
from utils.taxonomy_import import import_taxonomy
taxonomy_bp = Blueprint('taxonomy', __name__, url_prefix='/taxonomy')


@taxonomy_bp.route('/api/import', methods=['POST'])
@limiter.limit(lambda: current_app.config['IMPORT_RATE_LIMIT'])
@admin_required
@import_endpoint
def import_hierarchy():
    """Import Qualification, Exam Board, Subject and optional Topic/Subtopic rows."""
    text = read_csv_upload()
    if text is None:
        return (jsonify({'error': 'No file provided'}), 400)
    rows = parse_and_validate(text, parse_taxonomy_csv, validate_taxonomy_rows)
    created = import_taxonomy(rows)
    return jsonify({'success': True, 'message': f'Successfully imported {len(rows)} rows', 'created': created})
