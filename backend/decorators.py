from functools import wraps
import logging

from flask import jsonify
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from exceptions import ImportValidationError, MalformedInputError

logger = logging.getLogger(__name__)


def admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return (jsonify({'error': 'Authentication required'}), 401)
        if not current_user.is_admin:
            return (jsonify({'error': 'Admin access required'}), 403)
        return f(*args, **kwargs)
    return decorated_function


def import_endpoint(f):
    """Turn import failures into the JSON error bodies the upload pages expect.

    Structural problems give 400 with ``error`` (one message) or ``errors``
    (validation list). Database failures roll back the open transaction and
    give 500; work committed earlier in the request stays.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ImportValidationError as e:
            return (jsonify({'errors': e.errors}), 400)
        except MalformedInputError as e:
            return (jsonify({'error': str(e)}), 400)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception('Import aborted by database error')
            return (jsonify({'error': f'Database error: {str(e)}'}), 500)
    return decorated_function
