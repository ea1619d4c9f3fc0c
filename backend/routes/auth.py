from flask import Blueprint, request, jsonify, session
from flask_login import login_user, logout_user, current_user, login_required
from models import User
auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


def _user_payload(user):
    return {'id': user.id, 'email': user.email, 'role': user.role, 'name': user.full_name}


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    if not email or not password:
        return (jsonify({'error': 'Email and password are required'}), 400)
    user = User.query.filter_by(email=email).first()
    if user is None or not user.check_password(password):
        return (jsonify({'error': 'Invalid email or password'}), 401)
    login_user(user)
    session['user_role'] = user.role
    return jsonify({'success': True, 'user': _user_payload(user)})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    session.pop('user_role', None)
    return jsonify({'success': True})


@auth_bp.route('/check-auth', methods=['GET'])
@login_required
def check_auth():
    """
    Endpoint to check if the user is authenticated.
    Used by frontend to verify session validity.
    """
    return jsonify({'authenticated': True, 'user': _user_payload(current_user)})
