import logging
import os
from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix
from config import Config
from extensions import db, migrate, login_manager, limiter


def create_app(config_class=Config):
    base_dir = os.path.dirname(os.path.abspath(__file__))
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.secret_key = app.config['SECRET_KEY']
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)
    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(app)
    migrate.init_app(app, db, directory=os.path.join(base_dir, 'migrations'))
    login_manager.init_app(app)
    limiter.init_app(app)
    if app.config.get('SESSION_TYPE'):
        from flask_session import Session
        Session(app)

    from routes.auth import auth_bp
    from routes.classes import classes_bp
    from routes.students import students_bp
    from routes.teachers import teachers_bp
    from routes.taxonomy import taxonomy_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(classes_bp)
    app.register_blueprint(students_bp)
    app.register_blueprint(teachers_bp)
    app.register_blueprint(taxonomy_bp)

    from commands import register_commands
    register_commands(app)

    @app.errorhandler(413)
    def file_too_large(error):
        return (jsonify({'error': 'File is too large'}), 413)
    return app


@login_manager.user_loader
def load_user(user_id):
    from models import User
    return db.session.get(User, int(user_id))


@login_manager.unauthorized_handler
def unauthorized():
    return (jsonify({'error': 'Authentication required'}), 401)


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config['DEBUG'])
