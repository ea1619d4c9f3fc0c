from dotenv import load_dotenv
import os

load_dotenv()


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name, default):
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return int(value)


class Config:
    # Flask-Limiter Storage
    # Default to in-memory for local/dev; override with REDIS_URL for production
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL', 'memory://')
    RATELIMIT_ENABLED = _env_bool('RATELIMIT_ENABLED', True)
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'classroster-local-session-secret')

    # Database configuration
    DB_USER = os.environ.get('DB_USER', 'postgres')
    DB_PASSWORD = os.environ.get('DB_PASSWORD', 'password')
    DB_HOST = os.environ.get('DB_HOST', 'localhost')
    DB_PORT = os.environ.get('DB_PORT', '5432')
    DB_NAME = os.environ.get('DB_NAME', 'classroster')

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f'postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}'
    )
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 300,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Import settings
    IMPORT_RATE_LIMIT = os.environ.get('IMPORT_RATE_LIMIT', '20 per minute')
    IMPORT_BATCH_SIZE = _env_int('IMPORT_BATCH_SIZE', 100)
    DEFAULT_TEACHER_PASSWORD = os.environ.get('DEFAULT_TEACHER_PASSWORD', '12345678')
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file size

    # ClassCard exports carry times in the school's local zone
    SCHOOL_TIMEZONE = os.environ.get('SCHOOL_TIMEZONE', 'Asia/Dubai')

    # Security Settings
    SESSION_COOKIE_SECURE = _env_bool('SESSION_COOKIE_SECURE', False)  # Keep False for localhost HTTP
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour
    SESSION_TYPE = 'filesystem'  # Use filesystem for session storage
    SESSION_FILE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'flask_session')
    SESSION_FILE_THRESHOLD = 500  # Maximum number of sessions to store

    # Application Settings
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    DEBUG = _env_bool('FLASK_DEBUG', False)
    TESTING = False


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False
    SESSION_TYPE = None  # plain signed-cookie sessions
    IMPORT_BATCH_SIZE = 2
    LOG_LEVEL = 'DEBUG'
