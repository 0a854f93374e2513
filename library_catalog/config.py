import os

# --- Configuration ---
BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
DATABASE_PATH = os.path.join(BASE_DIR, "local_library.db")

# Scripts may come from the page itself and the two CDNs the layout links to.
CONTENT_SECURITY_POLICY = {
    'default-src': ["'self'"],
    'script-src': ["'self'", "code.jquery.com", "cdn.jsdelivr.net"],
    'style-src': ["'self'", "cdn.jsdelivr.net", "'unsafe-inline'"],
    'img-src': ["'self'", "data:"],
}


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # SECURITY: set a secure random key in production via env var
    SECRET_KEY = os.environ.get('LIBRARY_SECRET') or 'dev-secret-change-me'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or "sqlite:///" + DATABASE_PATH
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    # Maximum of 20 requests per minute per client address
    RATELIMIT_DEFAULT = "20 per minute"
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_ENABLED = True

    CONTENT_SECURITY_POLICY = CONTENT_SECURITY_POLICY
    FORCE_HTTPS = _env_flag('FORCE_HTTPS')

    WTF_CSRF_ENABLED = True


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    RATELIMIT_ENABLED = False
    WTF_CSRF_ENABLED = False
    LOG_LEVEL = 'WARNING'
