import os
from datetime import timedelta

basedir = os.path.abspath(os.path.dirname(__file__))


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() == 'true'


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(basedir, 'lms.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE')
    REMEMBER_COOKIE_DURATION = timedelta(days=7)

    ALLOW_ADMIN_SIGNUP = _env_flag('ALLOW_ADMIN_SIGNUP')
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', '')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', '')

    NEWS_DEFAULT_LIMIT = 50
    TOP_COURSES_DEFAULT_LIMIT = 5

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ALLOW_ADMIN_SIGNUP = False
    ADMIN_EMAIL = ''
    ADMIN_PASSWORD = ''
