"""
Elicit Survey System - Configuration
====================================

Settings come from the environment:
- SURVEY_ADMIN_PASSWORD: shared password for /admin (username is always "admin")
- SURVEY_WEB_HOST: externally visible host, used to build survey links
- DATABASE_URL, or SURVEY_DB_NAME / SURVEY_DB_USER / SURVEY_DB_PASSWORD / SURVEY_DB_HOST
- SECRET_KEY, LOG_LEVEL
"""

import os

from sqlalchemy.engine import URL


def database_uri(environ=os.environ):
    """Pick the database URI, falling back to a local SQLite file."""
    url = environ.get('DATABASE_URL')
    if url:
        # Fix for hosted PostgreSQL URLs (postgres:// -> postgresql://)
        if url.startswith('postgres://'):
            url = url.replace('postgres://', 'postgresql://', 1)
        return url

    if environ.get('SURVEY_DB_NAME'):
        return URL.create(
            'postgresql',
            username=environ.get('SURVEY_DB_USER'),
            password=environ.get('SURVEY_DB_PASSWORD'),
            host=environ.get('SURVEY_DB_HOST'),
            database=environ.get('SURVEY_DB_NAME'),
        ).render_as_string(hide_password=False)

    return 'sqlite:///elicit.db'


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = os.environ.get('SURVEY_ADMIN_PASSWORD', 'dev-admin-password')
    WEB_HOST = os.environ.get('SURVEY_WEB_HOST', 'http://localhost:8080')

    SQLALCHEMY_DATABASE_URI = database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Run background tasks inline instead of on a thread
    BACKGROUND_TASKS_EAGER = False

    # Static assets are cached for a day
    SEND_FILE_MAX_AGE_DEFAULT = 86400
