"""
Elicit Survey System - Main Flask Application
=============================================

This is the main Flask application that provides:
- Admin panel (questionnaire authoring, survey link generation, exports)
- Survey taking (public pages reached through a unique link token)

DEPLOYMENT NOTES:
- PostgreSQL in production, SQLite locally (see config.py for the environment variables)
- Tables are created at startup; there are no migrations
- Static client assets live in elicit/static and are served under /static

NOTES:
- Admin routes are behind HTTP basic auth with a single shared password
- Survey routes are public, anyone holding a link token can read and write that one result
- Run locally: python -m elicit.app
"""

import time

from flask import Flask, g, request
from werkzeug.exceptions import HTTPException

from .admin import admin
from .config import Config
from .logging_config import setup_logging
from .models import db
from .survey import survey


def create_app(config=None):
    """Build the application. ``config`` overrides settings from the environment."""
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    setup_logging(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)

    # Admin routes must be registered before the catch-all survey routes
    app.register_blueprint(admin)
    app.register_blueprint(survey)

    register_request_logging(app)
    register_error_handlers(app)
    register_commands(app)

    # Tables must exist before the first request; a failure here aborts startup
    with app.app_context():
        db.create_all()
    app.logger.info("Database tables ready")

    return app


# ============================================================================
# REQUEST LOGGING
# ============================================================================

def register_request_logging(app):

    @app.before_request
    def start_timer():
        g.request_started = time.time()

    @app.after_request
    def log_request(response):
        duration = time.time() - g.get('request_started', time.time())
        app.logger.info(
            f"Method: {request.method} Path: {request.path} "
            f"Status: {response.status_code} Duration: {duration:.2f}s"
        )
        return response


# ============================================================================
# ERROR HANDLERS
# ============================================================================

def register_error_handlers(app):

    @app.errorhandler(Exception)
    def internal_server_error(error):
        # Redirects, 404s and friends keep their own responses
        if isinstance(error, HTTPException):
            return error
        app.logger.error(f"Unhandled Exception: {error}", exc_info=error)
        return str(error), 500, {'Content-Type': 'text/plain; charset=utf-8'}


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def register_commands(app):

    @app.cli.command('init-db')
    def init_db():
        """Initialize the database tables"""
        db.create_all()
        print('Database tables created.')


# ============================================================================
# MAIN
# ============================================================================

if __name__ == '__main__':
    create_app().run(host='0.0.0.0', port=8080)
