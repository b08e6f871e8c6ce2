"""
Fire-and-forget work that must not hold up a response.

Each task runs on its own daemon thread inside a fresh app context, so it
gets its own database session. Failures are logged and go no further.
"""

import threading

from flask import current_app

from .models import db, Result


def spawn(func, *args):
    """Run func(*args) detached from the current request."""
    app = current_app._get_current_object()

    def run():
        with app.app_context():
            try:
                func(*args)
            except Exception:
                db.session.rollback()
                app.logger.exception(f"Background task {func.__name__} failed")

    if app.config.get('BACKGROUND_TASKS_EAGER'):
        run()
        return None

    thread = threading.Thread(target=run, name=f"task-{func.__name__}", daemon=True)
    thread.start()
    return thread


def record_visit(result_id, visited_at):
    """Persist the last_visited timestamp of a survey link"""
    result = db.session.get(Result, result_id)
    if result is None:
        raise LookupError(f"Result {result_id} not found")
    result.last_visited = visited_at
    db.session.commit()
    current_app.logger.info("updated")
