import logging
from datetime import datetime

from elicit.models import db, Questionnaire, Result
from elicit.tasks import record_visit, spawn


def make_result(app):
    with app.app_context():
        questionnaire = Questionnaire(title='T', problem={}, questions=[])
        db.session.add(questionnaire)
        db.session.flush()
        result = Result(questionnaire_id=questionnaire.id, url='visit001')
        db.session.add(result)
        db.session.commit()
        return result.id


def test_record_visit_sets_timestamp(app):
    result_id = make_result(app)
    visited_at = datetime(2024, 1, 2, 3, 4, 5)

    with app.app_context():
        spawn(record_visit, result_id, visited_at)
        assert db.session.get(Result, result_id).last_visited == visited_at


def test_failed_task_is_logged_not_raised(app, caplog):
    with app.app_context(), caplog.at_level(logging.ERROR):
        spawn(record_visit, 999, datetime.utcnow())
    assert 'Background task record_visit failed' in caplog.text


def test_threaded_task(app):
    result_id = make_result(app)
    app.config['BACKGROUND_TASKS_EAGER'] = False
    visited_at = datetime(2024, 6, 7, 8, 9, 10)

    with app.app_context():
        thread = spawn(record_visit, result_id, visited_at)
    thread.join(timeout=5)

    with app.app_context():
        assert db.session.get(Result, result_id).last_visited == visited_at
