"""
Public survey routes. A respondent reaches a survey through /<token>.
"""

from datetime import datetime

from flask import Blueprint, current_app, render_template, request

from .models import db, Questionnaire, Result
from .tasks import record_visit, spawn

survey = Blueprint('survey', __name__)


@survey.route('/', methods=['GET'])
def landing_page():
    return render_template('index.html', host=current_app.config['WEB_HOST'])


@survey.route('/<token>', methods=['GET'])
def take_survey(token):
    """Render the survey form for a link token"""
    result = Result.find_by_url(token)
    if result is None:
        return render_template(
            'survey_not_found.html',
            host=current_app.config['WEB_HOST'],
            url=token,
        ), 404

    questionnaire = db.session.get(Questionnaire, result.questionnaire_id)
    if questionnaire is None:
        return f"Questionnaire {result.questionnaire_id} not found", 404

    # The visit is written in the background; the page does not wait for it
    visited_at = datetime.utcnow()
    spawn(record_visit, result.id, visited_at)

    return render_template('home.html', info={
        'id': token,
        'title': questionnaire.title,
        'problem': questionnaire.problem,
        'questions': questionnaire.questions,
        'answers': result.answers,
        'lastVisited': visited_at.isoformat(),
        'lastSaved': result.last_completed.isoformat() if result.last_completed else None,
    })


@survey.route('/<token>', methods=['POST'])
def submit_answers(token):
    """Store the whole submitted body as the answers of this link"""
    result = Result.find_by_url(token)
    if result is None:
        return f"Survey with ID {token} not found", 404

    if request.is_json:
        answers = request.get_json()
    else:
        # Repeated fields (multi-select) keep every value
        answers = {
            key: values[0] if len(values) == 1 else values
            for key, values in request.form.to_dict(flat=False).items()
        }

    result.answers = answers
    result.last_completed = datetime.utcnow()
    db.session.commit()

    return '', 200
