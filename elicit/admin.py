"""
Admin panel routes: questionnaire authoring, link generation and exports.

Every route here sits behind HTTP basic auth (user "admin", shared password).
"""

import json
import secrets

from flask import Blueprint, Response, current_app, jsonify, redirect, render_template, request

from .models import db, Questionnaire, Result
from .tokens import random_token

admin = Blueprint('admin', __name__, url_prefix='/admin')


@admin.before_app_request
def require_admin():
    """Check the basic auth credentials on every /admin request, routed or not"""
    if request.path != '/admin' and not request.path.startswith('/admin/'):
        return None
    auth = request.authorization
    expected_user = current_app.config['ADMIN_USERNAME']
    expected_password = current_app.config['ADMIN_PASSWORD']
    if (auth is None or auth.type != 'basic'
            or not secrets.compare_digest(auth.username or '', expected_user)
            or not secrets.compare_digest(auth.password or '', expected_password)):
        return Response('Unauthorized', 401, {'WWW-Authenticate': 'Basic realm="Authorization Required"'})
    return None


def questionnaire_not_found(questionnaire_id):
    return f"Questionnaire {questionnaire_id} not found", 404


def questionnaire_fields(form):
    """Read title, problem and questions from a submitted edit form.

    problem and questions arrive as JSON text; a parse error is not caught here.
    """
    return {
        'title': form.get('title'),
        'problem': json.loads(form.get('problem', '')),
        'questions': json.loads(form.get('questions', '')),
    }


def require_questionnaire(questionnaire_id):
    """Fetch a questionnaire for routes that report a missing one as a server error."""
    questionnaire = db.session.get(Questionnaire, questionnaire_id)
    if questionnaire is None:
        raise LookupError(f"Questionnaire {questionnaire_id} does not exist")
    return questionnaire


# ============================================================================
# QUESTIONNAIRE AUTHORING
# ============================================================================

@admin.route('', methods=['GET'])
def list_questionnaires():
    """List all questionnaires"""
    questionnaires = Questionnaire.query.order_by(Questionnaire.id).all()
    return render_template('admin/home.html', questionnaires=questionnaires)


@admin.route('/new/edit', methods=['GET'])
def new_questionnaire_form():
    """Empty edit form for a new questionnaire"""
    return render_template('admin/edit.html', questionnaire_id='new')


@admin.route('/<int:questionnaire_id>/edit', methods=['GET'])
def edit_questionnaire_form(questionnaire_id):
    """Edit form with problem and questions pretty-printed for editing"""
    questionnaire = db.session.get(Questionnaire, questionnaire_id)
    if questionnaire is None:
        return questionnaire_not_found(questionnaire_id)

    return render_template(
        'admin/edit.html',
        questionnaire_id=questionnaire.id,
        questionnaire={
            'title': questionnaire.title,
            'problem': json.dumps(questionnaire.problem, indent=2, ensure_ascii=False),
            'questions': json.dumps(questionnaire.questions, indent=2, ensure_ascii=False),
        },
    )


@admin.route('/new', methods=['POST'])
def create_questionnaire():
    """Create a questionnaire from the edit form"""
    questionnaire = Questionnaire(**questionnaire_fields(request.form))

    db.session.add(questionnaire)
    db.session.commit()

    return redirect(f'/admin/{questionnaire.id}')


@admin.route('/<int:questionnaire_id>', methods=['POST'])
def update_questionnaire(questionnaire_id):
    """Overwrite title, problem and questions of an existing questionnaire"""
    questionnaire = db.session.get(Questionnaire, questionnaire_id)
    if questionnaire is None:
        return questionnaire_not_found(questionnaire_id)

    questionnaire.update(**questionnaire_fields(request.form))
    db.session.commit()

    return redirect(f'/admin/{questionnaire.id}')


# ============================================================================
# SURVEY LINKS & RESULTS
# ============================================================================

@admin.route('/<int:questionnaire_id>/generate-urls', methods=['POST'])
def generate_urls(questionnaire_id):
    """Create a batch of empty results, one fresh link token each"""
    questionnaire = db.session.get(Questionnaire, questionnaire_id)
    if questionnaire is None:
        return questionnaire_not_found(questionnaire_id)

    count = request.form.get('urls', 0, type=int)
    results = [
        Result(questionnaire_id=questionnaire.id, url=random_token())
        for _ in range(max(count, 0))
    ]

    db.session.add_all(results)
    db.session.commit()
    current_app.logger.info(f"Generated {len(results)} survey links for questionnaire {questionnaire.id}")

    return redirect(f'/admin/{questionnaire.id}')


@admin.route('/<int:questionnaire_id>', methods=['GET'])
def view_questionnaire(questionnaire_id):
    """Questionnaire together with all of its results"""
    questionnaire = require_questionnaire(questionnaire_id)
    results = Result.for_questionnaire(questionnaire_id)
    return render_template('admin/view.html', questionnaire=questionnaire, results=results)


@admin.route('/<int:questionnaire_id>/export-urls', methods=['GET'])
def export_urls(questionnaire_id):
    """Full survey links, one per line"""
    require_questionnaire(questionnaire_id)
    host = current_app.config['WEB_HOST']
    urls = [f"{host}/{result.url}" for result in Result.for_questionnaire(questionnaire_id)]
    return Response('\r\n'.join(urls), mimetype='text/plain')


@admin.route('/<int:questionnaire_id>/export-results', methods=['GET'])
def export_results(questionnaire_id):
    """Raw result rows as a JSON array"""
    results = Result.for_questionnaire(questionnaire_id)
    return jsonify([result.to_dict() for result in results])
