import base64
import json

import pytest

from elicit.app import create_app
from elicit.models import db


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'elicit.db'}",
        'ADMIN_PASSWORD': 'secret',
        'WEB_HOST': 'https://example.com',
        'BACKGROUND_TASKS_EAGER': True,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def basic_auth(username, password):
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {'Authorization': f'Basic {token}'}


@pytest.fixture
def admin_headers():
    return basic_auth('admin', 'secret')


@pytest.fixture
def create_questionnaire(client, admin_headers):
    """POST a new questionnaire through the admin form and return its id"""
    def create(title='T', problem=None, questions=None):
        response = client.post('/admin/new', headers=admin_headers, data={
            'title': title,
            'problem': json.dumps({} if problem is None else problem),
            'questions': json.dumps([] if questions is None else questions),
        })
        assert response.status_code == 302
        return int(response.headers['Location'].rsplit('/', 1)[1])
    return create
