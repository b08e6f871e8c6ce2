"""
Elicit Survey System - Database Models
======================================

This file defines the two database tables of the survey system:
- Questionnaire: An authored survey (title, problem statement, questions)
- Result: One respondent link for a questionnaire and the answers given through it

NOTES:
- problem, questions and answers are opaque JSON documents; the server only
  stores them and never looks inside
- Each Result gets a unique 8-character url token, respondents visit /{url}
- Rows are never deleted by the application
"""

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.dialects.postgresql import JSONB
from datetime import datetime

db = SQLAlchemy()

# JSONB on PostgreSQL, plain JSON everywhere else (SQLite in development)
JSONDocument = db.JSON().with_variant(JSONB(), 'postgresql')


def _isoformat(value):
    return value.isoformat() if value else None


class Questionnaire(db.Model):
    """
    A questionnaire authored in the admin panel.
    """
    __tablename__ = 'questionnaires'

    id = db.Column(db.Integer, primary_key=True)

    title = db.Column(db.Text)
    problem = db.Column(JSONDocument)  # Free-form problem statement shown to respondents
    questions = db.Column(JSONDocument)  # Shape is owned by the client

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def update(self, **fields):
        for field, value in fields.items():
            setattr(self, field, value)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'problem': self.problem,
            'questions': self.questions,
            'created_at': _isoformat(self.created_at),
            'updated_at': _isoformat(self.updated_at),
        }


class Result(db.Model):
    """
    A single survey link and whatever the respondent has submitted through it.
    Created empty in batches, then filled in by the respondent.
    """
    __tablename__ = 'results'

    id = db.Column(db.Integer, primary_key=True)
    questionnaire_id = db.Column(db.Integer, db.ForeignKey('questionnaires.id'))

    answers = db.Column(JSONDocument, nullable=True)  # Whole submitted body, last write wins
    url = db.Column(db.CHAR(8), unique=True)  # Public token

    last_visited = db.Column(db.DateTime, nullable=True)
    last_completed = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def for_questionnaire(cls, questionnaire_id):
        return cls.query.filter_by(questionnaire_id=questionnaire_id).order_by(cls.id).all()

    @classmethod
    def find_by_url(cls, url):
        return cls.query.filter_by(url=url).first()

    def to_dict(self):
        return {
            'id': self.id,
            'questionnaire_id': self.questionnaire_id,
            'answers': self.answers,
            'url': self.url,
            'last_visited': _isoformat(self.last_visited),
            'last_completed': _isoformat(self.last_completed),
            'created_at': _isoformat(self.created_at),
            'updated_at': _isoformat(self.updated_at),
        }
