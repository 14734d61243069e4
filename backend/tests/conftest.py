import os
import sys
import random
import pytest

# Ensure the backend root (containing the `predictiongame` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from predictiongame import create_app, db
from predictiongame.services.games.domain import Answer, Question


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    NUM_QUESTIONS = 12
    CORS_ORIGINS = []
    QUESTIONS_FILE = 'questions.json'


def make_questions(count=20):
    return [
        Question(id=f'q{i}', text=f'Question {i}?', bound_low=float(i * 10), bound_high=float(i * 10 + 5))
        for i in range(count)
    ]


def make_answers(questions, hit=True):
    """One answer per question; `hit` decides whether each answer overlaps the true range."""
    answers = []
    for q in questions:
        if hit:
            answers.append(Answer(question=q, lower_bound=q.bound_low - 1, upper_bound=q.bound_low + 1))
        else:
            answers.append(Answer(question=q, lower_bound=q.bound_high + 1, upper_bound=q.bound_high + 2))
    return answers


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import predictiongame.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def seeded_questions(flask_app):
    from predictiongame.models import QuestionModel
    questions = make_questions()
    for q in questions:
        db.session.add(QuestionModel.from_domain(q))
    db.session.commit()
    return questions


@pytest.fixture()
def rng():
    return random.Random(1234)
