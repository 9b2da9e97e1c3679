import pytest

from app import create_app
from config import TestConfig
from extensions import db as _db
from models import User, Project, Evaluation, JudgeAssignment
from store import EvaluationStore


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def store(app):
    return EvaluationStore(_db)


@pytest.fixture
def create_user(db):
    counter = {'n': 0}

    def _create_user(**kw):
        counter['n'] += 1
        password = kw.pop('password', 'secret123')
        data = {
            'username': f"user{counter['n']}",
            'role': 'judge',
            'name': None,
        }
        data.update(kw)
        user = User(**data)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user
    return _create_user


@pytest.fixture
def create_project(db):
    def _create_project(**kw):
        data = {
            'name': 'Proyecto',
            'course': 'PRIMERO A',
            'advisors': 'N/A',
        }
        data.update(kw)
        project = Project(**data)
        db.session.add(project)
        db.session.commit()
        return project
    return _create_project


@pytest.fixture
def assign(db):
    def _assign(judge, project):
        db.session.add(JudgeAssignment(judge_id=judge.id, project_id=project.id))
        db.session.commit()
    return _assign


@pytest.fixture
def create_evaluation(db):
    def _create_evaluation(judge, project, total_score, **scores):
        evaluation = Evaluation(judge_id=judge.id, project_id=project.id,
                                total_score=total_score, **scores)
        db.session.add(evaluation)
        db.session.commit()
        return evaluation
    return _create_evaluation


@pytest.fixture
def login_as(client):
    def _login_as(user):
        with client.session_transaction() as sess:
            sess['user_id'] = user.id
            sess['user_role'] = user.role
    return _login_as
