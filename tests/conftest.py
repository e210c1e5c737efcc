import itertools
from datetime import date

import pytest

from config import TestConfig
from lms import create_app, db
from lms.models import User, AcademicSession, Course

PASSWORD = 'password123'

_emails = itertools.count(1)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Insert a user directly and return ``(id, email)``."""
    def _make_user(role='student', email=None, is_active=True, **kwargs):
        email = email or f'{role}{next(_emails)}@example.edu'
        with app.app_context():
            user = User(email=email, role=role, is_active=is_active, **kwargs)
            user.set_password(PASSWORD)
            db.session.add(user)
            db.session.commit()
            return user.id, email
    return _make_user


@pytest.fixture
def signed_in(app, make_user):
    """Create a user of ``role`` and return a test client signed in as them."""
    def _signed_in(role='student', **kwargs):
        user_id, email = make_user(role, **kwargs)
        client = app.test_client()
        response = client.post('/api/auth/signin', json={'email': email, 'password': PASSWORD})
        assert response.status_code == 200, response.get_json()
        return client, user_id
    return _signed_in


@pytest.fixture
def make_session(app):
    def _make_session(name='2025/2026 First Semester', is_active=True,
                      start_date=date(2025, 9, 1), end_date=date(2026, 1, 31)):
        with app.app_context():
            session = AcademicSession(name=name, start_date=start_date, end_date=end_date, is_active=is_active)
            db.session.add(session)
            db.session.commit()
            return session.id
    return _make_session


@pytest.fixture
def make_course(app):
    def _make_course(code, session_id=None, lecturer_id=None, name=None, credits=3, is_active=True):
        with app.app_context():
            course = Course(code=code, name=name or f'Course {code}', credits=credits,
                            session_id=session_id, lecturer_id=lecturer_id, is_active=is_active)
            db.session.add(course)
            db.session.commit()
            return course.id
    return _make_course
