import pytest

from app import create_app
from models import db
from tests.factories import make_user, make_course


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def student(app):
    return make_user()


@pytest.fixture
def admin(app):
    return make_user(name="Admin User", email="admin@example.com", role="admin")


@pytest.fixture
def course(app):
    return make_course()
