import pytest

from classes.patches import CoursePatch, LessonPatch, OptionPatch
from models import db, Course, User
from utils.errors import InternalError, InvalidInputError, NotFoundError
from utils.helpers import percentage
from utils.tokens import decode_jwt, get_jwt_token, identity_from_token
from utils.transaction import execute_transaction, transaction


@pytest.mark.parametrize("part, whole, expected", [
    (0, 0, 0),
    (0, 4, 0),
    (3, 4, 75),
    (5, 8, 63),
    (1, 3, 33),
    (2, 3, 67),
    (1, 200, 1),
    (4, 4, 100),
])
def test_percentage(part, whole, expected):
    assert percentage(part, whole) == expected


class TestPatches:

    def test_only_present_fields_apply(self, course):
        patch = CoursePatch.from_json({"title": "Renamed", "description": None})

        assert patch.present_fields() == ["title"]
        assert patch.apply(course) == 1
        assert course.title == "Renamed"
        assert course.description == "An introduction to the Python language."

    def test_empty_patch_is_falsy(self):
        assert not CoursePatch.from_json({})

    def test_camel_case_keys(self):
        assert LessonPatch.from_json({"videoUrl": "https://v.example.com"}).video_url == "https://v.example.com"
        assert LessonPatch.from_json({"video_url": "https://v.example.com"}).video_url is None

    def test_false_counts_as_present(self):
        patch = OptionPatch.from_json({"isCorrect": False})
        assert patch.present_fields() == ["is_correct"]

    def test_text_is_stripped(self):
        patch = CoursePatch.from_json({"title": "  Renamed\n", "instructor": " Grace Hopper"})
        assert patch.title == "Renamed"
        assert patch.instructor == "Grace Hopper"


class TestTransaction:

    def test_commits_on_success(self, app):
        with transaction() as session:
            session.add(User(name="Tx User", email="tx@example.com", password_hash="x"))

        db.session.expunge_all()
        assert User.query.filter_by(email="tx@example.com").count() == 1

    def test_domain_error_rolls_back_and_passes_through(self, app):
        with pytest.raises(NotFoundError):
            with transaction() as session:
                session.add(User(name="Tx User", email="tx@example.com", password_hash="x"))
                session.flush()
                raise NotFoundError("gone")

        assert User.query.count() == 0

    def test_unexpected_error_becomes_internal(self, app):
        with pytest.raises(InternalError) as exc:
            with transaction() as session:
                session.add(User(name="Tx User", email="tx@example.com", password_hash="x"))
                session.flush()
                raise KeyError("boom")

        assert isinstance(exc.value.__cause__, KeyError)
        assert User.query.count() == 0

    def test_execute_transaction_runs_in_order(self, app):
        def add_course(session):
            course = Course(title="Batch", description="Created in a batch.", instructor="Bot", price=0)
            session.add(course)
            session.flush()
            return course.id

        def count_courses(session):
            return session.query(Course).count()

        course_id, count = execute_transaction([add_course, count_courses])
        assert count == 1
        assert db.session.get(Course, course_id).title == "Batch"

    def test_execute_transaction_is_all_or_nothing(self, app):
        def add_course(session):
            session.add(Course(title="Batch", description="Created in a batch.", instructor="Bot", price=0))

        def fail(session):
            raise InvalidInputError("bad row")

        with pytest.raises(InvalidInputError):
            execute_transaction([add_course, fail])
        assert Course.query.count() == 0


class TestTokens:

    def test_round_trip(self, app):
        token = get_jwt_token({"user_id": 7, "role": "student"})
        identity = identity_from_token(token)
        assert identity.user_id == 7
        assert identity.role == "student"

    def test_expired_token(self, app):
        app.config["JWT_EXPIRATION_HOURS"] = -1
        token = get_jwt_token({"user_id": 7, "role": "student"})
        assert decode_jwt(token) is None

    def test_token_without_user(self, app):
        assert identity_from_token(get_jwt_token({"role": "admin"})) is None
