from flask import current_app
from sqlalchemy.exc import IntegrityError
from models import db, Course, Enrollment, User
from utils.errors import NotFoundError, InvalidInputError
from utils.transaction import transaction


class EnrollmentManager:
    @staticmethod
    def is_enrolled(user_id, course_id):
        """Anonymous callers are never enrolled."""
        if not user_id:
            return False
        return db.session.query(
            Enrollment.query.filter_by(user_id=user_id, course_id=course_id).exists()
        ).scalar()

    @staticmethod
    def enroll_student(course_id, user_id):
        course = db.session.get(Course, course_id)
        if not course:
            raise NotFoundError("Course not found", resource="course")

        if EnrollmentManager.is_enrolled(user_id, course_id):
            raise InvalidInputError("Already enrolled in this course")

        with transaction() as session:
            enrollment = Enrollment(course_id=course_id, user_id=user_id)
            session.add(enrollment)
            try:
                session.flush()
            except IntegrityError:
                session.rollback()
                raise InvalidInputError("Already enrolled in this course")

        current_app.logger.info(f"User {user_id} enrolled in course {course_id}")
        return enrollment

    @staticmethod
    def enrollments_for_user(user_id):
        """The user's enrollments joined with their course, newest first."""
        return (
            db.session.query(Enrollment, Course)
            .join(Course, Course.id == Enrollment.course_id)
            .filter(Enrollment.user_id == user_id)
            .order_by(*Enrollment.recent_first())
        )

    @staticmethod
    def enrollments_for_course(course_id):
        return (
            db.session.query(Enrollment, User)
            .join(User, User.id == Enrollment.user_id)
            .filter(Enrollment.course_id == course_id)
            .order_by(*Enrollment.recent_first())
        )

    @staticmethod
    def filter_lesson_for_enrollment(lesson, is_enrolled):
        """Lesson dict without `video_url` unless the caller is enrolled."""
        data = lesson.to_dict()
        if not is_enrolled:
            data.pop("video_url", None)
        return data

    @staticmethod
    def filter_lessons_for_enrollment(lessons, is_enrolled):
        return [EnrollmentManager.filter_lesson_for_enrollment(lesson, is_enrolled) for lesson in lessons]
