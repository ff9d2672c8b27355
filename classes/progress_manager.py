from flask import current_app
from sqlalchemy.exc import IntegrityError
from models import db, Course, Lesson, LessonCompletion, Quiz, QuizAttempt
from classes.enrollment_manager import EnrollmentManager
from utils.errors import NotFoundError, ForbiddenError
from utils.helpers import format_datetime, percentage
from utils.transaction import transaction


class ProgressManager:
    @staticmethod
    def mark_lesson_complete(lesson_id, user_id):
        """Record a completion; returns False when it already existed."""
        lesson = db.session.get(Lesson, lesson_id)
        if not lesson:
            raise NotFoundError("Lesson not found", resource="lesson")

        if not EnrollmentManager.is_enrolled(user_id, lesson.course_id):
            raise ForbiddenError("You must be enrolled in this course to mark lessons as complete")

        with transaction() as session:
            if LessonCompletion.find(user_id, lesson_id):
                return False
            session.add(LessonCompletion(user_id=user_id, lesson_id=lesson_id))
            try:
                session.flush()
            except IntegrityError:
                # completed by a concurrent request after the lookup
                session.rollback()
                return False

        current_app.logger.info(f"User {user_id} completed lesson {lesson_id}")
        return True

    @staticmethod
    def get_lesson_completions(user_id):
        return LessonCompletion.find_by_user(user_id)

    @staticmethod
    def _progress_for(course_id, user_id):
        lessons = Lesson.find_by_course(course_id)
        lesson_ids = {lesson.id for lesson in lessons}
        completed = [
            c for c in LessonCompletion.find_by_user(user_id) if c.lesson_id in lesson_ids
        ]

        # Score and activity come from the course's first quiz only.
        quizzes = Quiz.find_by_course(course_id)
        attempts = QuizAttempt.for_quiz_and_user(quizzes[0].id, user_id) if quizzes else []
        latest = attempts[0] if attempts else None

        return {
            "courseId": course_id,
            "totalLessons": len(lessons),
            "completedLessons": len(completed),
            "lessonProgress": f"{percentage(len(completed), len(lessons))}%",
            "totalQuizzes": len(quizzes),
            "latestQuizScore": latest.score if latest else None,
            "lastActivity": format_datetime(latest.attempted_at) if latest else None,
        }

    @staticmethod
    def course_progress(course_id, user_id):
        if not db.session.get(Course, course_id):
            raise NotFoundError("Course not found", resource="course")

        if not EnrollmentManager.is_enrolled(user_id, course_id):
            raise ForbiddenError("Not enrolled in this course")

        return ProgressManager._progress_for(course_id, user_id)

    @staticmethod
    def user_progress(user_id):
        progress = []
        for enrollment, course in EnrollmentManager.enrollments_for_user(user_id):
            progress.append({
                **ProgressManager._progress_for(course.id, user_id),
                "courseTitle": course.title,
                "enrolledAt": format_datetime(enrollment.enrolled_at),
            })
        return progress
