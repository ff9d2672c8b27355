from flask import Blueprint, jsonify, request
from models import db, Course, Lesson, Quiz
from classes.enrollment_manager import EnrollmentManager
from classes.patches import CoursePatch
from classes.validators import validate_course_input
from utils.errors import InvalidInputError, NotFoundError
from utils.helpers import get_json_body, get_pagination_args, paginate
from utils.transaction import transaction
from utils.utils import admin_required, student_required, identity_optional

courses_bp = Blueprint("courses", __name__)


def get_course_or_404(course_id):
    course = db.session.get(Course, course_id)
    if not course:
        raise NotFoundError("Course not found", resource="course")
    return course


# List courses (public)
@courses_bp.route("", methods=["GET"])
def get_all_courses():
    page, limit = get_pagination_args()
    search = request.args.get("search", "").strip()

    query = Course.query
    if search:
        term = f"%{search}%"
        query = query.filter(
            Course.title.like(term) | Course.description.like(term) | Course.instructor.like(term)
        )

    courses, pagination = paginate(query.order_by(Course.created_at.desc(), Course.id.desc()), page, limit)
    return jsonify({"courses": [c.to_dict() for c in courses], "pagination": pagination}), 200


# Course details; lesson videos only for enrolled callers
@courses_bp.route("/<int:course_id>", methods=["GET"])
@identity_optional
def get_course_by_id(identity, course_id):
    course = get_course_or_404(course_id)

    user_id = identity.user_id if identity else None
    is_enrolled = EnrollmentManager.is_enrolled(user_id, course_id)

    return jsonify({
        **course.to_dict(),
        "lessons": EnrollmentManager.filter_lessons_for_enrollment(Lesson.find_by_course(course_id), is_enrolled),
        "quizzes": [quiz.to_dict() for quiz in Quiz.find_by_course(course_id)],
    }), 200


@courses_bp.route("", methods=["POST"])
@admin_required
def create_course(identity):
    data = get_json_body()
    validate_course_input(data)

    with transaction() as session:
        course = Course(
            title=data["title"].strip(),
            description=data["description"].strip(),
            instructor=data["instructor"].strip(),
            price=data.get("price") or 0,
        )
        session.add(course)

    return jsonify({"message": "Course created successfully", "course": course.to_dict()}), 201


@courses_bp.route("/<int:course_id>", methods=["PUT"])
@admin_required
def update_course(identity, course_id):
    data = get_json_body()
    validate_course_input(data, partial=True)

    course = get_course_or_404(course_id)
    with transaction():
        if not CoursePatch.from_json(data).apply(course):
            raise InvalidInputError("No changes made")

    return jsonify({"message": "Course updated successfully", "course": course.to_dict()}), 200


@courses_bp.route("/<int:course_id>", methods=["DELETE"])
@admin_required
def delete_course(identity, course_id):
    course = get_course_or_404(course_id)
    with transaction() as session:
        session.delete(course)
    return jsonify({"message": "Course deleted successfully"}), 200


@courses_bp.route("/<int:course_id>/enroll", methods=["POST"])
@student_required
def enroll_in_course(identity, course_id):
    EnrollmentManager.enroll_student(course_id, identity.user_id)
    return jsonify({"message": "Successfully enrolled in course"}), 201


@courses_bp.route("/<int:course_id>/enrollments", methods=["GET"])
@admin_required
def get_course_enrollments(identity, course_id):
    get_course_or_404(course_id)
    page, limit = get_pagination_args()

    rows, _ = paginate(EnrollmentManager.enrollments_for_course(course_id), page, limit)
    return jsonify([
        {**enrollment.to_dict(), "name": user.name, "email": user.email}
        for enrollment, user in rows
    ]), 200
