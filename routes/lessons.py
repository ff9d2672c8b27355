from flask import Blueprint, jsonify, current_app
from models import db, Lesson, LessonResource
from classes.enrollment_manager import EnrollmentManager
from classes.patches import LessonPatch
from classes.validators import validate_input, LESSON_RULES
from routes.courses import get_course_or_404
from utils.errors import ForbiddenError, InvalidInputError, NotFoundError
from utils.helpers import get_json_body, get_pagination_args, paginate
from utils.transaction import transaction
from utils.utils import admin_required, identity_optional

lessons_bp = Blueprint("lessons", __name__)


def _get_lesson_or_404(lesson_id, course_id=None):
    lesson = db.session.get(Lesson, lesson_id)
    if not lesson or (course_id is not None and lesson.course_id != course_id):
        raise NotFoundError("Lesson not found", resource="lesson")
    return lesson


def _caller_enrolled(identity, course_id):
    return EnrollmentManager.is_enrolled(identity.user_id if identity else None, course_id)


@lessons_bp.route("/courses/<int:course_id>/lessons", methods=["GET"])
@identity_optional
def get_lessons_by_course(identity, course_id):
    get_course_or_404(course_id)
    page, limit = get_pagination_args(current_app.config["LESSON_PAGE_LIMIT"])

    lessons, _ = paginate(Lesson.course_query(course_id), page, limit)
    return jsonify(
        EnrollmentManager.filter_lessons_for_enrollment(lessons, _caller_enrolled(identity, course_id))
    ), 200


@lessons_bp.route("/courses/<int:course_id>/lessons/<int:lesson_id>", methods=["GET"])
@identity_optional
def get_lesson_by_id(identity, course_id, lesson_id):
    lesson = _get_lesson_or_404(lesson_id, course_id)
    data = EnrollmentManager.filter_lesson_for_enrollment(lesson, _caller_enrolled(identity, lesson.course_id))
    data["resources"] = [r.to_dict() for r in LessonResource.find_by_lesson(lesson_id)]
    return jsonify(data), 200


@lessons_bp.route("/courses/<int:course_id>/lessons", methods=["POST"])
@admin_required
def create_lesson(identity, course_id):
    data = get_json_body()
    validate_input(data, LESSON_RULES)
    get_course_or_404(course_id)

    with transaction() as session:
        lesson = Lesson(course_id=course_id, title=data["title"].strip(), video_url=data["videoUrl"])
        session.add(lesson)

    return jsonify({"message": "Lesson created successfully", "lesson": lesson.to_dict()}), 201


@lessons_bp.route("/courses/<int:course_id>/lessons/<int:lesson_id>", methods=["PUT"])
@admin_required
def update_lesson(identity, course_id, lesson_id):
    data = get_json_body()
    validate_input(data, LESSON_RULES, partial=True)

    lesson = _get_lesson_or_404(lesson_id, course_id)
    with transaction():
        if not LessonPatch.from_json(data).apply(lesson):
            raise InvalidInputError("No changes made")

    return jsonify({"message": "Lesson updated successfully", "lesson": lesson.to_dict()}), 200


@lessons_bp.route("/courses/<int:course_id>/lessons/<int:lesson_id>", methods=["DELETE"])
@admin_required
def delete_lesson(identity, course_id, lesson_id):
    lesson = _get_lesson_or_404(lesson_id, course_id)
    with transaction() as session:
        session.delete(lesson)
    return jsonify({"message": "Lesson deleted successfully"}), 200


# Lesson resources are for enrolled students only
@lessons_bp.route("/lessons/<int:lesson_id>/resources", methods=["GET"])
@identity_optional
def get_lesson_resources(identity, lesson_id):
    lesson = _get_lesson_or_404(lesson_id)
    if not _caller_enrolled(identity, lesson.course_id):
        raise ForbiddenError("You must be enrolled in this course to access lesson resources")

    return jsonify([r.to_dict() for r in LessonResource.find_by_lesson(lesson_id)]), 200


@lessons_bp.route("/lessons/<int:lesson_id>/resources", methods=["POST"])
@admin_required
def add_lesson_resource(identity, lesson_id):
    data = get_json_body()
    resource_url = data.get("resourceUrl")
    if not isinstance(resource_url, str) or not resource_url.strip():
        raise InvalidInputError("Resource URL is required")

    _get_lesson_or_404(lesson_id)
    with transaction() as session:
        resource = LessonResource(lesson_id=lesson_id, resource_url=resource_url.strip())
        session.add(resource)

    return jsonify({"message": "Resource added successfully", "resource": resource.to_dict()}), 201


@lessons_bp.route("/lessons/<int:lesson_id>/resources/<int:resource_id>", methods=["DELETE"])
@admin_required
def delete_lesson_resource(identity, lesson_id, resource_id):
    resource = db.session.get(LessonResource, resource_id)
    if not resource or resource.lesson_id != lesson_id:
        raise NotFoundError("Resource not found", resource="resource")

    with transaction() as session:
        session.delete(resource)
    return jsonify({"message": "Resource deleted successfully"}), 200
