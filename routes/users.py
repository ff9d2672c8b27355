from flask import Blueprint, jsonify, request
from models import db, User
from classes.enrollment_manager import EnrollmentManager
from classes.patches import UserPatch, AdminUserPatch
from classes.validators import validate_input, validate_role, USER_RULES
from utils.errors import InvalidInputError, NotFoundError
from utils.helpers import get_json_body, get_pagination_args, paginate
from utils.transaction import transaction
from utils.utils import login_required, admin_required, student_required

users_bp = Blueprint("users", __name__)


def _get_user_or_404(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found", resource="user")
    return user


def _update_user(user, patch):
    if patch.email:
        existing = User.find_by_email(patch.email)
        if existing and existing.id != user.id:
            raise InvalidInputError("Email already in use")

    with transaction():
        if not patch.apply(user):
            raise InvalidInputError("No changes made")
    return user


@users_bp.route("/me", methods=["GET"])
@login_required
def get_current_user(identity):
    return jsonify(_get_user_or_404(identity.user_id).to_dict()), 200


@users_bp.route("/me", methods=["PUT"])
@login_required
def update_current_user(identity):
    data = get_json_body()
    validate_input(data, USER_RULES, partial=True)

    user = _update_user(_get_user_or_404(identity.user_id), UserPatch.from_json(data))
    return jsonify({"message": "Profile updated successfully", "user": user.to_dict()}), 200


@users_bp.route("/me/enrollments", methods=["GET"])
@student_required
def get_my_enrollments(identity):
    page, limit = get_pagination_args()
    rows, _ = paginate(EnrollmentManager.enrollments_for_user(identity.user_id), page, limit)
    return jsonify([
        {**enrollment.to_dict(), "title": course.title, "instructor": course.instructor}
        for enrollment, course in rows
    ]), 200


# Admin: list users
@users_bp.route("", methods=["GET"])
@admin_required
def get_all_users(identity):
    page, limit = get_pagination_args()
    search = request.args.get("search", "").strip()

    query = User.query
    if search:
        term = f"%{search}%"
        query = query.filter(User.name.like(term) | User.email.like(term))

    users, pagination = paginate(query.order_by(User.created_at.desc(), User.id.desc()), page, limit)
    return jsonify({"users": [u.to_dict() for u in users], "pagination": pagination}), 200


@users_bp.route("/<int:user_id>", methods=["GET"])
@admin_required
def get_user_by_id(identity, user_id):
    return jsonify(_get_user_or_404(user_id).to_dict()), 200


@users_bp.route("/<int:user_id>", methods=["PUT"])
@admin_required
def update_user(identity, user_id):
    data = get_json_body()
    validate_input(data, USER_RULES, partial=True)
    validate_role(data.get("role"))

    user = _update_user(_get_user_or_404(user_id), AdminUserPatch.from_json(data))
    return jsonify({"message": "User updated successfully", "user": user.to_dict()}), 200


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@admin_required
def delete_user(identity, user_id):
    user = _get_user_or_404(user_id)
    with transaction() as session:
        session.delete(user)
    return jsonify({"message": "User deleted successfully"}), 200
