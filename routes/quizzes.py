from flask import Blueprint, jsonify
from models import db, Quiz, Question, Option
from classes.patches import QuizPatch, QuestionPatch, OptionPatch
from classes.validators import (
    validate_input, validate_option_flag, QUIZ_RULES, QUESTION_RULES, OPTION_RULES,
)
from routes.courses import get_course_or_404
from utils.errors import InvalidInputError, NotFoundError
from utils.helpers import get_json_body
from utils.transaction import transaction
from utils.utils import admin_required

quizzes_bp = Blueprint("quizzes", __name__)


def _get_or_404(model, object_id, label):
    obj = db.session.get(model, object_id)
    if not obj:
        raise NotFoundError(f"{label} not found", resource=label.lower())
    return obj


def _apply_patch(patch, entity):
    with transaction():
        if not patch.apply(entity):
            raise InvalidInputError("No changes made")


def _delete(entity):
    with transaction() as session:
        session.delete(entity)


# Quizzes
@quizzes_bp.route("/courses/<int:course_id>/quizzes", methods=["GET"])
def get_quizzes_by_course(course_id):
    get_course_or_404(course_id)
    return jsonify([quiz.to_dict() for quiz in Quiz.find_by_course(course_id)]), 200


@quizzes_bp.route("/quizzes/<int:quiz_id>", methods=["GET"])
def get_quiz_by_id(quiz_id):
    quiz = _get_or_404(Quiz, quiz_id, "Quiz")
    return jsonify(quiz.to_dict(include_questions=True)), 200


@quizzes_bp.route("/courses/<int:course_id>/quizzes", methods=["POST"])
@admin_required
def create_quiz(identity, course_id):
    data = get_json_body()
    validate_input(data, QUIZ_RULES)
    get_course_or_404(course_id)

    with transaction() as session:
        quiz = Quiz(course_id=course_id, title=data["title"].strip())
        session.add(quiz)

    return jsonify({"message": "Quiz created successfully", "quiz": quiz.to_dict()}), 201


@quizzes_bp.route("/quizzes/<int:quiz_id>", methods=["PUT"])
@admin_required
def update_quiz(identity, quiz_id):
    data = get_json_body()
    validate_input(data, QUIZ_RULES, partial=True)

    quiz = _get_or_404(Quiz, quiz_id, "Quiz")
    _apply_patch(QuizPatch.from_json(data), quiz)
    return jsonify({"message": "Quiz updated successfully", "quiz": quiz.to_dict()}), 200


@quizzes_bp.route("/quizzes/<int:quiz_id>", methods=["DELETE"])
@admin_required
def delete_quiz(identity, quiz_id):
    _delete(_get_or_404(Quiz, quiz_id, "Quiz"))
    return jsonify({"message": "Quiz deleted successfully"}), 200


# Questions
@quizzes_bp.route("/quizzes/<int:quiz_id>/questions", methods=["GET"])
def get_questions_by_quiz(quiz_id):
    _get_or_404(Quiz, quiz_id, "Quiz")
    return jsonify([q.to_dict(include_options=True) for q in Question.find_by_quiz(quiz_id)]), 200


@quizzes_bp.route("/questions/<int:question_id>", methods=["GET"])
def get_question_by_id(question_id):
    question = _get_or_404(Question, question_id, "Question")
    return jsonify(question.to_dict(include_options=True)), 200


@quizzes_bp.route("/quizzes/<int:quiz_id>/questions", methods=["POST"])
@admin_required
def create_question(identity, quiz_id):
    data = get_json_body()
    validate_input(data, QUESTION_RULES)
    _get_or_404(Quiz, quiz_id, "Quiz")

    with transaction() as session:
        question = Question(quiz_id=quiz_id, text=data["text"].strip())
        session.add(question)

    return jsonify({"message": "Question created successfully", "question": question.to_dict()}), 201


@quizzes_bp.route("/questions/<int:question_id>", methods=["PUT"])
@admin_required
def update_question(identity, question_id):
    data = get_json_body()
    validate_input(data, QUESTION_RULES, partial=True)

    question = _get_or_404(Question, question_id, "Question")
    _apply_patch(QuestionPatch.from_json(data), question)
    return jsonify({"message": "Question updated successfully", "question": question.to_dict()}), 200


@quizzes_bp.route("/questions/<int:question_id>", methods=["DELETE"])
@admin_required
def delete_question(identity, question_id):
    _delete(_get_or_404(Question, question_id, "Question"))
    return jsonify({"message": "Question deleted successfully"}), 200


# Options
@quizzes_bp.route("/questions/<int:question_id>/options", methods=["POST"])
@admin_required
def add_option(identity, question_id):
    data = get_json_body()
    validate_input(data, OPTION_RULES)
    validate_option_flag(data.get("isCorrect"))
    _get_or_404(Question, question_id, "Question")

    with transaction() as session:
        option = Option(question_id=question_id, text=data["text"].strip(), is_correct=bool(data.get("isCorrect")))
        session.add(option)

    return jsonify({"message": "Option added successfully", "option": option.to_dict()}), 201


@quizzes_bp.route("/options/<int:option_id>", methods=["PUT"])
@admin_required
def update_option(identity, option_id):
    data = get_json_body()
    validate_input(data, OPTION_RULES, partial=True)
    validate_option_flag(data.get("isCorrect"))

    option = _get_or_404(Option, option_id, "Option")
    _apply_patch(OptionPatch.from_json(data), option)
    return jsonify({"message": "Option updated successfully", "option": option.to_dict()}), 200


@quizzes_bp.route("/options/<int:option_id>", methods=["DELETE"])
@admin_required
def delete_option(identity, option_id):
    _delete(_get_or_404(Option, option_id, "Option"))
    return jsonify({"message": "Option deleted successfully"}), 200
