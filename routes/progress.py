from flask import Blueprint, jsonify
from classes.progress_manager import ProgressManager
from classes.quiz_attempt_manager import QuizAttemptManager
from utils.helpers import get_json_body
from utils.utils import student_required

progress_bp = Blueprint("progress", __name__)


@progress_bp.route("/lessons/<int:lesson_id>/complete", methods=["POST"])
@student_required
def mark_lesson_complete(identity, lesson_id):
    created = ProgressManager.mark_lesson_complete(lesson_id, identity.user_id)
    message = "Lesson marked as completed" if created else "Lesson already completed"
    return jsonify({"message": message}), 200


@progress_bp.route("/me/lessons/completions", methods=["GET"])
@student_required
def get_lesson_completions(identity):
    completions = ProgressManager.get_lesson_completions(identity.user_id)
    return jsonify([c.to_dict() for c in completions]), 200


# Submit a quiz attempt
@progress_bp.route("/quizzes/<int:quiz_id>/attempts", methods=["POST"])
@student_required
def submit_quiz_attempt(identity, quiz_id):
    data = get_json_body()
    result = QuizAttemptManager.submit(quiz_id, identity.user_id, data.get("answers"))

    return jsonify({
        "message": "Quiz attempt submitted successfully",
        "attemptId": result.attempt_id,
        "score": result.score,
        "correctAnswers": result.correct_answers,
        "totalQuestions": result.total_questions,
    }), 201


@progress_bp.route("/quizzes/<int:quiz_id>/attempts", methods=["GET"])
@student_required
def get_quiz_attempts(identity, quiz_id):
    attempts = QuizAttemptManager.get_attempts(quiz_id, identity.user_id)
    return jsonify([a.to_dict() for a in attempts]), 200


@progress_bp.route("/me/attempts", methods=["GET"])
@student_required
def get_all_attempts(identity):
    return jsonify(QuizAttemptManager.get_user_attempts(identity.user_id)), 200


@progress_bp.route("/attempts/<int:attempt_id>", methods=["GET"])
@student_required
def get_attempt_details(identity, attempt_id):
    return jsonify(QuizAttemptManager.get_attempt_detail(attempt_id, identity.user_id)), 200


@progress_bp.route("/courses/<int:course_id>/progress", methods=["GET"])
@student_required
def get_course_progress(identity, course_id):
    return jsonify(ProgressManager.course_progress(course_id, identity.user_id)), 200


@progress_bp.route("/me/progress", methods=["GET"])
@student_required
def get_user_progress(identity):
    return jsonify(ProgressManager.user_progress(identity.user_id)), 200
