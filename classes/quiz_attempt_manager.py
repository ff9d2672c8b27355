"""
Quiz attempt engine.

Validates a submission against the quiz's question set, stores the attempt
and one answer row per submitted answer in a single transaction, and scores
it as the rounded percentage of correct answers.
"""
from collections import namedtuple
from flask import current_app
from models import db, Course, Quiz, Question, Option, QuizAttempt, QuizAttemptAnswer
from utils.errors import NotFoundError, InvalidInputError, ForbiddenError
from utils.helpers import percentage
from utils.transaction import transaction

SubmittedAnswer = namedtuple("SubmittedAnswer", ["question_id", "selected_option_id"])
AttemptResult = namedtuple("AttemptResult", ["attempt_id", "score", "correct_answers", "total_questions"])


def _is_id(value):
    return isinstance(value, int) and not isinstance(value, bool)


def parse_answers(answers):
    """Turn the request's answer list into SubmittedAnswer tuples."""
    if not isinstance(answers, list) or not answers:
        raise InvalidInputError("Answers array is required")

    parsed = []
    for index, answer in enumerate(answers):
        if not isinstance(answer, dict):
            raise InvalidInputError(f"Answer {index} must be an object")
        question_id = answer.get("questionId")
        selected_option_id = answer.get("selectedOptionId")
        if not _is_id(question_id) or not _is_id(selected_option_id):
            raise InvalidInputError(
                f"Answer {index} needs integer questionId and selectedOptionId"
            )
        parsed.append(SubmittedAnswer(question_id, selected_option_id))
    return parsed


class QuizAttemptManager:
    @staticmethod
    def submit(quiz_id, user_id, answers):
        answers = parse_answers(answers)

        quiz = db.session.get(Quiz, quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found", resource="quiz")

        questions = Question.find_by_quiz(quiz_id)
        question_ids = {question.id for question in questions}

        # Counts are compared, not sets: a duplicated id can stand in for an
        # omitted one.
        if len(answers) != len(questions):
            raise InvalidInputError(
                "Number of answers must match number of questions",
                details={"expected": len(questions), "received": len(answers)},
            )

        unknown = [a.question_id for a in answers if a.question_id not in question_ids]
        if unknown:
            raise InvalidInputError(
                "Invalid question IDs provided", details={"question_ids": unknown}
            )

        # Read-then-insert is not serialized; concurrent submissions by the
        # same user may share an attempt_number.
        attempt_number = QuizAttempt.count_for_quiz_and_user(quiz_id, user_id) + 1
        total_questions = len(questions)

        with transaction() as session:
            attempt = QuizAttempt(
                user_id=user_id,
                quiz_id=quiz_id,
                attempt_number=attempt_number,
                score=0,
            )
            session.add(attempt)
            session.flush()

            correct_answers = 0
            for answer in answers:
                options = Option.find_by_question(answer.question_id)
                selected = next((o for o in options if o.id == answer.selected_option_id), None)
                is_correct = bool(selected is not None and selected.is_correct)
                if is_correct:
                    correct_answers += 1

                session.add(QuizAttemptAnswer(
                    attempt_id=attempt.id,
                    question_id=answer.question_id,
                    selected_option_id=answer.selected_option_id,
                    is_correct=is_correct,
                ))

            attempt.score = percentage(correct_answers, total_questions)
            result = AttemptResult(attempt.id, attempt.score, correct_answers, total_questions)

        current_app.logger.info(
            f"User {user_id} attempt #{attempt_number} on quiz {quiz_id}: "
            f"{correct_answers}/{total_questions} ({result.score})"
        )
        return result

    @staticmethod
    def get_attempts(quiz_id, user_id):
        if not db.session.get(Quiz, quiz_id):
            raise NotFoundError("Quiz not found", resource="quiz")
        return QuizAttempt.for_quiz_and_user(quiz_id, user_id)

    @staticmethod
    def get_user_attempts(user_id):
        """All of a user's attempts, with quiz and course titles."""
        rows = (
            db.session.query(QuizAttempt, Quiz.title, Course.title)
            .join(Quiz, Quiz.id == QuizAttempt.quiz_id)
            .join(Course, Course.id == Quiz.course_id)
            .filter(QuizAttempt.user_id == user_id)
            .order_by(QuizAttempt.attempted_at.desc(), QuizAttempt.id.desc())
            .all()
        )
        return [
            {**attempt.to_dict(), "quiz_title": quiz_title, "course_title": course_title}
            for attempt, quiz_title, course_title in rows
        ]

    @staticmethod
    def get_attempt_detail(attempt_id, requesting_user_id):
        attempt = db.session.get(QuizAttempt, attempt_id)
        if not attempt:
            raise NotFoundError("Attempt not found", resource="attempt")

        if attempt.user_id != requesting_user_id:
            raise ForbiddenError("Access denied")

        rows = (
            db.session.query(QuizAttemptAnswer, Question.text, Option.text)
            .outerjoin(Question, Question.id == QuizAttemptAnswer.question_id)
            .outerjoin(Option, Option.id == QuizAttemptAnswer.selected_option_id)
            .filter(QuizAttemptAnswer.attempt_id == attempt.id)
            .order_by(QuizAttemptAnswer.id)
            .all()
        )
        answers = [
            {**answer.to_dict(), "question": question_text, "selected_text": option_text}
            for answer, question_text, option_text in rows
        ]
        return {**attempt.to_dict(), "answers": answers}

