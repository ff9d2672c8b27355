"""
Tests for the quiz attempt engine.

Tests cover:
- Answer set validation (count, unknown questions, shape)
- Score rounding
- Attempt numbering
- Rollback of failed submissions
- Attempt listing and detail ownership
"""

import pytest

from classes.quiz_attempt_manager import QuizAttemptManager, parse_answers
from models import db, Option, QuizAttempt, QuizAttemptAnswer
from utils.errors import ForbiddenError, InternalError, InvalidInputError, NotFoundError
from tests.factories import answers_for, make_course, make_quiz, make_user


class TestAnswerValidation:

    def test_exact_answer_set_succeeds(self, student, course):
        quiz, rows = make_quiz(course, 3)
        result = QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 3))

        assert result.total_questions == 3
        assert result.correct_answers == 3
        assert result.score == 100

    def test_one_answer_short_fails(self, student, course):
        quiz, rows = make_quiz(course, 3)
        with pytest.raises(InvalidInputError):
            QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 3)[:-1])
        assert QuizAttempt.query.count() == 0

    def test_one_answer_too_many_fails(self, student, course):
        quiz, rows = make_quiz(course, 3)
        answers = answers_for(rows, 3)
        answers.append(dict(answers[0]))
        with pytest.raises(InvalidInputError):
            QuizAttemptManager.submit(quiz.id, student.id, answers)

    def test_question_from_another_quiz_fails(self, student, course):
        quiz, rows = make_quiz(course, 2)
        _, other_rows = make_quiz(course, 1, title="Other quiz")
        answers = answers_for(rows, 2)[:1] + answers_for(other_rows, 1)

        with pytest.raises(InvalidInputError) as exc:
            QuizAttemptManager.submit(quiz.id, student.id, answers)
        assert exc.value.details["question_ids"] == [other_rows[0][0].id]

    def test_duplicate_question_passes_count_check(self, student, course):
        """Only counts are compared, so a repeated question id is accepted."""
        quiz, rows = make_quiz(course, 2)
        first = answers_for(rows, 2)[0]

        result = QuizAttemptManager.submit(quiz.id, student.id, [first, dict(first)])
        assert result.correct_answers == 2
        assert result.total_questions == 2

    def test_missing_quiz_is_not_found(self, student):
        with pytest.raises(NotFoundError):
            QuizAttemptManager.submit(999, student.id, [{"questionId": 1, "selectedOptionId": 1}])

    @pytest.mark.parametrize("answers", [
        None,
        [],
        "not a list",
        [{"questionId": 1}],
        [{"questionId": "1", "selectedOptionId": 2}],
        [{"questionId": True, "selectedOptionId": 2}],
        [42],
    ])
    def test_malformed_answers_rejected(self, answers):
        with pytest.raises(InvalidInputError):
            parse_answers(answers)


class TestScoring:

    def test_three_of_four_scores_75(self, student, course):
        quiz, rows = make_quiz(course, 4)
        result = QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 3))
        assert result.score == 75

    def test_five_of_eight_rounds_half_up(self, student, course):
        quiz, rows = make_quiz(course, 8)
        result = QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 5))
        assert result.score == 63

    def test_one_of_three_rounds_down(self, student, course):
        quiz, rows = make_quiz(course, 3)
        result = QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 1))
        assert result.score == 33

    def test_option_of_other_question_counts_as_wrong(self, student, course):
        quiz, rows = make_quiz(course, 2)
        answers = [
            {"questionId": rows[0][0].id, "selectedOptionId": rows[1][1].id},
            {"questionId": rows[1][0].id, "selectedOptionId": rows[1][1].id},
        ]
        result = QuizAttemptManager.submit(quiz.id, student.id, answers)
        assert result.correct_answers == 1
        assert result.score == 50

    def test_stored_score_matches_result(self, student, course):
        quiz, rows = make_quiz(course, 4)
        result = QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 1))

        attempt = db.session.get(QuizAttempt, result.attempt_id)
        assert attempt.score == 25
        assert len(attempt.answers) == 4
        assert [a.is_correct for a in attempt.answers] == [True, False, False, False]


class TestAttemptNumbering:

    def test_sequential_attempts_are_numbered(self, student, course):
        quiz, rows = make_quiz(course, 2)
        for _ in range(3):
            QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 1))

        attempts = QuizAttemptManager.get_attempts(quiz.id, student.id)
        assert [a.attempt_number for a in attempts] == [3, 2, 1]

    def test_numbering_is_per_user(self, student, course):
        other = make_user(name="Other", email="other@example.com")
        quiz, rows = make_quiz(course, 1)

        QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 1))
        QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 1))
        QuizAttemptManager.submit(quiz.id, other.id, answers_for(rows, 1))

        assert QuizAttemptManager.get_attempts(quiz.id, other.id)[0].attempt_number == 1

    def test_get_attempts_for_missing_quiz(self, student):
        with pytest.raises(NotFoundError):
            QuizAttemptManager.get_attempts(123, student.id)


class TestAtomicity:

    def test_failure_mid_submission_leaves_no_rows(self, student, course, monkeypatch):
        quiz, rows = make_quiz(course, 3)
        real_lookup = Option.find_by_question
        calls = {"n": 0}

        def flaky_lookup(question_id):
            calls["n"] += 1
            if calls["n"] == 2:
                raise RuntimeError("connection lost")
            return real_lookup(question_id)

        monkeypatch.setattr(Option, "find_by_question", staticmethod(flaky_lookup))

        with pytest.raises(InternalError):
            QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 3))

        assert QuizAttempt.query.count() == 0
        assert QuizAttemptAnswer.query.count() == 0

    def test_answer_correctness_is_a_snapshot(self, student, course):
        quiz, rows = make_quiz(course, 1)
        result = QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 1))

        _, correct, _ = rows[0]
        correct.is_correct = False
        db.session.commit()

        detail = QuizAttemptManager.get_attempt_detail(result.attempt_id, student.id)
        assert detail["answers"][0]["is_correct"] is True
        assert detail["score"] == 100


class TestAttemptQueries:

    def test_detail_includes_question_and_option_text(self, student, course):
        quiz, rows = make_quiz(course, 2)
        result = QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 1))

        detail = QuizAttemptManager.get_attempt_detail(result.attempt_id, student.id)
        assert detail["id"] == result.attempt_id
        assert detail["attempt_number"] == 1
        assert [a["question"] for a in detail["answers"]] == [q.text for q, _, _ in rows]
        assert [a["selected_text"] for a in detail["answers"]] == ["right", "wrong"]

    def test_detail_of_someone_elses_attempt_is_forbidden(self, student, course):
        intruder = make_user(name="Intruder", email="intruder@example.com")
        quiz, rows = make_quiz(course, 1)
        result = QuizAttemptManager.submit(quiz.id, student.id, answers_for(rows, 1))

        with pytest.raises(ForbiddenError):
            QuizAttemptManager.get_attempt_detail(result.attempt_id, intruder.id)

    def test_detail_of_missing_attempt(self, student):
        with pytest.raises(NotFoundError):
            QuizAttemptManager.get_attempt_detail(404, student.id)

    def test_user_attempts_carry_titles(self, student, course):
        second_course = make_course(title="Data Science")
        quiz_a, rows_a = make_quiz(course, 1, title="Basics quiz")
        quiz_b, rows_b = make_quiz(second_course, 1, title="Pandas quiz")

        QuizAttemptManager.submit(quiz_a.id, student.id, answers_for(rows_a, 1))
        QuizAttemptManager.submit(quiz_b.id, student.id, answers_for(rows_b, 0))

        attempts = QuizAttemptManager.get_user_attempts(student.id)
        assert [(a["quiz_title"], a["course_title"]) for a in attempts] == [
            ("Pandas quiz", "Data Science"),
            ("Basics quiz", "Python Basics"),
        ]
