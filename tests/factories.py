"""Builders for test data; each commits so HTTP requests can see it."""
from models import db, User, Course, Lesson, Enrollment, Quiz, Question, Option
from utils.tokens import get_jwt_token


def make_user(name="Student One", email="student@example.com", role="student", password="secret123"):
    user = User(name=name, email=email, role=role)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def make_course(title="Python Basics", description="An introduction to the Python language."):
    course = Course(
        title=title,
        description=description,
        instructor="Ada Lovelace",
        price=0,
    )
    db.session.add(course)
    db.session.commit()
    return course


def make_lessons(course, count):
    lessons = [
        Lesson(course_id=course.id, title=f"Lesson {i + 1}", video_url=f"https://videos.example.com/{i + 1}")
        for i in range(count)
    ]
    db.session.add_all(lessons)
    db.session.commit()
    return lessons


def make_quiz(course, question_count, title="Chapter quiz"):
    """Quiz whose questions each have one correct and one wrong option.

    Returns (quiz, [(question, correct_option, wrong_option), ...]).
    """
    quiz = Quiz(course_id=course.id, title=title)
    db.session.add(quiz)
    db.session.flush()

    rows = []
    for i in range(question_count):
        question = Question(quiz_id=quiz.id, text=f"What is answer number {i + 1}?")
        db.session.add(question)
        db.session.flush()
        correct = Option(question_id=question.id, text="right", is_correct=True)
        wrong = Option(question_id=question.id, text="wrong", is_correct=False)
        db.session.add_all([correct, wrong])
        db.session.flush()
        rows.append((question, correct, wrong))

    db.session.commit()
    return quiz, rows


def enroll(user, course):
    enrollment = Enrollment(user_id=user.id, course_id=course.id)
    db.session.add(enrollment)
    db.session.commit()
    return enrollment


def answers_for(rows, correct_count):
    """Answer payload getting the first `correct_count` questions right."""
    return [
        {
            "questionId": question.id,
            "selectedOptionId": (correct if i < correct_count else wrong).id,
        }
        for i, (question, correct, wrong) in enumerate(rows)
    ]


def auth_headers(user):
    token = get_jwt_token({"user_id": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}
