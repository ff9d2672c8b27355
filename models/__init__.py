from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Import models
from models.users import User

from models.courses import Course
from models.course_lessons import Lesson
from models.lesson_resources import LessonResource
from models.enrollments import Enrollment
from models.lesson_completions import LessonCompletion

from models.quizzes import Quiz
from models.quiz_questions import Question
from models.quiz_options import Option
from models.quiz_attempts import QuizAttempt
from models.quiz_attempts_answers import QuizAttemptAnswer
