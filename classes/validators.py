from numbers import Number
from utils.errors import InvalidInputError
from utils.utils import ROLES

# json key -> (rule, message); a rule gets the raw value
USER_RULES = {
    "name": (lambda v: _min_text(v, 2), "Name must be at least 2 characters long"),
    "email": (lambda v: isinstance(v, str) and "@" in v, "Valid email is required"),
    "password": (lambda v: isinstance(v, str) and len(v) >= 6, "Password must be at least 6 characters long"),
}

COURSE_RULES = {
    "title": (lambda v: _min_text(v, 3), "Title must be at least 3 characters long"),
    "description": (lambda v: _min_text(v, 10), "Description must be at least 10 characters long"),
    "instructor": (lambda v: _min_text(v, 2), "Instructor name must be at least 2 characters long"),
}

LESSON_RULES = {
    "title": (lambda v: _min_text(v, 3), "Title must be at least 3 characters long"),
    "videoUrl": (lambda v: isinstance(v, str) and "http" in v, "Valid video URL is required"),
}

QUIZ_RULES = {
    "title": (lambda v: _min_text(v, 3), "Quiz title must be at least 3 characters long"),
}

QUESTION_RULES = {
    "text": (lambda v: _min_text(v, 5), "Question text must be at least 5 characters long"),
}

OPTION_RULES = {
    "text": (lambda v: _min_text(v, 1), "Option text is required"),
}


def _min_text(value, length):
    return isinstance(value, str) and len(value.strip()) >= length


def validate_price(price):
    if price is None:
        return
    if isinstance(price, bool) or not isinstance(price, Number) or price < 0:
        raise InvalidInputError("Price must be a non-negative number")


def validate_input(data, rules, partial=False):
    """Check `data` against `rules`; the first failing field wins.

    With `partial`, absent fields are skipped (update payloads).
    """
    for key, (rule, message) in rules.items():
        if partial and key not in data:
            continue
        if not rule(data.get(key)):
            raise InvalidInputError(message)


def validate_course_input(data, partial=False):
    validate_input(data, COURSE_RULES, partial=partial)
    validate_price(data.get("price"))


def validate_role(role):
    if role is not None and role not in ROLES:
        raise InvalidInputError(f"Role must be one of: {', '.join(ROLES)}")


def validate_option_flag(is_correct):
    if is_correct is not None and not isinstance(is_correct, bool):
        raise InvalidInputError("isCorrect must be a boolean")
