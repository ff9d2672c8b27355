from functools import wraps
from flask import request
from utils.errors import UnauthorizedError, ForbiddenError
from utils.tokens import identity_from_token

STUDENT = "student"
ADMIN = "admin"
ROLES = (STUDENT, ADMIN)


def bearer_token():
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def current_identity():
    """Identity of the caller, or None for anonymous or bad tokens."""
    token = bearer_token()
    if not token:
        return None
    return identity_from_token(token)


def role_required(*roles):
    """Reject callers without a valid token or outside `roles`.

    The decoded Identity is passed to the view as its first argument.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            identity = current_identity()
            if identity is None:
                raise UnauthorizedError("Authentication required")

            if identity.role not in roles:
                raise ForbiddenError(
                    "Access denied. Insufficient permissions.",
                    details={"required": list(roles), "current": identity.role},
                )

            return f(identity, *args, **kwargs)

        return decorated_function

    return decorator


login_required = role_required(*ROLES)
student_required = role_required(STUDENT)
admin_required = role_required(ADMIN)


def identity_optional(f):
    """Pass the caller's Identity (or None) to public views."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        return f(current_identity(), *args, **kwargs)

    return decorated_function
