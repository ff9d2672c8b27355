import datetime
from dataclasses import dataclass
from typing import Optional

import jwt
from flask import current_app


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, decoded from a bearer token."""
    user_id: int
    role: str


def get_jwt_token(user_data):
    """Generate JWT token with user payload"""
    if not user_data:
        raise ValueError("User data must be provided to generate JWT token")

    hours = current_app.config["JWT_EXPIRATION_HOURS"]
    expiration = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=hours)
    payload = {"exp": expiration, **user_data}

    return jwt.encode(
        payload,
        current_app.config["JWT_SECRET_KEY"],
        algorithm=current_app.config["JWT_ALGORITHM"],
    )


def decode_jwt(token) -> Optional[dict]:
    """Decode and validate a JWT token; None when expired or invalid."""
    try:
        return jwt.decode(
            token,
            current_app.config["JWT_SECRET_KEY"],
            algorithms=[current_app.config["JWT_ALGORITHM"]],
        )
    except jwt.ExpiredSignatureError:
        current_app.logger.info("Token expired")
        return None
    except jwt.InvalidTokenError:
        current_app.logger.info("Invalid token provided")
        return None


def identity_from_token(token) -> Optional[Identity]:
    payload = decode_jwt(token)
    if not payload or payload.get("user_id") is None:
        return None
    return Identity(user_id=payload["user_id"], role=payload.get("role"))
