"""
Error types for the LMS API and the Flask handlers that render them.

Services raise these; routes never build error responses by hand.
"""

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from typing import Optional, Dict, Any


class LMSError(Exception):
    """Base exception for every failure the API reports to clients."""

    code = 'ERROR'
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        response = {
            'error': self.message,
            'code': self.code,
        }
        if self.details:
            response['details'] = self.details
        return response


class InvalidInputError(LMSError):
    code = 'INVALID_INPUT'
    status_code = 400


class UnauthorizedError(LMSError):
    code = 'UNAUTHORIZED'
    status_code = 401


class ForbiddenError(LMSError):
    code = 'FORBIDDEN'
    status_code = 403


class NotFoundError(LMSError):
    code = 'NOT_FOUND'
    status_code = 404

    def __init__(self, message: str = 'Resource not found', resource: str = None):
        super().__init__(message, details={'resource': resource} if resource else None)


class InternalError(LMSError):
    code = 'INTERNAL_ERROR'
    status_code = 500


def register_error_handlers(app):
    """Register JSON error handlers with the Flask app."""

    @app.errorhandler(LMSError)
    def handle_lms_error(error):
        if error.status_code >= 500:
            current_app.logger.error(f"{error.code}: {error.message}")
        else:
            current_app.logger.warning(f"{error.code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({
            'error': error.description,
            'code': error.name.upper().replace(' ', '_'),
        }), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        current_app.logger.exception('Internal server error')
        return jsonify(InternalError('Internal server error').to_dict()), 500
