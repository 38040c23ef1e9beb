"""
Domain errors raised by services and rendered by the handlers in app.main
"""


class AppError(Exception):
    """Base error carrying the HTTP status and a stable error code"""

    status_code = 500
    error_code = "internal_server_error"

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400
    error_code = "validation_error"


class NotFoundError(AppError):
    status_code = 404
    error_code = "not_found"


class ConflictError(AppError):
    status_code = 409
    error_code = "conflict"


class AlreadySubmittedError(ConflictError):
    error_code = "already_submitted"

    def __init__(self, message: str = "This mobile number has already been used for this quiz."):
        super().__init__(message)


class AuthenticationError(AppError):
    status_code = 401
    error_code = "unauthorized"


class PermissionDeniedError(AppError):
    status_code = 403
    error_code = "forbidden"
