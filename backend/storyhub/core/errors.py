# storyhub/core/errors.py
"""
Typed domain errors.

Services raise these; the HTTP layer renders them as
``{"success": False, "error": {"code": ..., "message": ...}}`` with the
class's status code, and the realtime layer sends them back to the
originating connection only.
"""


class AppError(Exception):
    """Base class for every error surfaced to a caller."""

    status_code = 500
    code = "INTERNAL_ERROR"
    message = "Internal server error"

    def __init__(self, message: str | None = None, code: str | None = None):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(AppError):
    status_code = 400
    code = "BAD_REQUEST"
    message = "Invalid input"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"
    message = "Resource already exists"


class InvalidCredentials(AppError):
    status_code = 401
    code = "AUTH_INVALID_CREDENTIALS"
    message = "Incorrect email or password"


class Unauthorized(AppError):
    status_code = 401
    code = "AUTH_REQUIRED"
    message = "Authentication required"


class Forbidden(AppError):
    status_code = 403
    code = "FORBIDDEN"
    message = "Not allowed"


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Not found"


class NotForSale(AppError):
    status_code = 400
    code = "NOT_FOR_SALE"
    message = "Story is not for sale"


class InternalError(AppError):
    # message is always the generic default; details go to the log only
    def __init__(self):
        super().__init__()
