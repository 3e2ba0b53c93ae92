"""
Error taxonomy shared by services and routes.

Services raise these; app.main turns every AppError into a JSON body of the
form {"error": <message>, **extra}.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.message}
        body.update(self.extra)
        return body


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request data"


class PastDateError(ValidationError):
    def __init__(self, message: str | None = None, **extra):
        extra.setdefault("available", False)
        super().__init__(message, **extra)


class InvalidCredentials(AppError):
    status_code = 400
    default_message = "Invalid email or password"


class ConflictError(AppError):
    # Uniqueness and referential-integrity violations answer 400, not 409
    status_code = 400
    default_message = "Conflict"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Access denied"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Insufficient rights for this operation"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    status_code = 500
