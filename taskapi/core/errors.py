# taskapi/core/errors.py

from fastapi import status


class TaskApiError(Exception):
    """
    Base class for errors that end a request with a known status code.
    The message is safe to show to clients.
    """
    code = "INTERNAL_ERROR"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(TaskApiError):
    code = "VALIDATION_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST


class ConflictError(TaskApiError):
    code = "CONFLICT"
    http_status = status.HTTP_409_CONFLICT


class AuthenticationError(TaskApiError):
    code = "UNAUTHORIZED"
    http_status = status.HTTP_401_UNAUTHORIZED


class NotFoundError(TaskApiError):
    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND
