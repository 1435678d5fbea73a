from fastapi import status


class TaskboardError(Exception):
    """Base error rendered to clients as ``{"error": message}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(TaskboardError):
    # Duplicate emails are reported as a plain bad request.
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND
