from fastapi import status


class AttendanceAppError(Exception):
    """Base exception for errors reported to the caller as ``{success: false, message}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AttendanceAppError):
    """Raised when a required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AttendanceAppError):
    """Raised when the referenced student or attendance record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AttendanceAppError):
    """Raised when a unique business key (e.g. matricule) is already taken."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(AttendanceAppError):
    """Raised when the database fails unexpectedly."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
