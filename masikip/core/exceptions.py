"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Backend failures fall into three groups: the backend could not be reached,
the backend answered with a non-2xx status, or the backend answered with a
payload the client cannot use.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ExternalServiceError(ApplicationError):
    """Raised when a call to the notes backend fails."""

    def __init__(self, message: str = "External service error", code: str = "SYS_EXTERNAL_SERVICE_ERROR") -> None:
        super().__init__(message, code=code)


class BackendUnavailableError(ExternalServiceError):
    """Raised on network or transport failure."""

    def __init__(self, message: str = "Backend unavailable") -> None:
        super().__init__(message, code="SYS_BACKEND_UNAVAILABLE")


class BackendStatusError(ExternalServiceError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(
            message or f"HTTP error! status: {status_code}",
            code="SYS_BACKEND_STATUS",
        )


class NoteTransformError(ApplicationError):
    """Raised when a backend note payload is missing or has no identifier."""

    def __init__(self, message: str = "Backend note missing noteId") -> None:
        super().__init__(message, code="VAL_MALFORMED_NOTE")
