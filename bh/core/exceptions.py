"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
The CLI runner renders any ApplicationError as a one-line message and
exits with status 1.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when required configuration is missing or malformed."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="CFG_INVALID")


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Not Found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed") -> None:
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class AuthenticationError(ApplicationError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class AuthorizationError(ApplicationError):
    """Raised when authorization fails."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, code="AUTHZ_FORBIDDEN")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, code="RES_CONFLICT")


class RateLimitError(ApplicationError):
    """Raised when rate limit is exceeded."""

    def __init__(self, message: str = "Rate limit exceeded") -> None:
        super().__init__(message, code="RATE_LIMITED")


class ExternalServiceError(ApplicationError):
    """Raised when an external service call fails."""

    def __init__(self, message: str = "External service error", status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, code="SYS_EXTERNAL_SERVICE_ERROR")


class FileTransferError(ApplicationError):
    """Raised when a local file cannot be read or written."""

    def __init__(self, message: str = "File transfer failed") -> None:
        super().__init__(message, code="IO_FILE_TRANSFER")


# Map HTTP status codes to exception types
STATUS_EXCEPTION_MAP: dict[int, type[ApplicationError]] = {
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}
