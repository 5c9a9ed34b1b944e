"""Custom exception classes for the Jobly API."""


class JoblyError(Exception):
    """Base exception for Jobly."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(JoblyError):
    """Malformed or missing input, rejected before or instead of a write."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(JoblyError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class WriteRejectedError(JoblyError):
    """The store refused a write. The cause is only reported in details."""

    def __init__(self, message: str, reason: str = "unknown"):
        super().__init__("WRITE_REJECTED", message, {"reason": reason}, status_code=403)
        self.reason = reason


class AuthenticationError(JoblyError):
    """Authentication required or token invalid."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class AuthorizationError(JoblyError):
    """Insufficient permissions."""

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__("AUTHORIZATION_ERROR", message, status_code=403)


class ConflictError(JoblyError):
    """Resource state conflict."""

    def __init__(self, message: str):
        super().__init__("CONFLICT", message, status_code=409)


class ConfigurationError(JoblyError):
    """A declared field/column mapping does not match its table."""

    def __init__(self, message: str, details=None):
        super().__init__("CONFIGURATION_ERROR", message, details, status_code=500)
