"""
Typed failures raised by services and rendered by the exception handler in portal.main
"""


class PortalError(Exception):
    status_code = 500
    error = "internal_error"
    retryable = False

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.error, "detail": self.detail}


class UnauthenticatedError(PortalError):
    status_code = 401
    error = "unauthenticated"

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail)


class InvalidArgumentError(PortalError):
    status_code = 400
    error = "invalid_argument"


class ForbiddenError(PortalError):
    status_code = 403
    error = "forbidden"


class NotFoundError(PortalError):
    status_code = 404
    error = "not_found"


class ConfigurationError(PortalError):
    """Deployment is missing required configuration; fatal to the request, not the process."""
    status_code = 500
    error = "configuration_error"


class UnavailableError(PortalError):
    """A backing lookup failed transiently; the caller may retry."""
    status_code = 503
    error = "unavailable"
    retryable = True
