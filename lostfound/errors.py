class LostFoundError(Exception):
    """Base error for the service. Carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(detail)
        self.detail = detail


class ValidationError(LostFoundError):
    """Missing or invalid request field"""

    status_code = 400


class AuthError(LostFoundError):
    """Credentials did not match"""

    status_code = 401


class NotFoundError(LostFoundError):
    status_code = 404


class ConflictError(LostFoundError):
    """A unique field (username, email) is already taken"""

    status_code = 409


class UpstreamError(LostFoundError):
    """A remote collaborator (SMS provider, object storage) failed"""

    status_code = 502
