# newwork-server/newwork/core/exceptions.py
# Error taxonomy shared by the services; main.py maps each class to an HTTP status.


class ServiceError(Exception):
    """Base class for errors a service raises on purpose."""

    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(ServiceError):
    """Missing, malformed, expired or badly signed credential, or a failed login."""

    status_code = 401
    default_detail = "Could not validate credentials"


class Forbidden(ServiceError):
    """The principal is authenticated but the policy denies the operation."""

    status_code = 403
    default_detail = "Not enough permissions for this resource"


class NotFound(ServiceError):
    status_code = 404
    default_detail = "Resource not found"


class Conflict(ServiceError):
    status_code = 409
    default_detail = "Resource state conflict"


class InvalidInput(ServiceError):
    status_code = 400
    default_detail = "Invalid input"


class UpstreamUnavailable(ServiceError):
    """The polishing backend failed. Recovered locally, never sent to a client."""

    status_code = 502
    default_detail = "Upstream service unavailable"
