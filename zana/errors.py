"""Errors raised by book clients and the request boundary."""


class ClientError(Exception):
    """Base class for failures reported by a BookClient implementation."""


class TransportFailure(ClientError):
    """Request could not be completed: timeout, connection or decode failure."""


class RateLimitExceeded(ClientError):
    """Upstream service answered with 429 (or 403 for quota errors)."""

    def __init__(self, status_code: int = 429):
        super().__init__(f"rate limit exceeded for external service ({status_code})")
        self.status_code = status_code


class NotFound(ClientError):
    """Upstream service reported that the book does not exist."""


class HttpError(ClientError):
    """Any other non-success status; keeps the raw body for diagnostics."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"unexpected status {status_code} from external service")
        self.status_code = status_code
        self.body = body


class MissingParameter(Exception):
    """Request parameter is missing or invalid."""

    def __init__(self, details: str):
        super().__init__(details)
        self.details = details
