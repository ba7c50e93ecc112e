"""Error taxonomy for the Mailchimp client."""

from typing import Any


class MailchimpError(Exception):
    """Base class for every error raised by the client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MailchimpError):
    """Raised client-side when an entity lacks the identity needed to build a path."""
    pass


class TransportError(MailchimpError):
    """Raised when the exchange could not complete (DNS, connect, timeout, cancellation)."""
    pass


class APIError(MailchimpError):
    """Raised when the service answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class StructuredAPIError(APIError):
    """
    Non-2xx response whose body is a problem-detail document.

    ``status`` is what the payload claims, ``status_code`` is what was
    observed on the wire. They usually agree but are kept separately.
    """

    def __init__(
        self,
        status_code: int,
        type: str = "",
        title: str = "",
        status: int = 0,
        detail: str = "",
        instance: str = "",
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(
            f"Error {status_code} ({type}) {title}: {detail}",
            status_code=status_code,
        )
        self.type = type
        self.title = title
        self.status = status
        self.detail = detail
        self.instance = instance
        self.errors = errors or []


class RawHTTPError(APIError):
    """Non-2xx response whose body is not a problem-detail document."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body}", status_code=status_code)
        self.body = body


class DecodeError(MailchimpError):
    """Raised when a 2xx body cannot be decoded into the requested type."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(MailchimpError):
    """Raised when there is an error loading or saving configuration."""
    pass
