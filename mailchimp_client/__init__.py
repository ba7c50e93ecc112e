"""Typed client for the Mailchimp Marketing API."""

from .client import MailchimpClient, build_client
from .core import (
    MailchimpError,
    ValidationError,
    TransportError,
    APIError,
    StructuredAPIError,
    RawHTTPError,
    DecodeError,
    ConfigError,
    RequestContext,
)

__version__ = "0.1.0"

__all__ = [
    "MailchimpClient",
    "build_client",
    "MailchimpError",
    "ValidationError",
    "TransportError",
    "APIError",
    "StructuredAPIError",
    "RawHTTPError",
    "DecodeError",
    "ConfigError",
    "RequestContext",
]
