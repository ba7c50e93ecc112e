"""Classification of completed HTTP exchanges."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .models import APIError, RawHTTPError, StructuredAPIError

logger = logging.getLogger(__name__)

# Raw error bodies are cut to this many characters
MAX_RAW_BODY = 4096

PROBLEM_KEYS = ("type", "title", "status", "detail", "instance")


class Classification(Enum):
    """Outcome kinds for a response that arrived."""
    SUCCESS = "success"
    EMPTY_SUCCESS = "empty_success"
    STRUCTURED_ERROR = "structured_error"
    RAW_ERROR = "raw_error"


@dataclass
class ProblemDetail:
    """The problem-detail document returned by the service on failure."""
    type: str = ""
    title: str = ""
    status: int = 0
    detail: str = ""
    instance: str = ""
    errors: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def parse(cls, body: bytes) -> "ProblemDetail | None":
        """
        Parse a response body as a problem-detail document.

        Returns:
            The parsed document, or None if the body is not one
        """
        try:
            data = json.loads(body)
        except (ValueError, UnicodeDecodeError):
            return None

        if not isinstance(data, dict) or not any(key in data for key in PROBLEM_KEYS):
            return None

        try:
            status = int(data.get("status") or 0)
        except (TypeError, ValueError):
            return None

        errors = data.get("errors") or []
        if not isinstance(errors, list):
            errors = []

        return cls(
            type=str(data.get("type") or ""),
            title=str(data.get("title") or ""),
            status=status,
            detail=str(data.get("detail") or ""),
            instance=str(data.get("instance") or ""),
            errors=errors,
        )


@dataclass
class Outcome:
    kind: Classification
    status_code: int
    body: bytes = b""
    error: APIError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def truncate(text: str, limit: int = MAX_RAW_BODY) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + f"... [truncated {len(text) - limit} chars]"


def classify(status_code: int, body: bytes) -> Outcome:
    """
    Classify a response by status code and raw body.

    Args:
        status_code: HTTP status observed on the wire
        body: Full response body

    Returns:
        Outcome carrying the classification and, for failures, the error
    """
    if is_success(status_code):
        if not body:
            return Outcome(Classification.EMPTY_SUCCESS, status_code)
        return Outcome(Classification.SUCCESS, status_code, body)

    problem = ProblemDetail.parse(body)
    if problem is not None:
        logger.debug(f"Structured error {status_code}: {problem.title}")
        error = StructuredAPIError(
            status_code=status_code,
            type=problem.type,
            title=problem.title,
            status=problem.status,
            detail=problem.detail,
            instance=problem.instance,
            errors=problem.errors,
        )
        return Outcome(Classification.STRUCTURED_ERROR, status_code, body, error)

    text = truncate(body.decode("utf-8", errors="replace"))
    logger.debug(f"Raw error {status_code}")
    return Outcome(Classification.RAW_ERROR, status_code, body, RawHTTPError(status_code, text))
