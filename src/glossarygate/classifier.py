"""Maps provider HTTP statuses to a severity and a log message."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import NoReturn

import httpx

from .errors import ApiError

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_CREATED = 201
HTTP_NO_CONTENT = 204
HTTP_BAD_REQUEST = 400
HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429
HTTP_QUOTA_EXCEEDED = 456


class ResponseCategory(str, Enum):
    """What a provider status means for the caller."""

    SUCCESS = "success"
    BAD_CREDENTIALS = "bad_credentials"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    MALFORMED_REQUEST = "malformed_request"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Classification:
    """The category of a status together with the log level and message to use."""

    status_code: int
    category: ResponseCategory
    level: int
    message: str

    @property
    def is_success(self) -> bool:
        """Return True for the success statuses 200, 201 and 204."""
        return self.category is ResponseCategory.SUCCESS


_SUCCESS_STATUSES = frozenset({HTTP_OK, HTTP_CREATED, HTTP_NO_CONTENT})

_FAILURES: dict[int, tuple[ResponseCategory, int, str]] = {
    HTTP_FORBIDDEN: (
        ResponseCategory.BAD_CREDENTIALS,
        logging.CRITICAL,
        "Your DeepL API credentials are either wrong, or you don't have access to the requested API.",
    ),
    HTTP_TOO_MANY_REQUESTS: (
        ResponseCategory.RATE_LIMITED,
        logging.WARNING,
        "You sent too many requests to the DeepL API.",
    ),
    HTTP_QUOTA_EXCEEDED: (
        ResponseCategory.QUOTA_EXCEEDED,
        logging.WARNING,
        "You reached your DeepL API character limit. Upgrade your plan or wait until your quota is filled up again.",
    ),
    HTTP_BAD_REQUEST: (
        ResponseCategory.MALFORMED_REQUEST,
        logging.WARNING,
        "Your DeepL API request was not well-formed. Please check the source and the target language in particular.",
    ),
}


def classify(status_code: int) -> Classification:
    """Classify a provider status code. Pure; never raises."""
    if status_code in _SUCCESS_STATUSES:
        return Classification(status_code, ResponseCategory.SUCCESS, logging.DEBUG, "Success")
    if status_code in _FAILURES:
        category, level, message = _FAILURES[status_code]
        return Classification(status_code, category, level, message)
    return Classification(status_code, ResponseCategory.UNEXPECTED, logging.WARNING, "Unexpected status from DeepL API")


def log_degraded(status_code: int, source_language: str | None, target_language: str) -> Classification:
    """
    Log a failed translate call at the severity its status calls for.

    The texts are returned untranslated by the caller; this only reports why.
    """
    classification = classify(status_code)
    if classification.category is ResponseCategory.MALFORMED_REQUEST:
        logger.log(
            classification.level,
            "%s (source_language=%s, target_language=%s)",
            classification.message,
            source_language,
            target_language,
        )
    elif classification.category is ResponseCategory.UNEXPECTED:
        logger.log(classification.level, "%s (status=%d)", classification.message, status_code)
    else:
        logger.log(classification.level, classification.message)
    return classification


def _extract_detail(response: httpx.Response) -> str | None:
    """Return the provider's 'detail' field from an error body, if present."""
    try:
        content = response.json()
    except ValueError:
        return None
    if isinstance(content, dict) and content.get("detail"):
        return str(content["detail"])
    return None


def raise_for_api_error(response: httpx.Response) -> NoReturn:
    """
    Raise an ApiError for a response of an operation that has no fallback.

    Raises:
        ApiError: Always, carrying status, reason phrase and provider detail.

    """
    error = ApiError(response.status_code, response.reason_phrase, _extract_detail(response))
    logger.error("%s", error)
    raise error
