"""Exceptions raised by the translation gateway."""


class GlossaryGateError(Exception):
    """Base class for all gateway errors."""


class TransportError(GlossaryGateError, ConnectionError):
    """The provider could not be reached (connection failure or timeout)."""


class ApiError(GlossaryGateError):
    """The provider answered an operation without fallback with a non-success status."""

    def __init__(self, status_code: int, reason: str = "", detail: str | None = None) -> None:
        """
        Build the error message from the HTTP status, reason phrase and provider detail.

        Args:
            status_code: The HTTP status returned by the provider.
            reason: The HTTP reason phrase, possibly empty.
            detail: The 'detail' field of the provider's error body, if any.

        """
        self.status_code = status_code
        self.reason = reason
        self.detail = detail
        msg = f"Provider API error, HTTP status {status_code} ({reason})"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class MalformedKeyError(GlossaryGateError, ValueError):
    """A glossary key could not be split into its source and target language."""


class IntegrityError(GlossaryGateError, ValueError):
    """The provider returned a different number of translations than texts were sent."""
