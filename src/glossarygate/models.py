"""Tagged outcomes of a translation request."""

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class Success:
    """The provider translated every text; ``texts`` holds the translations by key."""

    texts: dict[str, str]

    def unwrap(self) -> dict[str, str]:
        """Return the translated texts."""
        return self.texts


@dataclass(frozen=True)
class Degraded:
    """
    The provider call did not succeed as expected and the input is returned unchanged.

    Attributes:
        texts: The original texts, untouched.
        status_code: The HTTP status of the provider response.
        reason: A short description of why the translation degraded.

    """

    texts: Mapping[str, str]
    status_code: int
    reason: str

    def unwrap(self) -> dict[str, str]:
        """Return the original texts."""
        return dict(self.texts)


@dataclass(frozen=True)
class Fatal:
    """The request failed in a way the caller must see (transport or integrity failure)."""

    error: Exception

    def unwrap(self) -> dict[str, str]:
        """Raise the wrapped error."""
        raise self.error


TranslationOutcome = Success | Degraded | Fatal
