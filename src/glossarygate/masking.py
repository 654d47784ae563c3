"""Protects ignored terms from translation by wrapping them in <ignore> markers."""

import logging
from collections.abc import Iterable
from typing import Final

import regex

logger = logging.getLogger(__name__)

IGNORE_OPEN: Final[str] = "<ignore>"
IGNORE_CLOSE: Final[str] = "</ignore>"

_MARKER_PATTERN = regex.compile(r"(<ignore>|</ignore>)", regex.IGNORECASE)


class TermMasker:
    """
    Wraps ignored terms before a request and strips the markers from the answer.

    The provider is told to skip the content of ``<ignore>`` tags through the
    ``ignore_tags`` request option.
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        """
        Compile the ignored-term patterns into a single alternation.

        Args:
            patterns: Regular expressions matching the terms to protect. They are
                matched case-insensitively; empty patterns are dropped.

        """
        self.patterns = [pattern for pattern in patterns if pattern]
        self._pattern = None
        if self.patterns:
            self._pattern = regex.compile("(" + "|".join(self.patterns) + ")", regex.IGNORECASE)

    def mask(self, text: str) -> str:
        """Wrap every ignored term in ``text`` in the ignore markers."""
        if self._pattern is None:
            return text
        masked = self._pattern.sub(lambda match: f"{IGNORE_OPEN}{match.group(0)}{IGNORE_CLOSE}", text)
        if masked != text:
            logger.debug("Masked ignored terms: '%s' -> '%s'", text, masked)
        return masked

    def unmask(self, text: str) -> str:
        """Remove every opening and closing ignore marker, balanced or not."""
        return unmask_terms(text)


def mask_terms(text: str, patterns: Iterable[str]) -> str:
    """Wrap the terms matching any of ``patterns`` in ignore markers."""
    return TermMasker(patterns).mask(text)


def unmask_terms(text: str) -> str:
    """Strip all ignore markers from ``text``."""
    return _MARKER_PATTERN.sub("", text)
