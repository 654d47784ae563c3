"""Negotiates which configured language pairs the provider supports for glossaries."""

import logging
from collections.abc import Iterable, Sequence

from . import glossary_key
from .client import ProviderClient
from .types import LanguagePair

logger = logging.getLogger(__name__)


def reconcile(
    configured_pairs: Iterable[LanguagePair],
    supported_pairs: Sequence[LanguagePair],
    limit_to: Sequence[str] | None = None,
) -> tuple[list[LanguagePair], list[str] | None]:
    """
    Keep the configured pairs the provider supports and expand the language filter.

    A configured pair is skipped when ``limit_to`` is given and contains neither
    of its languages. A kept pair is returned as configured, not as reported by
    the provider. For every kept pair, the language opposite to a filtered
    language is added to the filter, so the editor also sees the languages the
    filtered ones are paired with. Only the supported pair that matched the
    current configured pair is considered for that expansion.

    Args:
        configured_pairs: The configured pairs, in display order.
        supported_pairs: The pairs supported by the provider.
        limit_to: Optional list of languages to restrict the result to.

    Returns:
        The supported configured pairs in their original order, and a copy of
        ``limit_to`` with the paired languages appended (None if no filter was given).

    """
    pairs: list[LanguagePair] = []
    updated_limit_to = list(limit_to) if limit_to is not None else None

    for configured_pair in configured_pairs:
        if limit_to is not None and configured_pair.source not in limit_to and configured_pair.target not in limit_to:
            continue

        configured_key = configured_pair.key
        matched_pair = None
        for supported_pair in supported_pairs:
            candidate = LanguagePair(supported_pair.source.upper(), supported_pair.target.upper())
            if glossary_key.encode(candidate.source, candidate.target) == configured_key:
                matched_pair = candidate
                break

        if matched_pair is None:
            logger.debug("Configured pair %s is not supported by the provider.", configured_pair)
            continue
        pairs.append(configured_pair)

        if limit_to is not None and updated_limit_to is not None:
            if matched_pair.source in limit_to and matched_pair.target not in updated_limit_to:
                updated_limit_to.append(matched_pair.target)
            elif matched_pair.target in limit_to and matched_pair.source not in updated_limit_to:
                updated_limit_to.append(matched_pair.source)

    return pairs, updated_limit_to


def extract_languages(pairs: Iterable[LanguagePair]) -> list[str]:
    """
    Return the distinct languages of ``pairs``, all sources before all targets.

    Languages keep the order in which they first appear; empty values are skipped.
    """
    pairs = list(pairs)
    languages: list[str] = []
    for language in [pair.source for pair in pairs] + [pair.target for pair in pairs]:
        if language and language not in languages:
            languages.append(language)
    return languages


class LanguagePairReconciler:
    """Reconciles the configured pairs against the provider's current supported pairs."""

    def __init__(self, client: ProviderClient, configured_pairs: Iterable[LanguagePair]) -> None:
        """
        Initialize the reconciler.

        Args:
            client: The provider client used to fetch supported pairs.
            configured_pairs: The configured language pairs.

        """
        self._client = client
        self.configured_pairs = list(configured_pairs)

    def language_pairs(self, limit_to: Sequence[str] | None = None) -> tuple[list[LanguagePair], list[str] | None]:
        """
        Fetch the supported pairs from the provider and reconcile the configured ones.

        Raises:
            TransportError: If the provider could not be reached.
            ApiError: If the provider rejected the request.

        """
        supported_pairs = self._client.supported_language_pairs()
        logger.debug("Provider supports %d glossary language pairs.", len(supported_pairs))
        return reconcile(self.configured_pairs, supported_pairs, limit_to)

    def languages(self) -> list[str]:
        """Return the languages of the configured pairs, sources first."""
        return extract_languages(self.configured_pairs)
