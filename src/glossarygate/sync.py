"""Replaces the provider glossaries with the current local glossary entries."""

import logging
from collections.abc import Iterable, Mapping

from . import glossary_key
from .directory import GlossaryDirectory
from .entries import build_glossary_definition
from .types import LanguagePair

logger = logging.getLogger(__name__)


def synchronize_glossaries(
    directory: GlossaryDirectory,
    pairs: Iterable[LanguagePair],
    aggregates: Mapping[str, Mapping[str, str]],
) -> list[list[tuple[str, str]]]:
    """
    Recreate the provider glossary of every pair from the local entries.

    Provider glossaries cannot be edited, so a new glossary is created first
    and the glossaries the pair had before are deleted afterwards. Pairs
    without any complete entry end up without a glossary.

    Args:
        directory: The glossary directory of the provider account.
        pairs: The usable language pairs, usually the reconciled configured pairs.
        aggregates: The local entries grouped by aggregate (see ``aggregate_entries``).

    Returns:
        The definitions of the glossaries that were created.

    Raises:
        TransportError: If the provider could not be reached.
        ApiError: If the provider rejected a request.

    """
    existing = directory.list_glossaries()
    created = []
    processed_keys: set[str] = set()
    for pair in pairs:
        requested_key = glossary_key.encode(glossary_key.primary_subtag(pair.source), glossary_key.primary_subtag(pair.target))
        if requested_key in processed_keys:
            # Regional variants share one glossary.
            continue
        processed_keys.add(requested_key)
        outdated_ids = [glossary.glossary_id for glossary in existing if glossary.key == requested_key]

        definition = build_glossary_definition(pair, aggregates)
        if definition is None:
            logger.info("No complete entries for %s. Removing its glossaries.", pair)
        else:
            # A failed create leaves the old glossaries in place.
            directory.create(definition)
            created.append(definition)
            logger.info("Created glossary for %s.", pair)

        for glossary_id in outdated_ids:
            directory.delete(glossary_id)
    return created
