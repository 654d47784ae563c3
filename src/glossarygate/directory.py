"""Lists, creates, deletes and resolves provider-side glossaries."""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from . import glossary_key
from .classifier import HTTP_CREATED, HTTP_NO_CONTENT, raise_for_api_error
from .client import FormFields, ProviderClient
from .types import Glossary, GlossaryList, GlossaryStatus, LanguagePair

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with provider timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class GlossaryDirectory:
    """
    Access to the glossaries stored at the provider.

    Nothing is cached: every call asks the provider again.
    """

    def __init__(self, client: ProviderClient) -> None:
        """Initialize the directory with the client used for all requests."""
        self._client = client

    def list_glossaries(self) -> list[Glossary]:
        """
        Fetch all glossaries of the provider account, in provider order.

        Raises:
            TransportError: If the provider could not be reached.
            ApiError: If the provider did not answer with 200.

        """
        return self._client.get_model("glossaries", GlossaryList).glossaries

    def resolve(self, source_language: str, target_language: str) -> str | None:
        """
        Return the id of the first ready glossary for the pair, or None.

        Glossaries that are not ready yet are skipped even if their pair matches.
        """
        requested_key = glossary_key.encode(source_language, target_language)
        for glossary in self.list_glossaries():
            if not glossary.ready:
                continue
            if glossary.key == requested_key:
                logger.debug("Using glossary %s for %s.", glossary.glossary_id, requested_key)
                return glossary.glossary_id
        logger.debug("No ready glossary found for %s.", requested_key)
        return None

    def create(self, definition: FormFields) -> None:
        """
        Create a glossary from a form-encoded definition.

        Raises:
            ApiError: If the provider does not answer with 201.

        """
        response = self._client.request("POST", "glossaries", form=definition)
        if response.status_code != HTTP_CREATED:
            raise_for_api_error(response)
        logger.info("Created glossary.")

    def delete(self, glossary_id: str) -> None:
        """
        Delete the glossary with the given id.

        Raises:
            ApiError: If the provider does not answer with 204.

        """
        response = self._client.request("DELETE", f"glossaries/{glossary_id}")
        if response.status_code != HTTP_NO_CONTENT:
            raise_for_api_error(response)
        logger.info("Deleted glossary %s.", glossary_id)

    def status(self, pairs: Iterable[LanguagePair], last_modified: datetime | None = None) -> list[GlossaryStatus]:
        """
        Report for each pair whether its glossary can be used and is up to date.

        The newest provider glossary of a pair is considered. A pair without a
        glossary, or whose glossary was created before ``last_modified``, is outdated.

        Args:
            pairs: The language pairs to report on.
            last_modified: When the local glossary entries were last changed.

        """
        glossaries = self.list_glossaries()
        statuses = []
        for pair in pairs:
            source = glossary_key.primary_subtag(pair.source)
            target = glossary_key.primary_subtag(pair.target)
            requested_key = glossary_key.encode(source, target)
            newest = None
            for glossary in glossaries:
                if glossary.key != requested_key:
                    continue
                if newest is None or _is_newer(glossary, newest):
                    newest = glossary

            creation_date = newest.creation_date if newest else None
            is_outdated = creation_date is None or (last_modified is not None and _as_utc(creation_date) < _as_utc(last_modified))
            statuses.append(
                GlossaryStatus(
                    source_lang=source,
                    target_lang=target,
                    creation_date=creation_date,
                    can_be_used=newest is not None and newest.ready,
                    is_outdated=is_outdated,
                ),
            )
        return statuses


def _is_newer(glossary: Glossary, other: Glossary) -> bool:
    if glossary.creation_date is None:
        return False
    if other.creation_date is None:
        return True
    return _as_utc(glossary.creation_date) > _as_utc(other.creation_date)
