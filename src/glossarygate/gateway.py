"""Translates ordered text mappings through the DeepL API with glossary support."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from .classifier import HTTP_OK, log_degraded
from .client import ProviderClient
from .config import GatewayConfig
from .directory import GlossaryDirectory
from .errors import ApiError, IntegrityError, TransportError
from .glossary_key import primary_subtag
from .masking import TermMasker
from .models import Degraded, Fatal, Success, TranslationOutcome
from .types import TranslationList

logger = logging.getLogger(__name__)


class TranslationGateway:
    """
    Entry point for translating texts of the editing workflow.

    A failed translation never interrupts editing: unless the provider cannot
    be reached or breaks its response contract, the caller gets either the
    translations or its own texts back.
    """

    def __init__(
        self,
        config: GatewayConfig,
        client: ProviderClient,
        *,
        directory: GlossaryDirectory | None = None,
        masker: TermMasker | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            config: The immutable gateway configuration.
            client: The client used to reach the provider.
            directory: The glossary directory. Defaults to one sharing ``client``.
            masker: The ignored-term masker. Defaults to one built from ``config.ignored_terms``.

        """
        self.config = config
        self.client = client
        self.directory = directory or GlossaryDirectory(client)
        self.masker = masker or TermMasker(config.ignored_terms)

    @classmethod
    def from_config(cls, config: GatewayConfig, *, transport: httpx.BaseTransport | None = None) -> "TranslationGateway":
        """Build a gateway and its collaborators from a configuration value."""
        return cls(config, ProviderClient(config, transport=transport))

    def translate(
        self,
        texts: Mapping[str, str],
        target_language: str,
        source_language: str | None = None,
    ) -> dict[str, str]:
        """
        Translate the values of ``texts`` and return them under the same keys.

        On a degraded outcome the original texts are returned.

        Raises:
            TransportError: If the provider could not be reached.
            IntegrityError: If the provider returned a different number of translations.

        """
        return self.request_translation(texts, target_language, source_language).unwrap()

    def request_translation(
        self,
        texts: Mapping[str, str],
        target_language: str,
        source_language: str | None = None,
    ) -> TranslationOutcome:
        """
        Translate ``texts`` and report the result as a tagged outcome.

        Never raises for provider failures: transport and integrity errors are
        returned as ``Fatal``, every other failure as ``Degraded``.
        """
        try:
            return self._translate(texts, target_language, source_language)
        except (TransportError, IntegrityError) as e:
            logger.error("Translation to %s failed: %s", target_language, e)  # noqa: TRY400
            return Fatal(e)

    def build_request(self, values: list[str], target_language: str, source_language: str | None = None) -> list[tuple[str, Any]]:
        """
        Build the ordered form fields of a translate request, without the glossary.

        The provider answers positionally, so the ``text`` fields keep the order of ``values``.
        """
        fields: list[tuple[str, Any]] = list(self.config.default_options.items())
        if source_language:
            fields.append(("source_lang", source_language))
        fields.append(("target_lang", target_language))
        fields.extend(("text", self.masker.mask(value)) for value in values)
        return fields

    def _lookup_glossary(self, source_language: str | None, target_language: str) -> str | None:
        # Translation accepts regional variants but glossaries only know the plain language.
        if not source_language:
            return None
        try:
            return self.directory.resolve(primary_subtag(source_language), primary_subtag(target_language))
        except (ApiError, IntegrityError) as e:
            logger.warning("Could not look up glossaries, translating without one: %s", e)
            return None

    def _translate(
        self,
        texts: Mapping[str, str],
        target_language: str,
        source_language: str | None,
    ) -> TranslationOutcome:
        keys = list(texts.keys())
        values = list(texts.values())
        if not keys:
            return Success({})

        fields = self.build_request(values, target_language, source_language)
        glossary_id = self._lookup_glossary(source_language, target_language)
        if glossary_id is not None:
            fields.append(("glossary_id", glossary_id))

        logger.debug("Translating %d texts from %s to %s.", len(values), source_language or "auto", target_language)
        response = self.client.request("POST", "translate", form=fields)

        if response.status_code != HTTP_OK:
            classification = log_degraded(response.status_code, source_language, target_language)
            return Degraded(texts, response.status_code, classification.message)

        data = _parse_body(response)
        if not data:
            logger.info("DeepL API returned an empty body. Keeping the original texts.")
            return Degraded(texts, response.status_code, "Empty response body")

        try:
            translations = TranslationList.model_validate(data).translations
        except ValidationError as e:
            msg = f"Unexpected translate response body: {e}"
            raise IntegrityError(msg) from e

        if len(translations) != len(keys):
            msg = f"Mismatched translation count: expected {len(keys)}, but got {len(translations)}"
            raise IntegrityError(msg)

        return Success({key: self.masker.unmask(translation.text) for key, translation in zip(keys, translations, strict=True)})


def _parse_body(response: httpx.Response) -> Any:  # noqa: ANN401
    """Decode a JSON body; an empty or unparsable body counts as no content."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.warning("DeepL API returned a body that is not valid JSON.")
        return None
