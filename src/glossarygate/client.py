"""HTTP access to the DeepL API."""

import logging
from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ValidationError

from .classifier import HTTP_OK, raise_for_api_error
from .config import GatewayConfig
from .errors import IntegrityError, TransportError
from .types import LanguagePair, SupportedLanguageList

logger = logging.getLogger(__name__)

FormFields = Mapping[str, Any] | Sequence[tuple[str, Any]]
ModelT = TypeVar("ModelT", bound=BaseModel)


def _form_value(value: Any) -> Any:  # noqa: ANN401
    # DeepL reads booleans as 1 and 0.
    if isinstance(value, bool):
        return int(value)
    return value


def encode_form(form: FormFields) -> str:
    """
    Encode form fields as ``application/x-www-form-urlencoded``.

    A sequence of pairs keeps repeated fields in order. Booleans become ``1``/``0``.
    """
    items = form.items() if isinstance(form, Mapping) else form
    return urlencode([(name, _form_value(value)) for name, value in items], doseq=True)


class ProviderClient:
    """
    Sends single blocking requests to the provider.

    Authentication headers are built for every request. The underlying
    ``httpx.Client`` only pools connections.
    """

    def __init__(self, config: GatewayConfig, *, transport: httpx.BaseTransport | None = None) -> None:
        """
        Initialize the client for the API tier matching the authentication key.

        Args:
            config: The gateway configuration.
            transport: An optional httpx transport, e.g. ``httpx.MockTransport`` in tests.

        """
        self.config = config
        self.base_uri = config.effective_base_uri
        self._client = httpx.Client(
            base_url=self.base_uri,
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
        )
        logger.debug("Initialized provider client for %s (timeout=%s).", self.base_uri, config.timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"DeepL-Auth-Key {self.config.authentication_key}",
        }

    def request(self, method: str, path: str, *, form: FormFields | None = None) -> httpx.Response:
        """
        Send one request and wait for the full response.

        Args:
            method: The HTTP method.
            path: The path relative to the base URI, e.g. 'translate'.
            form: Optional form fields, sent ``application/x-www-form-urlencoded``.
                A sequence of pairs keeps repeated fields in order.

        Raises:
            TransportError: If the provider could not be reached or the request timed out.

        """
        headers = self._headers()
        content = None
        if form is not None:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            content = encode_form(form)

        logger.debug("%s %s%s", method, self.base_uri, path)
        try:
            response = self._client.request(method, path, headers=headers, content=content)
        except httpx.TransportError as e:
            msg = f"Request to DeepL API failed: {method} {path}: {e}"
            raise TransportError(msg) from e
        logger.debug("%s %s -> %d", method, path, response.status_code)
        return response

    def get_json(self, path: str) -> Any:  # noqa: ANN401
        """
        Send a GET request and return the decoded JSON body.

        Raises:
            TransportError: If the provider could not be reached.
            ApiError: If the provider did not answer with 200.
            IntegrityError: If the body is not valid JSON.

        """
        response = self.request("GET", path)
        if response.status_code != HTTP_OK:
            raise_for_api_error(response)
        try:
            return response.json()
        except ValueError as e:
            msg = f"DeepL API returned invalid JSON for GET {path}: {e}"
            raise IntegrityError(msg) from e

    def get_model(self, path: str, model_type: type[ModelT]) -> ModelT:
        """
        Send a GET request and validate the JSON body against ``model_type``.

        Raises:
            TransportError: If the provider could not be reached.
            ApiError: If the provider did not answer with 200.
            IntegrityError: If the body does not have the expected shape.

        """
        data = self.get_json(path)
        try:
            return model_type.model_validate(data)
        except ValidationError as e:
            msg = f"Unexpected response body for GET {path}: {e}"
            raise IntegrityError(msg) from e

    def supported_language_pairs(self) -> list[LanguagePair]:
        """Fetch the language pairs the provider supports for glossaries, uppercased."""
        data = self.get_model("glossary-language-pairs", SupportedLanguageList)
        return [language.to_pair() for language in data.supported_languages]

    def close(self) -> None:
        """Close pooled connections."""
        self._client.close()

    def __enter__(self) -> "ProviderClient":
        """Return the client itself."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Close the client."""
        self.close()
