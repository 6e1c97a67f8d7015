from __future__ import annotations

import enum
import json as jsonlib
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar, Union

import httpx
import pydantic

from shipi18n_proxy.core.config import DEFAULT_SHIPI18N_API_URL, AppSettings
from shipi18n_proxy.schemas.translation import (
    HealthStatus,
    JsonTranslationResult,
    TextTranslationResult,
    TranslationRequest,
)


logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = (
    "SHIPI18N_API_KEY is not set. Get your free key at https://shipi18n.com"
)
TEXT_REQUIRED_MESSAGE = "Text is required"
LANGUAGES_REQUIRED_MESSAGE = "At least one target language is required"


class Shipi18nError(RuntimeError):
    """Base class for every failure raised by the Shipi18n client."""


class ConfigurationError(Shipi18nError):
    """Raised when no API key is available for the active context."""


class ValidationError(Shipi18nError, ValueError):
    """Raised when required input is missing before any request is sent."""


class SerializationError(Shipi18nError, TypeError):
    """Raised when content handed to JSON translation cannot be serialized."""


class TransportError(Shipi18nError):
    """Raised when the HTTP transport fails before a response is received."""


class ResponseFormatError(Shipi18nError):
    """Raised when the API answers with a body that does not match the endpoint schema."""


class ApiError(Shipi18nError):
    """Raised for non-success HTTP responses from the Shipi18n API."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ExecutionContext(str, enum.Enum):
    """Trust level of the code that will hold the resolved credentials."""

    TRUSTED = "trusted"
    UNTRUSTED = "untrusted"


@dataclass(frozen=True, slots=True)
class Shipi18nConfig:
    api_key: str | None
    api_url: str = DEFAULT_SHIPI18N_API_URL


def resolve_config(settings: AppSettings, context: ExecutionContext) -> Shipi18nConfig:
    """Derive the client configuration for ``context`` from application settings.

    Trusted (server) code reads the ``SHIPI18N_*`` variables. Untrusted code only
    ever sees the ``PUBLIC_SHIPI18N_*`` pair, so a variable's name alone tells
    whether it may end up in a browser.
    """
    if context is ExecutionContext.TRUSTED:
        secret = settings.shipi18n_api_key
        api_url = settings.shipi18n_api_url
    else:
        secret = settings.public_shipi18n_api_key
        api_url = settings.public_shipi18n_api_url
        if secret:
            logger.warning(
                "PUBLIC_SHIPI18N_API_KEY is set; it is readable by untrusted callers. "
                "Route browser traffic through /api/translate instead."
            )

    return Shipi18nConfig(
        api_key=secret.get_secret_value() if secret else None,
        api_url=(api_url or DEFAULT_SHIPI18N_API_URL).rstrip("/"),
    )


class ConfigProvider:
    """Resolves configuration on every read unless an explicit override is set.

    The override is last-write-wins and unsynchronized; callers sharing a
    provider across concurrent tasks share its override as well. Without an
    override every read builds fresh settings, which re-reads `.env`.
    """

    def __init__(
        self,
        context: ExecutionContext = ExecutionContext.TRUSTED,
        *,
        settings_factory: Callable[[], AppSettings] = AppSettings,
    ) -> None:
        self._context = context
        self._settings_factory = settings_factory
        self._override: Shipi18nConfig | None = None

    @property
    def context(self) -> ExecutionContext:
        return self._context

    def get_config(self) -> Shipi18nConfig:
        if self._override is not None:
            return self._override
        return resolve_config(self._settings_factory(), self._context)

    def set_config(self, config: Shipi18nConfig) -> None:
        self._override = config

    def reset_config(self) -> None:
        self._override = None


ConfigSource = Union[Shipi18nConfig, ConfigProvider, Callable[[], Shipi18nConfig]]
ResultT = TypeVar("ResultT", TextTranslationResult, JsonTranslationResult)


def serialize_document(document: Any) -> str:
    """Return ``document`` as JSON text, passing strings through untouched."""
    if isinstance(document, str):
        return document
    try:
        return jsonlib.dumps(
            document,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Content is not JSON serializable: {exc}") from exc


def _require_languages(target_languages: Sequence[str] | None) -> list[str]:
    if isinstance(target_languages, str):
        target_languages = [target_languages]
    if not target_languages:
        raise ValidationError(LANGUAGES_REQUIRED_MESSAGE)
    return list(target_languages)


class Shipi18nClient:
    """Async client for the hosted Shipi18n translation API.

    Every operation performs exactly one HTTP call through a fresh client from
    ``client_factory`` and never retries. Timeouts are whatever the transport
    defaults to.
    """

    def __init__(
        self,
        config: ConfigSource | None = None,
        *,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        if config is None:
            config = ConfigProvider()
        if isinstance(config, Shipi18nConfig):
            fixed = config
            self._config_source: Callable[[], Shipi18nConfig] = lambda: fixed
        elif isinstance(config, ConfigProvider):
            self._config_source = config.get_config
        else:
            self._config_source = config
        self._client_factory = client_factory or httpx.AsyncClient

    def get_config(self) -> Shipi18nConfig:
        return self._config_source()

    async def api_request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send an authenticated request to ``{api_url}/api{endpoint}``.

        Caller headers are merged over the JSON content type; the API key header
        is always set last so it cannot be overridden.
        """
        config = self.get_config()
        if not config.api_key:
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)

        url = f"{config.api_url}/api{endpoint}"
        request_headers = httpx.Headers({"Content-Type": "application/json"})
        if headers:
            request_headers.update(headers)
        request_headers["X-API-Key"] = config.api_key

        logger.debug("Shipi18n %s %s", method, url)
        try:
            async with self._client_factory() as client:
                response = await client.request(
                    method,
                    url,
                    json=json,
                    headers=request_headers,
                )
        except httpx.HTTPError as exc:
            logger.warning("Shipi18n request to %s failed: %s", url, exc)
            raise TransportError(f"Failed to reach Shipi18n API: {exc}") from exc

        if not response.is_success:
            message = self._extract_error(response)
            logger.warning(
                "Shipi18n API returned %s for %s: %s",
                response.status_code,
                endpoint,
                message,
            )
            raise ApiError(message, status_code=response.status_code)

        return self._parse_body(response)

    async def translate(
        self,
        text: str,
        *,
        source_language: str = "en",
        target_languages: Sequence[str] | None = None,
        preserve_placeholders: bool = True,
        enable_pluralization: bool = True,
    ) -> TextTranslationResult:
        """Translate plain text into each of ``target_languages``."""
        if not text:
            raise ValidationError(TEXT_REQUIRED_MESSAGE)
        languages = _require_languages(target_languages)

        request = TranslationRequest(
            text=text,
            source_language=source_language,
            target_languages=languages,
            preserve_placeholders=preserve_placeholders,
            enable_pluralization=enable_pluralization,
        )
        payload = await self.api_request("/translate", method="POST", json=request.to_wire())
        return self._build_result(TextTranslationResult, payload, languages)

    async def translate_json(
        self,
        json: Any,
        *,
        source_language: str = "en",
        target_languages: Sequence[str] | None = None,
        preserve_placeholders: bool = True,
        enable_pluralization: bool = True,
    ) -> JsonTranslationResult:
        """Translate a JSON document while keeping its structure.

        ``json`` may already be serialized text; anything else is encoded first.
        """
        languages = _require_languages(target_languages)
        request = TranslationRequest(
            text=serialize_document(json),
            source_language=source_language,
            target_languages=languages,
            preserve_placeholders=preserve_placeholders,
            enable_pluralization=enable_pluralization,
            output_format="json",
        )
        payload = await self.api_request("/translate", method="POST", json=request.to_wire())
        return self._build_result(JsonTranslationResult, payload, languages)

    async def translate_locale_file(
        self,
        content: Any,
        *,
        source_language: str = "en",
        target_languages: Sequence[str] | None = None,
        preserve_placeholders: bool = True,
        enable_pluralization: bool = True,
    ) -> dict[str, Any]:
        """Translate a locale document and return ``{language: document}``.

        Only requested languages are kept. A language missing from the response
        is left out rather than reported. One that is present but empty is kept.
        """
        result = await self.translate_json(
            content,
            source_language=source_language,
            target_languages=target_languages,
            preserve_placeholders=preserve_placeholders,
            enable_pluralization=enable_pluralization,
        )
        translations: dict[str, Any] = {}
        for language in _require_languages(target_languages):
            if language in result.translations:
                translations[language] = result.translations[language]
        return translations

    async def health_check(self) -> HealthStatus:
        config = self.get_config()
        url = f"{config.api_url}/api/health"
        try:
            async with self._client_factory() as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(f"Failed to reach Shipi18n API: {exc}") from exc

        payload = self._parse_body(response)
        if not isinstance(payload, dict):
            raise ResponseFormatError("Shipi18n health endpoint returned a non-object body.")
        try:
            return HealthStatus.model_validate(payload)
        except pydantic.ValidationError as exc:
            raise ResponseFormatError("Unexpected health payload from Shipi18n API.") from exc

    def _build_result(
        self,
        model: type[ResultT],
        payload: Any,
        languages: Sequence[str],
    ) -> ResultT:
        if not isinstance(payload, dict):
            raise ResponseFormatError("Shipi18n API returned a non-object translation body.")
        try:
            return model.from_payload(payload, languages)
        except pydantic.ValidationError as exc:
            raise ResponseFormatError(
                f"Unexpected translation payload from Shipi18n API "
                f"({exc.error_count()} invalid field(s))."
            ) from exc

    def _parse_body(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseFormatError("Shipi18n API returned a non-JSON body.") from exc

    def _extract_error(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            message = payload.get("message")
            if message:
                return str(message)

        return f"API error: {response.status_code}"
