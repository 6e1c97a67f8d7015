from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


OutputFormat = Literal["json"]


class TranslationRequest(BaseModel):
    """Body sent to the Shipi18n ``/translate`` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="Source text or serialized JSON document.")
    source_language: str = Field(default="en", alias="sourceLanguage")
    target_languages: list[str] = Field(..., alias="targetLanguages")
    preserve_placeholders: bool = Field(default=True, alias="preservePlaceholders")
    enable_pluralization: bool = Field(default=True, alias="enablePluralization")
    output_format: OutputFormat | None = Field(default=None, alias="outputFormat")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TranslatedSegment(BaseModel):
    model_config = ConfigDict(extra="allow")

    original: str
    translated: str


_SEGMENTS = TypeAdapter(list[TranslatedSegment])


def _split_payload(
    payload: Mapping[str, Any],
    target_languages: Sequence[str],
) -> tuple[dict[str, Any], dict[str, Any]]:
    requested = set(target_languages)
    translations: dict[str, Any] = {}
    extras: dict[str, Any] = {}
    for key, value in payload.items():
        if key in requested and value is not None:
            translations[key] = value
        else:
            extras[key] = value
    return translations, extras


class TextTranslationResult(BaseModel):
    """Plain-text translation keyed by language code.

    ``extras`` keeps every top-level key that is not a requested language
    (diagnostics or unrequested languages) so the full response body can be
    rebuilt with :meth:`to_payload`. A requested language whose entry is not a
    list of segments, such as a per-language error object, lands in ``extras``
    untouched.
    """

    translations: dict[str, list[TranslatedSegment]] = Field(default_factory=dict)
    extras: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        target_languages: Sequence[str],
    ) -> TextTranslationResult:
        entries, extras = _split_payload(payload, target_languages)
        translations: dict[str, list[TranslatedSegment]] = {}
        for language, value in entries.items():
            try:
                translations[language] = _SEGMENTS.validate_python(value)
            except ValidationError:
                extras[language] = value
        return cls(translations=translations, extras=extras)

    def to_payload(self) -> dict[str, Any]:
        payload = dict(self.extras)
        for language, segments in self.translations.items():
            payload[language] = [segment.model_dump() for segment in segments]
        return payload


class JsonTranslationResult(BaseModel):
    """Structured translation whose per-language values mirror the input document.

    Pluralized keys may gain ``<key>_<category>`` siblings (``items_one``,
    ``items_few``...); those are passed through untouched.
    """

    translations: dict[str, Any] = Field(default_factory=dict)
    extras: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        target_languages: Sequence[str],
    ) -> JsonTranslationResult:
        translations, extras = _split_payload(payload, target_languages)
        return cls(translations=translations, extras=extras)

    def to_payload(self) -> dict[str, Any]:
        return {**self.extras, **self.translations}


class HealthStatus(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str | None = None
    version: str | None = None


class TranslateProxyRequest(BaseModel):
    """Body accepted by the public ``POST /api/translate`` route."""

    model_config = ConfigDict(populate_by_name=True)

    text: str | None = Field(default=None, description="Text or serialized JSON to translate.")
    target_languages: list[str] | None = Field(
        default=None,
        alias="targetLanguages",
        description="Language codes to translate into.",
    )
    preserve_placeholders: bool = Field(default=True, alias="preservePlaceholders")
    output_format: str | None = Field(
        default=None,
        alias="outputFormat",
        description="Set to 'json' to translate a JSON document while keeping its structure.",
    )


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable failure reason.")
