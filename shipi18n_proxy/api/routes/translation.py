from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from shipi18n_proxy.api.deps import get_translation_proxy_service
from shipi18n_proxy.integrations.shipi18n import (
    LANGUAGES_REQUIRED_MESSAGE,
    TEXT_REQUIRED_MESSAGE,
)
from shipi18n_proxy.schemas.translation import ErrorResponse, TranslateProxyRequest
from shipi18n_proxy.services.translation import TranslationProxyService

router = APIRouter()

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/translate",
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Translate text or a JSON document on behalf of a browser caller.",
)
async def translate(
    payload: TranslateProxyRequest,
    service: TranslationProxyService = Depends(get_translation_proxy_service),
):
    """Relay the translation result verbatim, keeping the API key on the server."""
    if not payload.text:
        return _error(status.HTTP_400_BAD_REQUEST, TEXT_REQUIRED_MESSAGE)
    if not payload.target_languages:
        return _error(status.HTTP_400_BAD_REQUEST, LANGUAGES_REQUIRED_MESSAGE)

    try:
        result = await service.translate(
            payload.text,
            target_languages=payload.target_languages,
            preserve_placeholders=payload.preserve_placeholders,
            output_format=payload.output_format,
        )
    except Exception as exc:
        logger.exception("Translation error")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc) or "Translation failed",
        )
    return result
