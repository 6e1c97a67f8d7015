from __future__ import annotations

import logging
from typing import Any, Sequence

from shipi18n_proxy.integrations.shipi18n import Shipi18nClient


logger = logging.getLogger(__name__)


class TranslationProxyService:
    """Forwards untrusted translation requests to the server-side Shipi18n client.

    This is where per-caller rate limiting, authentication, analytics or caching
    would hook in; the request and response shapes stay the same either way.
    """

    def __init__(self, client: Shipi18nClient) -> None:
        self._client = client

    async def translate(
        self,
        text: str,
        *,
        target_languages: Sequence[str],
        preserve_placeholders: bool = True,
        output_format: str | None = None,
    ) -> dict[str, Any]:
        logger.info(
            "Proxy translation requested (languages=%s format=%s chars=%d)",
            ",".join(target_languages),
            output_format or "plain",
            len(text),
        )
        if output_format == "json":
            json_result = await self._client.translate_json(
                text,
                target_languages=target_languages,
                preserve_placeholders=preserve_placeholders,
            )
            return json_result.to_payload()

        text_result = await self._client.translate(
            text,
            target_languages=target_languages,
            preserve_placeholders=preserve_placeholders,
        )
        return text_result.to_payload()
