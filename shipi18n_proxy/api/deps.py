from fastapi import Depends

from shipi18n_proxy.integrations.shipi18n import (
    ConfigProvider,
    ExecutionContext,
    Shipi18nClient,
)
from shipi18n_proxy.services.translation import TranslationProxyService

_config_provider: ConfigProvider | None = None
_shipi18n_client: Shipi18nClient | None = None


def get_config_provider() -> ConfigProvider:
    """Provide the server-side configuration provider singleton."""
    global _config_provider
    if _config_provider is None:
        # The proxy runs on the server, so it always uses the trusted credentials.
        _config_provider = ConfigProvider(ExecutionContext.TRUSTED)
    return _config_provider


async def get_shipi18n_client() -> Shipi18nClient:
    """Provide singleton Shipi18nClient instance."""
    global _shipi18n_client
    if _shipi18n_client is None:
        _shipi18n_client = Shipi18nClient(get_config_provider())
    return _shipi18n_client


async def get_translation_proxy_service(
    client: Shipi18nClient = Depends(get_shipi18n_client),
) -> TranslationProxyService:
    """Provide TranslationProxyService for the public translate route."""
    return TranslationProxyService(client)
