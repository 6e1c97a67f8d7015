from shipi18n_proxy.integrations.shipi18n import (
    ApiError,
    ConfigProvider,
    ConfigurationError,
    ExecutionContext,
    ResponseFormatError,
    SerializationError,
    Shipi18nClient,
    Shipi18nConfig,
    Shipi18nError,
    TransportError,
    ValidationError,
    resolve_config,
)

__all__ = [
    "ApiError",
    "ConfigProvider",
    "ConfigurationError",
    "ExecutionContext",
    "ResponseFormatError",
    "SerializationError",
    "Shipi18nClient",
    "Shipi18nConfig",
    "Shipi18nError",
    "TransportError",
    "ValidationError",
    "resolve_config",
]
