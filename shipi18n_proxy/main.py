import uvicorn

from shipi18n_proxy.core.app import create_app
from shipi18n_proxy.core.config import get_settings

app = create_app()


def run() -> None:
    """Entrypoint for `shipi18n-proxy` script."""
    settings = get_settings()
    uvicorn.run(
        "shipi18n_proxy.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        factory=False,
    )


if __name__ == "__main__":
    run()
