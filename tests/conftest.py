from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest


def _ensure_local_project_on_path() -> None:
    root_dir = Path(__file__).resolve().parents[1]
    if str(root_dir) not in sys.path:
        sys.path.insert(0, str(root_dir))


_ensure_local_project_on_path()

_SHIPI18N_ENV = (
    "SHIPI18N_API_KEY",
    "SHIPI18N_API_URL",
    "PUBLIC_SHIPI18N_API_KEY",
    "PUBLIC_SHIPI18N_API_URL",
)


class RecordingTransport:
    """httpx mock transport that records requests and replays a canned response."""

    def __init__(
        self,
        *,
        status_code: int = 200,
        json_body: Any = None,
        content: bytes | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {}
        self.content = content
        self.error = error
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    def client_factory(self) -> Callable[[], httpx.AsyncClient]:
        return lambda: httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_body(self) -> dict[str, Any]:
        return json.loads(self.last_request.content)


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer shells and .env files out of configuration resolution."""
    for name in _SHIPI18N_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
