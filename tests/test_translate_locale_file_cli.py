from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from scripts.translate_locale_file import main, write_translations
from shipi18n_proxy.integrations.shipi18n import ApiError


class FakeShipi18nClient:
    calls: list[dict[str, Any]] = []
    result: dict[str, Any] = {}
    error: Exception | None = None

    def __init__(self, _config: object) -> None:
        pass

    async def translate_locale_file(self, content: Any, **kwargs: Any) -> dict[str, Any]:
        FakeShipi18nClient.calls.append({"content": content, **kwargs})
        if FakeShipi18nClient.error is not None:
            raise FakeShipi18nClient.error
        return FakeShipi18nClient.result


@pytest.fixture()
def fake_client(monkeypatch: pytest.MonkeyPatch) -> type[FakeShipi18nClient]:
    FakeShipi18nClient.calls = []
    FakeShipi18nClient.result = {}
    FakeShipi18nClient.error = None
    monkeypatch.setattr("scripts.translate_locale_file.Shipi18nClient", FakeShipi18nClient)
    return FakeShipi18nClient


def _write_source(tmp_path: Path) -> Path:
    source = tmp_path / "en.json"
    source.write_text(json.dumps({"app": {"title": "My App"}}), encoding="utf-8")
    return source


def test_write_translations_creates_one_file_per_language(tmp_path: Path) -> None:
    written = write_translations(
        {"es": {"title": "Mi aplicación"}, "fr": {"title": "Mon app"}},
        tmp_path / "out",
    )

    assert [path.name for path in written] == ["es.json", "fr.json"]
    spanish = json.loads((tmp_path / "out" / "es.json").read_text(encoding="utf-8"))
    assert spanish == {"title": "Mi aplicación"}
    assert "aplicación" in (tmp_path / "out" / "es.json").read_text(encoding="utf-8")


def test_main_writes_translated_files(
    tmp_path: Path,
    fake_client: type[FakeShipi18nClient],
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path)
    fake_client.result = {"es": {"app": {"title": "Mi App"}}}

    with pytest.raises(SystemExit) as exc:
        main([str(source), "--target", "es", "fr", "--output-dir", str(tmp_path / "locales")])

    assert exc.value.code == 0
    call = fake_client.calls[-1]
    assert call["content"] == {"app": {"title": "My App"}}
    assert call["target_languages"] == ["es", "fr"]
    assert call["source_language"] == "en"
    assert call["preserve_placeholders"] is True
    assert call["enable_pluralization"] is True
    assert (tmp_path / "locales" / "es.json").exists()
    assert not (tmp_path / "locales" / "fr.json").exists()
    captured = capsys.readouterr()
    assert "No translation returned for: fr" in captured.err


def test_main_prints_to_stdout(
    tmp_path: Path,
    fake_client: type[FakeShipi18nClient],
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path)
    fake_client.result = {"de": {"app": {"title": "Meine App"}}}

    with pytest.raises(SystemExit) as exc:
        main([str(source), "-t", "de", "--stdout", "--no-pluralization", "--no-placeholders"])

    assert exc.value.code == 0
    assert json.loads(capsys.readouterr().out) == fake_client.result
    assert fake_client.calls[-1]["enable_pluralization"] is False
    assert fake_client.calls[-1]["preserve_placeholders"] is False


def test_main_reports_api_failures(
    tmp_path: Path,
    fake_client: type[FakeShipi18nClient],
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path)
    fake_client.error = ApiError("Invalid API key", status_code=401)

    with pytest.raises(SystemExit) as exc:
        main([str(source), "--target", "es"])

    assert exc.value.code == 1
    assert "Invalid API key" in capsys.readouterr().err


def test_main_rejects_invalid_json(tmp_path: Path, fake_client: type[FakeShipi18nClient]) -> None:
    source = tmp_path / "broken.json"
    source.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main([str(source), "--target", "es"])

    assert exc.value.code == 2
    assert fake_client.calls == []
