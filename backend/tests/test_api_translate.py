"""
翻訳・ロールバック・設定APIのテスト
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock, patch

from block_translation.api import dependencies
from block_translation.api.dependencies import get_settings, get_translator
from block_translation.config import Settings
from block_translation.main import app
from block_translation.services.prompts import PromptBuilder
from block_translation.services.translator_base import TranslatorBase

from conftest import FakeTranslator


class BrokenTranslator(TranslatorBase):
    """想定外の例外を送出する翻訳エンジン"""

    backend_id = "broken"
    display_name = "Broken"

    async def translate(self, text: str, target_locale: str) -> str:
        raise RuntimeError("unexpected failure")


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-test",
        DEEPL_API_KEY="",
        GROK_API_KEY="",
        DEEPSEEK_API_KEY="",
        GEMINI_API_KEY="",
        CLAUDE_API_KEY="",
        TRANSLATION_LANGUAGES="fr_FR,es_ES",
        LOCALE_VALIDATOR="custom",
        EXTRA_SUPPORTED_BLOCKS=["acme/hero"]
    )


@pytest.fixture
def translator():
    return FakeTranslator({
        ("Hello", "fr_FR"): "Bonjour",
        ("My page", "fr_FR"): "Ma page",
    })


@pytest.fixture
def client(test_settings, translator):
    """依存関係を差し替えたテストクライアント"""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_translator] = lambda backend: translator
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def paragraph_payload():
    return {
        "name": "core/paragraph",
        "attributes": {"content": "Hello"},
        "innerBlocks": [],
        "clientId": "p-1"
    }


@pytest.mark.integration
class TestTranslateEndpoint:
    """POST /api/translate/{backend}"""

    def test_translate_title_and_blocks(self, client, paragraph_payload):
        response = client.post(
            "/api/translate/fake",
            json={"title": "My page", "blocks": [paragraph_payload], "language": "fr_FR"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Ma page"
        assert data["errors"] == {}
        assert data["failedBlocks"] == []
        block = data["blocks"][0]
        assert block["clientId"] == "p-1"
        assert block["attributes"]["content"] == "Bonjour"
        assert block["attributes"]["_backup"]["targetLocale"] == "fr_FR"

    def test_missing_language(self, client):
        response = client.post("/api/translate/fake", json={"title": "My page"})

        assert response.status_code == 400
        assert response.json()["errors"] == {"targetLanguage": "form.targetLanguage.required"}

    def test_missing_content(self, client, translator):
        response = client.post("/api/translate/fake", json={"title": "", "blocks": [], "language": "fr_FR"})

        assert response.status_code == 400
        assert response.json()["errors"] == {"content": "form.content.required"}
        assert translator.calls == []

    def test_unsupported_language(self, client):
        response = client.post("/api/translate/fake", json={"title": "My page", "language": "de_DE"})

        assert response.status_code == 400
        assert response.json()["errors"] == {"targetLanguage": "form.targetLanguage.not_supported"}

    def test_partial_failure(self, client, translator, paragraph_payload):
        """失敗したブロックがあれば400（翻訳済みのブロックも返す）"""
        translator.failing_texts = {"Broken"}
        broken = {"name": "core/paragraph", "attributes": {"content": "Broken"}, "clientId": "p-2"}

        response = client.post(
            "/api/translate/fake",
            json={"blocks": [paragraph_payload, broken], "language": "fr_FR"}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["errors"] == {
            "blocks.1": "internal.error.translation_failed",
            "internal": "internal.error.translation_failed",
        }
        assert data["failedBlocks"] == ["p-2"]
        assert data["blocks"][0]["attributes"]["content"] == "Bonjour"
        assert data["blocks"][1]["attributes"] == {"content": "Broken"}

    def test_backend_not_available(self, test_settings):
        """APIキー未設定のバックエンドは400"""
        app.dependency_overrides[get_settings] = lambda: test_settings
        try:
            response = TestClient(app).post("/api/translate/grok", json={"title": "Hi", "language": "fr_FR"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 400
        assert response.json() == {"errors": {"backend": "backend.not_available"}}

    def test_unexpected_error(self, test_settings):
        """想定外の例外は500"""
        app.dependency_overrides[get_settings] = lambda: test_settings
        app.dependency_overrides[get_translator] = lambda backend: BrokenTranslator()
        try:
            response = TestClient(app, raise_server_exceptions=False).post(
                "/api/translate/broken",
                json={"title": "Hi", "language": "fr_FR"}
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"errors": {"internal": "internal.error.unexpected"}}


@pytest.mark.integration
class TestPromptFilters:
    """共有プロンプトビルダーに登録したフィルターがバックエンドに届く"""

    def test_shared_prompt_builder(self):
        assert dependencies.get_prompt_builder() is dependencies.get_prompt_builder()
        assert dependencies.get_prompt_builder() is dependencies.prompt_builder

    @patch('block_translation.services.claude_translator.AsyncAnthropic')
    def test_filter_reaches_backend(self, mock_anthropic, test_settings, monkeypatch):
        received = []

        def glossary_filter(template, locale, language, backend_id):
            received.append((locale, language, backend_id))
            return f"{template} Never translate the brand name Acme."

        builder = PromptBuilder()
        builder.add_filter(glossary_filter)
        monkeypatch.setattr(dependencies, "prompt_builder", builder)

        mock_content = MagicMock()
        mock_content.text = "Ma page"
        mock_response = MagicMock()
        mock_response.content = [mock_content]
        mock_client = MagicMock()
        mock_client.messages.create = AsyncMock(return_value=mock_response)
        mock_anthropic.return_value = mock_client

        app.dependency_overrides[get_settings] = lambda: test_settings.model_copy(
            update={"CLAUDE_API_KEY": "claude-key"}
        )
        try:
            response = TestClient(app).post("/api/translate/claude", json={"title": "My page", "language": "fr_FR"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["title"] == "Ma page"
        assert received == [("fr_FR", "French", "claude")]
        system_prompt = mock_client.messages.create.call_args.kwargs["system"]
        assert "Never translate the brand name Acme." in system_prompt
        assert system_prompt.endswith("only one translation in French.")


@pytest.mark.integration
class TestBlockEndpoints:
    """単一ブロック翻訳・ロールバック"""

    def test_translate_block_then_rollback(self, client, paragraph_payload):
        response = client.post(
            "/api/translate/fake/block",
            json={"block": paragraph_payload, "language": "fr_FR"}
        )

        assert response.status_code == 200
        block = response.json()["block"]
        assert block["attributes"]["content"] == "Bonjour"
        assert block["attributes"]["_individuallyTranslated"]["targetLocale"] == "fr_FR"

        response = client.post("/api/rollback", json={"block": block})

        assert response.status_code == 200
        assert response.json()["block"] == paragraph_payload

    def test_translate_block_failure(self, client, translator, paragraph_payload):
        translator.failing_texts = {"Hello"}

        response = client.post(
            "/api/translate/fake/block",
            json={"block": paragraph_payload, "language": "fr_FR"}
        )

        assert response.status_code == 400
        assert response.json()["errors"]["internal"] == "internal.error.translation_failed"

    def test_translate_block_invalid_language(self, client, translator, paragraph_payload):
        response = client.post(
            "/api/translate/fake/block",
            json={"block": paragraph_payload, "language": "xx_YY"}
        )

        assert response.status_code == 400
        assert response.json() == {"errors": {"targetLanguage": "form.targetLanguage.not_supported"}}
        assert translator.calls == []

    def test_rollback_without_backup(self, client, paragraph_payload):
        response = client.post("/api/rollback", json={"block": paragraph_payload})

        assert response.status_code == 400
        assert response.json() == {"errors": {"backup": "rollback.error.no_backup"}}

    def test_rollback_not_restorable(self, client, paragraph_payload):
        paragraph_payload["attributes"]["_backup"] = {
            "snapshot": "{not json",
            "createdAt": "2024-01-01T00:00:00+00:00",
            "targetLocale": "fr_FR",
            "backendId": "deepl"
        }

        response = client.post("/api/rollback", json={"block": paragraph_payload})

        assert response.status_code == 400
        assert response.json() == {"errors": {"backup": "rollback.error.not_restorable"}}


@pytest.mark.integration
class TestConfigEndpoints:
    """設定・ヘルスチェック"""

    def test_editor_config(self, client):
        response = client.get("/api/config")

        assert response.status_code == 200
        data = response.json()
        assert data["languages"] == [
            {"code": "fr_FR", "label": "French"},
            {"code": "es_ES", "label": "Spanish"},
        ]
        assert data["backends"] == {"openai": "OpenAI", "google": "Google Translate"}
        assert "core/paragraph" in data["supportedBlocks"]
        assert "acme/hero" in data["supportedBlocks"]
        assert data["supportedBlocks"] == sorted(data["supportedBlocks"])

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "google" in data["configured_backends"]

    def test_api_root(self, client):
        response = client.get("/api")

        assert response.status_code == 200
        assert response.json()["message"] == "Block Translation API"
