"""
Gemini翻訳サービスのテスト
"""
import pytest
from google.genai import errors
from unittest.mock import AsyncMock, MagicMock, patch

from block_translation.exceptions import APIRateLimitException, BackendCallException
from block_translation.services.gemini_translator import GeminiTranslator


def _mock_client(generate_content):
    mock_client = MagicMock()
    mock_aio = MagicMock()
    mock_models = MagicMock()
    mock_models.generate_content = generate_content
    mock_aio.models = mock_models
    mock_client.aio = mock_aio
    return mock_client


def _mock_response(text):
    mock_response = MagicMock()
    mock_response.text = text
    return mock_response


@pytest.mark.unit
class TestGeminiTranslatorInit:
    """初期化のテスト"""

    @patch('block_translation.services.gemini_translator.genai.Client')
    def test_init(self, mock_client_class):
        """初期化テスト"""
        translator = GeminiTranslator("test_gemini_api_key")

        mock_client_class.assert_called_once_with(api_key="test_gemini_api_key")
        assert translator.model == "gemini-2.5-flash"
        assert translator.backend_id == "gemini"


@pytest.mark.unit
@pytest.mark.asyncio
class TestGeminiTranslator:
    """Gemini翻訳サービスのテスト"""

    @pytest.fixture
    def api_key(self):
        """テスト用APIキー"""
        return "test_gemini_api_key"

    @patch('block_translation.services.gemini_translator.genai.Client')
    async def test_translate_success(self, mock_client_class, api_key):
        """translate - 成功ケース"""
        generate_content = AsyncMock(return_value=_mock_response("Hola mundo\n"))
        mock_client_class.return_value = _mock_client(generate_content)

        translator = GeminiTranslator(api_key, model="gemini-2.5-pro")
        result = await translator.translate("Hello world", "es_ES")

        assert result == "Hola mundo"

        # API呼び出しの検証
        generate_content.assert_called_once()
        call_args = generate_content.call_args
        assert call_args.kwargs["model"] == "gemini-2.5-pro"
        assert "only one translation in Spanish." in call_args.kwargs["contents"]
        assert call_args.kwargs["contents"].endswith("\n\nHello world")
        assert call_args.kwargs["config"].temperature == 0.3

    async def test_translate_without_key(self):
        """translate - APIキー未設定"""
        translator = GeminiTranslator("")

        with pytest.raises(BackendCallException, match="API key is required"):
            await translator.translate("Hello", "es_ES")

    @patch('block_translation.services.gemini_translator.genai.Client')
    async def test_translate_api_error(self, mock_client_class, api_key):
        """translate - API呼び出しエラー"""
        generate_content = AsyncMock(side_effect=Exception("API connection error"))
        mock_client_class.return_value = _mock_client(generate_content)

        translator = GeminiTranslator(api_key)

        with pytest.raises(BackendCallException, match="Gemini translation failed"):
            await translator.translate("Hello", "es_ES")

        assert generate_content.call_count == 1

    @patch('block_translation.services.gemini_translator.genai.Client')
    async def test_translate_rate_limit(self, mock_client_class, api_key):
        """translate - レート制限（HTTP 429）"""
        error = errors.APIError(429, {"error": {"message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}})
        mock_client_class.return_value = _mock_client(AsyncMock(side_effect=error))

        translator = GeminiTranslator(api_key)

        with pytest.raises(APIRateLimitException):
            await translator.translate("Hello", "es_ES")

    @patch('block_translation.services.gemini_translator.genai.Client')
    async def test_translate_server_error(self, mock_client_class, api_key):
        """translate - サーバーエラーはステータスコード付き"""
        error = errors.APIError(500, {"error": {"message": "Internal error", "status": "INTERNAL"}})
        mock_client_class.return_value = _mock_client(AsyncMock(side_effect=error))

        translator = GeminiTranslator(api_key)

        with pytest.raises(BackendCallException) as exc_info:
            await translator.translate("Hello", "es_ES")

        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, APIRateLimitException)

    @patch('block_translation.services.gemini_translator.genai.Client')
    async def test_translate_empty_response(self, mock_client_class, api_key):
        """translate - 空の応答は失敗"""
        mock_client_class.return_value = _mock_client(AsyncMock(return_value=_mock_response(None)))

        translator = GeminiTranslator(api_key)

        with pytest.raises(BackendCallException, match="empty response"):
            await translator.translate("Hello", "es_ES")
