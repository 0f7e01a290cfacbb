"""
Chat Completions 互換APIによる翻訳（OpenAI / Grok / Deepseek 共通）
"""
from typing import Any, Dict, List, Optional
import httpx
import logging

from block_translation.exceptions import BackendCallException
from block_translation.services.http_transport import BackendHttpClient
from block_translation.services.prompts import PromptBuilder
from block_translation.services.translator_base import AITranslatorBase

logger = logging.getLogger(__name__)


class ChatCompletionTranslator(AITranslatorBase):
    """Chat Completions 形式の翻訳エンジン"""

    API_URL: str = ""
    DEFAULT_MODEL: str = ""
    TEMPERATURE: Optional[float] = None

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout: float = 60.0,
        prompt_builder: Optional[PromptBuilder] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        super().__init__(prompt_builder)
        self.api_key = api_key.strip() if isinstance(api_key, str) else ""
        self.model = model or self.DEFAULT_MODEL
        self.http = BackendHttpClient(
            self.display_name,
            self.backend_id,
            timeout=timeout,
            client=http_client
        )

    def build_messages(self, prompt: str, text: str) -> List[Dict[str, str]]:
        """既定: システムプロンプト + ユーザーテキスト"""
        return [
            {"role": "system", "content": prompt},
            {"role": "user", "content": text},
        ]

    def build_payload(self, prompt: str, text: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": self.build_messages(prompt, text),
            "stream": False,
        }
        if self.TEMPERATURE is not None:
            payload["temperature"] = self.TEMPERATURE
        return payload

    async def translate(self, text: str, target_locale: str) -> str:
        if not self.api_key:
            raise BackendCallException(
                f"{self.display_name} API key is required",
                backend_id=self.backend_id
            )

        logger.info(f"Starting translation to {target_locale} using {self.display_name} ({self.model})")

        response = await self.http.post(
            self.API_URL,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json=self.build_payload(self.build_prompt(target_locale), text)
        )
        translated_text = self._extract_content(self.http.decode_json(response))

        logger.info(f"Translation completed successfully. Output length: {len(translated_text)} chars")
        return translated_text

    def _extract_content(self, payload: Any) -> str:
        """choices[0].message.content を取り出す"""
        name = self.display_name

        if not isinstance(payload, dict):
            raise BackendCallException(f"{name} API error: Invalid response structure", backend_id=self.backend_id)

        error = payload.get("error")
        if error:
            message = error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
            raise BackendCallException(f"{name} API error: {message}", backend_id=self.backend_id)

        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise BackendCallException(f"{name} API error: Invalid response structure", backend_id=self.backend_id)

        if not isinstance(content, str) or not content.strip():
            raise BackendCallException(f"{name} API error: Empty translation", backend_id=self.backend_id)

        return content.strip()
