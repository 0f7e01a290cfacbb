"""
Gemini翻訳サービス
"""
from google import genai
from google.genai import errors, types
from typing import Optional
from block_translation.services.translator_base import AITranslatorBase
from block_translation.services.prompts import PromptBuilder
from block_translation.exceptions import APIRateLimitException, BackendCallException
import logging

logger = logging.getLogger(__name__)


class GeminiTranslator(AITranslatorBase):
    """Geminiによる翻訳"""

    backend_id = "gemini"
    display_name = "Gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        prompt_builder: Optional[PromptBuilder] = None
    ):
        super().__init__(prompt_builder)
        self.client = genai.Client(api_key=api_key) if api_key else None
        self.model = model

    async def translate(self, text: str, target_locale: str) -> str:
        """Geminiで翻訳（リトライなし）"""

        if self.client is None:
            raise BackendCallException("Gemini API key is required", backend_id=self.backend_id)

        logger.info(f"Starting translation to {target_locale} using Gemini ({self.model})")

        prompt = self.build_prompt(target_locale)

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=f"{prompt}\n\n{text}",
                config=types.GenerateContentConfig(
                    temperature=0.3  # 翻訳には低めのtemperatureが適切
                )
            )
            translated_text = response.text

        except errors.APIError as e:
            logger.error(f"Gemini translation failed: {str(e)}")
            if e.code == 429:
                raise APIRateLimitException(
                    f"Gemini translation failed: {str(e)}",
                    backend_id=self.backend_id
                ) from e
            raise BackendCallException(
                f"Gemini translation failed: {str(e)}",
                status_code=e.code,
                backend_id=self.backend_id
            ) from e
        except Exception as e:
            logger.error(f"Gemini translation failed: {str(e)}")
            raise BackendCallException(
                f"Gemini translation failed: {str(e)}",
                backend_id=self.backend_id
            ) from e

        if not translated_text or not translated_text.strip():
            raise BackendCallException("Gemini translation failed: empty response", backend_id=self.backend_id)

        logger.info(f"Translation completed successfully. Output length: {len(translated_text)} chars")
        return translated_text.strip()
