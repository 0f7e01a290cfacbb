"""
Claude翻訳サービス
"""
from anthropic import AsyncAnthropic, RateLimitError
from typing import Optional
from block_translation.services.translator_base import AITranslatorBase
from block_translation.services.prompts import PromptBuilder
from block_translation.exceptions import APIRateLimitException, BackendCallException
import logging

logger = logging.getLogger(__name__)


class ClaudeTranslator(AITranslatorBase):
    """Claude Sonnetによる翻訳"""

    backend_id = "claude"
    display_name = "Claude"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-5-20250929",
        timeout: float = 60.0,
        prompt_builder: Optional[PromptBuilder] = None
    ):
        super().__init__(prompt_builder)
        self.client = AsyncAnthropic(api_key=api_key) if api_key else None
        self.model = model
        self.timeout = timeout

    async def translate(self, text: str, target_locale: str) -> str:
        """Claude Sonnetで翻訳（リトライなし）"""

        if self.client is None:
            raise BackendCallException("Claude API key is required", backend_id=self.backend_id)

        logger.info(f"Starting translation to {target_locale} using Claude")

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=4000,
                system=self.build_prompt(target_locale),
                messages=[{
                    "role": "user",
                    "content": text
                }],
                timeout=self.timeout
            )
            translated_text = response.content[0].text

        except RateLimitError as e:
            logger.error(f"Claude rate limited: {str(e)}")
            raise APIRateLimitException(
                f"Claude translation failed: {str(e)}",
                backend_id=self.backend_id
            ) from e
        except Exception as e:
            logger.error(f"Claude translation failed: {str(e)}")
            raise BackendCallException(
                f"Claude translation failed: {str(e)}",
                status_code=getattr(e, "status_code", None),
                backend_id=self.backend_id
            ) from e

        if not translated_text or not translated_text.strip():
            raise BackendCallException("Claude translation failed: empty response", backend_id=self.backend_id)

        logger.info(f"Translation completed successfully. Output length: {len(translated_text)} chars")
        return translated_text.strip()
