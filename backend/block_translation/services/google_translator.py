"""
Google翻訳サービス（APIキー不要）
"""
from typing import Optional
import httpx
import logging

from block_translation.exceptions import BackendCallException
from block_translation.services.http_transport import BackendHttpClient
from block_translation.services.translator_base import TranslatorBase

logger = logging.getLogger(__name__)


class GoogleTranslator(TranslatorBase):
    """translate.googleapis.com による翻訳"""

    backend_id = "google"
    display_name = "Google Translate"

    API_URL = "https://translate.googleapis.com/translate_a/single"
    USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    def __init__(
        self,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.http = BackendHttpClient("Google Translate", self.backend_id, timeout=timeout, client=http_client)

    @staticmethod
    def convert_locale(locale: str) -> str:
        """ロケールを言語コードに変換（en_US -> en）"""
        return locale[:2].lower()

    async def translate(self, text: str, target_locale: str) -> str:
        lang_code = self.convert_locale(target_locale)
        logger.info(f"Starting translation to {lang_code} using Google Translate")

        response = await self.http.get(
            self.API_URL,
            params={
                'client': 'gtx',
                'sl': 'auto',
                'tl': lang_code,
                'dt': 't',
                'q': text,
            },
            headers={'User-Agent': self.USER_AGENT}
        )
        decoded = self.http.decode_json(response)

        if not isinstance(decoded, list) or not decoded or not isinstance(decoded[0], list):
            raise BackendCallException("Invalid response from Google Translate", backend_id=self.backend_id)

        # 文ごとに分割された訳文を連結
        translation = "".join(
            sentence[0]
            for sentence in decoded[0]
            if isinstance(sentence, list) and sentence and isinstance(sentence[0], str)
        ).strip()

        if not translation:
            raise BackendCallException("Google Translate returned an empty translation", backend_id=self.backend_id)

        return translation
