"""
DeepL翻訳サービス
"""
from typing import Optional
import httpx
import logging

from block_translation.exceptions import BackendCallException
from block_translation.services.http_transport import BackendHttpClient
from block_translation.services.translator_base import TranslatorBase

logger = logging.getLogger(__name__)


class DeepLTranslator(TranslatorBase):
    """DeepL APIによる翻訳"""

    backend_id = "deepl"
    display_name = "DeepL"

    API_URL_FREE = "https://api-free.deepl.com/v2/translate"
    API_URL_PRO = "https://api.deepl.com/v2/translate"

    # 地域バリアントを持つ言語のみ個別に対応
    LOCALE_CODES = {
        'en_GB': 'EN-GB',
        'en_US': 'EN-US',
        'pt_BR': 'PT-BR',
        'pt_PT': 'PT-PT',
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.api_key = api_key.strip() if isinstance(api_key, str) else ""
        self.http = BackendHttpClient("DeepL", self.backend_id, timeout=timeout, client=http_client)

    @property
    def api_url(self) -> str:
        """Freeプランのキーは :fx で終わる"""
        return self.API_URL_FREE if self.api_key.endswith(':fx') else self.API_URL_PRO

    @classmethod
    def convert_locale(cls, locale: str) -> str:
        """ロケールをDeepLの言語コードに変換（en_US -> EN-US, fr_FR -> FR）"""
        if locale in cls.LOCALE_CODES:
            return cls.LOCALE_CODES[locale]
        return locale[:2].upper()

    async def translate(self, text: str, target_locale: str) -> str:
        if not self.api_key:
            raise BackendCallException("DeepL API key is required", backend_id=self.backend_id)

        target_lang = self.convert_locale(target_locale)
        logger.info(f"Starting translation to {target_lang} using DeepL")

        response = await self.http.post(
            self.api_url,
            headers={"Authorization": f"DeepL-Auth-Key {self.api_key}"},
            data={"text": text, "target_lang": target_lang}
        )
        decoded = self.http.decode_json(response)

        try:
            translated_text = decoded["translations"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise BackendCallException("Invalid response from DeepL", backend_id=self.backend_id)

        if not isinstance(translated_text, str) or not translated_text:
            raise BackendCallException("DeepL API error: Empty translation", backend_id=self.backend_id)

        return translated_text
