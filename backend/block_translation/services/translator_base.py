"""
翻訳エンジンの基底クラス
"""
from abc import ABC, abstractmethod
from typing import Optional

from block_translation.services.prompts import PromptBuilder


class TranslatorBase(ABC):
    """翻訳エンジンの基底クラス"""

    # バックエンドID（レジストリのキー）と表示名
    backend_id: str = ""
    display_name: str = ""

    @abstractmethod
    async def translate(
        self,
        text: str,
        target_locale: str
    ) -> str:
        """
        テキスト翻訳

        Args:
            text: 翻訳元テキスト（空でない文字列）
            target_locale: 翻訳先ロケール (en_US, fr_FR, etc.)

        Returns:
            翻訳されたテキスト

        Raises:
            BackendCallException: 認証・HTTP・レスポンス形式のエラー
        """
        pass


class AITranslatorBase(TranslatorBase):
    """LLMベースの翻訳エンジン（プロンプト生成を共通化）"""

    def __init__(self, prompt_builder: Optional[PromptBuilder] = None):
        self.prompt_builder = prompt_builder or PromptBuilder()

    def build_prompt(self, target_locale: str) -> str:
        """翻訳先言語名入りのシステムプロンプト"""
        return self.prompt_builder.build(target_locale, self.backend_id)
