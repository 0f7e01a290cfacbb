"""
LLM翻訳用プロンプト
"""
from typing import Callable, Dict, List, Optional

from block_translation.services.locales import locale_to_language


# プロンプトフィルター: (テンプレート, ロケール, 言語名, バックエンドID) -> テンプレート
PromptFilter = Callable[[str, str, str, str], str]

BASE_PROMPT = (
    "You are a professional translator. Ensure translations are grammatically "
    "correct, natural-sounding, and human-oriented."
)
PROMPT_SUFFIX = " You will have to answer just by giving only one translation in {language}."


class PromptBuilder:
    """翻訳指示プロンプトの生成（フィルターでカスタマイズ可能）"""

    def __init__(
        self,
        base_prompt: str = BASE_PROMPT,
        language_names: Optional[Dict[str, str]] = None
    ):
        self.base_prompt = base_prompt
        self.language_names = language_names or {}
        self._filters: List[PromptFilter] = []

    def add_filter(self, prompt_filter: PromptFilter):
        """テンプレートを加工するフィルターを追加"""
        self._filters.append(prompt_filter)

    def build(self, target_locale: str, backend_id: str) -> str:
        """
        プロンプトを生成

        Args:
            target_locale: ロケールコード（例: fr_FR）
            backend_id: バックエンドID（フィルターへ渡す）

        Returns:
            言語名を埋め込んだプロンプト
        """
        target_language = locale_to_language(target_locale, self.language_names)

        template = self.base_prompt
        for prompt_filter in self._filters:
            template = prompt_filter(template, target_locale, target_language, backend_id)

        return template + PROMPT_SUFFIX.format(language=target_language)
