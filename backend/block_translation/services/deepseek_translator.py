"""
Deepseek翻訳サービス
"""
from typing import Dict, List

from block_translation.services.chat_completion_translator import ChatCompletionTranslator


class DeepseekTranslator(ChatCompletionTranslator):
    """Deepseekによる翻訳"""

    backend_id = "deepseek"
    display_name = "Deepseek"

    API_URL = "https://api.deepseek.com/chat/completions"
    DEFAULT_MODEL = "deepseek-chat"

    def build_messages(self, prompt: str, text: str) -> List[Dict[str, str]]:
        # プロンプトと本文を1つのユーザーメッセージにまとめる
        return [{"role": "user", "content": f"{prompt}\n\n{text}"}]
