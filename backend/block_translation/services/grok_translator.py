"""
Grok翻訳サービス
"""
from block_translation.services.chat_completion_translator import ChatCompletionTranslator


class GrokTranslator(ChatCompletionTranslator):
    """x.ai Grokによる翻訳"""

    backend_id = "grok"
    display_name = "Grok"

    API_URL = "https://api.x.ai/v1/chat/completions"
    DEFAULT_MODEL = "grok-beta"
    TEMPERATURE = 0.3
