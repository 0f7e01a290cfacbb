"""
OpenAI翻訳サービス
"""
from block_translation.services.chat_completion_translator import ChatCompletionTranslator


class OpenAITranslator(ChatCompletionTranslator):
    """OpenAI Chat Completionsによる翻訳"""

    backend_id = "openai"
    display_name = "OpenAI"

    API_URL = "https://api.openai.com/v1/chat/completions"
    DEFAULT_MODEL = "gpt-4o-mini"
    TEMPERATURE = 0.3
