"""
翻訳バックエンドのレジストリ

バックエンドID -> (表示名, APIキー設定名, 生成関数)
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional
import logging

from block_translation.config import Settings
from block_translation.exceptions import BackendUnavailableException
from block_translation.services.claude_translator import ClaudeTranslator
from block_translation.services.deepl_translator import DeepLTranslator
from block_translation.services.deepseek_translator import DeepseekTranslator
from block_translation.services.gemini_translator import GeminiTranslator
from block_translation.services.google_translator import GoogleTranslator
from block_translation.services.grok_translator import GrokTranslator
from block_translation.services.openai_translator import OpenAITranslator
from block_translation.services.prompts import PromptBuilder
from block_translation.services.translator_base import TranslatorBase

logger = logging.getLogger(__name__)


# (APIキー, 設定, プロンプトビルダー) -> 翻訳エンジン
TranslatorFactory = Callable[[str, Settings, PromptBuilder], TranslatorBase]


@dataclass(frozen=True)
class BackendDefinition:
    """バックエンド定義"""
    backend_id: str
    display_name: str
    api_key_setting: Optional[str]
    factory: TranslatorFactory


BACKENDS: Dict[str, BackendDefinition] = {
    definition.backend_id: definition
    for definition in [
        BackendDefinition(
            "openai", "OpenAI", "OPENAI_API_KEY",
            lambda key, cfg, prompts: OpenAITranslator(
                key, model=cfg.OPENAI_MODEL,
                timeout=cfg.TRANSLATION_TIMEOUT_SECONDS, prompt_builder=prompts
            )
        ),
        BackendDefinition(
            "google", "Google Translate", None,
            lambda key, cfg, prompts: GoogleTranslator(timeout=cfg.TRANSLATION_TIMEOUT_SECONDS)
        ),
        BackendDefinition(
            "deepl", "DeepL", "DEEPL_API_KEY",
            lambda key, cfg, prompts: DeepLTranslator(key, timeout=cfg.TRANSLATION_TIMEOUT_SECONDS)
        ),
        BackendDefinition(
            "grok", "Grok", "GROK_API_KEY",
            lambda key, cfg, prompts: GrokTranslator(
                key, model=cfg.GROK_MODEL,
                timeout=cfg.TRANSLATION_TIMEOUT_SECONDS, prompt_builder=prompts
            )
        ),
        BackendDefinition(
            "deepseek", "Deepseek", "DEEPSEEK_API_KEY",
            lambda key, cfg, prompts: DeepseekTranslator(
                key, model=cfg.DEEPSEEK_MODEL,
                timeout=cfg.TRANSLATION_TIMEOUT_SECONDS, prompt_builder=prompts
            )
        ),
        BackendDefinition(
            "gemini", "Gemini", "GEMINI_API_KEY",
            lambda key, cfg, prompts: GeminiTranslator(
                key, model=cfg.GEMINI_TRANSLATE_MODEL, prompt_builder=prompts
            )
        ),
        BackendDefinition(
            "claude", "Claude", "CLAUDE_API_KEY",
            lambda key, cfg, prompts: ClaudeTranslator(
                key, model=cfg.CLAUDE_MODEL,
                timeout=cfg.TRANSLATION_TIMEOUT_SECONDS, prompt_builder=prompts
            )
        ),
    ]
}


def get_api_key(backend_id: str, settings: Settings) -> Optional[str]:
    """バックエンドのAPIキー（キー不要のバックエンドは空文字、未設定はNone）"""
    definition = BACKENDS.get(backend_id)
    if definition is None:
        return None
    if definition.api_key_setting is None:
        return ""

    key = (getattr(settings, definition.api_key_setting, "") or "").strip()
    return key or None


def get_available_backends(settings: Settings) -> Dict[str, str]:
    """利用可能（キー設定済み）なバックエンド ID -> 表示名"""
    return {
        backend_id: definition.display_name
        for backend_id, definition in BACKENDS.items()
        if get_api_key(backend_id, settings) is not None
    }


def create_translator(
    backend_id: str,
    settings: Settings,
    prompt_builder: Optional[PromptBuilder] = None
) -> TranslatorBase:
    """
    翻訳エンジンを生成

    Args:
        backend_id: バックエンドID（openai, google, deepl, ...）
        settings: 解決済みの設定
        prompt_builder: LLM系バックエンドで共有するプロンプトビルダー

    Raises:
        BackendUnavailableException: 未知のIDまたはAPIキー未設定
    """
    definition = BACKENDS.get(backend_id)
    if definition is None:
        raise BackendUnavailableException(backend_id, f"Unknown translation backend '{backend_id}'")

    api_key = get_api_key(backend_id, settings)
    if api_key is None:
        logger.warning(f"Translation backend '{backend_id}' requested but {definition.api_key_setting} is not set")
        raise BackendUnavailableException(backend_id)

    return definition.factory(api_key, settings, prompt_builder or PromptBuilder())
