"""
APIの依存関係

設定を解決してサービスを組み立てる（コアは設定を直接参照しない）
"""
from fastapi import Depends

from block_translation.config import Settings, settings
from block_translation.services.backup_manager import BackupManager
from block_translation.services.block_attributes import BlockAttributePolicy
from block_translation.services.locale_validator import LocaleValidatorBase, create_locale_validator
from block_translation.services.prompts import PromptBuilder
from block_translation.services.translation_orchestrator import TranslationOrchestrator
from block_translation.services.translator_base import TranslatorBase
from block_translation.services.translator_registry import create_translator

# アプリケーション全体で共有するプロンプトビルダー（add_filter で翻訳指示を拡張する）
prompt_builder = PromptBuilder()


def get_settings() -> Settings:
    """アプリケーション設定（テストで差し替え可能）"""
    return settings


def get_block_policy(app_settings: Settings = Depends(get_settings)) -> BlockAttributePolicy:
    return BlockAttributePolicy(
        overrides=app_settings.BLOCK_ATTRIBUTE_OVERRIDES,
        extra_block_types=app_settings.EXTRA_SUPPORTED_BLOCKS
    )


def get_locale_validator(app_settings: Settings = Depends(get_settings)) -> LocaleValidatorBase:
    return create_locale_validator(app_settings.LOCALE_VALIDATOR, app_settings.translation_locales)


def get_backup_manager(policy: BlockAttributePolicy = Depends(get_block_policy)) -> BackupManager:
    return BackupManager(policy)


def get_prompt_builder() -> PromptBuilder:
    """共有プロンプトビルダー（登録済みのフィルターを全リクエストに適用）"""
    return prompt_builder


def get_translator(
    backend: str,
    app_settings: Settings = Depends(get_settings),
    prompts: PromptBuilder = Depends(get_prompt_builder)
) -> TranslatorBase:
    """パスパラメータ backend から翻訳エンジンを生成（未設定は400）"""
    return create_translator(backend, app_settings, prompts)


def get_orchestrator(
    translator: TranslatorBase = Depends(get_translator),
    locale_validator: LocaleValidatorBase = Depends(get_locale_validator),
    policy: BlockAttributePolicy = Depends(get_block_policy),
    backup_manager: BackupManager = Depends(get_backup_manager)
) -> TranslationOrchestrator:
    return TranslationOrchestrator(translator, locale_validator, policy, backup_manager)
