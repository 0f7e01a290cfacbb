"""
ロケールと言語名の対応
"""
from babel import Locale, UnknownLocaleError
from typing import Dict, List, Optional


LANGUAGE_NAMES = {
    'en_GB': 'English (GB)',
    'en_US': 'English (US)',
    'fr_FR': 'French',
    'es_ES': 'Spanish',
    'de_DE': 'German',
    'it_IT': 'Italian',
    'ja_JP': 'Japanese',
    'nl_NL': 'Dutch',
    'ro_RO': 'Romanian',
    'pt_PT': 'Portuguese',
    'cs_CZ': 'Czech',
}


def locale_to_language(locale: str, language_names: Optional[Dict[str, str]] = None) -> str:
    """
    ロケールコードを人間が読める言語名に変換

    Args:
        locale: ロケールコード（例: fr_FR）
        language_names: 追加の言語名テーブル（既定テーブルより優先）

    Returns:
        言語名（例: French）。不明な場合はロケールコードそのもの
    """
    names = {**LANGUAGE_NAMES, **(language_names or {})}
    if locale in names:
        return names[locale]

    try:
        display_name = Locale.parse(locale).get_display_name('en')
    except (UnknownLocaleError, ValueError, TypeError):
        return locale

    return display_name or locale


def get_language_list(locales: List[str]) -> List[Dict[str, str]]:
    """エディタの言語選択肢を生成"""
    return [
        {'code': locale, 'label': locale_to_language(locale)}
        for locale in locales
    ]
