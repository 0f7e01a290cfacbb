"""
翻訳先ロケールの検証
"""
from abc import ABC, abstractmethod
from babel import Locale, UnknownLocaleError
from typing import Iterable
import logging

logger = logging.getLogger(__name__)


class LocaleValidatorBase(ABC):
    """ロケール検証の基底クラス"""

    @abstractmethod
    def validate(self, locale: str) -> bool:
        """ロケールが翻訳先として有効か"""
        pass


class CustomLocaleValidator(LocaleValidatorBase):
    """対応ロケール表による検証"""

    def __init__(self, supported_locales: Iterable[str]):
        self.supported_locales = frozenset(supported_locales)

    def validate(self, locale: str) -> bool:
        return bool(locale) and locale in self.supported_locales


class BabelLocaleValidator(LocaleValidatorBase):
    """Babel (CLDR) による検証。実在するロケールであれば有効"""

    def validate(self, locale: str) -> bool:
        if not locale:
            return False
        try:
            Locale.parse(locale)
        except (UnknownLocaleError, ValueError, TypeError) as e:
            logger.debug(f"Locale {locale!r} rejected by Babel: {e}")
            return False
        return True


def create_locale_validator(name: str, supported_locales: Iterable[str]) -> LocaleValidatorBase:
    """
    設定名からバリデーターを生成

    Args:
        name: "custom" または "babel"
        supported_locales: customで使用する対応ロケール

    Returns:
        バリデーター（不明な名前はcustom）
    """
    if name == 'babel':
        return BabelLocaleValidator()

    if name != 'custom':
        logger.warning(f"Unknown locale validator '{name}', falling back to custom")

    return CustomLocaleValidator(supported_locales)
