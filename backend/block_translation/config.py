"""
アプリケーション設定管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # API Keys（空文字 = 未設定。Google翻訳はキー不要）
    OPENAI_API_KEY: str = ""
    DEEPL_API_KEY: str = ""
    GROK_API_KEY: str = ""
    DEEPSEEK_API_KEY: str = ""
    GEMINI_API_KEY: str = ""
    CLAUDE_API_KEY: str = ""

    # Models
    OPENAI_MODEL: str = "gpt-4o-mini"
    GROK_MODEL: str = "grok-beta"
    DEEPSEEK_MODEL: str = "deepseek-chat"
    GEMINI_TRANSLATE_MODEL: str = "gemini-2.5-flash"
    CLAUDE_MODEL: str = "claude-sonnet-4-5-20250929"

    # 1回の翻訳呼び出しのタイムアウト（秒）
    TRANSLATION_TIMEOUT_SECONDS: float = 60.0

    # Locales
    TRANSLATION_LANGUAGES: str = "en_GB,en_US,fr_FR,es_ES,de_DE,it_IT,ja_JP"
    # "custom" = テーブル参照, "babel" = Babelによる検証
    LOCALE_VALIDATOR: str = "custom"

    # ブロック属性ポリシーの拡張（JSONで指定）
    BLOCK_ATTRIBUTE_OVERRIDES: Dict[str, List[str]] = {}
    EXTRA_SUPPORTED_BLOCKS: List[str] = []

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_COLORS: bool = True
    LOG_FILE: str = ""

    # Backend
    BACKEND_PORT: int = 8000
    BACKEND_HOST: str = "0.0.0.0"

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def allowed_origins_list(self) -> List[str]:
        """CORS許可オリジンのリスト"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def translation_locales(self) -> List[str]:
        """翻訳先ロケールのリスト"""
        return [
            locale.strip()
            for locale in self.TRANSLATION_LANGUAGES.split(",")
            if locale.strip()
        ]


# グローバル設定インスタンス（API層からのみ参照）
settings = Settings()
