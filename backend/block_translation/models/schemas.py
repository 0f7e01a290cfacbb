"""
Pydantic データモデル
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from uuid import uuid4


# ============================================================================
# エラーコード
# ============================================================================

CONTENT_REQUIRED = "form.content.required"
TARGET_LANGUAGE_REQUIRED = "form.targetLanguage.required"
TARGET_LANGUAGE_NOT_SUPPORTED = "form.targetLanguage.not_supported"
DUPLICATE_BLOCK_IDENTITY = "form.blocks.duplicate_identity"
TRANSLATION_FAILED = "internal.error.translation_failed"
UNEXPECTED_ERROR = "internal.error.unexpected"
BACKEND_NOT_AVAILABLE = "backend.not_available"
ROLLBACK_NO_BACKUP = "rollback.error.no_backup"
ROLLBACK_NOT_RESTORABLE = "rollback.error.not_restorable"


# ============================================================================
# ブロック関連モデル
# ============================================================================

# 属性に埋め込む予約キー
BACKUP_KEY = "_backup"
MARKER_KEY = "_individuallyTranslated"


class Block(BaseModel):
    """
    エディタのコンテンツブロック

    name: ブロックタイプ（例: core/paragraph）
    attributes: 属性名 -> 値
    inner_blocks: 子ブロック（順序保持）
    client_id: 翻訳前後で不変のインスタンスID
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    inner_blocks: List["Block"] = Field(default_factory=list, alias="innerBlocks")
    client_id: str = Field(default_factory=lambda: str(uuid4()), alias="clientId")


class TranslationBackup(BaseModel):
    """翻訳前ブロックのスナップショット"""
    model_config = ConfigDict(populate_by_name=True)

    snapshot: str
    created_at: str = Field(alias="createdAt")
    source_locale: Optional[str] = Field(default=None, alias="sourceLocale")
    target_locale: str = Field(alias="targetLocale")
    backend_id: str = Field(alias="backendId")
    backend_display_name: Optional[str] = Field(default=None, alias="backendDisplayName")


class TranslationMarker(BaseModel):
    """個別翻訳されたブロックの目印"""
    model_config = ConfigDict(populate_by_name=True)

    timestamp: str
    target_locale: str = Field(alias="targetLocale")
    backend_id: str = Field(alias="backendId")


# ============================================================================
# 翻訳関連モデル
# ============================================================================

class TranslateRequest(BaseModel):
    """翻訳リクエスト（タイトル・ブロックの少なくとも一方が必要）"""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    blocks: Optional[List[Block]] = None
    target_locale: Optional[str] = Field(default=None, alias="language")
    source_locale: Optional[str] = Field(default=None, alias="sourceLanguage")
    include_individually_translated: bool = Field(
        default=False,
        alias="includeIndividuallyTranslated"
    )


class TranslateResponse(BaseModel):
    """翻訳レスポンス"""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    blocks: Optional[List[Block]] = None
    errors: Dict[str, str] = Field(default_factory=dict)
    failed_blocks: List[str] = Field(default_factory=list, alias="failedBlocks")

    def add_error(self, field: str, code: str):
        """エラーを記録（同一フィールドは最初のエラーを保持）"""
        self.errors.setdefault(field, code)

    def has_errors(self) -> bool:
        return bool(self.errors)


class BlockTranslateRequest(BaseModel):
    """単一ブロック翻訳リクエスト"""
    model_config = ConfigDict(populate_by_name=True)

    block: Block
    target_locale: Optional[str] = Field(default=None, alias="language")
    source_locale: Optional[str] = Field(default=None, alias="sourceLanguage")


class BlockResponse(BaseModel):
    """単一ブロックレスポンス"""
    block: Block


class RollbackRequest(BaseModel):
    """ロールバックリクエスト"""
    block: Block


class ErrorResponse(BaseModel):
    """エラーレスポンス"""
    errors: Dict[str, str]


# ============================================================================
# APIレスポンスモデル
# ============================================================================

class LanguageOption(BaseModel):
    """言語選択肢"""
    code: str
    label: str


class EditorConfigResponse(BaseModel):
    """エディタ用設定"""
    model_config = ConfigDict(populate_by_name=True)

    languages: List[LanguageOption]
    backends: Dict[str, str]
    supported_blocks: List[str] = Field(alias="supportedBlocks")


class HealthCheckResponse(BaseModel):
    """ヘルスチェックレスポンス"""
    status: str
    configured_backends: List[str]
