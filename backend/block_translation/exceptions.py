"""
カスタム例外クラス

アプリケーション全体で使用する例外を定義
"""
from typing import Optional


class AppException(Exception):
    """アプリケーション基底例外"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AppException):
    """入力検証エラー（バックエンドは呼び出さない）"""

    def __init__(
        self,
        message: str,
        field: str,
        code: str,
        details: dict = None
    ):
        super().__init__(message, details)
        self.field = field
        self.code = code


class TranslationException(AppException):
    """翻訳処理関連の例外"""
    pass


class BackendUnavailableException(TranslationException):
    """翻訳バックエンドが未設定・未対応"""

    def __init__(self, backend_id: str, message: str = None, details: dict = None):
        super().__init__(
            message or f"Translation backend '{backend_id}' not available or not configured",
            details
        )
        self.backend_id = backend_id


class BackendCallException(TranslationException):
    """翻訳API呼び出し関連の例外（リトライしない）"""

    def __init__(
        self,
        message: str,
        status_code: int = None,
        backend_id: str = None,
        details: dict = None
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.backend_id = backend_id


class APIRateLimitException(BackendCallException):
    """APIレート制限例外"""

    def __init__(
        self,
        message: str,
        retry_after: Optional[int] = None,
        backend_id: str = None,
        details: dict = None
    ):
        super().__init__(message, status_code=429, backend_id=backend_id, details=details)
        self.retry_after = retry_after


class BlockMismatchException(BackendCallException):
    """同一IDのブロックでタイプが変化している"""
    pass


class RestoreException(AppException):
    """バックアップからの復元失敗（ブロックは変更しない）"""

    def __init__(self, message: str, code: str, details: dict = None):
        super().__init__(message, details)
        self.code = code
