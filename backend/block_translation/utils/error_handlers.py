"""
エラーハンドリング

例外・エラーコードを {"errors": {field: code}} 形式のHTTPレスポンスに変換
"""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from typing import Dict
import logging

from block_translation.exceptions import (
    BackendUnavailableException,
    RestoreException,
    ValidationException,
)
from block_translation.models.schemas import BACKEND_NOT_AVAILABLE, UNEXPECTED_ERROR

logger = logging.getLogger(__name__)


def error_response(errors: Dict[str, str], status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    """エラーレスポンスを生成"""
    return JSONResponse(status_code=status_code, content={"errors": errors})


async def validation_exception_handler(request: Request, exc: ValidationException) -> JSONResponse:
    """400 Bad Request（入力エラー）"""
    return error_response(exc.details.get('errors') or {exc.field: exc.code})


async def backend_unavailable_handler(request: Request, exc: BackendUnavailableException) -> JSONResponse:
    """400 Bad Request（バックエンド未設定）"""
    logger.info(f"Backend unavailable: {exc.message}")
    return error_response({"backend": BACKEND_NOT_AVAILABLE})


async def restore_exception_handler(request: Request, exc: RestoreException) -> JSONResponse:
    """400 Bad Request（復元不能）"""
    return error_response({"backup": exc.code})


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500 Internal Server Error"""
    logger.exception(f"Unexpected error while handling {request.method} {request.url.path}: {exc}")
    return error_response(
        {"internal": UNEXPECTED_ERROR},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def register_exception_handlers(app: FastAPI):
    """アプリケーションに例外ハンドラーを登録"""
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(BackendUnavailableException, backend_unavailable_handler)
    app.add_exception_handler(RestoreException, restore_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
