"""
FastAPI メインアプリケーション
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from block_translation.config import settings
from block_translation.api import editor_config, rollback, translate
from block_translation.models.schemas import HealthCheckResponse
from block_translation.services.translator_registry import get_available_backends
from block_translation.utils.error_handlers import register_exception_handlers
from block_translation.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """アプリケーションライフサイクル管理"""
    setup_logging(
        log_level=settings.LOG_LEVEL,
        enable_colors=settings.LOG_COLORS,
        log_file=settings.LOG_FILE or None
    )
    logger.info("Starting Block Translation API...")
    logger.info(f"Configured backends: {', '.join(get_available_backends(settings))}")

    yield

    logger.info("Shutting down Block Translation API...")


# FastAPIアプリケーション作成
app = FastAPI(
    title="Block Translation API",
    description="ブロックエディタのコンテンツを構造を保ったまま翻訳するAPI",
    version="1.0.0",
    lifespan=lifespan
)

# CORS設定
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/api")
async def api_root():
    """API ルートエンドポイント"""
    return {
        "message": "Block Translation API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """ヘルスチェック"""
    return HealthCheckResponse(
        status="healthy",
        configured_backends=list(get_available_backends(settings))
    )


# APIルーターの登録
app.include_router(translate.router, prefix="/api", tags=["translate"])
app.include_router(rollback.router, prefix="/api", tags=["rollback"])
app.include_router(editor_config.router, prefix="/api", tags=["config"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "block_translation.main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        reload=True
    )
