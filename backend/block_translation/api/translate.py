"""
翻訳API
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from block_translation.api.dependencies import get_orchestrator
from block_translation.exceptions import TranslationException
from block_translation.models.schemas import (
    BlockResponse,
    BlockTranslateRequest,
    ErrorResponse,
    TRANSLATION_FAILED,
    TranslateRequest,
    TranslateResponse,
)
from block_translation.services.translation_orchestrator import TranslationOrchestrator
from block_translation.utils.error_handlers import error_response

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/translate/{backend}",
    response_model=TranslateResponse,
    responses={400: {"model": TranslateResponse}}
)
async def translate_content(
    backend: str,
    request: TranslateRequest,
    orchestrator: TranslationOrchestrator = Depends(get_orchestrator)
):
    """
    タイトル・ブロックの翻訳（ページ全体・タイトルのみ）

    Args:
        backend: 翻訳バックエンドID（openai, google, deepl, grok, deepseek, gemini, claude）
        request: title / blocks / language

    Returns:
        翻訳結果。エラーがあれば400（翻訳済みのブロックも含む）
    """
    response = await orchestrator.execute(request)

    return JSONResponse(
        status_code=400 if response.has_errors() else 200,
        content=response.model_dump(mode="json", by_alias=True, exclude_none=True)
    )


@router.post(
    "/translate/{backend}/block",
    response_model=BlockResponse,
    responses={400: {"model": ErrorResponse}}
)
async def translate_block(
    backend: str,
    request: BlockTranslateRequest,
    orchestrator: TranslationOrchestrator = Depends(get_orchestrator)
):
    """
    単一ブロックの翻訳

    ブロックを {title: "", blocks: [block]} として翻訳し、blocks[0] を返す
    """
    try:
        block = await orchestrator.translate_single_block(
            request.block,
            request.target_locale,
            request.source_locale
        )
    except TranslationException as e:
        logger.info(f"Block translation via {backend} failed: {e.message}")
        return error_response(e.details.get('errors') or {'internal': TRANSLATION_FAILED})

    return BlockResponse(block=block)
