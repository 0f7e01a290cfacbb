"""
ロールバックAPI
"""
from fastapi import APIRouter, Depends

from block_translation.api.dependencies import get_backup_manager
from block_translation.models.schemas import BlockResponse, ErrorResponse, RollbackRequest
from block_translation.services.backup_manager import BackupManager


router = APIRouter()


@router.post(
    "/rollback",
    response_model=BlockResponse,
    responses={400: {"model": ErrorResponse}}
)
async def rollback_block(
    request: RollbackRequest,
    backup_manager: BackupManager = Depends(get_backup_manager)
):
    """
    翻訳前のブロックを復元

    バックアップがない・解析できない場合は400（RestoreExceptionハンドラー）
    """
    restored = backup_manager.rollback(request.block)
    return BlockResponse(block=restored)
