"""
エディタ設定API
"""
from fastapi import APIRouter, Depends

from block_translation.api.dependencies import get_block_policy, get_settings
from block_translation.config import Settings
from block_translation.models.schemas import EditorConfigResponse
from block_translation.services.block_attributes import BlockAttributePolicy
from block_translation.services.locales import get_language_list
from block_translation.services.translator_registry import get_available_backends


router = APIRouter()


@router.get("/config", response_model=EditorConfigResponse, response_model_by_alias=True)
async def get_editor_config(
    app_settings: Settings = Depends(get_settings),
    policy: BlockAttributePolicy = Depends(get_block_policy)
):
    """言語一覧・利用可能なバックエンド・対応ブロックタイプ"""
    return EditorConfigResponse(
        languages=get_language_list(app_settings.translation_locales),
        backends=get_available_backends(app_settings),
        supported_blocks=sorted(policy.supported_block_types())
    )
