"""
ブロックツリー翻訳

ブロックを深さ優先で走査し、ブロックタイプごとの翻訳対象属性のみを翻訳する。
ツリー構造（子の数・順序・client_id）は変更しない。
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set
import logging

from block_translation.exceptions import TranslationException
from block_translation.models.schemas import MARKER_KEY, TRANSLATION_FAILED, Block
from block_translation.services.block_attributes import BlockAttributePolicy
from block_translation.services.translator_base import TranslatorBase

logger = logging.getLogger(__name__)


@dataclass
class BlockError:
    """ブロック単位の翻訳エラー"""
    client_id: str
    block_name: str
    attribute: str
    code: str
    message: str


@dataclass
class BlockTranslationResult:
    """translate_block の戻り値"""
    block: Block
    errors: List[BlockError] = field(default_factory=list)
    # 少なくとも1属性が翻訳されたノード
    translated_ids: Set[str] = field(default_factory=set)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @property
    def failed_ids(self) -> List[str]:
        return [error.client_id for error in self.errors]


def _has_text(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, list):
        return any(isinstance(item, str) and item.strip() for item in value)
    return False


class BlockTreeTranslator:
    """ブロックツリーの翻訳"""

    def __init__(
        self,
        translator: TranslatorBase,
        policy: Optional[BlockAttributePolicy] = None,
        skip_individually_translated: bool = False
    ):
        """
        Args:
            translator: 翻訳エンジン
            policy: ブロック属性ポリシー
            skip_individually_translated: 個別翻訳マーカー付きのブロックを素通しする（一括翻訳用）
        """
        self.translator = translator
        self.policy = policy or BlockAttributePolicy()
        self.skip_individually_translated = skip_individually_translated

    async def translate_title(self, title: str, target_locale: str) -> str:
        """タイトル翻訳（空の結果は失敗）"""
        translated = await self.translator.translate(title, target_locale)
        if not translated:
            raise TranslationException("Title translation returned an empty result")
        return translated

    async def translate_block(self, block: Block, target_locale: str) -> BlockTranslationResult:
        """
        ブロックを子ブロックも含めて翻訳

        属性の翻訳に失敗したノードは以降の属性を翻訳せず、サブツリーを元のまま返す。
        子ブロックの失敗は親の翻訳結果を取り消さない。
        """
        if self.skip_individually_translated and block.attributes.get(MARKER_KEY):
            logger.debug(f"Skipping individually translated block {block.client_id} ({block.name})")
            return BlockTranslationResult(block=block)

        attributes: Dict[str, Any] = dict(block.attributes)
        translated_any = False

        for attribute in self.policy.translatable_attributes(block.name):
            value = block.attributes.get(attribute)
            if not _has_text(value):
                continue

            try:
                attributes[attribute] = await self._translate_value(value, target_locale)
            except TranslationException as e:
                logger.error(
                    f"Translation of {block.name}.{attribute} ({block.client_id}) failed: {e.message}"
                )
                return BlockTranslationResult(
                    block=block,
                    errors=[BlockError(
                        client_id=block.client_id,
                        block_name=block.name,
                        attribute=attribute,
                        code=TRANSLATION_FAILED,
                        message=e.message
                    )]
                )
            translated_any = True

        errors: List[BlockError] = []
        translated_ids: Set[str] = {block.client_id} if translated_any else set()

        # 子ブロックは client_id で対応付けて元の順序に並べ直す
        child_results: Dict[str, BlockTranslationResult] = {}
        for child in block.inner_blocks:
            child_results[child.client_id] = await self.translate_block(child, target_locale)

        inner_blocks: List[Block] = []
        for child in block.inner_blocks:
            result = child_results[child.client_id]
            inner_blocks.append(result.block)
            errors.extend(result.errors)
            translated_ids |= result.translated_ids

        if not translated_any and not block.inner_blocks:
            return BlockTranslationResult(block=block)

        return BlockTranslationResult(
            block=block.model_copy(update={
                'attributes': attributes,
                'inner_blocks': inner_blocks,
            }),
            errors=errors,
            translated_ids=translated_ids
        )

    async def _translate_value(self, value: Any, target_locale: str) -> Any:
        """文字列または文字列リストを翻訳"""
        if isinstance(value, list):
            translated_items = []
            for item in value:
                if isinstance(item, str) and item.strip():
                    translated_items.append(await self._translate_text(item, target_locale))
                else:
                    translated_items.append(item)
            return translated_items

        return await self._translate_text(value, target_locale)

    async def _translate_text(self, text: str, target_locale: str) -> str:
        translated = await self.translator.translate(text, target_locale)
        if not translated:
            raise TranslationException("Translation returned an empty result")
        return translated
