"""
翻訳オーケストレーター
翻訳リクエスト全体（検証 -> タイトル -> ブロック -> レスポンス）の管理
"""
from typing import List, Optional
import logging

from block_translation.exceptions import (
    BlockMismatchException,
    TranslationException,
    ValidationException,
)
from block_translation.models.schemas import (
    CONTENT_REQUIRED,
    DUPLICATE_BLOCK_IDENTITY,
    TARGET_LANGUAGE_NOT_SUPPORTED,
    TARGET_LANGUAGE_REQUIRED,
    TRANSLATION_FAILED,
    Block,
    TranslateRequest,
    TranslateResponse,
)
from block_translation.services.backup_manager import BackupManager, TranslationProvenance
from block_translation.services.block_attributes import BlockAttributePolicy
from block_translation.services.block_translator import BlockTreeTranslator
from block_translation.services.block_tree import find_duplicate_identities, tree_shape
from block_translation.services.locale_validator import LocaleValidatorBase
from block_translation.services.translator_base import TranslatorBase

logger = logging.getLogger(__name__)


class TranslationOrchestrator:
    """翻訳処理の管理"""

    def __init__(
        self,
        translator: TranslatorBase,
        locale_validator: LocaleValidatorBase,
        policy: Optional[BlockAttributePolicy] = None,
        backup_manager: Optional[BackupManager] = None
    ):
        self.translator = translator
        self.locale_validator = locale_validator
        self.policy = policy or BlockAttributePolicy()
        self.backups = backup_manager or BackupManager(self.policy)

    async def execute(
        self,
        request: TranslateRequest,
        individually: bool = False
    ) -> TranslateResponse:
        """
        翻訳リクエストを実行

        Args:
            request: タイトル・ブロック・翻訳先ロケール
            individually: 個別（単一ブロック）翻訳か。Falseはページ単位の一括翻訳

        Returns:
            翻訳結果とフィールドごとのエラー（部分的な成功を含む）
        """
        response = TranslateResponse()

        if not self._validate_request(request, response):
            logger.info(f"Translation request rejected: {response.errors}")
            return response

        if not self._validate_language(request, response):
            logger.info(f"Unsupported target locale: {request.target_locale}")
            return response

        target_locale = request.target_locale
        tree_translator = BlockTreeTranslator(
            self.translator,
            self.policy,
            skip_individually_translated=not (individually or request.include_individually_translated)
        )

        # タイトルの失敗はリクエスト全体を中断する
        if request.title and request.title.strip():
            logger.info(f"Translating title to {target_locale} via {self.translator.backend_id}")
            try:
                response.title = await tree_translator.translate_title(request.title, target_locale)
            except TranslationException as e:
                logger.error(f"Title translation failed, skipping blocks: {e.message}")
                response.add_error('internal', TRANSLATION_FAILED)
                return response

        if request.blocks:
            response.blocks = await self._translate_blocks(
                request,
                tree_translator,
                response,
                individually
            )

        if response.has_errors():
            logger.warning(
                f"Translation finished with errors: {response.errors} "
                f"(failed blocks: {len(response.failed_blocks)})"
            )
        else:
            logger.info("Translation finished successfully")

        return response

    async def translate_single_block(
        self,
        block: Block,
        target_locale: str,
        source_locale: Optional[str] = None
    ) -> Block:
        """
        単一ブロックを翻訳（{title: "", blocks: [block]} として実行）

        Raises:
            ValidationException: 入力エラー（details['errors'] に全エラーコード）
            TranslationException: 翻訳失敗（details['errors'] にエラーコード）
        """
        request = TranslateRequest(
            title="",
            blocks=[block],
            target_locale=target_locale,
            source_locale=source_locale
        )
        response = await self.execute(request, individually=True)

        if response.has_errors() and 'internal' not in response.errors:
            field, code = next(iter(response.errors.items()))
            raise ValidationException(
                "Block translation request is invalid",
                field=field,
                code=code,
                details={'errors': response.errors}
            )
        if response.has_errors():
            raise TranslationException(
                "Block translation failed",
                details={'errors': response.errors, 'failed_blocks': response.failed_blocks}
            )
        if not response.blocks:
            raise TranslationException("No translated content returned")

        return response.blocks[0]

    def _validate_request(self, request: TranslateRequest, response: TranslateResponse) -> bool:
        has_title = bool(request.title and request.title.strip())
        has_blocks = bool(request.blocks)

        if not has_title and not has_blocks:
            response.add_error('content', CONTENT_REQUIRED)

        if not request.target_locale:
            response.add_error('targetLanguage', TARGET_LANGUAGE_REQUIRED)

        if has_blocks and find_duplicate_identities(request.blocks):
            response.add_error('blocks', DUPLICATE_BLOCK_IDENTITY)

        return not response.has_errors()

    def _validate_language(self, request: TranslateRequest, response: TranslateResponse) -> bool:
        if not self.locale_validator.validate(request.target_locale):
            response.add_error('targetLanguage', TARGET_LANGUAGE_NOT_SUPPORTED)
        return not response.has_errors()

    async def _translate_blocks(
        self,
        request: TranslateRequest,
        tree_translator: BlockTreeTranslator,
        response: TranslateResponse,
        individually: bool
    ) -> List[Block]:
        """トップレベルブロックを順に翻訳（1ブロックの失敗は他に影響しない）"""
        provenance = TranslationProvenance(
            target_locale=request.target_locale,
            backend_id=self.translator.backend_id,
            backend_display_name=self.translator.display_name,
            source_locale=request.source_locale
        )

        translated_blocks: List[Block] = []
        for index, block in enumerate(request.blocks):
            result = await tree_translator.translate_block(block, request.target_locale)
            translated = result.block
            failed_ids = result.failed_ids

            try:
                if tree_shape(translated) != tree_shape(block):
                    raise BlockMismatchException(
                        f"Translated block {block.client_id} does not match the original structure",
                        backend_id=self.translator.backend_id
                    )
                if result.translated_ids:
                    translated = self.backups.apply_backups(
                        block,
                        translated,
                        provenance,
                        result.translated_ids,
                        individually
                    )
            except BlockMismatchException as e:
                logger.error(f"Discarding translation of block #{index}: {e.message}")
                translated = block
                failed_ids = [block.client_id]

            if failed_ids:
                logger.warning(f"Block #{index} ({block.name}) had {len(failed_ids)} failed node(s)")
                response.add_error(f"blocks.{index}", TRANSLATION_FAILED)
                response.add_error('internal', TRANSLATION_FAILED)
                response.failed_blocks.extend(failed_ids)

            translated_blocks.append(translated)

        return translated_blocks
