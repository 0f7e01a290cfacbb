"""
翻訳バックアップ・ロールバック管理

翻訳前のブロックをサブツリーごとシリアライズして属性に保持し、
後から元のブロックを完全に復元する。
バックアップは最初の翻訳時に一度だけ作成され、再翻訳では上書きしない。
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from pydantic import ValidationError
from typing import Any, Dict, Iterable, Optional
import logging

from block_translation.exceptions import BlockMismatchException, RestoreException
from block_translation.models.schemas import (
    BACKUP_KEY,
    MARKER_KEY,
    ROLLBACK_NO_BACKUP,
    ROLLBACK_NOT_RESTORABLE,
    Block,
    TranslationBackup,
    TranslationMarker,
)
from block_translation.services.block_attributes import BlockAttributePolicy
from block_translation.services.block_tree import index_by_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationProvenance:
    """翻訳の出所情報"""
    target_locale: str
    backend_id: str
    backend_display_name: Optional[str] = None
    source_locale: Optional[str] = None


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class BackupManager:
    """ブロック単位のバックアップ作成・復元"""

    def __init__(self, policy: Optional[BlockAttributePolicy] = None):
        self.policy = policy or BlockAttributePolicy()

    def create_backup(self, block: Block, provenance: TranslationProvenance) -> TranslationBackup:
        """
        ブロックのスナップショットを作成

        Args:
            block: 翻訳前のブロック（子ブロックを含む）
            provenance: 出所情報

        Returns:
            サブツリー全体をJSON化したバックアップ
        """
        return TranslationBackup(
            snapshot=block.model_dump_json(by_alias=True),
            created_at=_utc_now(),
            source_locale=provenance.source_locale,
            target_locale=provenance.target_locale,
            backend_id=provenance.backend_id,
            backend_display_name=provenance.backend_display_name,
        )

    def attach_backup(
        self,
        attributes: Dict[str, Any],
        backup: Optional[TranslationBackup],
        provenance: TranslationProvenance,
        individually: bool = True
    ) -> Dict[str, Any]:
        """
        バックアップとマーカーを属性にマージ

        既存のバックアップがあればそのまま保持する（再翻訳で原文を失わない）。
        値が null のキーはバックアップなしとして扱う。
        individually=False（一括翻訳）の場合はマーカーを外す。
        """
        merged = dict(attributes)

        if not self.has_backup(merged):
            if backup is None:
                raise ValueError("backup is required when the block has no existing backup")
            merged[BACKUP_KEY] = backup.model_dump(by_alias=True)

        if individually:
            merged[MARKER_KEY] = TranslationMarker(
                timestamp=_utc_now(),
                target_locale=provenance.target_locale,
                backend_id=provenance.backend_id,
            ).model_dump(by_alias=True)
        else:
            merged.pop(MARKER_KEY, None)

        return merged

    @staticmethod
    def has_backup(attributes: Dict[str, Any]) -> bool:
        return bool(attributes) and attributes.get(BACKUP_KEY) is not None

    @staticmethod
    def get_backup(attributes: Dict[str, Any]) -> Optional[TranslationBackup]:
        """属性からバックアップを取得（形式不正はNone）"""
        value = (attributes or {}).get(BACKUP_KEY)
        if value is None:
            return None
        if isinstance(value, TranslationBackup):
            return value
        try:
            return TranslationBackup.model_validate(value)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed translation backup: {e.error_count()} validation errors")
            return None

    @staticmethod
    def clear_backup(attributes: Dict[str, Any]) -> Dict[str, Any]:
        """バックアップとマーカーを除去した属性"""
        return {
            key: value
            for key, value in attributes.items()
            if key not in (BACKUP_KEY, MARKER_KEY)
        }

    @staticmethod
    def restore(backup: Optional[TranslationBackup]) -> Optional[Block]:
        """スナップショットからブロックを復元（解析できない場合はNone）"""
        if backup is None or not backup.snapshot:
            return None
        try:
            return Block.model_validate_json(backup.snapshot)
        except ValidationError as e:
            logger.warning(f"Unable to restore block from snapshot: {e.error_count()} validation errors")
            return None

    def rollback(self, block: Block) -> Block:
        """
        ブロックを翻訳前の状態に戻す

        復元したブロックにはバックアップ・マーカーを残さない（バックアップは消費される）

        Raises:
            RestoreException: バックアップなし、または復元不能（ブロックは変更しない）
        """
        if not self.has_backup(block.attributes):
            raise RestoreException("No backup found", ROLLBACK_NO_BACKUP)

        restored = self.restore(self.get_backup(block.attributes))
        if restored is None:
            raise RestoreException("Unable to restore: backup format not recognized", ROLLBACK_NOT_RESTORABLE)

        logger.info(f"Restored block {block.client_id} ({block.name}) from backup")
        return restored.model_copy(update={'attributes': self.clear_backup(restored.attributes)})

    def apply_backups(
        self,
        original: Block,
        translated: Block,
        provenance: TranslationProvenance,
        translated_ids: Iterable[str],
        individually: bool = True
    ) -> Block:
        """
        翻訳済みツリーの各ノードにバックアップを付与

        元ツリーとの対応付けは client_id で行う（配列位置は使わない）。
        バックアップは翻訳されたプリミティブブロックにのみ付与し、コンテナには付与しない。

        Raises:
            BlockMismatchException: 同一IDのノードでブロックタイプが異なる
        """
        originals = index_by_identity(original)
        translated_ids = set(translated_ids)

        def visit(node: Block) -> Block:
            counterpart = originals.get(node.client_id)
            if counterpart is not None and counterpart.name != node.name:
                raise BlockMismatchException(
                    f"Block {node.client_id} changed type from {counterpart.name} to {node.name}",
                    backend_id=provenance.backend_id
                )

            attributes = node.attributes
            if (
                counterpart is not None
                and node.client_id in translated_ids
                and not self.policy.is_container(node.name)
            ):
                backup = None if self.has_backup(attributes) else self.create_backup(counterpart, provenance)
                attributes = self.attach_backup(attributes, backup, provenance, individually)

            return node.model_copy(update={
                'attributes': attributes,
                'inner_blocks': [visit(child) for child in node.inner_blocks],
            })

        return visit(translated)
