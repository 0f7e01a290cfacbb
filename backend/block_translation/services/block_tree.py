"""
ブロックツリー操作のユーティリティ
"""
from typing import Dict, Iterable, Iterator, List

from block_translation.models.schemas import Block


def iter_blocks(blocks: Iterable[Block]) -> Iterator[Block]:
    """深さ優先（行きがけ順）で全ブロックを列挙"""
    for block in blocks:
        yield block
        yield from iter_blocks(block.inner_blocks)


def index_by_identity(block: Block) -> Dict[str, Block]:
    """client_id -> ブロック（サブツリー全体）"""
    return {node.client_id: node for node in iter_blocks([block])}


def find_duplicate_identities(blocks: Iterable[Block]) -> List[str]:
    """ツリー内で重複している client_id"""
    seen = set()
    duplicates = []
    for node in iter_blocks(blocks):
        if node.client_id in seen and node.client_id not in duplicates:
            duplicates.append(node.client_id)
        seen.add(node.client_id)
    return duplicates


def tree_shape(block: Block):
    """構造（タイプ・ID・子の順序）のみを取り出す"""
    return (
        block.name,
        block.client_id,
        tuple(tree_shape(child) for child in block.inner_blocks),
    )
