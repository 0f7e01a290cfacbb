"""
ブロック属性ポリシー

ブロックタイプごとに翻訳対象となる属性名を管理する

core/table は対象外。セルは属性値の入れ子構造（head/body/foot）に格納されるため、
未登録タイプとして content のみが翻訳対象になる。
"""
from typing import Callable, Dict, Iterable, List, Optional, Set


# 属性フィルター: (属性リスト, ブロックタイプ) -> 属性リスト
AttributeFilter = Callable[[List[str], str], List[str]]

# 未登録タイプの既定値
FALLBACK_ATTRIBUTES = ['content']

DEFAULT_BLOCK_ATTRIBUTES: Dict[str, List[str]] = {
    # テキスト系
    'core/paragraph': ['content'],
    'core/heading': ['content'],
    'core/verse': ['content'],
    'core/preformatted': ['content'],
    'core/code': ['content'],
    'core/list-item': ['content'],

    # リスト
    'core/list': ['values'],

    # ボタン
    'core/button': ['text'],
    'core/buttons': [],

    # 引用
    'core/quote': ['value', 'citation'],
    'core/pullquote': ['value', 'citation'],

    # メディア
    'core/image': ['alt', 'caption'],
    'core/gallery': ['caption'],
    'core/video': ['caption'],
    'core/audio': ['caption'],
    'core/file': ['fileName'],

    # コンテナ（子ブロックのみ）
    'core/group': [],
    'core/columns': [],
    'core/column': [],
    'core/cover': [],
    'core/media-text': [],
    'core/row': [],
    'core/stack': [],
}


class BlockAttributePolicy:
    """ブロックタイプ -> 翻訳対象属性"""

    def __init__(
        self,
        overrides: Optional[Dict[str, List[str]]] = None,
        extra_block_types: Optional[Iterable[str]] = None
    ):
        """
        Args:
            overrides: タイプ -> 属性リストの上書き・追加
            extra_block_types: 対応ブロックとして追加するタイプ
        """
        self._table: Dict[str, List[str]] = {
            block_type: list(attributes)
            for block_type, attributes in DEFAULT_BLOCK_ATTRIBUTES.items()
        }
        self._extra_types: Set[str] = set()
        self._filters: List[AttributeFilter] = []

        for block_type, attributes in (overrides or {}).items():
            self.register(block_type, attributes)

        for block_type in extra_block_types or []:
            self.register_supported_block(block_type)

    def register(self, block_type: str, attributes: Iterable[str]):
        """タイプの翻訳対象属性を登録（既存の定義は置き換え）"""
        self._table[block_type] = list(attributes)

    def register_supported_block(self, block_type: str):
        """属性定義なしで対応ブロックに追加（contentが既定）"""
        self._extra_types.add(block_type)

    def add_filter(self, attribute_filter: AttributeFilter):
        """属性リストを加工するフィルターを追加（登録順に適用）"""
        self._filters.append(attribute_filter)

    def translatable_attributes(self, block_type: str) -> List[str]:
        """
        翻訳対象の属性名を取得

        未登録のタイプは content を翻訳対象とする（サードパーティブロック向け）
        """
        attributes = list(self._table.get(block_type, FALLBACK_ATTRIBUTES))
        for attribute_filter in self._filters:
            attributes = list(attribute_filter(attributes, block_type))
        return attributes

    def is_container(self, block_type: str) -> bool:
        """子ブロックのみを持つコンテナタイプか"""
        return block_type in self._table and not self.translatable_attributes(block_type)

    def supported_block_types(self) -> Set[str]:
        """対応ブロックタイプの一覧"""
        return set(self._table) | self._extra_types
