"""
pytest設定とフィクスチャ

テスト全体で共有されるフィクスチャや設定を定義
"""
import pytest
from pathlib import Path
import sys
from typing import Dict, List, Optional, Tuple

# アプリケーションのルートをパスに追加
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from block_translation.exceptions import BackendCallException  # noqa: E402
from block_translation.models.schemas import Block  # noqa: E402
from block_translation.services.locale_validator import CustomLocaleValidator  # noqa: E402
from block_translation.services.translator_base import TranslatorBase  # noqa: E402


class FakeTranslator(TranslatorBase):
    """
    テスト用翻訳エンジン

    (テキスト, ロケール) -> 訳文 の辞書で応答し、呼び出しを記録する。
    未登録の組み合わせは "[ロケール] テキスト" を返す。
    """

    backend_id = "fake"
    display_name = "Fake Translator"

    def __init__(
        self,
        translations: Optional[Dict[Tuple[str, str], str]] = None,
        failing_texts: Optional[List[str]] = None,
        empty_texts: Optional[List[str]] = None
    ):
        self.translations = translations or {}
        self.failing_texts = set(failing_texts or [])
        self.empty_texts = set(empty_texts or [])
        self.calls: List[Tuple[str, str]] = []

    async def translate(self, text: str, target_locale: str) -> str:
        self.calls.append((text, target_locale))
        if text in self.failing_texts:
            raise BackendCallException(f"Fake backend failure for {text!r}", backend_id=self.backend_id)
        if text in self.empty_texts:
            return ""
        return self.translations.get((text, target_locale), f"[{target_locale}] {text}")


@pytest.fixture
def fake_translator():
    """Hello -> Bonjour / Hola のフェイク翻訳"""
    return FakeTranslator({
        ("Hello", "fr_FR"): "Bonjour",
        ("Hello", "es_ES"): "Hola",
        ("Bonjour", "es_ES"): "Hola",
        ("My page", "fr_FR"): "Ma page",
    })


@pytest.fixture
def locale_validator():
    """対応ロケール表によるバリデーター"""
    return CustomLocaleValidator(["en_GB", "en_US", "fr_FR", "es_ES", "de_DE", "it_IT", "ja_JP"])


@pytest.fixture
def paragraph():
    """単純な段落ブロック"""
    return Block(name="core/paragraph", attributes={"content": "Hello", "dropCap": False}, client_id="p-1")


@pytest.fixture
def group_with_paragraphs():
    """2つの段落を含むグループ"""
    return Block(
        name="core/group",
        attributes={"layout": {"type": "constrained"}},
        client_id="g-1",
        inner_blocks=[
            Block(name="core/paragraph", attributes={"content": "First"}, client_id="g-1-p-1"),
            Block(name="core/paragraph", attributes={"content": "Second"}, client_id="g-1-p-2"),
        ]
    )


@pytest.fixture
def nested_page_blocks():
    """入れ子構造を含むページ全体のブロック"""
    return [
        Block(name="core/heading", attributes={"content": "Welcome", "level": 2}, client_id="h-1"),
        Block(
            name="core/columns",
            client_id="cols-1",
            inner_blocks=[
                Block(
                    name="core/column",
                    client_id="col-1",
                    inner_blocks=[
                        Block(name="core/paragraph", attributes={"content": "Left"}, client_id="col-1-p"),
                        Block(
                            name="core/image",
                            attributes={"url": "https://example.com/a.png", "alt": "A cat", "caption": ""},
                            client_id="col-1-img"
                        ),
                    ]
                ),
                Block(
                    name="core/column",
                    client_id="col-2",
                    inner_blocks=[
                        Block(
                            name="core/quote",
                            attributes={"value": "To be", "citation": "Hamlet"},
                            client_id="col-2-q"
                        ),
                    ]
                ),
            ]
        ),
        Block(name="core/button", attributes={"text": "Buy now", "url": "/buy"}, client_id="btn-1"),
    ]
