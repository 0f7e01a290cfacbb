"""
翻訳API向けHTTPクライアント

HTTPエラー・タイムアウト・不正なJSONを BackendCallException に変換する。
リトライは行わない。
"""
from typing import Any, Optional
import re
import httpx
import logging

from block_translation.exceptions import APIRateLimitException, BackendCallException

logger = logging.getLogger(__name__)

MAX_ERROR_BODY_CHARS = 180


def _short_message(text: str) -> str:
    """エラーメッセージを1行・上限文字数に整形"""
    compact = " ".join(text.split())
    # APIキーらしき文字列は伏せる
    compact = re.sub(r"\bsk-[A-Za-z0-9_-]{8,}\b", "[redacted-key]", compact)
    if len(compact) <= MAX_ERROR_BODY_CHARS:
        return compact
    return f"{compact[:MAX_ERROR_BODY_CHARS - 1]}..."


def _parse_retry_after(response: httpx.Response) -> Optional[int]:
    value = response.headers.get("retry-after")
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


class BackendHttpClient:
    """翻訳バックエンド1つ分のHTTP送信"""

    def __init__(
        self,
        api_name: str,
        backend_id: str,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            api_name: エラーメッセージ用のAPI名（例: DeepL）
            backend_id: バックエンドID
            timeout: 1リクエストのタイムアウト（秒）
            client: 共有する httpx.AsyncClient（Noneの場合は都度生成）
        """
        self.api_name = api_name
        self.backend_id = backend_id
        self.timeout = timeout
        self.client = client

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """リクエスト送信。200以外は例外"""
        try:
            if self.client is not None:
                response = await self.client.request(method, url, timeout=self.timeout, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(method, url, **kwargs)

        except httpx.TimeoutException as e:
            logger.error(f"{self.api_name} request timed out: {str(e)}")
            raise BackendCallException(
                f"{self.api_name} API error: request timed out",
                backend_id=self.backend_id
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{self.api_name} transport error: {str(e)}")
            raise BackendCallException(
                f"{self.api_name} API error: {_short_message(str(e))}",
                backend_id=self.backend_id
            ) from e

        if response.status_code == 429:
            raise APIRateLimitException(
                f"{self.api_name} API error (HTTP 429): rate limited",
                retry_after=_parse_retry_after(response),
                backend_id=self.backend_id
            )

        if response.status_code in (401, 403):
            raise BackendCallException(
                f"{self.api_name} authentication failed (HTTP {response.status_code})",
                status_code=response.status_code,
                backend_id=self.backend_id
            )

        if response.status_code != 200:
            raise BackendCallException(
                f"{self.api_name} API error (HTTP {response.status_code}): "
                f"{_short_message(response.text)}",
                status_code=response.status_code,
                backend_id=self.backend_id
            )

        return response

    async def post(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    def decode_json(self, response: httpx.Response) -> Any:
        """レスポンスJSONを取得"""
        try:
            return response.json()
        except ValueError as e:
            raise BackendCallException(
                f"{self.api_name} API error: Invalid JSON response",
                status_code=response.status_code,
                backend_id=self.backend_id
            ) from e
