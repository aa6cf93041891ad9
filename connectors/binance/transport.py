"""
Binance HTTP 传输层

基于 aiohttp，对预设的 base URL 发送 GET/POST/DELETE 请求。
不做重试、限流或交易所错误码解析，失败统一抛出 TransportError。
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import aiohttp
from yarl import URL

from core.exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


@dataclass
class TransportResponse:
    """HTTP 响应"""
    status: int
    data: Any
    headers: Dict[str, str] = field(default_factory=dict)


class BinanceTransport:
    """
    Binance HTTP 客户端

    使用:
    ```python
    async with BinanceTransport("https://api.binance.com/", api_key=key) as transport:
        resp = await transport.get("api/v1/depth", params={"symbol": "BNBBTC"})
        print(resp.data)
    ```
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        """
        Args:
            base_url: API 根地址
            api_key: 设置后作为 X-MBX-APIKEY 默认请求头
            timeout: 请求超时 (毫秒)，默认 30 秒
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.headers: Dict[str, str] = {}
        if api_key:
            self.headers['X-MBX-APIKEY'] = api_key

        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            total = self.timeout / 1000 if self.timeout else DEFAULT_TIMEOUT_SECONDS
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=total),
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    # ==================== HTTP 方法 ====================

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> TransportResponse:
        return await self._request("GET", path, params)

    async def post(self, path: str) -> TransportResponse:
        return await self._request("POST", path)

    async def delete(self, path: str) -> TransportResponse:
        return await self._request("DELETE", path)

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse:
        """
        发送请求

        path 可能已包含签名查询串，以 encoded=True 原样发送，
        保证签名内容与实际发出的字节一致。
        """
        session = self._ensure_session()
        url = URL(self.base_url + path.lstrip("/"), encoded=True)
        query = {k: v for k, v in (params or {}).items() if v is not None}

        try:
            async with session.request(method, url, params=query or None) as resp:
                data = await self._read_body(resp)
                if not 200 <= resp.status < 300:
                    logger.warning(f"Binance 请求失败: {method} {url.path} -> HTTP {resp.status}")
                    raise TransportError(
                        f"HTTP {resp.status} for {method} {url.path}",
                        status=resp.status,
                        payload=data,
                    )
                return TransportResponse(
                    status=resp.status,
                    data=data,
                    headers=dict(resp.headers),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Binance 网络错误: {method} {url.path} -> {type(e).__name__}")
            raise TransportError(f"网络错误: {e}") from e

    @staticmethod
    async def _read_body(resp: aiohttp.ClientResponse) -> Any:
        """解析 JSON 响应体，非 JSON 时返回原始文本"""
        try:
            return await resp.json(content_type=None)
        except ValueError:
            return await resp.text()
