"""
Binance 认证和签名工具

HMAC-SHA256 签名 (API Key + Secret Key)，
签名内容为 `k1=v1&k2=v2&...&timestamp=<ms>`，结果为小写十六进制。
"""
import hmac
import hashlib
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from connectors.base import CapabilityResult
from core.exceptions import InvalidArgument

logger = logging.getLogger(__name__)

KEY_LENGTH = 64


def check_key(key: Any) -> Optional[str]:
    """
    检查密钥格式

    Returns:
        合法密钥原样返回，未提供时返回 None

    Raises:
        InvalidArgument: 提供了密钥但不是 64 位字符串
    """
    if key and isinstance(key, str) and len(key) == KEY_LENGTH:
        return key
    elif key:
        # 不在异常中回显密钥
        raise InvalidArgument(f"Bad key format: expected a {KEY_LENGTH}-character string")
    return None


def sign_hmac(message: str, secret: str) -> str:
    """HMAC-SHA256 签名"""
    return hmac.new(
        secret.encode('utf-8'),
        message.encode('utf-8'),
        hashlib.sha256
    ).hexdigest()


@dataclass(frozen=True)
class Credentials:
    """API 凭证 (构造后不可变)"""
    api_key: Optional[str] = None
    api_secret: Optional[str] = None

    @classmethod
    def create(cls, api_key: Any = None, api_secret: Any = None) -> "Credentials":
        """校验格式后创建凭证"""
        return cls(api_key=check_key(api_key), api_secret=check_key(api_secret))

    def __repr__(self) -> str:
        return (
            f"Credentials(api_key={'***' if self.api_key else None}, "
            f"api_secret={'***' if self.api_secret else None})"
        )


# ==================== 认证管理器 ====================

class BinanceAuth:
    """
    Binance API 认证管理器

    - 凭证检查 (API Key / Secret Key)
    - 签名查询串构造

    使用示例:
    ```python
    auth = BinanceAuth(Credentials.create(api_key, api_secret), recv_window=5000)
    query = auth.make_query("api/v3/order", {"symbol": "BNBBTC", "orderId": 1})
    ```
    """

    def __init__(self, credentials: Credentials, recv_window: Optional[int] = None):
        self.credentials = credentials
        self.recv_window = recv_window

    @property
    def api_key(self) -> Optional[str]:
        return self.credentials.api_key

    # ==================== 凭证检查 ====================

    def check_api_key(self) -> CapabilityResult:
        if not self.credentials.api_key:
            return CapabilityResult.fail("API key required")
        return CapabilityResult.ok()

    def check_signed(self) -> CapabilityResult:
        """签名接口需要 API Key 和 Secret Key"""
        result = self.check_api_key()
        if not result.success:
            return result
        if not self.credentials.api_secret:
            return CapabilityResult.fail("secret key required")
        return CapabilityResult.ok()

    def require_api_key(self) -> None:
        self.check_api_key().raise_for_failure()

    def require_signed(self) -> None:
        self.check_signed().raise_for_failure()

    # ==================== 签名 ====================

    def sign(self, message: str) -> str:
        """使用 Secret Key 签名"""
        self.require_signed()
        return sign_hmac(message, self.credentials.api_secret)

    def get_timestamp(self) -> int:
        """当前时间戳 (ms)"""
        return int(time.time() * 1000)

    def get_headers(self) -> Dict[str, str]:
        """认证请求头"""
        if not self.credentials.api_key:
            return {}
        return {'X-MBX-APIKEY': self.credentials.api_key}

    def make_query(
        self,
        path: str,
        params: Optional[Mapping] = None,
        timestamp: Optional[int] = None,
    ) -> str:
        """
        构造签名查询串

        Args:
            path: 相对路径 (如 "api/v3/order")
            params: 请求参数，按插入顺序序列化；其中的 timestamp 会被忽略
            timestamp: 固定时间戳 (仅用于测试)，默认取当前时间

        Returns:
            "path?k1=v1&...&timestamp=<ms>&signature=<hex>"
        """
        self.require_signed()

        if not path or not isinstance(path, str):
            raise InvalidArgument("path is missing and should be a string")

        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise InvalidArgument("params should be a mapping")

        query = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in params.items()
            if key != 'timestamp'
        }

        if self.recv_window and 'recvWindow' not in query:
            query['recvWindow'] = self.recv_window

        now = self.get_timestamp() if timestamp is None else timestamp
        payload = urlencode(list(query.items()) + [('timestamp', now)])
        signature = sign_hmac(payload, self.credentials.api_secret)

        return f"{path}?{payload}&signature={signature}"
