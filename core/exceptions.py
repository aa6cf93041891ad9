"""
Binance 客户端异常类

分层异常设计: 参数/凭证错误在发出任何请求之前同步抛出，
传输层错误原样透传，不做重试也不解析交易所错误码。
"""
from typing import Any, Optional, Sequence


class BinanceClientError(Exception):
    """客户端基础异常类"""
    pass


# ==================== 参数校验异常 ====================

class InvalidArgument(BinanceClientError, ValueError):
    """调用参数格式错误 (非映射、非序列、密钥格式错误等)"""
    pass


class MissingRequiredField(InvalidArgument):
    """缺少必填参数

    触发条件: 必填字段不存在或为假值 ("", 0, None)
    """

    def __init__(self, field: str):
        super().__init__(f"{field} parameter is required for this method")
        self.field = field


class InvalidEnumValue(InvalidArgument):
    """枚举参数取值不在允许集合内"""

    def __init__(self, field: str, value: Any, allowed: Sequence[str]):
        super().__init__(
            f"{field} should be one of {', '.join(allowed)}, got {value!r}"
        )
        self.field = field
        self.value = value
        self.allowed = tuple(allowed)


class WrongType(BinanceClientError, TypeError):
    """参数类型错误"""

    def __init__(self, field: str, value: Any, expected: str):
        super().__init__(f"{field} should be a {expected}")
        self.field = field
        self.value = value
        self.expected = expected


# ==================== 认证异常 ====================

class CredentialsRequired(BinanceClientError):
    """缺少 API Key 或 Secret Key

    触发条件: 签名接口在未配置凭证的客户端上调用
    恢复策略: 无自动恢复，需配置密钥
    """
    pass


# ==================== 传输异常 ====================

class TransportError(BinanceClientError):
    """HTTP 传输错误 (网络错误或非 2xx 状态码)

    payload 保存交易所返回的原始响应体，不做解析。
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.status = status
        self.payload = payload
