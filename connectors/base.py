"""
连接器公共类型

枚举取值即 Binance 接口使用的原始字符串。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.exceptions import CredentialsRequired


# ==================== 枚举定义 ====================

class OrderSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"


class TimeInForce(str, Enum):
    GTC = "GTC"  # Good Till Cancel
    IOC = "IOC"  # Immediate Or Cancel


# ==================== 数据结构 ====================

@dataclass(frozen=True)
class CapabilityResult:
    """凭证检查结果"""
    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "CapabilityResult":
        return cls(success=True)

    @classmethod
    def fail(cls, error: str) -> "CapabilityResult":
        return cls(success=False, error=error)

    def raise_for_failure(self) -> None:
        """检查失败时抛出 CredentialsRequired"""
        if not self.success:
            raise CredentialsRequired(self.error)
