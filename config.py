"""
配置管理 - 所有敏感信息通过环境变量读取

Binance 配置说明：
- BINANCE_API_KEY / BINANCE_API_SECRET: 64 位密钥，只调用公共接口时可留空
- BINANCE_TIMEOUT_MS: 请求超时 (毫秒)，设置后同时作为签名请求的 recvWindow
"""
from typing import Any, Dict, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用配置"""

    # ==================== Binance 配置 ====================
    BINANCE_API_KEY: str = ""
    BINANCE_API_SECRET: str = ""  # HMAC 签名需要
    BINANCE_TESTNET: bool = False  # True = 测试网

    # 主网: https://api.binance.com/
    # 测试网: https://testnet.binance.vision/
    BINANCE_BASE_URL: str = "https://api.binance.com/"

    # 留空表示使用默认超时 (30 秒) 且不发送 recvWindow
    BINANCE_TIMEOUT_MS: Optional[int] = None

    # 日志配置
    LOG_FILE: str = ""       # 日志文件路径 (留空只输出到控制台)
    LOG_LEVEL: str = "INFO"  # 日志级别

    @field_validator('BINANCE_TIMEOUT_MS', mode='before')
    @classmethod
    def parse_timeout(cls, v):
        """处理空字符串的情况"""
        if v == '' or v is None:
            return None
        return int(v)

    def binance_config(self) -> Dict[str, Any]:
        """BinanceConnector 配置字典"""
        base_url = self.BINANCE_BASE_URL
        if self.BINANCE_TESTNET:
            base_url = "https://testnet.binance.vision/"
        return {
            "api_key": self.BINANCE_API_KEY or None,
            "api_secret": self.BINANCE_API_SECRET or None,
            "base_url": base_url,
            "timeout": self.BINANCE_TIMEOUT_MS,
        }

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
