"""
Binance 连接器模块

支持 Binance Spot REST 接口。
"""
from connectors.binance.auth import BinanceAuth, Credentials, check_key, sign_hmac
from connectors.binance.client import BinanceConnector
from connectors.binance.params import check_enum, format_number, validate_params
from connectors.binance.transport import BinanceTransport, TransportResponse

__all__ = [
    "BinanceConnector",
    "BinanceAuth",
    "Credentials",
    "check_key",
    "sign_hmac",
    "validate_params",
    "check_enum",
    "format_number",
    "BinanceTransport",
    "TransportResponse",
]
