"""Connectors package"""
from connectors.base import (
    CapabilityResult,
    OrderSide, OrderType, TimeInForce,
)
from connectors.binance import BinanceConnector, BinanceTransport

__all__ = [
    "BinanceConnector",
    "BinanceTransport",
    "CapabilityResult",
    "OrderSide", "OrderType", "TimeInForce",
]
