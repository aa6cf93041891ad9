"""Core module - 异常和日志"""
from core.exceptions import (
    BinanceClientError,
    InvalidArgument,
    MissingRequiredField,
    InvalidEnumValue,
    WrongType,
    CredentialsRequired,
    TransportError,
)
from core.logging_config import setup_logging

__all__ = [
    "BinanceClientError",
    "InvalidArgument",
    "MissingRequiredField",
    "InvalidEnumValue",
    "WrongType",
    "CredentialsRequired",
    "TransportError",
    "setup_logging",
]
