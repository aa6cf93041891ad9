"""
Binance 请求参数校验

每个已知参数名对应一条校验规则 (类型检查或枚举检查)，
规则以查找表形式保存，未知参数不做检查直接放行。
"""
import numbers
from collections.abc import Mapping
from decimal import Decimal
from functools import partial
from typing import Any, Callable, Dict, Sequence, Union

from connectors.base import OrderSide, OrderType, TimeInForce
from core.exceptions import (
    InvalidArgument,
    InvalidEnumValue,
    MissingRequiredField,
    WrongType,
)

Rule = Callable[[str, Any], None]


# ==================== 基础检查 ====================

def check_enum(allowed: Sequence[str], value: Any, key: str) -> None:
    """检查取值是否属于枚举集合"""
    if value not in allowed:
        raise InvalidEnumValue(key, value, allowed)


def is_number(value: Any) -> bool:
    """bool 是 int 的子类，但不视为数字"""
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _expect_string(key: str, value: Any) -> None:
    if not isinstance(value, str):
        raise WrongType(key, value, "string")


def _expect_number(key: str, value: Any) -> None:
    if not is_number(value):
        raise WrongType(key, value, "number")


def _expect_enum(allowed: Sequence[str], key: str, value: Any) -> None:
    check_enum(allowed, value, key)


def _accept(key: str, value: Any) -> None:
    # TODO: quantity/price 应校验为十进制数字字符串
    return None


def _enum_values(enum_cls) -> tuple:
    return tuple(member.value for member in enum_cls)


# ==================== 规则表 ====================

STRING_FIELDS = ("symbol", "newClientOrderId", "origClientOrderId", "listenKey")
NUMBER_FIELDS = ("orderId", "stopPrice", "icebergQty", "recvWindow", "fromId")
UNCHECKED_FIELDS = ("quantity", "price")

PARAM_RULES: Dict[str, Rule] = {
    **{key: _expect_string for key in STRING_FIELDS},
    **{key: _expect_number for key in NUMBER_FIELDS},
    **{key: _accept for key in UNCHECKED_FIELDS},
    "side": partial(_expect_enum, _enum_values(OrderSide)),
    "type": partial(_expect_enum, _enum_values(OrderType)),
    "timeInForce": partial(_expect_enum, _enum_values(TimeInForce)),
}


def validate_params(params: Mapping, required: Sequence[str]) -> None:
    """
    校验请求参数

    Args:
        params: 参数映射 (不会被修改)
        required: 当前接口的必填字段列表

    Raises:
        InvalidArgument: params 不是映射或 required 不是列表
        MissingRequiredField: 必填字段缺失或为假值 (0 也视为缺失)
        WrongType: 参数类型错误
        InvalidEnumValue: 枚举参数取值非法
    """
    if not isinstance(params, Mapping):
        raise InvalidArgument("params is required and should be a mapping")

    if not isinstance(required, (list, tuple)):
        raise InvalidArgument("required is required and should be a list")

    for field in required:
        if not params.get(field):
            raise MissingRequiredField(field)

    for key, value in params.items():
        rule = PARAM_RULES.get(key)
        if rule is not None:
            rule(key, value)


def format_number(value: Union[int, float, Decimal, str], key: str = "value") -> str:
    """
    数字转为不带科学计数法的十进制字符串

    Examples:
        1 -> "1"
        0.1 -> "0.1"
        1e-7 -> "0.0000001"
    """
    if isinstance(value, str):
        return value
    if not is_number(value):
        raise WrongType(key, value, "number")

    text = format(Decimal(str(value)).normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
