"""
Binance Spot REST 连接器

封装 Binance REST API: 公共行情接口 + 需要签名的下单/查单/账户接口。
每个接口只发送一次 HTTP 请求并原样返回解析后的 JSON。

SDK 参考: https://github.com/binance/binance-spot-api-docs
"""
import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence, Union

from connectors.base import OrderSide, OrderType, TimeInForce
from connectors.binance.auth import BinanceAuth, Credentials
from connectors.binance.params import format_number, is_number, validate_params
from connectors.binance.transport import BinanceTransport
from core.exceptions import InvalidArgument

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal, str]

ORDER_FIELDS = ["symbol", "side", "type", "timeInForce", "quantity", "price"]
MARKET_ORDER_FIELDS = ["symbol", "side", "type", "quantity"]
ORDER_ID_FIELDS = ["symbol", "orderId"]


class BinanceConnector:
    """
    Binance Spot 交易所连接器

    功能:
    - 公共行情 (ticker / 订单簿 / 交易所信息 / 产品列表)
    - HMAC-SHA256 签名的下单、查单、撤单、账户接口
    - 参数校验 (在发出请求之前)

    配置示例:
    ```python
    config = {
        "api_key": "your_api_key",        # 64 位
        "api_secret": "your_api_secret",  # 64 位
        "timeout": 5000,                  # 毫秒, 同时作为 recvWindow
    }
    async with BinanceConnector(config) as connector:
        await connector.buy_limit("BNBBTC", 1, 0.1)
    ```
    """

    # API 端点
    MAINNET_URL = "https://api.binance.com/"
    TESTNET_URL = "https://testnet.binance.vision/"

    def __init__(self, config: Optional[Dict[str, Any]] = None, transport=None):
        config = config or {}

        self.exchange_name = "binance"

        # 凭证 (格式错误时直接抛出 InvalidArgument)
        self.credentials = Credentials.create(
            config.get("api_key"),
            config.get("api_secret"),
        )
        self.timeout: Optional[int] = config.get("timeout")
        self.base_url = config.get("base_url") or self.MAINNET_URL

        self._auth = BinanceAuth(self.credentials, recv_window=self.timeout)

        # HTTP 传输 (测试时可注入替身)
        self.request = transport or BinanceTransport(
            self.base_url,
            api_key=self.credentials.api_key,
            timeout=self.timeout,
        )

    @classmethod
    def from_settings(cls, settings) -> "BinanceConnector":
        """从 config.Settings 创建连接器"""
        return cls(settings.binance_config())

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """关闭 HTTP 会话"""
        close = getattr(self.request, "close", None)
        if close is not None:
            await close()

    # ==================== 凭证与参数 ====================

    def require_api_key(self) -> None:
        self._auth.require_api_key()

    def require_signed(self) -> None:
        """签名接口需要 API Key 和 Secret Key"""
        self._auth.require_signed()

    @staticmethod
    def check_params(params: Mapping, required: Sequence[str]) -> None:
        validate_params(params, required)

    def make_query(
        self,
        path: str,
        params: Optional[Mapping] = None,
        timestamp: Optional[int] = None,
    ) -> str:
        return self._auth.make_query(path, params, timestamp)

    async def _signed(
        self,
        method: str,
        path: str,
        params: Dict[str, Any],
        required: Sequence[str] = (),
    ) -> Any:
        """校验参数 -> 签名 -> 发送请求"""
        self.require_signed()
        self.check_params(params, list(required))

        query = self.make_query(path, params)
        logger.debug(f"签名请求: {method} {path}")

        send = {
            "GET": self.request.get,
            "POST": self.request.post,
            "DELETE": self.request.delete,
        }[method]
        resp = await send(query)
        return resp.data

    async def _public(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        logger.debug(f"公共请求: GET {path}")
        resp = await self.request.get(path, params=params)
        return resp.data

    # ==================== 行情数据 ====================

    async def get_ticker(self, symbol: Optional[str] = None) -> Any:
        """24 小时价格变动 (不传 symbol 时返回全部交易对)"""
        return await self._public("api/v1/ticker/24hr", params={"symbol": symbol})

    async def get_order_book(self, symbol: str, limit: int = 50) -> Dict[str, Any]:
        """订单簿快照"""
        return await self._public("api/v1/depth", params={"symbol": symbol, "limit": limit})

    async def get_exchange_info(self) -> Dict[str, Any]:
        """交易所规则和交易对信息"""
        return await self._public("api/v1/exchangeInfo")

    async def get_products(self) -> Dict[str, Any]:
        """公共产品列表"""
        return await self._public("exchange/public/product")

    # ==================== 订单管理 ====================

    def _order_params(
        self,
        market: str,
        side: OrderSide,
        order_type: OrderType,
        quantity: Number,
        rate: Optional[Number] = None,
    ) -> Dict[str, Any]:
        """按固定字段顺序构建下单参数"""
        params: Dict[str, Any] = {
            "symbol": market,
            "side": side.value,
            "type": order_type.value,
        }
        if order_type == OrderType.LIMIT:
            params["timeInForce"] = TimeInForce.GTC.value
        params["quantity"] = self._format(quantity, "quantity")
        if order_type == OrderType.LIMIT:
            params["price"] = self._format(rate, "price")
        return params

    @staticmethod
    def _format(value: Any, key: str) -> Any:
        """只格式化非零数字，其余原样交给参数校验 (0 / None 视为缺失)"""
        if value and is_number(value):
            return format_number(value, key)
        return value

    async def buy_limit(self, market: str, quantity: Number, rate: Number) -> Dict[str, Any]:
        """限价买入 (GTC)"""
        params = self._order_params(market, OrderSide.BUY, OrderType.LIMIT, quantity, rate)
        return await self._signed("POST", "api/v3/order", params, ORDER_FIELDS)

    async def sell_limit(self, market: str, quantity: Number, rate: Number) -> Dict[str, Any]:
        """限价卖出 (GTC)"""
        params = self._order_params(market, OrderSide.SELL, OrderType.LIMIT, quantity, rate)
        return await self._signed("POST", "api/v3/order", params, ORDER_FIELDS)

    async def buy_market(self, market: str, quantity: Number) -> Dict[str, Any]:
        """市价买入"""
        params = self._order_params(market, OrderSide.BUY, OrderType.MARKET, quantity)
        return await self._signed("POST", "api/v3/order", params, MARKET_ORDER_FIELDS)

    async def sell_market(self, market: str, quantity: Number) -> Dict[str, Any]:
        """市价卖出 (市价单不带 timeInForce)"""
        params = self._order_params(market, OrderSide.SELL, OrderType.MARKET, quantity)
        return await self._signed("POST", "api/v3/order", params, MARKET_ORDER_FIELDS)

    async def query_order(self, symbol: str, order_id: int) -> Dict[str, Any]:
        """查询订单状态"""
        params = {"symbol": symbol, "orderId": order_id}
        return await self._signed("GET", "api/v3/order", params, ORDER_ID_FIELDS)

    async def all_orders(self, params: Optional[Mapping] = None) -> Any:
        """
        查询全部订单 (需要 symbol)

        Args:
            params: 如 {"symbol": "BNBBTC", "orderId": 1, "limit": 500}
        """
        return await self._signed("GET", "api/v3/allOrders", self._copy(params), ["symbol"])

    async def open_orders(self, params: Optional[Mapping] = None) -> Any:
        """查询当前挂单 (symbol 可选)"""
        return await self._signed("GET", "api/v3/openOrders", self._copy(params))

    async def cancel(self, market: str, order_id: int) -> Dict[str, Any]:
        """撤销订单"""
        params = {"symbol": market, "orderId": order_id}
        return await self._signed("DELETE", "api/v3/order", params, ORDER_ID_FIELDS)

    # ==================== 账户信息 ====================

    async def get_account(self) -> Dict[str, Any]:
        """账户余额信息"""
        return await self._signed("GET", "api/v3/account", {})

    @staticmethod
    def _copy(params: Optional[Mapping]) -> Dict[str, Any]:
        if params is None:
            return {}
        if not isinstance(params, Mapping):
            raise InvalidArgument("params should be a mapping")
        return dict(params)
