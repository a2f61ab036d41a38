"""DEX interaction utilities for Uniswap V2 style exchanges."""
from typing import Dict, List, Sequence, Tuple

from web3 import AsyncWeb3
from web3.contract import AsyncContract

from ..config import BotConfig
from ..interfaces import PairFactory, RouterEndpoint
from ..logger_config import logger
from ..exceptions import (
    ConfigurationError,
    NoLiquidityError,
    QuoteUnavailableError
)
from .abi_utils import load_abi

ZERO_ADDRESS = '0x' + '0' * 40

def is_zero_address(address: str) -> bool:
    return not address or address.lower() == ZERO_ADDRESS

class UniswapV2Router(RouterEndpoint):
    """Router endpoint backed by ``getAmountsOut``."""

    def __init__(self, exchange: str, contract: AsyncContract):
        self.exchange = exchange
        self.contract = contract

    @property
    def address(self) -> str:
        return self.contract.address

    async def quote(self, amount_in: int, path: Sequence[str]) -> List[int]:
        try:
            amounts = await self.contract.functions.getAmountsOut(
                amount_in,
                list(path)
            ).call()
        except Exception as e:
            logger.error(f"Error getting amounts out from {self.exchange}: {e}")
            raise QuoteUnavailableError(
                f"Failed to get {self.exchange} quote for {amount_in} via {list(path)}: {e}"
            ) from e
        return [int(amount) for amount in amounts]

    def __repr__(self) -> str:
        return f"UniswapV2Router({self.exchange!r}, {self.address})"

class UniswapV2Factory(PairFactory):
    """Factory endpoint backed by ``getPair``."""

    def __init__(self, exchange: str, contract: AsyncContract):
        self.exchange = exchange
        self.contract = contract

    async def get_pair(self, token0: str, token1: str) -> str:
        try:
            return await self.contract.functions.getPair(token0, token1).call()
        except Exception as e:
            logger.error(f"Error getting {self.exchange} pair address: {e}")
            raise NoLiquidityError(
                f"Failed to get {self.exchange} pair for {token0}/{token1}: {e}"
            ) from e

class DEXHandler:
    """Handles contract bindings for the configured exchanges."""

    def __init__(self, w3: AsyncWeb3, config: BotConfig):
        """Initialize DEX handler."""
        self.w3 = w3
        self.config = config

        self.router_abi = load_abi('IUniswapV2Router02')
        self.factory_abi = load_abi('IUniswapV2Factory')
        self.pair_abi = load_abi('IUniswapV2Pair')

        self.routers: Dict[str, UniswapV2Router] = {}
        self.factories: Dict[str, UniswapV2Factory] = {}
        for name, exchange in config.exchanges.items():
            self.routers[name] = UniswapV2Router(
                name,
                self.w3.eth.contract(address=exchange.router, abi=self.router_abi)
            )
            self.factories[name] = UniswapV2Factory(
                name,
                self.w3.eth.contract(address=exchange.factory, abi=self.factory_abi)
            )

        logger.info(f"DEX handler initialized for {', '.join(sorted(self.routers))}")

    def router(self, exchange: str) -> UniswapV2Router:
        try:
            return self.routers[exchange]
        except KeyError:
            raise ConfigurationError(f"Unsupported DEX: {exchange}") from None

    def factory(self, exchange: str) -> UniswapV2Factory:
        try:
            return self.factories[exchange]
        except KeyError:
            raise ConfigurationError(f"Unsupported DEX: {exchange}") from None

    def route(self, start_exchange: str, end_exchange: str) -> Tuple[UniswapV2Router, UniswapV2Router]:
        """Return the (first hop, second hop) routers for a round trip."""
        return self.router(start_exchange), self.router(end_exchange)

    def pair_contract(self, pair_address: str) -> AsyncContract:
        return self.w3.eth.contract(address=pair_address, abi=self.pair_abi)
