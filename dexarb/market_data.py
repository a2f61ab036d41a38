"""Reserve and spot price queries against exchange pair contracts."""
from decimal import Decimal, localcontext

from .logger_config import logger
from .exceptions import (
    DivisionByZeroError,
    NoLiquidityError
)
from .types import PairHandle, PairReserves
from .utils.dex_handler import DEXHandler, is_zero_address

# Enough significant digits to divide any pair of uint256 values exactly
# to well past the integer part.
PRICE_PRECISION = 78

def calculate_price(reserves: PairReserves) -> Decimal:
    """Price of token1 in token0 units, ``reserve0 / reserve1``."""
    if reserves.reserve1 == 0:
        raise DivisionByZeroError("Cannot price pair with zero reserve1")
    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        return Decimal(reserves.reserve0) / Decimal(reserves.reserve1)

class MarketDataProvider:
    """Read-only view of pool reserves on the configured exchanges.

    Works over any transport the handler's web3 client uses (local fork or
    remote node). Nothing is cached: reserves move with every trade, so each
    call reads fresh chain state.
    """

    def __init__(self, dex_handler: DEXHandler):
        self.dex_handler = dex_handler

    async def get_pair(self, exchange: str, token0: str, token1: str) -> PairHandle:
        """Resolve the pool for ``token0``/``token1`` on ``exchange``."""
        pair_address = await self.dex_handler.factory(exchange).get_pair(token0, token1)
        if is_zero_address(pair_address):
            raise NoLiquidityError(f"No {exchange} pool exists for {token0}/{token1}")
        return PairHandle(
            exchange=exchange,
            token0=token0,
            token1=token1,
            address=pair_address
        )

    async def get_reserves(self, pair: PairHandle) -> PairReserves:
        """Current reserves, ordered to match ``pair.token0``/``pair.token1``."""
        contract = self.dex_handler.pair_contract(pair.address)
        try:
            reserve0, reserve1, timestamp = await contract.functions.getReserves().call()
            pool_token0 = await contract.functions.token0().call()
        except Exception as e:
            logger.error(f"Error getting reserves for {pair.exchange} pair {pair.address}: {e}")
            raise NoLiquidityError(
                f"Failed to get reserves for {pair.exchange} pair {pair.address}: {e}"
            ) from e

        # Pools store tokens sorted by address, which may not be the order asked for.
        if pool_token0.lower() != pair.token0.lower():
            reserve0, reserve1 = reserve1, reserve0

        return PairReserves(
            reserve0=int(reserve0),
            reserve1=int(reserve1),
            block_timestamp_last=int(timestamp)
        )

    async def get_price(self, pair: PairHandle) -> Decimal:
        """Spot price ``reserve0 / reserve1`` using exact decimal arithmetic."""
        reserves = await self.get_reserves(pair)
        return calculate_price(reserves)

    async def require_liquidity(self, pair: PairHandle) -> PairReserves:
        """Return reserves, raising ``NoLiquidityError`` if either side is empty."""
        reserves = await self.get_reserves(pair)
        if not reserves.has_liquidity:
            raise NoLiquidityError(
                f"{pair.exchange} pair {pair.address} has no liquidity "
                f"({reserves.reserve0}/{reserves.reserve1})"
            )
        return reserves
