"""Block-driven arbitrage loop over the configured token pairs."""
from typing import List, Optional
import asyncio

from web3 import AsyncWeb3

from .config import BotConfig, PairConfig
from .driver import ArbitrageDriver
from .interfaces import TradeSubmitter
from .logger_config import logger
from .exceptions import ArbitrageError, ExecutionError, NoLiquidityError
from .market_data import MarketDataProvider
from .types import Decision, SkipReason, SUSHISWAP, UNISWAP
from .utils.dex_handler import DEXHandler

class ArbitrageBot:
    """Evaluates every configured pair once per new block.

    Pairs are evaluated concurrently and independently: a failure on one
    pair is logged and never stops the others or the loop.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        config: BotConfig,
        dex_handler: DEXHandler,
        market_data: MarketDataProvider,
        driver: ArbitrageDriver
    ):
        self.w3 = w3
        self.config = config
        self.dex_handler = dex_handler
        self.market_data = market_data
        self.driver = driver
        self.running = False
        self.last_block: Optional[int] = None

    @classmethod
    def from_config(
        cls,
        w3: AsyncWeb3,
        config: BotConfig,
        submitter: Optional[TradeSubmitter] = None
    ) -> 'ArbitrageBot':
        dex_handler = DEXHandler(w3, config)
        return cls(
            w3,
            config,
            dex_handler,
            MarketDataProvider(dex_handler),
            ArbitrageDriver(submitter)
        )

    async def evaluate_pair(self, pair: PairConfig) -> Decision:
        """Check liquidity on both exchanges, then trade the better direction."""
        try:
            for exchange in (UNISWAP, SUSHISWAP):
                handle = await self.market_data.get_pair(exchange, pair.token0, pair.token1)
                await self.market_data.require_liquidity(handle)
        except NoLiquidityError as e:
            logger.warning(f"Skipping {pair.token0}/{pair.token1} on {exchange}: {e}")
            return Decision.skip(exchange, SkipReason.ESTIMATION_FAILED, error=e)

        decision = await self.driver.best_direction(
            pair.amount_in,
            pair.token0,
            pair.token1,
            self.dex_handler.route(UNISWAP, SUSHISWAP),
            self.config.min_profit_wei
        )

        if decision.is_execute:
            await self.driver.execute(decision)
        else:
            logger.info(
                f"No trade for {pair.token0}/{pair.token1}: {decision.reason.value}"
                + (f" (best profit {decision.estimated_profit})"
                   if decision.estimated_profit is not None else "")
            )
        return decision

    async def _evaluate_isolated(self, pair: PairConfig) -> Optional[Decision]:
        try:
            return await self.evaluate_pair(pair)
        except ExecutionError as e:
            logger.error(f"Execution failed for {pair.token0}/{pair.token1}: {e}")
        except ArbitrageError as e:
            logger.warning(f"Evaluation failed for {pair.token0}/{pair.token1}: {e}")
        except Exception:
            logger.exception(f"Unexpected error evaluating {pair.token0}/{pair.token1}")
        return None

    async def run_once(self) -> List[Optional[Decision]]:
        """Evaluate all pairs concurrently; ``None`` marks a failed pair."""
        return list(await asyncio.gather(
            *(self._evaluate_isolated(pair) for pair in self.config.pairs)
        ))

    async def run(self, max_iterations: Optional[int] = None) -> None:
        """Poll for new blocks and evaluate all pairs on each one."""
        self.running = True
        iterations = 0
        logger.info(f"Monitoring {len(self.config.pairs)} pair(s)")

        while self.running:
            try:
                block_number = await self.w3.eth.block_number
            except Exception as e:
                logger.warning(f"Error fetching block number: {e}")
                block_number = None

            if block_number is not None and block_number != self.last_block:
                self.last_block = block_number
                logger.debug(f"Evaluating pairs at block {block_number}")
                await self.run_once()

            iterations += 1
            if max_iterations is not None and iterations >= max_iterations:
                break
            await asyncio.sleep(self.config.poll_interval)

        self.running = False

    def stop(self) -> None:
        self.running = False
