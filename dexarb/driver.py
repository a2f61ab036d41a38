"""Arbitrage decision making for two-hop round trips."""
from typing import Optional, Tuple

from .estimator import estimate_round_trip
from .interfaces import RouterEndpoint, TradeSubmitter
from .logger_config import logger
from .exceptions import ArbitrageError, ExecutionError
from .types import (
    ArbitrageOpportunity,
    Decision,
    ExecutionRequest,
    ExecutionResult,
    SkipReason
)

class ArbitrageDriver:
    """Turns round trip estimates into execute/skip decisions.

    The driver evaluates one direction at a time: ``routers[0]`` is the
    exchange the trade starts on. Searching both directions is left to the
    caller (see :meth:`best_direction`).
    """

    def __init__(self, submitter: Optional[TradeSubmitter] = None):
        self.submitter = submitter

    async def assess(
        self,
        amount_in: int,
        token0: str,
        token1: str,
        routers: Tuple[RouterEndpoint, RouterEndpoint],
        min_profit_threshold: int
    ) -> Decision:
        """Decide without side effects."""
        start_exchange = routers[0].exchange
        try:
            amount_out = await estimate_round_trip(amount_in, routers, token0, token1)
        except ArbitrageError as e:
            logger.warning(f"Estimation failed for {token0}/{token1} on {start_exchange}: {e}")
            return Decision.skip(start_exchange, SkipReason.ESTIMATION_FAILED, error=e)

        opportunity = ArbitrageOpportunity(
            amount_in=amount_in,
            token0=token0,
            token1=token1,
            start_exchange=start_exchange,
            estimated_amount_out=amount_out,
            estimated_profit=amount_out - amount_in
        )

        if opportunity.estimated_profit > min_profit_threshold:
            return Decision.execute(opportunity)

        logger.debug(
            f"Insufficient margin starting on {start_exchange}: "
            f"{opportunity.estimated_profit} <= {min_profit_threshold}"
        )
        return Decision.skip(start_exchange, SkipReason.INSUFFICIENT_MARGIN, opportunity=opportunity)

    async def evaluate(
        self,
        amount_in: int,
        token0: str,
        token1: str,
        routers: Tuple[RouterEndpoint, RouterEndpoint],
        min_profit_threshold: int
    ) -> Decision:
        """Assess one direction and submit the trade if it clears the threshold."""
        decision = await self.assess(amount_in, token0, token1, routers, min_profit_threshold)
        if decision.is_execute:
            await self.execute(decision)
        return decision

    async def best_direction(
        self,
        amount_in: int,
        token0: str,
        token1: str,
        routers: Tuple[RouterEndpoint, RouterEndpoint],
        min_profit_threshold: int
    ) -> Decision:
        """Assess both start exchanges and return the more profitable decision."""
        forward = await self.assess(amount_in, token0, token1, routers, min_profit_threshold)
        backward = await self.assess(
            amount_in, token0, token1, (routers[1], routers[0]), min_profit_threshold
        )

        def rank(decision: Decision):
            profit = decision.estimated_profit
            return (decision.is_execute, profit if profit is not None else float('-inf'))

        return max((forward, backward), key=rank)

    async def execute(self, decision: Decision) -> Optional[ExecutionResult]:
        """Hand an ``EXECUTE`` decision to the trade submitter."""
        if not decision.is_execute or decision.opportunity is None:
            raise ValueError("Only execute decisions can be submitted")

        opportunity = decision.opportunity
        logger.info(
            f"Profitable round trip starting on {opportunity.start_exchange}: "
            f"{opportunity.amount_in} -> {opportunity.estimated_amount_out} "
            f"(profit {opportunity.estimated_profit})"
        )
        if self.submitter is None:
            logger.info("No trade submitter configured, not executing")
            return None

        request = ExecutionRequest(
            amount_in=opportunity.amount_in,
            token0=opportunity.token0,
            token1=opportunity.token1,
            start_exchange=opportunity.start_exchange
        )
        try:
            return await self.submitter.submit(request)
        except ExecutionError:
            raise
        except Exception as e:
            logger.error(f"Trade submission failed: {e}")
            raise ExecutionError(f"Trade submission failed: {e}") from e
