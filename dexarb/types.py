"""Value objects shared across the arbitrage pipeline.

Everything here is transient: built fresh for each evaluation cycle and
never persisted or cached across blocks.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

UNISWAP = 'uniswap'
SUSHISWAP = 'sushiswap'

@dataclass(frozen=True)
class PairHandle:
    """A resolved liquidity pool for a token pair on one exchange."""
    exchange: str
    token0: str
    token1: str
    address: str

@dataclass(frozen=True)
class PairReserves:
    """Pool balances, oriented to the requested token0/token1 order."""
    reserve0: int
    reserve1: int
    block_timestamp_last: int = 0

    def __post_init__(self):
        if self.reserve0 < 0 or self.reserve1 < 0:
            raise ValueError("Reserves must be non-negative")

    @property
    def has_liquidity(self) -> bool:
        return self.reserve0 > 0 and self.reserve1 > 0

@dataclass(frozen=True)
class ArbitrageOpportunity:
    amount_in: int
    token0: str
    token1: str
    start_exchange: str
    estimated_amount_out: int
    estimated_profit: int

class Action(Enum):
    EXECUTE = 'execute'
    SKIP = 'skip'

class SkipReason(Enum):
    INSUFFICIENT_MARGIN = 'insufficient_margin'
    ESTIMATION_FAILED = 'estimation_failed'

@dataclass(frozen=True)
class Decision:
    """Outcome of a single-direction evaluation."""
    action: Action
    start_exchange: str
    estimated_profit: Optional[int] = None
    reason: Optional[SkipReason] = None
    opportunity: Optional[ArbitrageOpportunity] = None
    error: Optional[Exception] = None

    @classmethod
    def execute(cls, opportunity: ArbitrageOpportunity) -> 'Decision':
        return cls(
            action=Action.EXECUTE,
            start_exchange=opportunity.start_exchange,
            estimated_profit=opportunity.estimated_profit,
            opportunity=opportunity
        )

    @classmethod
    def skip(
        cls,
        start_exchange: str,
        reason: SkipReason,
        opportunity: Optional[ArbitrageOpportunity] = None,
        error: Optional[Exception] = None
    ) -> 'Decision':
        return cls(
            action=Action.SKIP,
            start_exchange=start_exchange,
            estimated_profit=opportunity.estimated_profit if opportunity else None,
            reason=reason,
            opportunity=opportunity,
            error=error
        )

    @property
    def is_execute(self) -> bool:
        return self.action is Action.EXECUTE

@dataclass(frozen=True)
class ExecutionRequest:
    """Parameters for the on-chain ``executeTrade`` call."""
    amount_in: int
    token0: str
    token1: str
    start_exchange: str

    @property
    def start_on_uniswap(self) -> bool:
        return self.start_exchange == UNISWAP

@dataclass(frozen=True)
class ExecutionResult:
    tx_hash: str
    status: int
    gas_used: int
    balance_before: int
    balance_after: int

    @property
    def realized_profit(self) -> int:
        return self.balance_after - self.balance_before
