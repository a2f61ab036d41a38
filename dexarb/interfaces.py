"""Capability interfaces for the external contracts the bot talks to."""
from abc import ABC, abstractmethod
from typing import List, Sequence

from .types import ExecutionRequest, ExecutionResult

class RouterEndpoint(ABC):
    """Quoting side of an exchange router."""

    exchange: str

    @abstractmethod
    async def quote(self, amount_in: int, path: Sequence[str]) -> List[int]:
        """Return one amount per path entry; the first echoes ``amount_in``."""

class PairFactory(ABC):
    """Pool lookup side of an exchange factory."""

    exchange: str

    @abstractmethod
    async def get_pair(self, token0: str, token1: str) -> str:
        """Return the pool address, or the zero address if none exists."""

class TradeSubmitter(ABC):
    """Receives execution requests for profitable round trips."""

    @abstractmethod
    async def submit(self, request: ExecutionRequest) -> ExecutionResult:
        pass
