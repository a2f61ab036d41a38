"""Two-hop Uniswap/Sushiswap arbitrage bot."""
from .driver import ArbitrageDriver
from .estimator import estimate_round_trip
from .market_data import MarketDataProvider
from .types import Action, Decision, SkipReason

__version__ = '1.0.0'

__all__ = [
    'ArbitrageDriver',
    'MarketDataProvider',
    'estimate_round_trip',
    'Action',
    'Decision',
    'SkipReason',
]
