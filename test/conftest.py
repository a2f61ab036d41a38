"""Test configuration and fixtures."""
from typing import Dict, List, Sequence, Tuple
from unittest.mock import AsyncMock, Mock

import pytest
from eth_account import Account

from dexarb.config import BotConfig
from dexarb.interfaces import RouterEndpoint

# Constants for testing
TEST_PRIVATE_KEY = "0x" + "1" * 64
TEST_ACCOUNT = Account.from_key(TEST_PRIVATE_KEY)
ZERO_ADDRESS = "0x" + "0" * 40

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
SHIB = "0x95aD61b0a150d79219dCF64E1E6Cc01f0B64C4cE"
DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
PAIR_ADDRESS = "0x811beEd0119b4AfCE20D2583EB608C6F7AF1954f"
ARB_CONTRACT = "0x1234567890123456789012345678901234567890"

def create_test_config() -> Dict:
    """Create a test configuration with realistic values"""
    return {
        'project_settings': {
            'is_local': True,
            'poll_interval': 0
        },
        'network': {
            'local_rpc_url': 'http://127.0.0.1:8545',
            'remote_rpc_url': 'https://eth-mainnet.alchemyapi.io/v2/{api_key}',
            'fork_block_number': 14240415,
            'request_timeout': 5
        },
        'dex': {
            'uniswap_v2_router': '0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D',
            'uniswap_v2_factory': '0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f',
            'sushiswap_router': '0xd9e1cE17f2641f24aE83637ab66a2cca9C378B9F',
            'sushiswap_factory': '0xC0AEe478e3658e2610c5F7A4A2E1777cE9e4f2Ac'
        },
        'contracts': {
            'arbitrage_contract': None,
            'arbitrage_artifact': 'artifacts/contracts/Arbitrage.sol/Arbitrage.json'
        },
        'strategies': {
            'arbitrage': {
                'min_profit_wei': '10'
            }
        },
        'pairs': [
            {'token0': WETH, 'token1': SHIB, 'amount_in': '1000'}
        ]
    }

def make_call(value=None, side_effect=None) -> Mock:
    """Mock for ``contract.functions.x(...)`` whose ``call()`` is awaitable."""
    return Mock(call=AsyncMock(return_value=value, side_effect=side_effect))

class StubRouter(RouterEndpoint):
    """Router that answers from scripted quotes and records every request."""

    def __init__(self, exchange: str, quotes: Sequence = ()):
        self.exchange = exchange
        self.quotes = list(quotes)
        self.requests: List[Tuple[int, List[str]]] = []

    async def quote(self, amount_in, path):
        self.requests.append((amount_in, list(path)))
        response = self.quotes.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

class RateRouter(RouterEndpoint):
    """Router that prices each hop at a fixed rate per direction."""

    def __init__(self, exchange: str, rates: Dict[Tuple[str, str], Tuple[int, int]]):
        self.exchange = exchange
        self.rates = rates
        self.calls = 0

    async def quote(self, amount_in, path):
        self.calls += 1
        num, den = self.rates[(path[0], path[1])]
        return [amount_in, amount_in * num // den]

@pytest.fixture
def test_config() -> Dict:
    return create_test_config()

@pytest.fixture
def bot_config(test_config) -> BotConfig:
    return BotConfig.from_dict(test_config)

@pytest.fixture
def pair_contract():
    """Pair contract holding 5000 WETH / 2000 SHIB with WETH as pool token0."""
    contract = Mock()
    contract.functions.getReserves = Mock(return_value=make_call([5000, 2000, 1646000000]))
    contract.functions.token0 = Mock(return_value=make_call(WETH))
    return contract

@pytest.fixture
def dex_handler(pair_contract):
    handler = Mock()
    factory = Mock()
    factory.get_pair = AsyncMock(return_value=PAIR_ADDRESS)
    handler.factory = Mock(return_value=factory)
    handler.pair_contract = Mock(return_value=pair_contract)
    return handler
