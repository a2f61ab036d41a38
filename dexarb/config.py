"""Configuration loading for the arbitrage bot.

The bot is configured from a JSON file shaped like the dict configs used
throughout the project::

    {
        "project_settings": {"is_local": true, "poll_interval": 2},
        "network": {"local_rpc_url": "...", "remote_rpc_url": "...{api_key}", ...},
        "dex": {"uniswap_v2_router": "...", "uniswap_v2_factory": "...",
                "sushiswap_router": "...", "sushiswap_factory": "..."},
        "contracts": {"arbitrage_contract": null, "arbitrage_artifact": "..."},
        "strategies": {"arbitrage": {"min_profit_wei": "1000000000000000"}},
        "pairs": [{"token0": "...", "token1": "...", "amount_in": "..."}]
    }

Secrets are never read here; the CLI passes them in.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json

from eth_utils import is_address, to_checksum_address

from .logger_config import logger
from .exceptions import ConfigurationError
from .types import UNISWAP, SUSHISWAP

DEFAULT_LOCAL_RPC_URL = 'http://127.0.0.1:8545'
DEFAULT_REMOTE_RPC_URL = 'https://eth-mainnet.alchemyapi.io/v2/{api_key}'

@dataclass
class NetworkConfig:
    local_rpc_url: str = DEFAULT_LOCAL_RPC_URL
    remote_rpc_url: str = DEFAULT_REMOTE_RPC_URL
    fork_url: Optional[str] = None
    fork_block_number: Optional[int] = None
    request_timeout: float = 10.0
    ephemeral: bool = False
    api_key: Optional[str] = field(default=None, repr=False)

    @property
    def remote_url(self) -> str:
        if '{api_key}' in self.remote_rpc_url:
            if not self.api_key:
                raise ConfigurationError("Remote RPC URL requires an API key")
            return self.remote_rpc_url.format(api_key=self.api_key)
        return self.remote_rpc_url

    @property
    def fork_rpc_url(self) -> str:
        url = self.fork_url or self.remote_rpc_url
        if '{api_key}' in url:
            if not self.api_key:
                raise ConfigurationError("Fork URL requires an API key")
            return url.format(api_key=self.api_key)
        return url

@dataclass(frozen=True)
class ExchangeConfig:
    name: str
    router: str
    factory: str

@dataclass(frozen=True)
class PairConfig:
    token0: str
    token1: str
    amount_in: int

@dataclass
class BotConfig:
    is_local: bool
    network: NetworkConfig
    exchanges: Dict[str, ExchangeConfig]
    min_profit_wei: int
    pairs: List[PairConfig] = field(default_factory=list)
    poll_interval: float = 2.0
    arbitrage_contract: Optional[str] = None
    arbitrage_artifact: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)

    def exchange(self, name: str) -> ExchangeConfig:
        try:
            return self.exchanges[name]
        except KeyError:
            raise ConfigurationError(f"Unsupported DEX: {name}") from None

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        api_key: Optional[str] = None,
        private_key: Optional[str] = None
    ) -> 'BotConfig':
        """Build and validate a config from its dict form."""
        try:
            settings = data.get('project_settings', {})
            network_data = data.get('network', {})
            contracts = data.get('contracts', {})

            network = NetworkConfig(
                local_rpc_url=network_data.get('local_rpc_url', DEFAULT_LOCAL_RPC_URL),
                remote_rpc_url=network_data.get('remote_rpc_url', DEFAULT_REMOTE_RPC_URL),
                fork_url=network_data.get('fork_url'),
                fork_block_number=_optional_int(network_data.get('fork_block_number')),
                request_timeout=float(network_data.get('request_timeout', 10)),
                ephemeral=bool(network_data.get('ephemeral', False)),
                api_key=api_key
            )

            arbitrage = data.get('strategies', {}).get('arbitrage', {})
            if arbitrage.get('min_profit_wei') is None:
                raise ConfigurationError(
                    "strategies.arbitrage.min_profit_wei must be set explicitly"
                )
            min_profit_wei = int(arbitrage['min_profit_wei'])

            contract_address = contracts.get('arbitrage_contract')

            return cls(
                is_local=bool(settings.get('is_local', True)),
                network=network,
                exchanges=_parse_exchanges(data.get('dex', {})),
                min_profit_wei=min_profit_wei,
                pairs=[_parse_pair(p) for p in data.get('pairs', [])],
                poll_interval=float(settings.get('poll_interval', 2)),
                arbitrage_contract=_checksum(contract_address, 'contracts.arbitrage_contract')
                if contract_address else None,
                arbitrage_artifact=contracts.get('arbitrage_artifact'),
                private_key=private_key
            )

        except ConfigurationError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)

def _checksum(address: Any, key: str) -> str:
    if not isinstance(address, str) or not is_address(address):
        raise ConfigurationError(f"Invalid address for {key}: {address!r}")
    return to_checksum_address(address)

def _parse_exchanges(dex: Dict[str, Any]) -> Dict[str, ExchangeConfig]:
    exchanges = {}
    for name, router_key, factory_key in (
        (UNISWAP, 'uniswap_v2_router', 'uniswap_v2_factory'),
        (SUSHISWAP, 'sushiswap_router', 'sushiswap_factory'),
    ):
        if router_key not in dex or factory_key not in dex:
            raise ConfigurationError(f"Missing {name} router/factory in dex config")
        exchanges[name] = ExchangeConfig(
            name=name,
            router=_checksum(dex[router_key], f"dex.{router_key}"),
            factory=_checksum(dex[factory_key], f"dex.{factory_key}")
        )
    return exchanges

def _parse_pair(pair: Dict[str, Any]) -> PairConfig:
    token0 = _checksum(pair['token0'], 'pairs.token0')
    token1 = _checksum(pair['token1'], 'pairs.token1')
    if token0 == token1:
        raise ConfigurationError(f"Pair tokens must differ: {token0}")
    amount_in = int(pair['amount_in'])
    if amount_in <= 0:
        raise ConfigurationError(f"Pair amount_in must be positive: {amount_in}")
    return PairConfig(token0=token0, token1=token1, amount_in=amount_in)

def load_config(
    path: Union[str, Path],
    api_key: Optional[str] = None,
    private_key: Optional[str] = None
) -> BotConfig:
    """Load configuration from a JSON file."""
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading config from {path}: {e}")
        raise ConfigurationError(f"Failed to load config from {path}: {e}") from e

    config = BotConfig.from_dict(data, api_key=api_key, private_key=private_key)
    logger.info(
        f"Loaded config from {path}: local={config.is_local}, "
        f"{len(config.pairs)} pair(s)"
    )
    return config
