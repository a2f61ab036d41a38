"""Chain connection and local fork control."""
from typing import Any, Dict, List

import aiohttp
from web3 import AsyncWeb3, AsyncHTTPProvider
from web3.types import RPCEndpoint

from .config import BotConfig
from .logger_config import logger
from .exceptions import ConfigurationError, NetworkError

def setup_web3_connection(config: BotConfig) -> AsyncWeb3:
    """Create an async web3 client for the local fork or the remote network."""
    url = config.network.local_rpc_url if config.is_local else config.network.remote_url
    provider = AsyncHTTPProvider(
        url,
        request_kwargs={'timeout': aiohttp.ClientTimeout(total=config.network.request_timeout)}
    )
    logger.info(f"Using {'local' if config.is_local else 'remote'} provider")
    return AsyncWeb3(provider)

async def validate_connection(w3: AsyncWeb3) -> int:
    """Return the chain id, raising if the node is unreachable."""
    try:
        if not await w3.is_connected():
            raise NetworkError("Web3 provider is not connected")
        chain_id = await w3.eth.chain_id
        block_number = await w3.eth.block_number
        logger.info(f"Connected to chain {chain_id} at block {block_number}")
        return chain_id
    except NetworkError:
        raise
    except Exception as e:
        logger.error(f"Network validation failed: {e}")
        raise NetworkError(f"Failed to validate connection: {e}") from e

def warn_about_ephemeral_network(config: BotConfig) -> None:
    if config.is_local and config.network.ephemeral:
        logger.warning(
            "Using an ephemeral local network that is created and destroyed "
            "with each run. Point local_rpc_url at a persistent node when "
            "running outside of tests."
        )

async def _rpc(w3: AsyncWeb3, method: str, params: List[Any]) -> Any:
    try:
        response: Dict[str, Any] = await w3.provider.make_request(RPCEndpoint(method), params)
    except Exception as e:
        logger.error(f"RPC {method} failed: {e}")
        raise NetworkError(f"RPC {method} failed: {e}") from e

    if response.get('error'):
        raise NetworkError(f"RPC {method} returned error: {response['error']}")
    return response.get('result')

def _require_local(config: BotConfig, action: str) -> None:
    if not config.is_local:
        raise ConfigurationError(f"Cannot {action} on a remote network")

async def reset_to_fork(w3: AsyncWeb3, config: BotConfig) -> None:
    """Restore the local node to the configured mainnet fork."""
    _require_local(config, 'reset fork')
    forking: Dict[str, Any] = {'jsonRpcUrl': config.network.fork_rpc_url}
    if config.network.fork_block_number is not None:
        forking['blockNumber'] = config.network.fork_block_number

    await _rpc(w3, 'hardhat_reset', [{'forking': forking}])
    logger.info(f"Reset local node to fork at block {config.network.fork_block_number or 'latest'}")

async def impersonate_account(w3: AsyncWeb3, address: str) -> None:
    await _rpc(w3, 'hardhat_impersonateAccount', [address])
    logger.debug(f"Impersonating {address}")

async def stop_impersonating_account(w3: AsyncWeb3, address: str) -> None:
    await _rpc(w3, 'hardhat_stopImpersonatingAccount', [address])
    logger.debug(f"Stopped impersonating {address}")
