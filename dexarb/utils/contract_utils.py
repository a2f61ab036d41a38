"""Contract instantiation and deployment utilities."""
from typing import Any, Dict, List, Tuple

from web3 import AsyncWeb3
from web3.contract import AsyncContract

from ..config import BotConfig
from ..logger_config import logger
from ..exceptions import ConfigurationError, ContractError
from ..types import SUSHISWAP, UNISWAP
from .abi_utils import load_abi, load_artifact

def get_token_contracts(
    w3: AsyncWeb3,
    token0: str,
    token1: str
) -> Tuple[AsyncContract, AsyncContract]:
    """ERC20 contracts for both tokens of a pair."""
    erc20_abi = load_abi('IERC20')
    return (
        w3.eth.contract(address=token0, abi=erc20_abi),
        w3.eth.contract(address=token1, abi=erc20_abi)
    )

async def get_token_balance(token: AsyncContract, account: str) -> int:
    try:
        return await token.functions.balanceOf(account).call()
    except Exception as e:
        logger.error(f"Error getting balance of {account} in {token.address}: {e}")
        raise ContractError(f"Failed to get token balance: {e}") from e

async def deploy_contract(
    w3: AsyncWeb3,
    abi: List[Dict[str, Any]],
    bytecode: str,
    deployer: str,
    *args: Any
) -> AsyncContract:
    """Deploy a contract from an unlocked node account and wait for it."""
    try:
        factory = w3.eth.contract(abi=abi, bytecode=bytecode)
        tx_hash = await factory.constructor(*args).transact({'from': deployer})
        receipt = await w3.eth.wait_for_transaction_receipt(tx_hash)
    except Exception as e:
        logger.error(f"Error deploying contract: {e}")
        raise ContractError(f"Failed to deploy contract: {e}") from e

    if receipt['status'] != 1 or not receipt.get('contractAddress'):
        raise ContractError(f"Contract deployment reverted: {AsyncWeb3.to_hex(tx_hash)}")

    logger.info(f"Deployed contract at {receipt['contractAddress']}")
    return w3.eth.contract(address=receipt['contractAddress'], abi=abi)

async def get_arb_contract_and_deployer(
    w3: AsyncWeb3,
    config: BotConfig
) -> Tuple[AsyncContract, str]:
    """Deploy the arbitrage contract on the local network.

    The contract is constructed with the Sushiswap router first and the
    Uniswap router second, and is owned by the node's first account.
    """
    if not config.is_local:
        raise ConfigurationError("Arbitrage contract is only deployed on a local network")
    if not config.arbitrage_artifact:
        raise ConfigurationError("contracts.arbitrage_artifact is required for local deploys")

    abi, bytecode = load_artifact(config.arbitrage_artifact)
    accounts = await w3.eth.accounts
    if not accounts:
        raise ContractError("Local node exposes no unlocked accounts")
    deployer = accounts[0]

    contract = await deploy_contract(
        w3,
        abi,
        bytecode,
        deployer,
        config.exchange(SUSHISWAP).router,
        config.exchange(UNISWAP).router
    )
    return contract, deployer
