"""On-chain trade submission through the arbitrage contract."""
from typing import Optional

from eth_account import Account
from web3 import AsyncWeb3
from web3.contract import AsyncContract

from .config import BotConfig
from .interfaces import TradeSubmitter
from .logger_config import logger
from .exceptions import ConfigurationError, ExecutionError
from .types import ExecutionRequest, ExecutionResult
from .utils.abi_utils import load_abi
from .utils.contract_utils import (
    get_arb_contract_and_deployer,
    get_token_balance,
    get_token_contracts
)

class TradeExecutor(TradeSubmitter):
    """Submits ``executeTrade`` calls and reports the realized result.

    With a private key the transaction is signed locally and sent raw;
    without one the account must be unlocked on the node (local fork).
    Failed or reverted submissions raise ``ExecutionError`` and are never
    retried here.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        contract: AsyncContract,
        account: str,
        private_key: Optional[str] = None,
        receipt_timeout: float = 120
    ):
        self.w3 = w3
        self.contract = contract
        self.account = account
        self._private_key = private_key
        self.receipt_timeout = receipt_timeout

    async def get_market_id(self, token: str) -> int:
        return await self.contract.functions.getMarketId(token).call()

    async def submit(self, request: ExecutionRequest) -> ExecutionResult:
        token0_contract, _ = get_token_contracts(self.w3, request.token0, request.token1)
        balance_before = await get_token_balance(token0_contract, self.account)

        trade = self.contract.functions.executeTrade(
            request.start_on_uniswap,
            request.token0,
            request.token1,
            request.amount_in
        )

        try:
            if self._private_key:
                tx = await trade.build_transaction({
                    'from': self.account,
                    'nonce': await self.w3.eth.get_transaction_count(self.account)
                })
                signed_tx = self.w3.eth.account.sign_transaction(tx, self._private_key)
                tx_hash = await self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
            else:
                tx_hash = await trade.transact({'from': self.account})

            tx_hex = AsyncWeb3.to_hex(tx_hash)
            logger.info(f"Submitted executeTrade: {tx_hex}")
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.receipt_timeout
            )
        except Exception as e:
            logger.error(f"Error executing trade: {e}")
            raise ExecutionError(f"Failed to execute trade: {e}") from e

        if receipt['status'] != 1:
            logger.error(f"Transaction failed: {tx_hex}")
            raise ExecutionError(f"executeTrade reverted: {tx_hex}")

        balance_after = await get_token_balance(token0_contract, self.account)
        result = ExecutionResult(
            tx_hash=tx_hex,
            status=receipt['status'],
            gas_used=receipt['gasUsed'],
            balance_before=balance_before,
            balance_after=balance_after
        )
        logger.info(
            f"Trade {result.tx_hash} settled, realized profit {result.realized_profit} "
            f"(gas used {result.gas_used})"
        )
        return result

async def configure_arb_contract_and_signer(
    w3: AsyncWeb3,
    config: BotConfig
) -> TradeExecutor:
    """Instantiate the arbitrage contract and the account that trades with it.

    Locally the contract is deployed fresh and owned by the node's first
    account. Remotely both the deployed contract address and a private key
    must be configured.
    """
    if config.is_local:
        contract, deployer = await get_arb_contract_and_deployer(w3, config)
        return TradeExecutor(w3, contract, deployer)

    if not config.arbitrage_contract:
        raise ConfigurationError("contracts.arbitrage_contract is required on a remote network")
    if not config.private_key:
        raise ConfigurationError("A private key is required to trade on a remote network")

    signer = Account.from_key(config.private_key)
    contract = w3.eth.contract(address=config.arbitrage_contract, abi=load_abi('Arbitrage'))
    return TradeExecutor(w3, contract, signer.address, private_key=config.private_key)
