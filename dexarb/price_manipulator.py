"""Move a pool's price on a local fork to set up arbitrage scenarios."""
from typing import Optional, Tuple

from eth_utils import is_address, to_checksum_address
from web3 import AsyncWeb3

from .config import BotConfig, PairConfig
from .logger_config import logger
from .exceptions import ConfigurationError, ExecutionError
from .network import impersonate_account, stop_impersonating_account
from .types import SUSHISWAP, UNISWAP
from .utils.contract_utils import get_token_balance, get_token_contracts
from .utils.dex_handler import DEXHandler

SWAP_DEADLINE = 600  # seconds

async def manipulate_price(
    w3: AsyncWeb3,
    config: BotConfig,
    dex_handler: DEXHandler,
    exchange: str,
    holder: str,
    token_in: str,
    token_out: str,
    amount: int,
    recipient: Optional[str] = None
) -> int:
    """Dump ``amount`` of ``token_in`` into ``exchange``'s pool from ``holder``.

    The holder is impersonated on the local node for the duration of the
    swap. Returns the amount of ``token_out`` the recipient received.
    """
    if not config.is_local:
        raise ConfigurationError("Price manipulation is only possible on a local fork")

    router = dex_handler.router(exchange)
    recipient = recipient or holder
    token_in_contract, token_out_contract = get_token_contracts(w3, token_in, token_out)

    await impersonate_account(w3, holder)
    try:
        balance_before = await get_token_balance(token_out_contract, recipient)
        latest = await w3.eth.get_block('latest')

        approve_hash = await token_in_contract.functions.approve(
            router.address,
            amount
        ).transact({'from': holder})
        await w3.eth.wait_for_transaction_receipt(approve_hash)

        swap_hash = await router.contract.functions.swapExactTokensForTokens(
            amount,
            0,
            [token_in, token_out],
            recipient,
            latest['timestamp'] + SWAP_DEADLINE
        ).transact({'from': holder})
        receipt = await w3.eth.wait_for_transaction_receipt(swap_hash)
        if receipt['status'] != 1:
            raise ExecutionError(f"Manipulation swap reverted: {AsyncWeb3.to_hex(swap_hash)}")

        balance_after = await get_token_balance(token_out_contract, recipient)
    except ExecutionError:
        raise
    except Exception as e:
        logger.error(f"Error manipulating {exchange} price: {e}")
        raise ExecutionError(f"Failed to manipulate {exchange} price: {e}") from e
    finally:
        await stop_impersonating_account(w3, holder)

    received = balance_after - balance_before
    logger.info(
        f"Swapped {amount} {token_in} for {received} {token_out} on {exchange}"
    )
    return received

def parse_manipulation(value: str) -> Tuple[str, str, int]:
    """Parse an ``EXCHANGE:HOLDER:AMOUNT`` command line setting."""
    try:
        exchange, holder, raw_amount = value.split(':')
        amount = int(raw_amount)
    except ValueError:
        raise ConfigurationError(f"Expected EXCHANGE:HOLDER:AMOUNT, got {value!r}") from None

    if exchange not in (UNISWAP, SUSHISWAP):
        raise ConfigurationError(f"Unsupported DEX: {exchange}")
    if not is_address(holder):
        raise ConfigurationError(f"Invalid holder address: {holder!r}")
    if amount <= 0:
        raise ConfigurationError(f"Manipulation amount must be positive: {amount}")
    return exchange, to_checksum_address(holder), amount

async def manipulate_pair_price(
    w3: AsyncWeb3,
    config: BotConfig,
    dex_handler: DEXHandler,
    pair: PairConfig,
    exchange: str,
    holder: str,
    amount: int
) -> int:
    """Dump the pair's token1 into ``exchange`` so token1 is cheap there.

    This opens a round trip that buys token1 on ``exchange`` and sells it
    back on the other one.
    """
    return await manipulate_price(
        w3,
        config,
        dex_handler,
        exchange,
        holder,
        pair.token1,
        pair.token0,
        amount
    )
