"""Two-hop round trip estimation."""
from typing import Any, List, Tuple

from .interfaces import RouterEndpoint
from .logger_config import logger
from .exceptions import (
    ArbitrageError,
    QuoteInconsistencyError,
    QuoteUnavailableError,
    ValidationError
)

def _is_amount(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

def _check_quote(quote: Any, amount_in: int, exchange: str) -> int:
    """Validate a single-hop quote and return its output amount."""
    if not isinstance(quote, (list, tuple)):
        raise QuoteInconsistencyError(f"{exchange} returned a malformed quote: {quote!r}")
    if len(quote) != 2:
        raise QuoteInconsistencyError(
            f"{exchange} returned {len(quote)} amounts for a single hop: {list(quote)}"
        )
    if not all(_is_amount(amount) for amount in quote):
        raise QuoteInconsistencyError(f"{exchange} returned non-integer amounts: {list(quote)}")
    echo, amount_out = quote
    if echo != amount_in:
        raise QuoteInconsistencyError(
            f"{exchange} quoted input {echo} but {amount_in} was requested"
        )
    if amount_out < 0:
        raise QuoteInconsistencyError(f"{exchange} quoted negative output {amount_out}")
    return amount_out

async def _quote(router: RouterEndpoint, amount_in: int, path: List[str]) -> int:
    try:
        quote = await router.quote(amount_in, path)
    except ArbitrageError:
        raise
    except Exception as e:
        logger.error(f"Error getting quote from {router.exchange}: {e!r}")
        raise QuoteUnavailableError(
            f"Failed to get {router.exchange} quote for {amount_in} via {path}: {e!r}"
        ) from e
    return _check_quote(quote, amount_in, router.exchange)

async def estimate_round_trip(
    amount_in: int,
    routers: Tuple[RouterEndpoint, RouterEndpoint],
    token0: str,
    token1: str
) -> int:
    """Estimate token0 received for swapping ``amount_in`` token0 -> token1 on
    ``routers[0]`` and straight back on ``routers[1]``.

    Amounts are raw integer units; nothing is rescaled for token decimals.
    The second quote depends on the first, so the hops run one after the
    other. Quote failures are raised immediately and never retried since a
    quote is only good for the block it was taken in.

    Raises:
        ValidationError: ``amount_in`` is not a positive integer.
        QuoteUnavailableError: a router call failed, for any reason.
        QuoteInconsistencyError: a router answered a different request than
            the one asked, in which case no further hop is quoted.
    """
    if not _is_amount(amount_in) or amount_in <= 0:
        raise ValidationError(f"amount_in must be a positive integer, got {amount_in!r}")

    first, second = routers

    first_path: List[str] = [token0, token1]
    amount_mid = await _quote(first, amount_in, first_path)

    second_path: List[str] = [token1, token0]
    amount_out = await _quote(second, amount_mid, second_path)

    logger.debug(
        f"Round trip {first.exchange}->{second.exchange}: "
        f"{amount_in} -> {amount_mid} -> {amount_out}"
    )
    return amount_out
