"""Tests for arbitrage decisions"""
import asyncio
from unittest.mock import AsyncMock

import pytest

from dexarb.driver import ArbitrageDriver
from dexarb.exceptions import (
    ExecutionError,
    QuoteInconsistencyError,
    QuoteUnavailableError
)
from dexarb.types import Action, ExecutionRequest, ExecutionResult, SkipReason

from conftest import WETH, SHIB, StubRouter, RateRouter

def make_routers(hop1, hop2):
    return StubRouter('uniswap', [hop1]), StubRouter('sushiswap', [hop2])

@pytest.fixture
def submitter():
    submitter = AsyncMock()
    submitter.submit = AsyncMock(return_value=ExecutionResult(
        tx_hash='0x' + 'ab' * 32,
        status=1,
        gas_used=250000,
        balance_before=0,
        balance_after=20
    ))
    return submitter

@pytest.mark.asyncio
async def test_profitable_round_trip_executes(submitter):
    driver = ArbitrageDriver(submitter)

    decision = await driver.evaluate(1000, WETH, SHIB, make_routers([1000, 1950], [1950, 1020]), 10)

    assert decision.action is Action.EXECUTE
    assert decision.estimated_profit == 20
    assert decision.start_exchange == 'uniswap'
    submitter.submit.assert_awaited_once_with(ExecutionRequest(
        amount_in=1000,
        token0=WETH,
        token1=SHIB,
        start_exchange='uniswap'
    ))

@pytest.mark.asyncio
async def test_losing_round_trip_skips(submitter):
    driver = ArbitrageDriver(submitter)

    decision = await driver.evaluate(1000, WETH, SHIB, make_routers([1000, 1950], [1950, 995]), 10)

    assert decision.action is Action.SKIP
    assert decision.reason is SkipReason.INSUFFICIENT_MARGIN
    assert decision.estimated_profit == -5
    submitter.submit.assert_not_awaited()

@pytest.mark.asyncio
async def test_profit_equal_to_threshold_skips(submitter):
    driver = ArbitrageDriver(submitter)

    decision = await driver.evaluate(1000, WETH, SHIB, make_routers([1000, 1950], [1950, 1010]), 10)

    assert decision.action is Action.SKIP
    assert decision.reason is SkipReason.INSUFFICIENT_MARGIN
    submitter.submit.assert_not_awaited()

@pytest.mark.asyncio
async def test_profit_one_above_threshold_executes(submitter):
    driver = ArbitrageDriver(submitter)

    decision = await driver.evaluate(1000, WETH, SHIB, make_routers([1000, 1950], [1950, 1011]), 10)

    assert decision.action is Action.EXECUTE
    assert decision.estimated_profit == 11

@pytest.mark.asyncio
@pytest.mark.parametrize('hop1', [
    [999, 1950],
    QuoteUnavailableError("timeout"),
])
async def test_estimation_failure_never_executes(submitter, hop1):
    driver = ArbitrageDriver(submitter)

    decision = await driver.evaluate(1000, WETH, SHIB, make_routers(hop1, [1950, 5000]), 10)

    assert decision.action is Action.SKIP
    assert decision.reason is SkipReason.ESTIMATION_FAILED
    assert isinstance(decision.error, (QuoteInconsistencyError, QuoteUnavailableError))
    assert decision.estimated_profit is None
    submitter.submit.assert_not_awaited()

@pytest.mark.asyncio
async def test_assess_has_no_side_effects(submitter):
    driver = ArbitrageDriver(submitter)

    decision = await driver.assess(1000, WETH, SHIB, make_routers([1000, 1950], [1950, 1020]), 10)

    assert decision.is_execute
    submitter.submit.assert_not_awaited()

@pytest.mark.asyncio
async def test_execute_without_submitter_is_dry_run():
    driver = ArbitrageDriver()

    decision = await driver.evaluate(1000, WETH, SHIB, make_routers([1000, 1950], [1950, 1020]), 10)

    assert decision.is_execute

@pytest.mark.asyncio
async def test_submission_failure_is_surfaced(submitter):
    submitter.submit.side_effect = RuntimeError("nonce too low")
    driver = ArbitrageDriver(submitter)

    with pytest.raises(ExecutionError):
        await driver.evaluate(1000, WETH, SHIB, make_routers([1000, 1950], [1950, 1020]), 10)

    submitter.submit.assert_awaited_once()

@pytest.mark.asyncio
async def test_execute_rejects_skip_decision(submitter):
    driver = ArbitrageDriver(submitter)
    decision = await driver.assess(1000, WETH, SHIB, make_routers([1000, 1950], [1950, 995]), 10)

    with pytest.raises(ValueError):
        await driver.execute(decision)

@pytest.mark.asyncio
async def test_best_direction_picks_more_profitable_start():
    # Uniswap sells SHIB cheap, Sushiswap buys it back dear.
    uniswap = RateRouter('uniswap', {(WETH, SHIB): (2, 1), (SHIB, WETH): (1, 3)})
    sushiswap = RateRouter('sushiswap', {(WETH, SHIB): (3, 2), (SHIB, WETH): (2, 3)})
    driver = ArbitrageDriver()

    decision = await driver.best_direction(900, WETH, SHIB, (uniswap, sushiswap), 10)

    # uniswap first: 900 -> 1800 -> 1200; sushiswap first: 900 -> 1350 -> 450
    assert decision.start_exchange == 'uniswap'
    assert decision.estimated_profit == 300
    assert decision.is_execute

@pytest.mark.asyncio
async def test_best_direction_prefers_estimate_over_failure():
    uniswap = StubRouter('uniswap', [QuoteUnavailableError("down"), [1950, 900]])
    sushiswap = StubRouter('sushiswap', [[1000, 1950]])
    driver = ArbitrageDriver()

    decision = await driver.best_direction(1000, WETH, SHIB, (uniswap, sushiswap), 10)

    assert decision.start_exchange == 'sushiswap'
    assert decision.reason is SkipReason.INSUFFICIENT_MARGIN
    assert decision.estimated_profit == -100

@pytest.mark.asyncio
@pytest.mark.parametrize('failure', [
    ConnectionError("reset"),
    asyncio.TimeoutError(),
])
async def test_raw_router_failure_is_skipped(submitter, failure):
    driver = ArbitrageDriver(submitter)

    decision = await driver.evaluate(1000, WETH, SHIB, make_routers(failure, [1950, 1020]), 10)

    assert decision.action is Action.SKIP
    assert decision.reason is SkipReason.ESTIMATION_FAILED
    assert isinstance(decision.error, QuoteUnavailableError)
    submitter.submit.assert_not_awaited()

@pytest.mark.asyncio
async def test_malformed_quote_is_skipped(submitter):
    driver = ArbitrageDriver(submitter)

    decision = await driver.evaluate(1000, WETH, SHIB, make_routers(None, [1950, 1020]), 10)

    assert decision.reason is SkipReason.ESTIMATION_FAILED
    assert isinstance(decision.error, QuoteInconsistencyError)
    submitter.submit.assert_not_awaited()
