#!/usr/bin/env python3
import argparse
import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

import dotenv

from dexarb.bot import ArbitrageBot
from dexarb.config import load_config
from dexarb.executor import configure_arb_contract_and_signer
from dexarb.logger_config import logger, setup_logging
from dexarb.exceptions import ConfigurationError
from dexarb.network import (
    reset_to_fork,
    setup_web3_connection,
    validate_connection,
    warn_about_ephemeral_network
)
from dexarb.price_manipulator import manipulate_pair_price, parse_manipulation

def load_environment():
    # Load .env file if it exists
    if Path('.env').exists():
        dotenv.load_dotenv()

    return os.getenv('ALCHEMY_API_KEY'), os.getenv('PRIVATE_KEY')

def manipulation_argument(value):
    try:
        return parse_manipulation(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e))

def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description='Two-hop DEX arbitrage bot')
    parser.add_argument(
        '--config',
        type=str,
        default='config/config.json',
        help='Path to configuration file (default: config/config.json)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='INFO',
        help='Set the logging level (default: INFO)'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default='logs/arbitrage_bot.log',
        help='JSON log file path (default: logs/arbitrage_bot.log)'
    )
    parser.add_argument(
        '--reset-fork',
        action='store_true',
        help='Reset the local node to the configured mainnet fork before starting'
    )
    parser.add_argument(
        '--once',
        action='store_true',
        help='Evaluate all pairs once and exit'
    )
    parser.add_argument(
        '--manipulate',
        type=manipulation_argument,
        metavar='EXCHANGE:HOLDER:AMOUNT',
        help='Local fork only: swap AMOUNT of the first pair token1 from HOLDER into EXCHANGE before starting'
    )
    return parser.parse_args(argv)

async def run(args):
    api_key, private_key = load_environment()
    config = load_config(args.config, api_key=api_key, private_key=private_key)

    w3 = setup_web3_connection(config)
    await validate_connection(w3)
    warn_about_ephemeral_network(config)

    if args.reset_fork:
        await reset_to_fork(w3, config)

    executor = await configure_arb_contract_and_signer(w3, config)
    bot = ArbitrageBot.from_config(w3, config, submitter=executor)

    if args.manipulate:
        if not config.pairs:
            raise ConfigurationError("--manipulate needs at least one configured pair")
        exchange, holder, amount = args.manipulate
        await manipulate_pair_price(
            w3, config, bot.dex_handler, config.pairs[0], exchange, holder, amount
        )

    if args.once:
        await bot.run_once()
        return

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, bot.stop)

    await bot.run()
    logger.info("Shutdown complete")

def main(argv=None):
    args = parse_arguments(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        logger.info("Starting arbitrage bot...")
        asyncio.run(run(args))
    except Exception as e:
        logger.exception(f"Fatal error occurred: {str(e)}")
        sys.exit(1)

if __name__ == "__main__":
    main()
