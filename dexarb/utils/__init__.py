"""Utility modules for the arbitrage bot."""
from .dex_handler import DEXHandler
from .abi_utils import load_abi

__all__ = ['DEXHandler', 'load_abi']
