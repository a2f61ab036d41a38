"""Custom exceptions for the arbitrage bot."""

class ArbitrageError(Exception):
    """Base exception for arbitrage bot errors."""
    pass

class ConfigurationError(ArbitrageError):
    """Raised when there is an error in configuration."""
    pass

class ValidationError(ArbitrageError):
    """Raised when validation fails."""
    pass

class NetworkError(ArbitrageError):
    """Raised when network-related issues occur."""
    pass

class ContractError(ArbitrageError):
    """Raised when there are contract-related issues."""
    pass

class NoLiquidityError(ArbitrageError):
    """Raised when a pair does not exist or holds no reserves."""
    pass

class DivisionByZeroError(ArbitrageError, ZeroDivisionError):
    """Raised when a price is requested from a degenerate reserve state."""
    pass

class QuoteInconsistencyError(ArbitrageError):
    """Raised when a router quote does not match the request it answers."""
    pass

class QuoteUnavailableError(ArbitrageError):
    """Raised when a router quote cannot be obtained."""
    pass

class ExecutionError(ArbitrageError):
    """Raised when trade submission fails."""
    pass
