"""
Custom Exceptions - Stock Health Score
healthscore/core/exceptions.py

Exception classes raised by the storage and market-data collaborators.
The scoring functions themselves never raise for numeric inputs.
"""


class HealthScoreException(Exception):
    """Base exception for the health score service."""

    pass


class EvidenceStoreException(HealthScoreException):
    """Evidence store read or write failure."""

    def __init__(self, ticker: str, message: str = "Evidence store unavailable"):
        self.ticker = ticker
        self.message = message
        super().__init__(f"{message} (ticker={ticker})")


class MarketDataException(HealthScoreException):
    """Upstream market data provider failure."""

    def __init__(self, message: str = "Market data unavailable"):
        self.message = message
        super().__init__(message)


class MarketDataNotConfiguredException(MarketDataException):
    """No API key configured for the market data provider."""

    def __init__(self, message: str = "ALPHA_VANTAGE_KEY not configured"):
        super().__init__(message)


class SymbolNotFoundException(MarketDataException):
    """Symbol unknown to the market data provider."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Symbol {symbol} not found")


class RateLimitedException(MarketDataException):
    """Provider refused the call because the API quota is used up."""

    pass
