"""
Market Data Client - Stock Health Score
healthscore/services/market_data.py

Alpha Vantage OVERVIEW + GLOBAL_QUOTE, parsed into a MarketSnapshot.

The provider returns every number as a string ("None" and "-" for missing
values) and signals rate limits and bad symbols inside a 200 response body,
so errors are detected from payload keys rather than status codes.

estimate_financial_inputs() derives rough Altman / Piotroski inputs from the
overview alone (no balance-sheet or income-statement calls).
"""
import logging
import math
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

import httpx

from healthscore.config import settings
from healthscore.core.exceptions import (
    MarketDataException,
    MarketDataNotConfiguredException,
    RateLimitedException,
    SymbolNotFoundException,
)
from healthscore.models.stock import MarketSnapshot
from healthscore.scoring.utils import safe_ratio
from healthscore.scoring.distress_calculator import AltmanInputs
from healthscore.scoring.quality_calculator import PiotroskiInputs

logger = logging.getLogger(__name__)


def to_float(value: Any, default: float = 0.0) -> float:
    """Parse a provider number; "None", "-", "" and non-finite values give default."""
    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip().rstrip("%")
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


class AlphaVantageClient:
    """Thin synchronous client over the Alpha Vantage query endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        if api_key is None and settings.ALPHA_VANTAGE_KEY is not None:
            api_key = settings.ALPHA_VANTAGE_KEY.get_secret_value()
        self.api_key = api_key
        self.base_url = base_url or settings.ALPHA_VANTAGE_URL
        self.client = client or httpx.Client(timeout=timeout or settings.HTTP_TIMEOUT_SECONDS)

    def _query(self, function: str, symbol: str) -> Dict[str, Any]:
        if not self.api_key:
            raise MarketDataNotConfiguredException()

        params = {"function": function, "symbol": symbol, "apikey": self.api_key}
        try:
            response = self.client.get(self.base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise MarketDataException(
                f"{function} fetch failed for {symbol}: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise MarketDataException(f"{function} fetch failed for {symbol}: {e}") from e
        except ValueError as e:
            raise MarketDataException(f"{function} returned invalid JSON for {symbol}") from e

        if not isinstance(payload, dict):
            raise MarketDataException(f"{function} returned unexpected payload for {symbol}")

        # Rate limits and invalid calls come back as 200 with a message key.
        rate_limit_message = payload.get("Note") or payload.get("Information")
        if rate_limit_message:
            raise RateLimitedException(rate_limit_message)
        if payload.get("Error Message"):
            raise MarketDataException(payload["Error Message"])

        return payload

    def fetch_overview(self, symbol: str) -> Dict[str, Any]:
        """Company overview; raises SymbolNotFoundException for unknown symbols."""
        symbol = symbol.upper()
        overview = self._query("OVERVIEW", symbol)
        if not overview.get("Symbol"):
            raise SymbolNotFoundException(symbol)
        logger.info(f"[{symbol}] Overview received: {overview.get('Name', '')}")
        return overview

    def fetch_quote(self, symbol: str) -> Dict[str, Any]:
        """Global quote block; empty dict when the provider has none."""
        symbol = symbol.upper()
        payload = self._query("GLOBAL_QUOTE", symbol)
        quote = payload.get("Global Quote") or {}
        if not quote.get("05. price"):
            logger.warning(f"[{symbol}] Empty quote, falling back to overview price")
        return quote

    def close(self) -> None:
        self.client.close()


def build_snapshot(overview: Dict[str, Any], quote: Optional[Dict[str, Any]] = None) -> MarketSnapshot:
    """
    Parse provider string fields into a MarketSnapshot.

    When the quote has no price, price comes from AnalystTargetPrice, then
    BookValue, and the daily change is 0.
    """
    quote = quote or {}
    if quote.get("05. price"):
        price = to_float(quote.get("05. price"))
        change_percent = to_float(quote.get("10. change percent"))
        volume = int(to_float(quote.get("06. volume")))
    else:
        price = to_float(overview.get("AnalystTargetPrice")) or to_float(overview.get("BookValue"))
        change_percent = 0.0
        volume = 0

    return MarketSnapshot(
        symbol=overview.get("Symbol", ""),
        company_name=overview.get("Name") or overview.get("Symbol", ""),
        description=overview.get("Description") or "",
        sector=overview.get("Sector") or "Unknown",
        industry=overview.get("Industry") or "Unknown",
        price=price,
        change_percent=change_percent,
        market_cap=to_float(overview.get("MarketCapitalization")),
        volume=volume,
        week52_high=to_float(overview.get("52WeekHigh")),
        week52_low=to_float(overview.get("52WeekLow")),
        pe_ratio=to_float(overview.get("PERatio")),
        pb_ratio=to_float(overview.get("PriceToBookRatio")),
        eps=to_float(overview.get("EPS")),
        dividend_yield=to_float(overview.get("DividendYield")) * 100,
        ev_to_ebitda=to_float(overview.get("EVToEBITDA")),
        eps_growth=to_float(overview.get("QuarterlyEarningsGrowthYOY")),
        revenue_growth=to_float(overview.get("QuarterlyRevenueGrowthYOY")),
        profit_margin=to_float(overview.get("ProfitMargin")),
        operating_margin=to_float(overview.get("OperatingMarginTTM")),
        roe=to_float(overview.get("ReturnOnEquityTTM")),
        current_ratio=to_float(overview.get("CurrentRatio")),
        debt_to_equity=to_float(overview.get("DebtToEquity")),
    )


def estimate_financial_inputs(overview: Dict[str, Any]) -> Tuple[AltmanInputs, PiotroskiInputs]:
    """
    Rough Altman / Piotroski inputs from overview fields only.

    Balance-sheet items are fixed multiples of market cap and the prior-period
    values assume mild improvement, so the indices lean optimistic for any
    profitable company. Treat them as indicative.
    """
    market_cap = to_float(overview.get("MarketCapitalization"))
    current_ratio = to_float(overview.get("CurrentRatio"))
    eps = to_float(overview.get("EPS"))
    revenue = to_float(overview.get("RevenueTTM"))
    profit_margin = to_float(overview.get("ProfitMargin"))
    gross_profit = to_float(overview.get("GrossProfitTTM"))
    roe = to_float(overview.get("ReturnOnEquityTTM"))

    total_assets = market_cap * 1.5 if market_cap > 0 else 0.0
    total_liabilities = market_cap * 0.5 if market_cap > 0 else 0.0

    current_assets = total_assets * 0.4
    current_liabilities = current_assets / current_ratio if current_ratio > 0 else current_assets
    working_capital = current_assets - current_liabilities

    net_income = revenue * profit_margin
    ebit = net_income * 1.2
    retained_earnings = market_cap * 0.3
    shares_out = market_cap / eps if market_cap > 0 and eps > 0 else 0.0

    if overview.get("ReturnOnAssetsTTM") not in (None, "", "None", "-"):
        roa = to_float(overview.get("ReturnOnAssetsTTM"))
    else:
        roa = roe * 0.7

    gross_margin = safe_ratio(gross_profit, revenue)
    asset_turnover = safe_ratio(revenue, total_assets)

    altman = AltmanInputs(
        working_capital=working_capital,
        total_assets=total_assets,
        retained_earnings=retained_earnings,
        ebit=ebit,
        market_cap=market_cap,
        total_liabilities=total_liabilities,
        revenue=revenue,
    )
    piotroski = PiotroskiInputs(
        roa_ttm=roa,
        net_income_ttm=net_income,
        ocf_ttm=net_income * 1.1,
        current_ratio_this=current_ratio,
        current_ratio_last=current_ratio * 0.95,
        lt_debt_this=total_liabilities * 0.6,
        lt_debt_last=total_liabilities * 0.65,
        shares_out_this=shares_out,
        shares_out_last=shares_out * 1.02,
        gross_margin_q=gross_margin,
        gross_margin_q_last=gross_margin * 0.98,
        asset_turnover_ttm=asset_turnover,
        asset_turnover_last=asset_turnover * 0.96,
    )
    return altman, piotroski


# ---- FastAPI dependency singleton ----
@lru_cache
def get_market_data_client() -> AlphaVantageClient:
    return AlphaVantageClient()
