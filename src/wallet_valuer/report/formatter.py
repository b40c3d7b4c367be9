"""Plain-text formatter for portfolio reports."""

from __future__ import annotations

from decimal import Decimal

from ..constants import AMOUNT_DISPLAY_PLACES, USD_DISPLAY_PLACES
from ..processors import Holding
from ..units import format_fixed

SYMBOL_WIDTH = 6
AMOUNT_WIDTH = 12
TOTAL_LABEL = "TOTAL"


def format_holding_line(holding: Holding) -> str:
    """Render one asset row, e.g. ``ETH        2.500000 => $7500.00``."""
    amount = format_fixed(holding.amount, AMOUNT_DISPLAY_PLACES)
    usd = format_fixed(holding.usd, USD_DISPLAY_PLACES)
    return f"{holding.symbol:<{SYMBOL_WIDTH}} {amount:>{AMOUNT_WIDTH}} => ${usd}"


def format_total_line(total_usd: Decimal) -> str:
    """Render the closing total row with a blank amount column."""
    usd = format_fixed(total_usd, USD_DISPLAY_PLACES)
    return f"{TOTAL_LABEL:<{SYMBOL_WIDTH}} {'':>{AMOUNT_WIDTH}} => ${usd}"
