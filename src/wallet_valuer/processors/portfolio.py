from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ..settings import AssetConfig
from ..units import add, multiply, to_decimal


@dataclass(frozen=True)
class Holding:
    """A resolved asset position valued in USD."""

    symbol: str
    raw_balance: int
    amount: Decimal
    price: Decimal
    usd: Decimal


@dataclass
class PortfolioTotal:
    """Running USD total for one run; values are summed unrounded."""

    usd: Decimal = field(default_factory=Decimal)
    holdings: list[Holding] = field(default_factory=list)

    def add(self, holding: Holding) -> None:
        self.usd = add(self.usd, holding.usd)
        self.holdings.append(holding)


def value_holding(asset: AssetConfig, raw_balance: int, price: Decimal) -> Holding:
    """Convert a raw balance to a decimal amount and price it in USD."""
    amount = to_decimal(raw_balance, asset.decimals)
    return Holding(
        symbol=asset.symbol,
        raw_balance=raw_balance,
        amount=amount,
        price=price,
        usd=multiply(amount, price),
    )
