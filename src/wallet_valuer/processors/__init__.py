from __future__ import annotations

from .portfolio import Holding, PortfolioTotal, value_holding

__all__ = [
    "Holding",
    "PortfolioTotal",
    "value_holding",
]
