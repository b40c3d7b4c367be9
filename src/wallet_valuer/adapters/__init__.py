from __future__ import annotations

from .balances import BalanceAdapter
from .chainlink import ChainlinkPriceAdapter

__all__ = ["BalanceAdapter", "ChainlinkPriceAdapter"]
