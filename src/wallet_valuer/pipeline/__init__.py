from __future__ import annotations

from .run import run_valuation

__all__ = ["run_valuation"]
