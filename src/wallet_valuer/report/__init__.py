from __future__ import annotations

from .formatter import format_holding_line, format_total_line

__all__ = ["format_holding_line", "format_total_line"]
