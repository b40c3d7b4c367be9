"""High-level valuation pipeline."""

from __future__ import annotations

import asyncio
from typing import Callable

import typer

from ..adapters import BalanceAdapter, ChainlinkPriceAdapter
from ..errors import AssetResolutionError
from ..processors import Holding, PortfolioTotal, value_holding
from ..report import format_holding_line, format_total_line
from ..settings import AssetConfig
from ..state import AppState


async def _resolve_holding(
    asset: AssetConfig,
    wallet: str,
    balances: BalanceAdapter,
    prices: ChainlinkPriceAdapter,
    semaphore: asyncio.Semaphore,
) -> Holding | None:
    """Resolve and value one asset; ``None`` means a zero balance.

    Raises:
        AssetResolutionError: If the balance or the price lookup fails.
    """
    async with semaphore:
        try:
            raw_balance = await balances.resolve_balance(asset, wallet)
        except Exception as e:
            raise AssetResolutionError(asset.symbol, "balance", e) from e

        if raw_balance == 0:
            return None

        try:
            price = await prices.resolve_price(asset.feed_address)
        except Exception as e:
            raise AssetResolutionError(asset.symbol, "price", e) from e

    return value_holding(asset, raw_balance, price)


async def run_valuation(
    state: AppState,
    wallet: str,
    emit: Callable[[str], None] = typer.echo,
) -> PortfolioTotal:
    """Value every configured asset held by ``wallet`` and emit the report.

    Assets are resolved as tasks bounded by ``max_concurrency`` (1 keeps the
    run strictly sequential). Tasks are awaited in configuration order, so
    each line is emitted as soon as it and every line before it is ready,
    and only this coroutine touches the running total.

    Assets with a zero balance, or whose balance or price lookup fails, get
    no line and add nothing to the total. Failures are logged as warnings.

    Args:
        state: Application state containing settings, logger and RPC client
        wallet: Checksummed wallet address
        emit: Sink for report lines

    Returns:
        The run's total, including the valued holdings in report order.
    """
    s = state.settings
    log = state.logger

    balances = BalanceAdapter(state.client)
    prices = ChainlinkPriceAdapter(state.client)
    semaphore = asyncio.Semaphore(s.max_concurrency)

    log.info(
        "Valuing %d assets for %s (block=%s, concurrency=%d)",
        len(s.assets),
        wallet,
        s.block_identifier,
        s.max_concurrency,
    )

    tasks = [
        asyncio.create_task(
            _resolve_holding(asset, wallet, balances, prices, semaphore)
        )
        for asset in s.assets
    ]

    total = PortfolioTotal()
    try:
        for asset, task in zip(s.assets, tasks):
            try:
                holding = await task
            except AssetResolutionError as e:
                log.warning("Skipping %s: %s", asset.symbol, e)
                continue

            if holding is None:
                log.debug(
                    "Skipping %s: zero %s balance",
                    asset.symbol,
                    "native" if asset.is_native else "token",
                )
                continue

            emit(format_holding_line(holding))
            total.add(holding)
    finally:
        for task in tasks:
            task.cancel()

    emit(format_total_line(total.usd))
    log.info(
        "Valued %d of %d assets, total $%s",
        len(total.holdings),
        len(s.assets),
        total.usd,
    )
    return total
