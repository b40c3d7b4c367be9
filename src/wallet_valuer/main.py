"""CLI entrypoint for wallet-valuer."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError

from .abi import validate_call_shapes
from .errors import ConfigurationError, SetupError
from .logger import get_logger, setup_logging
from .rpc import ChainClient
from .settings import CONFIG_ENV_VAR, ValuerSettings, checksum_address
from .state import AppState

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    help="Report the USD value of a wallet's native and token balances.",
)


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return get_logger("wallet_valuer")


def _fail(message: str) -> NoReturn:
    """Print a single diagnostic line to stderr and exit non-zero."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _describe_validation_error(error: ValidationError) -> str:
    """Collapse pydantic's multi-line report into one line."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
        for err in error.errors()
    )


def _parse_wallet(value: str) -> str:
    try:
        return checksum_address(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


@app.command()
def report(
    wallet_address: Annotated[
        str,
        typer.Argument(
            help="Wallet address to value (checksummed or not, 0x optional).",
            callback=_parse_wallet,
        ),
    ],
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [wallet_valuer] table).",
        ),
    ] = None,
    block_number: Annotated[
        int | None,
        typer.Option(
            "--block-number",
            help="Block number to read balances and prices at. Defaults to latest.",
        ),
    ] = None,
    max_concurrency: Annotated[
        int | None,
        typer.Option(
            "--max-concurrency",
            help="Number of assets resolved in parallel (1 = sequential).",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config (RPC URL redacted) and exit.",
        ),
    ] = False,
):
    """Print one line per held asset and the portfolio total in USD.

    The RPC endpoint comes from the ETH_RPC_URL environment variable (or .env,
    or the config file).
    """
    if config_path:
        os.environ[CONFIG_ENV_VAR] = str(config_path)

    init_kwargs: dict[str, int | str] = {}
    if block_number is not None:
        init_kwargs["block_number"] = block_number
    if max_concurrency is not None:
        init_kwargs["max_concurrency"] = max_concurrency
    if log_level is not None:
        init_kwargs["log_level"] = log_level

    try:
        settings = ValuerSettings(**init_kwargs)
    except ConfigurationError as e:
        _fail(str(e))
    except ValidationError as e:
        _fail(f"invalid configuration: {_describe_validation_error(e)}")
    except tomllib.TOMLDecodeError as e:
        _fail(f"invalid configuration: {e}")

    setup_logging(settings.log_level)
    logger = _build_logger()

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    try:
        validate_call_shapes()
        client = ChainClient.from_settings(settings)
        client.ensure_connected()
    except SetupError as e:
        _fail(str(e))

    state = AppState(settings=settings, logger=logger, client=client)

    from .pipeline.run import run_valuation

    asyncio.run(run_valuation(state, wallet_address))


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
