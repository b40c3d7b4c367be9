"""Thin async wrapper around a single web3 HTTP client."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import backoff
from eth_typing import URI
from web3 import Web3
from web3.exceptions import ProviderConnectionError

from .errors import RpcConnectionError
from .logger import get_logger
from .settings import ValuerSettings

logger = get_logger(__name__)


class ChainClient:
    """Read-only access to one node, shared by every resolver for a run."""

    def __init__(
        self,
        w3: Web3,
        block_identifier: int | str = "latest",
        rpc_retries: int = 0,
    ):
        self.w3 = w3
        self.block_identifier = block_identifier
        self.rpc_retries = rpc_retries

    @classmethod
    def from_settings(cls, settings: ValuerSettings) -> ChainClient:
        rpc_url = settings.rpc_url_required
        w3 = Web3(
            Web3.HTTPProvider(
                URI(rpc_url), request_kwargs={"timeout": settings.request_timeout}
            )
        )
        return cls(
            w3,
            block_identifier=settings.block_identifier,
            rpc_retries=settings.rpc_retries,
        )

    def ensure_connected(self) -> None:
        """Raise RpcConnectionError unless the node answers."""
        if not self.w3.is_connected():
            raise RpcConnectionError("Failed to connect to RPC endpoint")
        logger.debug("Connected to RPC, reading at block %s", self.block_identifier)

    async def _rpc(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run one blocking web3 call in a worker thread, retrying if configured."""

        def _on_backoff(details: Any) -> None:
            logger.warning(
                "RPC connection error (attempt %d of %d): %s",
                details["tries"],
                self.rpc_retries + 1,
                details.get("exception"),
            )

        @backoff.on_exception(
            backoff.expo,
            ProviderConnectionError,
            max_tries=self.rpc_retries + 1,
            jitter=backoff.full_jitter,
            on_backoff=_on_backoff,
        )
        async def _call() -> Any:
            return await asyncio.to_thread(fn, *args, **kwargs)

        return await _call()

    async def get_balance(self, address: str) -> int:
        """Native-currency balance of ``address`` in wei."""
        balance = await self._rpc(
            self.w3.eth.get_balance,
            Web3.to_checksum_address(address),
            block_identifier=self.block_identifier,
        )
        return int(balance)

    async def call(self, to: str, data: bytes) -> bytes:
        """Execute a read-only contract call and return the raw result bytes."""
        result = await self._rpc(
            self.w3.eth.call,
            {"to": Web3.to_checksum_address(to), "data": data},
            block_identifier=self.block_identifier,
        )
        return bytes(result)
