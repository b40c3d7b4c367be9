from __future__ import annotations

from ..abi import build_balance_call, decode_balance_response
from ..logger import get_logger
from ..rpc import ChainClient
from ..settings import AssetConfig

logger = get_logger(__name__)


class BalanceAdapter:
    """Adapter for reading native and ERC-20 balances of a wallet."""

    def __init__(self, client: ChainClient):
        self.client = client

    @property
    def adapter_name(self) -> str:
        return "balances"

    async def resolve_balance(self, asset: AssetConfig, wallet: str) -> int:
        """Fetch the raw smallest-unit balance of ``asset`` held by ``wallet``.

        Native assets use ``eth_getBalance``; tokens use ``balanceOf(wallet)``
        on the token contract. Errors propagate, a failure is never reported
        as a zero balance.
        """
        if asset.token_address is None:
            balance = await self.client.get_balance(wallet)
        else:
            data = await self.client.call(
                asset.token_address, build_balance_call(wallet)
            )
            balance = decode_balance_response(data)

        logger.debug("%s balance of %s: %d", asset.symbol, wallet, balance)
        return balance
