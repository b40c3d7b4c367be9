from __future__ import annotations

from decimal import Decimal

from ..abi import (
    RoundData,
    build_decimals_call,
    build_latest_round_call,
    decode_decimals_response,
    decode_latest_round_response,
)
from ..logger import get_logger
from ..rpc import ChainClient
from ..units import to_decimal

logger = get_logger(__name__)


class ChainlinkPriceAdapter:
    """Adapter for querying Chainlink aggregator price feeds."""

    def __init__(self, client: ChainClient):
        self.client = client

    @property
    def adapter_name(self) -> str:
        return "chainlink"

    async def fetch_decimals(self, feed_address: str) -> int:
        data = await self.client.call(feed_address, build_decimals_call())
        return decode_decimals_response(data)

    async def fetch_round_data(self, feed_address: str) -> RoundData:
        data = await self.client.call(feed_address, build_latest_round_call())
        return decode_latest_round_response(data)

    async def resolve_price(self, feed_address: str) -> Decimal:
        """Fetch the latest feed answer as a precision-normalized decimal.

        Args:
            feed_address: Aggregator contract address.

        Returns:
            ``answer / 10**decimals`` for the feed's latest round.

        Notes:
            - Exactly two remote calls per invocation, nothing cached.
            - A negative answer is returned as a negative price, unchecked.
            - Transport and decode errors propagate to the caller.
        """
        decimals = await self.fetch_decimals(feed_address)
        round_data = await self.fetch_round_data(feed_address)
        price = to_decimal(round_data.answer, decimals)
        logger.debug(
            "Feed %s round %d answer=%d decimals=%d price=%s",
            feed_address,
            round_data.round_id,
            round_data.answer,
            decimals,
            price,
        )
        return price
