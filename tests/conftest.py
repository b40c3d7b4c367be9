from __future__ import annotations

import asyncio

import pytest
from eth_abi import encode

from wallet_valuer.abi import BALANCE_OF, CALL_SHAPES, DECIMALS, LATEST_ROUND_DATA

WALLET = "0x277C6A642564A91ff78b008022D65683cEE5CCC5"
ETH_USD_FEED = "0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419"
USDC_USD_FEED = "0x8fFfFfd4AfB6115b954Bd326cbe7B4BA576818f6"
USDC_TOKEN = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


def encode_round(answer: int, round_id: int = 1, updated_at: int = 1_700_000_000):
    return encode(
        list(CALL_SHAPES[LATEST_ROUND_DATA].outputs),
        [round_id, answer, updated_at, updated_at, round_id],
    )


class FakeChainClient:
    """In-memory stand-in for ChainClient keyed by (address, selector)."""

    def __init__(self):
        self.native_balances: dict[str, int | Exception] = {}
        self.responses: dict[tuple[str, bytes], bytes | Exception] = {}
        self.delays: dict[str, float] = {}
        self.calls: list[tuple[str, bytes]] = []
        self.balance_requests: list[str] = []
        self.connected = True

    def ensure_connected(self) -> None:
        from wallet_valuer.errors import RpcConnectionError

        if not self.connected:
            raise RpcConnectionError("Failed to connect to RPC endpoint")

    def set_native_balance(self, wallet: str, value: int | Exception) -> None:
        self.native_balances[wallet.lower()] = value

    def set_response(self, address: str, call: str, value: bytes | Exception) -> None:
        self.responses[(address.lower(), CALL_SHAPES[call].selector)] = value

    def set_token_balance(self, token: str, value: int | Exception) -> None:
        if isinstance(value, Exception):
            self.set_response(token, BALANCE_OF, value)
        else:
            self.set_response(token, BALANCE_OF, encode(["uint256"], [value]))

    def set_feed(self, feed: str, answer: int, decimals: int) -> None:
        self.set_response(feed, DECIMALS, encode(["uint8"], [decimals]))
        self.set_response(feed, LATEST_ROUND_DATA, encode_round(answer))

    def calls_to(self, address: str) -> list[bytes]:
        return [data for to, data in self.calls if to == address.lower()]

    async def get_balance(self, address: str) -> int:
        self.balance_requests.append(address.lower())
        await asyncio.sleep(self.delays.get(address.lower(), 0))
        value = self.native_balances.get(address.lower(), 0)
        if isinstance(value, Exception):
            raise value
        return value

    async def call(self, to: str, data: bytes) -> bytes:
        self.calls.append((to.lower(), bytes(data)))
        await asyncio.sleep(self.delays.get(to.lower(), 0))
        value = self.responses[(to.lower(), bytes(data[:4]))]
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def fake_chain() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep host .env files, config files and RPC variables out of tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for var in (
        "ETH_RPC_URL",
        "WALLET_VALUER_RPC_URL",
        "WALLET_VALUER_CONFIG",
        "WALLET_VALUER_BLOCK_NUMBER",
        "WALLET_VALUER_MAX_CONCURRENCY",
        "WALLET_VALUER_RPC_RETRIES",
        "WALLET_VALUER_REQUEST_TIMEOUT",
        "WALLET_VALUER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
