"""Blockchain contract address constants."""

from typing import Optional, TypedDict


class AssetEntry(TypedDict):
    symbol: str
    token_address: Optional[str]
    feed_address: str
    decimals: int


# Chainlink USD feeds on Ethereum mainnet
PRICE_FEED_ETH_USD = "0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419"
PRICE_FEED_USDC_USD = "0x8fFfFfd4AfB6115b954Bd326cbe7B4BA576818f6"
PRICE_FEED_DAI_USD = "0xAed0c38402a5d19df6E4c03F4E2DceD6e29c1ee9"
PRICE_FEED_LINK_USD = "0x2c1d072e956AFFC0D435Cb7AC38EF18d24d9127c"

WETH_ADDRESS = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
USDC_ADDRESS = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
DAI_ADDRESS = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
LINK_ADDRESS = "0x514910771AF9Ca656af840dff83E8264EcF986CA"

# Report order follows this list
DEFAULT_ASSETS: list[AssetEntry] = [
    {
        "symbol": "ETH",
        "token_address": None,
        "feed_address": PRICE_FEED_ETH_USD,
        "decimals": 18,
    },
    {
        "symbol": "WETH",
        "token_address": WETH_ADDRESS,
        "feed_address": PRICE_FEED_ETH_USD,
        "decimals": 18,
    },
    {
        "symbol": "USDC",
        "token_address": USDC_ADDRESS,
        "feed_address": PRICE_FEED_USDC_USD,
        "decimals": 6,
    },
    {
        "symbol": "DAI",
        "token_address": DAI_ADDRESS,
        "feed_address": PRICE_FEED_DAI_USD,
        "decimals": 18,
    },
    {
        "symbol": "LINK",
        "token_address": LINK_ADDRESS,
        "feed_address": PRICE_FEED_LINK_USD,
        "decimals": 18,
    },
]

DEFAULT_BLOCK_IDENTIFIER = "latest"
DEFAULT_REQUEST_TIMEOUT = 30.0

AMOUNT_DISPLAY_PLACES = 6
USD_DISPLAY_PLACES = 2
