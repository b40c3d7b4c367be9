"""USD valuation of an EVM wallet via Chainlink price feeds."""
