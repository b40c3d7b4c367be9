"""Exception hierarchy for wallet-valuer."""

from __future__ import annotations


class SetupError(Exception):
    """Raised for fatal problems detected before any report output."""


class ConfigurationError(SetupError):
    """Required configuration is missing or invalid."""


class RpcConnectionError(SetupError):
    """The RPC endpoint could not be reached."""


class CallShapeError(SetupError):
    """An embedded contract call definition is malformed."""


class AssetResolutionError(Exception):
    """Balance or price lookup for one asset failed; the asset is skipped."""

    def __init__(self, symbol: str, stage: str, cause: Exception):
        super().__init__(f"{symbol} {stage} lookup failed: {cause}")
        self.symbol = symbol
        self.stage = stage
        self.cause = cause


class CallDecodeError(ValueError):
    """A contract call response does not match its declared output types."""

    def __init__(self, call_name: str, reason: str):
        super().__init__(f"Failed to decode {call_name} response: {reason}")
        self.call_name = call_name
        self.reason = reason
