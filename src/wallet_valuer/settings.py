"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from eth_typing import ChecksumAddress
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from web3 import Web3

from .constants import DEFAULT_ASSETS, DEFAULT_BLOCK_IDENTIFIER, DEFAULT_REQUEST_TIMEOUT
from .errors import ConfigurationError

load_dotenv()

CONFIG_ENV_VAR = "WALLET_VALUER_CONFIG"
RPC_URL_ENV_VAR = "ETH_RPC_URL"


def checksum_address(value: str) -> ChecksumAddress:
    """Normalize a 20-byte hex address, with or without ``0x``, to checksum form.

    Mixed-case input is accepted even when its checksum is wrong.

    Raises:
        ValueError: If ``value`` is not a 20-byte hex address.
    """
    candidate = value.strip().lower()
    if not candidate.startswith("0x"):
        candidate = f"0x{candidate}"
    if not Web3.is_address(candidate):
        raise ValueError(f"Not a valid 20-byte hex address: {value!r}")
    return Web3.to_checksum_address(candidate)


class AssetConfig(BaseModel):
    """One tracked asset: a balance source plus the USD feed that prices it."""

    symbol: str
    token_address: str | None = None  # None means the chain's native currency
    feed_address: str
    decimals: int = Field(ge=0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("token_address", "feed_address")
    @classmethod
    def normalize_address(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return checksum_address(v)

    @property
    def is_native(self) -> bool:
        return self.token_address is None


def _default_assets() -> list[AssetConfig]:
    return [AssetConfig(**entry) for entry in DEFAULT_ASSETS]


class ValuerSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with WALLET_VALUER_, plus ETH_RPC_URL)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- endpoint ---
    rpc_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices(RPC_URL_ENV_VAR, "WALLET_VALUER_RPC_URL"),
    )
    block_number: int | None = Field(default=None, ge=0)
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)

    # --- RPC settings ---
    max_concurrency: int = Field(default=1, ge=1)
    rpc_retries: int = Field(default=0, ge=0)

    # --- logging ---
    log_level: str = "WARNING"

    # --- tracked assets, in report order ---
    assets: list[AssetConfig] = Field(default_factory=_default_assets)

    model_config = SettingsConfigDict(
        env_prefix="WALLET_VALUER_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get(CONFIG_ENV_VAR)
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    # Try default locations
                    local_config = Path("wallet-valuer.toml")
                    user_config = (
                        Path.home() / ".config" / "wallet-valuer" / "config.toml"
                    )
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}
                elif not self._path.exists():
                    # An explicitly named file must exist
                    raise ConfigurationError(f"Config file not found: {self._path}")

                try:
                    with self._path.open("rb") as f:
                        data = tomllib.load(f)  # supports top-level or [wallet_valuer]
                except OSError as e:
                    raise ConfigurationError(
                        f"Cannot read config file {self._path}: {e.strerror or e}"
                    ) from e
                body = data.get("wallet_valuer", data)
                if not isinstance(body, dict):
                    return {}
                return body

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a dict with the RPC URL redacted.

        Hosted endpoints usually embed an API key in the URL path.
        """
        data = self.model_dump(mode="json")
        if self.rpc_url:
            data["rpc_url"] = "***redacted***"
        return data

    @property
    def rpc_url_required(self) -> str:
        """Get rpc_url, raising ConfigurationError if not set."""
        if not self.rpc_url:
            raise ConfigurationError(
                f"RPC endpoint is not configured; set {RPC_URL_ENV_VAR}"
            )
        return self.rpc_url

    @property
    def block_identifier(self) -> int | str:
        """Block to read state at: the pinned number, else the latest block."""
        if self.block_number is None:
            return DEFAULT_BLOCK_IDENTIFIER
        return self.block_number
