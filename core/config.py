"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for SubnetAuthN happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call. This is
      the official FastAPI dependency injection pattern for config.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. subnet_mask -> SUBNET_MASK). Type coercion and validation are built in.

  @field_validator: Both subnet fields go through core.address.parse_ipv4, the
      same rule the adapter applies at configure time. A malformed value fails
      startup instead of producing a half-configured adapter.

Layer rule: core/ is the kernel. This module may not import from api/ or auth/.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.address import InvalidAddressFormat, parse_ipv4

logger = logging.getLogger("subnetauthn.config")

INVALID_ADDRESS_MESSAGE = "Not a valid IP address"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file.

    Environment variable name mapping: field names are uppercased automatically.
    E.g. `network_base_address` reads from NETWORK_BASE_ADDRESS.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False

    # ------------------------------------------------------------------
    # Subnet (the two adapter configuration fields)
    # ------------------------------------------------------------------

    network_base_address: str = "0.0.0.0"
    subnet_mask: str = "255.255.255.0"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("network_base_address", "subnet_mask")
    @classmethod
    def validate_ipv4(cls, value: str) -> str:
        """Reject anything parse_ipv4() rejects, with the admin-facing message."""
        try:
            parse_ipv4(value)
        except InvalidAddressFormat as exc:
            raise ValueError(INVALID_ADDRESS_MESSAGE) from exc
        return value

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.debug else logging.INFO


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    Uses lru_cache so Settings() is instantiated exactly once -- at first call.
    All modules should call get_settings() rather than constructing Settings() directly.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    settings = Settings()
    logger.debug(
        "Settings loaded (base=%s, mask=%s, debug=%s)",
        settings.network_base_address,
        settings.subnet_mask,
        settings.debug,
    )
    return settings
