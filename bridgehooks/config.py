"""
Centralized Configuration for Bridge Hooks
Uses Pydantic Settings with .env loading.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bridgehooks.core.types import ZERO_ADDRESS, HookConfig, normalize_address


class ChainSettings(BaseSettings):
    """Target chain settings."""
    model_config = SettingsConfigDict(env_prefix="CHAIN_", extra="ignore")

    chain_id: int = 31337


class _AddressSettings(BaseSettings):
    """Checksums every `str` field; unset addresses stay zero."""

    @field_validator("*", mode="after")
    @classmethod
    def checksum_address(cls, v):
        if isinstance(v, str):
            return normalize_address(v)
        return v


class PoolDepositHookSettings(_AddressSettings):
    """Pool-deposit hook deployment settings."""
    model_config = SettingsConfigDict(env_prefix="POOL_HOOK_", extra="ignore")

    base_asset: str = ZERO_ADDRESS
    orchestrator: str = ZERO_ADDRESS
    spoke_pool: str = ZERO_ADDRESS
    owner: str = ZERO_ADDRESS  # multisig receiving ownership after deploy

    def hook_config(self, deployer: str) -> HookConfig:
        """Construction record; the deployer owns the hook until hand-over."""
        return HookConfig(
            base_asset=self.base_asset,
            orchestrator=self.orchestrator,
            downstream=self.spoke_pool,
            owner=deployer,
        )


class SignedQuoteHookSettings(_AddressSettings):
    """Signed-quote hook deployment settings."""
    model_config = SettingsConfigDict(env_prefix="QUOTE_HOOK_", extra="ignore")

    base_asset: str = ZERO_ADDRESS
    orchestrator: str = ZERO_ADDRESS
    depository: str = ZERO_ADDRESS
    trusted_signer: str = ZERO_ADDRESS
    owner: str = ZERO_ADDRESS

    def hook_config(self, deployer: str) -> HookConfig:
        return HookConfig(
            base_asset=self.base_asset,
            orchestrator=self.orchestrator,
            downstream=self.depository,
            owner=deployer,
            trusted_signer=self.trusted_signer,
        )


class LoggingSettings(BaseSettings):
    """Logging settings."""
    model_config = SettingsConfigDict(extra="ignore")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")

    @field_validator("log_format", mode="before")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            raise ValueError(f"LOG_FORMAT must be 'text' or 'json', got {v!r}")
        return v


class BridgeHookSettings(BaseSettings):
    """Main bridge hook settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings (loaded from same .env)
    chain: ChainSettings = Field(default_factory=ChainSettings)
    pool_hook: PoolDepositHookSettings = Field(default_factory=PoolDepositHookSettings)
    quote_hook: SignedQuoteHookSettings = Field(default_factory=SignedQuoteHookSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache()
def get_settings() -> BridgeHookSettings:
    """Get cached settings instance."""
    return BridgeHookSettings()


def reload_settings() -> BridgeHookSettings:
    """Force reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
