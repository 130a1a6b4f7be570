"""Library configuration using pydantic-settings.

Everything here is optional: a Wallet built with explicit arguments never
needs the environment, but defaults for the key template, RPC fallback and
metadata services are read from it.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PRIVATE_KEY_TEMPLATE = (
    "0x2050939757b6d498bb0407e001f0cb6db05c991b3c6f7d8e362f9d27c70128b9"
)


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")

    # ======================
    # Key derivation
    # ======================
    private_key_template: str = Field(
        default=DEFAULT_PRIVATE_KEY_TEMPLATE,
        description="Constant prefixed to passwords before hashing them into entropy",
    )

    # ======================
    # XRP Ledger
    # ======================
    xrpl_rpc_url: str = Field(
        default="", description="Fallback websocket URL when no RPC is given to a wallet"
    )

    # ======================
    # Token metadata services
    # ======================
    bithomp_api_url: str = Field(
        default="https://bithomp.com", description="Bithomp API base URL"
    )
    bithomp_api_key: Optional[str] = Field(
        default=None, description="Bithomp API token (lookup skipped when unset)"
    )
    xrpscan_api_url: str = Field(
        default="https://api.xrpscan.com", description="XRPScan API base URL"
    )
    metadata_timeout: float = Field(
        default=30.0, description="Timeout in seconds for metadata HTTP calls"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug else "INFO"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "xrpl_rpc_url": self.xrpl_rpc_url or "(not set)",
            "private_key_template": (
                "(default)"
                if self.private_key_template == DEFAULT_PRIVATE_KEY_TEMPLATE
                else "***"
            ),
            "metadata": {
                "bithomp": {
                    "url": self.bithomp_api_url,
                    "api_key": "***" if self.bithomp_api_key else "(not set)",
                },
                "xrpscan": {"url": self.xrpscan_api_url},
                "timeout": self.metadata_timeout,
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
