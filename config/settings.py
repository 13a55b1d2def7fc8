from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Sub-settings read flat env vars (and .env) by their validation_alias
ENV_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = ENV_CONFIG

    name: str = Field("Rocket Pool Smart Node CLI", validation_alias="APP_NAME")
    log_level: str = Field("WARNING", validation_alias="LOG_LEVEL")
    log_file: Optional[str] = Field(None, validation_alias="LOG_FILE")


class EthereumSettings(BaseSettings):
    """Settings related to the Ethereum client connection."""

    model_config = ENV_CONFIG

    provider_uri: str = Field(
        default="http://localhost:8545",
        validation_alias="PROVIDER_URI",
        description="Ethereum Node JSON-RPC URL",
    )
    # Deadline for a single JSON-RPC round trip (seconds)
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")
    # Interval between eth_syncing polls while waiting for the client to sync
    sync_poll_seconds: float = Field(default=5.0, gt=0, validation_alias="SYNC_POLL_SECONDS")


class RocketPoolSettings(BaseSettings):
    """Rocket Pool network deployment settings."""

    model_config = ENV_CONFIG

    storage_address: Optional[str] = Field(
        default=None,
        validation_alias="ROCKET_STORAGE_ADDRESS",
        description="Address of the RocketStorage contract",
    )


class NodeSettings(BaseSettings):
    """Node account keystore locations."""

    model_config = ENV_CONFIG

    keystore_path: str = Field(default="~/.rocketpool/accounts/node.json", validation_alias="NODE_KEYSTORE_PATH")
    password_path: str = Field(default="~/.rocketpool/password", validation_alias="NODE_PASSWORD_PATH")


class TransactionSettings(BaseSettings):
    """Settings for submitting and confirming node transactions."""

    model_config = ENV_CONFIG

    receipt_timeout: int = Field(default=300, gt=0, validation_alias="TX_RECEIPT_TIMEOUT")
    poll_latency: float = Field(default=1.0, gt=0, validation_alias="TX_POLL_LATENCY")


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Uses validation_alias in sub-models to map flat env vars to nested structure.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    ethereum: EthereumSettings = Field(default_factory=EthereumSettings)
    rocketpool: RocketPoolSettings = Field(default_factory=RocketPoolSettings)
    node: NodeSettings = Field(default_factory=NodeSettings)
    transaction: TransactionSettings = Field(default_factory=TransactionSettings)

    model_config = ENV_CONFIG


# Singleton instance
settings = Settings()
