# app/core/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent

MIB = 1024 * 1024


class Settings(BaseSettings):
    app_name: str = "WitnessChain API"
    version: str = "0.1.0"
    env: str = "local"  # local | development | production
    DATABASE_URL: str = "sqlite:///./witnesschain.db"

    # =========================
    # Filecoin / Synapse
    # =========================
    FILECOIN_NETWORK: str = "calibration"
    FILECOIN_RPC_URL: str = "https://api.calibration.node.glif.io/rpc/v1"

    # Signs storage deals and pays for storage. Without it every upload fails
    # with STORAGE_CLIENT_NOT_CONFIGURED.
    BACKEND_PRIVATE_KEY: str | None = None

    # "package.module:callable" returning a Synapse client, called with
    # private_key= and rpc_url= keyword arguments.
    SYNAPSE_CLIENT_FACTORY: str | None = None

    # Limits / runtime controls
    STORAGE_MAX_FILE_BYTES: int = 200 * MIB
    STORAGE_MIN_FILE_BYTES: int = 127
    STORAGE_UPLOAD_TIMEOUT_SECONDS: int = 300
    STORAGE_RETRIEVE_TIMEOUT_SECONDS: int = 120

    # =========================
    # Auth (tokens are issued by the wallet sign-in flow)
    # =========================
    JWT_SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRES_MINUTES: int = 60

    # HTTP
    CORS_ALLOW_ORIGINS: str | None = None
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=os.path.join(PROJECT_ROOT, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        return self.env.lower() in ("local", "development")

    @property
    def storage_configured(self) -> bool:
        return bool(self.BACKEND_PRIVATE_KEY)


settings = Settings()
