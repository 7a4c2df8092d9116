"""
HCP Frontend Configuration
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "aro-hcp-frontend"
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    region: str = Field(default="", validation_alias="REGION")

    # Server settings
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8443, validation_alias="PORT")
    # How often the serving loop checks for the stop signal
    stop_poll_interval_seconds: float = Field(
        default=0.1, validation_alias="STOP_POLL_INTERVAL_SECONDS"
    )

    # Database
    database_name: str = Field(default="", validation_alias="DB_NAME")
    database_url: str = Field(default="", validation_alias="DB_URL")

    # Clusters Service
    clusters_service_url: str = Field(
        default="https://api.openshift.com", validation_alias="CLUSTERS_SERVICE_URL"
    )
    # Skip validating TLS for the Clusters Service. Never set in production.
    clusters_service_insecure: bool = Field(
        default=False, validation_alias="CLUSTERS_SERVICE_INSECURE"
    )
    clusters_service_timeout_seconds: float = Field(
        default=30.0, validation_alias="CLUSTERS_SERVICE_TIMEOUT_SECONDS"
    )
    use_mock_clusters_service: bool = Field(
        default=False, validation_alias="USE_MOCK_CLUSTERS_SERVICE"
    )

    # Development-only Cluster Service properties
    provision_shard_id: Optional[str] = Field(
        default=None, validation_alias="PROVISION_SHARD_ID"
    )
    provisioner_noop_provision: bool = Field(
        default=False, validation_alias="PROVISIONER_NOOP_PROVISION"
    )
    provisioner_noop_deprovision: bool = Field(
        default=False, validation_alias="PROVISIONER_NOOP_DEPROVISION"
    )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )
