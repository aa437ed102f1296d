"""Application configuration — loaded from environment variables."""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import BaseModel, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from azure_repo_reader.domain.entities import AzureIntegrationConfig
from azure_repo_reader.domain.exceptions import InvalidConfigurationError
from azure_repo_reader.domain.value_objects import AZURE_HOST

# host name with optional port, no scheme or path
_HOST_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9\-.]*[A-Za-z0-9])?(?::\d{1,5})?$")


class AzureIntegrationSettings(BaseModel):
    """One raw ``integrations_azure`` entry."""

    host: str | None = None
    token: SecretStr | None = None


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # JSON list in INTEGRATIONS_AZURE, e.g. [{"host": "dev.azure.com", "token": "..."}]
    integrations_azure: list[AzureIntegrationSettings] = []
    http_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


def read_azure_integration_config(entry: AzureIntegrationSettings) -> AzureIntegrationConfig:
    """Validate a single entry, defaulting the host to ``dev.azure.com``."""
    host = entry.host if entry.host is not None else AZURE_HOST
    if not _HOST_RE.match(host):
        raise InvalidConfigurationError(
            f"Invalid Azure integration config, '{host}' is not a valid host"
        )
    token = entry.token.get_secret_value() if entry.token else None
    return AzureIntegrationConfig(host=host, token=token or None)


def read_azure_integration_configs(
    entries: list[AzureIntegrationSettings],
) -> list[AzureIntegrationConfig]:
    """Validate all entries and add an anonymous ``dev.azure.com`` one if missing."""
    configs = [read_azure_integration_config(e) for e in entries]
    if not any(c.host == AZURE_HOST for c in configs):
        configs.append(AzureIntegrationConfig(host=AZURE_HOST))
    return configs


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
