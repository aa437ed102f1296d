import json

import pytest

from azure_repo_reader.domain.entities import AzureIntegrationConfig
from azure_repo_reader.domain.exceptions import InvalidConfigurationError
from azure_repo_reader.infrastructure.config import (
    AzureIntegrationSettings,
    Settings,
    read_azure_integration_config,
    read_azure_integration_configs,
)


def test_settings_parse_integrations_from_env(monkeypatch):
    monkeypatch.setenv(
        "INTEGRATIONS_AZURE",
        json.dumps([{"host": "dev.azure.com", "token": "secret-pat"}]),
    )
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.log_level == "debug"
    assert settings.http_timeout_seconds == 30.0
    [entry] = settings.integrations_azure
    assert entry.host == "dev.azure.com"
    assert entry.token.get_secret_value() == "secret-pat"
    assert "secret-pat" not in repr(settings)


def test_settings_default_to_no_integrations(monkeypatch):
    monkeypatch.delenv("INTEGRATIONS_AZURE", raising=False)

    assert Settings(_env_file=None).integrations_azure == []


def test_entry_defaults_host():
    config = read_azure_integration_config(AzureIntegrationSettings())

    assert config == AzureIntegrationConfig(host="dev.azure.com", token=None)


def test_entry_unwraps_token():
    config = read_azure_integration_config(
        AzureIntegrationSettings(host="dev.azure.com", token="t0k")
    )

    assert config.token == "t0k"
    assert "t0k" not in repr(config)


@pytest.mark.parametrize(
    "host", ["https://dev.azure.com", "dev.azure.com/org", "", "dev azure com"]
)
def test_entry_rejects_invalid_host(host):
    with pytest.raises(InvalidConfigurationError):
        read_azure_integration_config(AzureIntegrationSettings(host=host))


def test_entry_accepts_host_with_port():
    config = read_azure_integration_config(AzureIntegrationSettings(host="ado.local:8080"))

    assert config.host == "ado.local:8080"


def test_configs_add_default_entry_when_missing():
    configs = read_azure_integration_configs([])

    assert configs == [AzureIntegrationConfig(host="dev.azure.com")]


def test_configs_keep_explicit_default_host():
    configs = read_azure_integration_configs(
        [AzureIntegrationSettings(host="dev.azure.com", token="pat")]
    )

    assert configs == [AzureIntegrationConfig(host="dev.azure.com", token="pat")]
