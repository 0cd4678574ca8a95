"""Unit tests for configuration utilities in config.py."""

import json
from io import BytesIO
from typing import cast
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from pytest import MonkeyPatch

from kvshortener.types import AppConfig
from kvshortener.utils import config
from kvshortener.constants import ENV
from kvshortener.exceptions import BadConfigurationError, MissingEnvironmentVariableError


# -------------------------------
# Environment helpers
# -------------------------------

@pytest.mark.parametrize(
    'app_name, app_env, expected',
    [
        ('kvshortener', 'prod', 'kvshortener:prod'),
        ('kvshortener', 'DEV', 'kvshortener:dev'),
        ('kvshortener', None, 'kvshortener:local'),
        (None, 'prod', None),
    ],
)
def test_app_prefix(monkeypatch: MonkeyPatch, app_name, app_env, expected) -> None:
    for name, value in ((ENV.App.APP_NAME, app_name), (ENV.App.APP_ENV, app_env)):
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)

    assert config.app_prefix() == expected


# -------------------------------
# Document extraction
# -------------------------------

def test_extract_lambda_config() -> None:
    document = {
        'active_backend': 'redis',
        'configs': {
            'router': {
                'redis': {'host': 'redis.test', 'port': 6379, 'db': 0},
                'memory': {'assets': {}},
                'policy': {'guest_max_ttl': 604800},
            },
        },
    }

    assert config.extract_lambda_config(document, 'router') == {
        'backend': 'redis',
        'redis': {'host': 'redis.test', 'port': 6379, 'db': 0},
        'policy': {'guest_max_ttl': 604800},
    }


def test_extract_lambda_config_defaults_missing_sections() -> None:
    document = {'active_backend': 'memory', 'configs': {'router': {}}}
    assert config.extract_lambda_config(document, 'router') == {'backend': 'memory', 'memory': {}, 'policy': {}}


@pytest.mark.parametrize(
    'document',
    [
        {},
        {'active_backend': 'redis'},
        {'active_backend': 'redis', 'configs': {}},
        {'active_backend': 'redis', 'configs': {'router': 'not a section'}},
        {'active_backend': 'redis', 'configs': None},
    ],
)
def test_extract_lambda_config_with_malformed_document(document) -> None:
    with pytest.raises(BadConfigurationError, match="Malformed AppConfig document for 'router'"):
        config.extract_lambda_config(document, 'router')


# -------------------------------
# AWS AppConfig loading
# -------------------------------

class TestLoadConfig:
    appconfig_payload: AppConfig

    @pytest.fixture
    def appconfig_payload(self) -> AppConfig:
        # fmt: off
        return cast(AppConfig, {
            'build': 42,
            'active_backend': 'redis',
            'configs': {
                'test_lambda': {
                    'redis': {
                        'host': 'monkey',
                        'port': 659595,
                        'db': 3
                    },
                    'policy': {
                        'max_allocation_attempts': 4
                    }
                }
            },
        })
        # fmt: on

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, appconfig_payload: AppConfig) -> None:
        monkeypatch.setenv(ENV.AppConfig.APP_ID, 'app123')
        monkeypatch.setenv(ENV.AppConfig.ENV_ID, 'env123')
        monkeypatch.setenv(ENV.AppConfig.PROFILE_ID, 'prof123')
        monkeypatch.delenv(ENV.AppConfig.AGENT_URL, raising=False)

        self.appconfig_payload = appconfig_payload

    def test_load_config_from_appconfig(self, monkeypatch: MonkeyPatch) -> None:
        monkey_bytes = BytesIO(json.dumps(self.appconfig_payload).encode('utf-8'))
        mock_appconfig = MagicMock()
        mock_appconfig.start_configuration_session.return_value = {'InitialConfigurationToken': 'monkey_token'}
        mock_appconfig.get_latest_configuration.return_value = {'Configuration': monkey_bytes}
        monkeypatch.setattr(config.boto3, 'client', lambda service: mock_appconfig)

        result = config.load_config('test_lambda')

        assert result['backend'] == 'redis'
        assert result['redis']['host'] == 'monkey'
        assert result['redis']['port'] == 659595
        assert result['redis']['db'] == 3
        assert result['policy'] == {'max_allocation_attempts': 4}

        mock_appconfig.start_configuration_session.assert_called_once_with(
            ApplicationIdentifier='app123',
            EnvironmentIdentifier='env123',
            ConfigurationProfileIdentifier='prof123',
        )
        mock_appconfig.get_latest_configuration.assert_called_once_with(
            ConfigurationToken='monkey_token',
        )

    def test_missing_appconfig_raises_error(self, monkeypatch: MonkeyPatch) -> None:
        """Ensure load_config() propagates ClientError when AppConfig returns an error."""
        mock_appconfig = MagicMock()
        mock_appconfig.start_configuration_session.side_effect = ClientError(
            {'Error': {'Code': 'ResourceNotFoundException'}}, 'StartConfigurationSession'
        )
        monkeypatch.setattr(config.boto3, 'client', lambda service: mock_appconfig)

        with pytest.raises(ClientError):
            config.load_config('test_lambda')

    def test_load_config_requires_appconfig_environment(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.delenv(ENV.AppConfig.PROFILE_ID)
        mock_client = MagicMock()
        monkeypatch.setattr(config.boto3, 'client', mock_client)

        with pytest.raises(MissingEnvironmentVariableError, match="'APPCONFIG_PROFILE_ID'"):
            config.load_config('test_lambda')

        mock_client.assert_not_called()
