"""Tests for PanelSettings environment loading."""

import pytest

from debate_core.config import PanelSettings
from debate_core.services.gateway_http import DEFAULT_BASE_URL


def test_defaults_from_empty_environment():
    settings = PanelSettings.from_env({})

    assert settings.api_base_url == DEFAULT_BASE_URL
    assert settings.poll_interval == 2.0
    assert settings.request_timeout == 30.0
    assert settings.mock_mode is False
    assert settings.log_level == "INFO"


def test_reads_overrides():
    settings = PanelSettings.from_env(
        {
            "DEBATE_API_BASE_URL": "http://localhost:5000/",
            "DEBATE_POLL_INTERVAL": "0.5",
            "DEBATE_REQUEST_TIMEOUT": "5",
            "DEBATE_MOCK_MODE": "Yes",
            "DEBATE_LOG_LEVEL": "debug",
        }
    )

    assert settings.api_base_url == "http://localhost:5000"
    assert settings.poll_interval == 0.5
    assert settings.request_timeout == 5.0
    assert settings.mock_mode is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["soon", "0", "-2"])
def test_rejects_bad_poll_interval(value):
    with pytest.raises(ValueError, match="DEBATE_POLL_INTERVAL"):
        PanelSettings.from_env({"DEBATE_POLL_INTERVAL": value})


def test_mock_mode_off_for_other_values():
    assert PanelSettings.from_env({"DEBATE_MOCK_MODE": "nope"}).mock_mode is False
