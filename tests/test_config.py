"""Tests for opendraw.config."""

import pytest

from opendraw.config import Settings, load_settings


def test_defaults():
    assert load_settings({}) == Settings(base_url="", draw_timeout=None, log_level="INFO")


def test_values_from_secrets():
    settings = load_settings({"BASE_URL": "https://x.streamlit.app/", "DRAW_TIMEOUT": "12.5", "LOG_LEVEL": "debug"})
    assert settings.base_url == "https://x.streamlit.app/"
    assert settings.draw_timeout == 12.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("secrets", [{"DRAW_TIMEOUT": 0}, {"DRAW_TIMEOUT": "soon"}, {"LOG_LEVEL": "LOUD"}])
def test_invalid_values(secrets):
    with pytest.raises(ValueError):
        load_settings(secrets)
