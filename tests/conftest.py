import pytest

from opendraw import link_codec


@pytest.fixture
def fast_kdf(monkeypatch):
    """Cheaper key derivation for tests that decode many tokens."""
    monkeypatch.setattr(link_codec, "ITERATIONS", 1_000)
