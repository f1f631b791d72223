import pytest

from swiftlet.config import _reset_config


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from the default config."""
    _reset_config()
    yield
    _reset_config()
