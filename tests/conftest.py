import pytest

from symbolic_diff.config import EngineConfig, set_config


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts from (and leaves behind) the default configuration"""
    set_config(EngineConfig())
    yield
    set_config(EngineConfig())
