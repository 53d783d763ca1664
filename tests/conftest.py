import pytest

from exprcalc.config_manager import DEFAULT_SETTINGS
from exprcalc.Interpreter import Environment


@pytest.fixture(autouse=True)
def bundled_config(monkeypatch):
    monkeypatch.delenv("EXPRCALC_CONFIG", raising=False)


@pytest.fixture
def env():
    return Environment.default(settings=DEFAULT_SETTINGS)
