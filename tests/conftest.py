import pytest

from resourcekit.config import reset_settings
from resourcekit.hooks import hooks
from tests.support import ManualTransport


@pytest.fixture(autouse=True)
def clear_hooks():
    hooks.clear()
    reset_settings()
    yield
    hooks.clear()
    reset_settings()


@pytest.fixture
def manual_transport():
    return ManualTransport()
