import pytest

from compare_validation.config_loader import set_config
from compare_validation.registry import RuleRegistry


@pytest.fixture(autouse=True)
def bundled_config():
    """Run every test against the bundled configuration."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def registry():
    """An empty rule registry isolated from the process-wide one."""
    return RuleRegistry()
