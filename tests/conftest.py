"""Root pytest configuration for forgekit-bridge tests."""
import pytest

from forgekit_bridge.settings import Settings

from .fakes.fake_executor import FakeExecutor

# Import fixtures to make them available
from .fixtures.fake_toolchain import fake_toolchain, toolchain_log


# Configure pytest markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: spawns real subprocesses (POSIX only)"
    )


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Keep the developer's own ForgeKit configuration out of the tests."""
    monkeypatch.delenv("FORGEKIT_PATH", raising=False)
    monkeypatch.delenv("FORGEKIT_VERBOSE", raising=False)
    monkeypatch.delenv("FAKE_FORGEKIT_LOG", raising=False)


@pytest.fixture
def settings(tmp_path):
    """Standard test settings rooted in a temp dir."""
    return Settings(working_dir=str(tmp_path), binary="forgekit-test")


@pytest.fixture
def executor():
    """Standard fake executor for testing."""
    return FakeExecutor()
