"""
Pytest configuration and shared fixtures for arduinokit tests.
"""

import pytest
from pathlib import Path

from arduinokit.core.artifacts import ArtifactLocator
from arduinokit.core.installer import CliInstaller
from arduinokit.core.platform import detect


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def cache_root(tmp_path) -> Path:
    """Fresh, isolated artifact cache root."""
    return tmp_path / "cache"


@pytest.fixture
def locator(cache_root) -> ArtifactLocator:
    """Locator writing into the isolated cache root."""
    return ArtifactLocator(cache_root)


@pytest.fixture
def installer(locator) -> CliInstaller:
    """Installer writing into the isolated cache root."""
    return CliInstaller(locator, connect_timeout=1, read_timeout=1)


@pytest.fixture
def linux_64():
    return detect("Linux", "x86_64")


@pytest.fixture
def windows_64():
    return detect("Windows", "AMD64")


@pytest.fixture
def isolated_home(tmp_path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))
    monkeypatch.delenv("ARDUINOKIT_HOME", raising=False)

    return fake_home
