"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Every test runs against a clean environment: BOUNTYHUB_* variables are
removed, the user config directory points into tmp_path (so no real
~/.config/bountyhub/.env is read) and all cached configuration is reset.
"""

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import httpx
import pytest

import bh.cli.client as client_module
from bh.cli.client import APIClient
from bh.core.config import get_app_config, get_settings

BOUNTYHUB_ENV_VARS = (
    "BOUNTYHUB_TOKEN",
    "BOUNTYHUB_URL",
    "BOUNTYHUB_LOG_LEVEL",
    "BOUNTYHUB_LOG_FILE",
    "BOUNTYHUB_JOB_ID",
    "BOUNTYHUB_JOB_ARTIFACT_NAME",
    "BOUNTYHUB_OUTPUT",
    "BOUNTYHUB_WORKFLOW_ID",
    "BOUNTYHUB_SCAN_NAME",
)

TEST_TOKEN = "bhv_test_token"
TEST_BASE_URL = "https://bountyhub.test"


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Strip BOUNTYHUB_* variables and point the user config dir at tmp_path."""
    for name in BOUNTYHUB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))

    get_settings.cache_clear()
    get_app_config.cache_clear()
    client_module._client = None

    yield config_home / "bountyhub"

    get_settings.cache_clear()
    get_app_config.cache_clear()
    client_module._client = None


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Leave the root logger as we found it. setup_logging replaces its handlers."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def user_config_dir(isolated_environment: Path) -> Path:
    """The per-user config directory used by the current test (not created)."""
    return isolated_environment


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def make_api_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], APIClient]:
    """
    Factory for an APIClient wired to an httpx.MockTransport.

    Usage:
        def test_something(make_api_client):
            client = make_api_client(lambda request: httpx.Response(204))
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> APIClient:
        return APIClient(
            base_url=TEST_BASE_URL,
            token=TEST_TOKEN,
            retry_wait_min=0,
            retry_wait_max=0,
            transport=httpx.MockTransport(handler),
        )

    return _make
