"""Shared pytest fixtures and test-run configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from monobank_mcp.monobank_client import (
    MONOBANK_BASE_URL_ENV_VAR,
    MONOBANK_TIMEOUT_ENV_VAR,
    MONOBANK_TOKEN_ENV_VAR,
)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the flag that opts into live Monobank API tests."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked as integration against the live Monobank API.",
    )


def _integration_skip_reason(config: pytest.Config) -> str | None:
    """Explain why live tests cannot run, or return None when they can."""
    enabled = config.getoption("--run-integration") or os.getenv("RUN_INTEGRATION_TESTS") == "1"
    if not enabled:
        return (
            "Live Monobank tests are off; "
            "pass --run-integration or set RUN_INTEGRATION_TESTS=1."
        )
    if not os.getenv(MONOBANK_TOKEN_ENV_VAR):
        return f"Live Monobank tests need {MONOBANK_TOKEN_ENV_VAR}."
    return None


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration-marked tests unless they are enabled and a token is set."""
    reason = _integration_skip_reason(config)
    if reason is None:
        return
    for item in items:
        if item.get_closest_marker("integration") is not None:
            item.add_marker(pytest.mark.skip(reason=reason))


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Clear Monobank env vars and run from a directory without a `.env` file."""
    for env_var in (MONOBANK_TOKEN_ENV_VAR, MONOBANK_BASE_URL_ENV_VAR, MONOBANK_TIMEOUT_ENV_VAR):
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.chdir(tmp_path)
