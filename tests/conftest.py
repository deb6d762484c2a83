"""Shared pytest fixtures for the crategen test suite.

Provides reusable fixtures for:
- ``Config`` instances pointing into a temporary directory
- A mocked ``cargo`` (no toolchain needed to scaffold)
- Mock subprocess helpers
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from crategen.config import Command, Config


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., Config]:
    """Factory for configs whose crate lives under ``tmp_path``.

    Usage:
        def test_something(make_config):
            config = make_config(api_spec_url="https://example.com/spec.json")
    """
    def factory(**overrides: Any) -> Config:
        values: dict[str, Any] = {
            "site_or_api_name": "petstore",
            "api_url": "https://petstore3.swagger.io/api/v3",
            "local_api_spec_filepath": tmp_path / "specs" / "openapi.yaml",
            "output_dir": tmp_path / "crates",
        }
        values.update(overrides)
        return Config(**values)

    return factory


@pytest.fixture
def config(make_config) -> Config:
    """A ``generate`` config with a local spec file and no spec URL."""
    return make_config()


@pytest.fixture
def test_generation_config(make_config, tmp_path: Path) -> Config:
    """A ``test-generation`` config writing the spec inside the crate."""
    return make_config(
        command=Command.TEST_GENERATION,
        local_api_spec_filepath=tmp_path / "crates" / "petstore" / "petstore.yaml",
    )


@pytest.fixture
def local_spec_file(config: Config) -> Path:
    """Write a tiny spec at the config's local spec path."""
    path = config.local_api_spec_filepath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("openapi: 3.0.3\ninfo:\n  title: t\n  version: '1'\npaths: {}\n", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Mock cargo
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_cargo():
    """Patch the scaffolder's ``run_command`` so ``cargo`` always succeeds.

    Usage:
        async def test_scaffold(mock_cargo, config):
            with mock_cargo as run:
                await scaffold_crate(config)
            run.assert_awaited()
    """
    return patch(
        "crategen.scaffolder.run_command",
        new=AsyncMock(return_value=(0, "Creating library package", "")),
    )


@pytest.fixture
def failing_cargo():
    """Patch the scaffolder's ``run_command`` so ``cargo`` exits with status 101."""
    return patch(
        "crategen.scaffolder.run_command",
        new=AsyncMock(return_value=(101, "", "error: could not create crate")),
    )


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
