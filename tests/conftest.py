"""
Shared pytest fixtures for the releasesd test suite.

Provides fixtures for:
- Temporary storage directories
- An in-memory release source with call recording
- Settings that never touch the real GitHub API
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pytest

from release_library.config import ReleaseSettings
from release_library.errors import SourceUnavailable


class FakeReleaseSource:
    """Release source serving canned releases and recording every fetch."""

    def __init__(
        self,
        releases: dict[str, list[dict[str, Any]]] | None = None,
        failures: Iterable[str] = (),
    ) -> None:
        self.releases = dict(releases or {})
        self.failures = set(failures)
        self.calls: list[str] = []

    async def fetch_all(self, repository_key: str) -> list[dict[str, Any]]:
        self.calls.append(repository_key)
        if repository_key in self.failures:
            raise SourceUnavailable(repository_key, "HTTP 403")
        return [dict(release) for release in self.releases.get(repository_key, [])]


def release(name: str, **fields: Any) -> dict[str, Any]:
    """Build a minimal release payload."""
    return {"tag_name": name, "name": name, "binaries": [], **fields}


@pytest.fixture
def temp_storage_dir(tmp_path: Path) -> Path:
    """Create temporary storage directory for tests."""
    storage_dir = tmp_path / "releasesd"
    storage_dir.mkdir()
    return storage_dir


@pytest.fixture
def mock_storage_env(temp_storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point RELEASESD_HOME at a temporary directory."""
    monkeypatch.setenv("RELEASESD_HOME", str(temp_storage_dir))
    monkeypatch.delenv("RELEASESD_CONFIG_DIR", raising=False)
    return temp_storage_dir


@pytest.fixture
def fake_source() -> FakeReleaseSource:
    """Empty fake release source."""
    return FakeReleaseSource()


@pytest.fixture
def anonymous_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """No token file and no GITHUB_TOKEN; returns the (missing) token file path."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    return tmp_path / "github.auth"


@pytest.fixture
def test_settings(anonymous_env: Path) -> ReleaseSettings:
    """Settings with scheduled refresh disabled and a small version range."""
    return ReleaseSettings(
        min_version=8,
        max_version=9,
        token_file=str(anonymous_env),
        disable_refresh=True,
        fetch_timeout_seconds=1.0,
    )


@pytest.fixture
def make_source():
    """Factory for FakeReleaseSource instances."""
    return FakeReleaseSource


@pytest.fixture
def make_release():
    """Factory for release payloads."""
    return release
