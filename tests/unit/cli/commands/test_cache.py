"""
Unit tests for cache CLI commands.

Covers ``feedcache cache warm`` (dry run, exit codes, interruption),
``status`` and ``purge``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from feedcache.cli.commands import cache as cache_module
from feedcache.cli.main import app as main_app
from feedcache.exceptions import ContentStoreError
from feedcache.models.enums import DataSource, RunStatus
from feedcache.models.precache import AggregatedUrls, FetchFailure, FetchSuccess, RunSummary
from feedcache.services.image_cache import CacheStats

# Create test apps that wrap each command
test_warm_app = typer.Typer()
test_warm_app.command(name="warm")(cache_module.warm)

test_status_app = typer.Typer()
test_status_app.command(name="status")(cache_module.status)

test_purge_app = typer.Typer()
test_purge_app.command(name="purge")(cache_module.purge)

runner = CliRunner()


def _summary(status: RunStatus = RunStatus.COMPLETED, **kwargs) -> RunSummary:
    values = {"total_urls": 3, "success_count": 3, "fail_count": 0, "elapsed_ms": 1500}
    values.update(kwargs)
    return RunSummary(
        job_id=6,
        start_time=datetime(2024, 1, 1, tzinfo=timezone.utc),
        status=status,
        **values,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def mock_job() -> MagicMock:
    job = MagicMock()
    job.run = AsyncMock(return_value=_summary())
    job.discover = AsyncMock(
        return_value=AggregatedUrls(
            urls=frozenset({"https://a/1.png", "https://a/2.png"}),
            direct_count=1,
            blob_count=2,
        )
    )
    return job


@pytest.fixture
def patched(tmp_path: Path, mock_job: MagicMock):
    """Patch the container, database manager and log file setup."""
    mock_container = MagicMock()
    mock_container.create_image_cache_job.return_value = mock_job
    mock_db = MagicMock()
    mock_db.close = AsyncMock()

    with patch.object(cache_module, "container", mock_container), patch.object(
        cache_module, "db_manager", mock_db
    ), patch.object(
        cache_module, "_setup_file_logging", return_value=tmp_path / "run.log"
    ):
        yield mock_container, mock_db


# ═══════════════════════════════════════════════════════════════════════════
# Warm Command Tests
# ═══════════════════════════════════════════════════════════════════════════


class TestCacheWarmCommand:
    """Unit tests for the `cache warm` CLI command."""

    def test_warm_success(self, patched, mock_job: MagicMock) -> None:
        _, mock_db = patched

        result = runner.invoke(test_warm_app, [])

        assert result.exit_code == 0
        assert "Cache Warm Summary" in result.output
        mock_job.run.assert_awaited_once()
        mock_db.close.assert_awaited_once()

    def test_warm_dry_run_downloads_nothing(
        self, patched, mock_job: MagicMock
    ) -> None:
        result = runner.invoke(test_warm_app, ["--dry-run"])

        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert "Images Found" in result.output
        mock_job.discover.assert_awaited_once()
        mock_job.run.assert_not_called()

    def test_warm_dry_run_store_error(self, patched, mock_job: MagicMock) -> None:
        mock_job.discover.side_effect = ContentStoreError("no such table")

        result = runner.invoke(test_warm_app, ["--dry-run"])

        assert result.exit_code == 2
        assert "no such table" in result.output

    def test_warm_partial_failure_exit_code(
        self, patched, mock_job: MagicMock
    ) -> None:
        mock_job.run.return_value = _summary(success_count=2, fail_count=1)

        result = runner.invoke(test_warm_app, [])

        assert result.exit_code == 1

    def test_warm_job_failed_exit_code(self, patched, mock_job: MagicMock) -> None:
        mock_job.run.return_value = _summary(
            RunStatus.FAILED, success_count=0, error="database is locked"
        )

        result = runner.invoke(test_warm_app, [])

        assert result.exit_code == 2
        assert "database is locked" in result.output

    def test_warm_interrupted_exit_code(self, patched, mock_job: MagicMock) -> None:
        async def interrupted_run(token, progress_callback=None):
            token.cancel("SIGINT")
            return _summary(RunStatus.CANCELLED, success_count=1)

        mock_job.run.side_effect = interrupted_run

        result = runner.invoke(test_warm_app, [])

        assert result.exit_code == 130
        assert "interrupted" in result.output

    def test_warm_progress_callback(self, patched, mock_job: MagicMock) -> None:
        async def run_with_progress(token, progress_callback=None):
            progress_callback(
                "https://a/1.png",
                FetchSuccess(url="https://a/1.png", source=DataSource.NETWORK),
            )
            progress_callback(
                "https://a/2.png", FetchFailure(url="https://a/2.png", reason="timeout")
            )
            return _summary(total_urls=2, success_count=1, fail_count=1)

        mock_job.run.side_effect = run_with_progress

        result = runner.invoke(test_warm_app, [])

        assert result.exit_code == 1
        assert "Cache Warm Summary" in result.output


# ═══════════════════════════════════════════════════════════════════════════
# Status and Purge Command Tests
# ═══════════════════════════════════════════════════════════════════════════


class TestCacheStatusCommand:
    def test_status_shows_stats(self, patched) -> None:
        mock_container, _ = patched
        mock_container.image_cache_service.get_stats = AsyncMock(
            return_value=CacheStats(
                image_count=1234,
                total_size_bytes=5 * 1024 * 1024,
                oldest_file=datetime(2024, 1, 1),
                newest_file=datetime(2024, 2, 1),
            )
        )

        result = runner.invoke(test_status_app, [])

        assert result.exit_code == 0
        assert "1,234" in result.output
        assert "5.0 MB" in result.output
        assert "2024-01-01" in result.output


class TestCachePurgeCommand:
    def test_purge_force(self, patched) -> None:
        mock_container, _ = patched
        mock_container.image_cache_service.purge = AsyncMock(return_value=2048)

        result = runner.invoke(test_purge_app, ["--force"])

        assert result.exit_code == 0
        assert "2.0 KB" in result.output
        mock_container.image_cache_service.purge.assert_awaited_once()

    def test_purge_declined(self, patched) -> None:
        mock_container, _ = patched
        mock_container.image_cache_service.purge = AsyncMock(return_value=0)

        result = runner.invoke(test_purge_app, [], input="n\n")

        assert result.exit_code == 1
        assert "cancelled" in result.output
        mock_container.image_cache_service.purge.assert_not_called()


class TestFormatSize:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [(512, "512 B"), (2048, "2.0 KB"), (3 * 1024**3, "3.0 GB")],
    )
    def test_format_size(self, size: int, expected: str) -> None:
        assert cache_module._format_size(size) == expected


class TestMainApp:
    def test_version_command(self) -> None:
        result = runner.invoke(main_app, ["version"])

        assert result.exit_code == 0
        assert "feedcache" in result.output

    def test_cache_group_registered(self) -> None:
        result = runner.invoke(main_app, ["cache", "--help"])

        assert result.exit_code == 0
        assert "warm" in result.output
