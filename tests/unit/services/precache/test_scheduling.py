"""
Tests for scheduling the image cache job.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from feedcache.models.enums import BackgroundJobId, NetworkType
from feedcache.services.interfaces import JobSchedulerInterface
from feedcache.services.precache import scheduling
from feedcache.services.precache.scheduling import (
    build_image_cache_job_request,
    schedule_image_cache_job,
)


class TestBuildRequest:
    @pytest.mark.parametrize(
        ("image_only_on_wifi", "expected"),
        [(True, NetworkType.UNMETERED), (False, NetworkType.ANY)],
    )
    def test_network_type_follows_preference(
        self, image_only_on_wifi: bool, expected: NetworkType
    ) -> None:
        request = build_image_cache_job_request(image_only_on_wifi=image_only_on_wifi)

        assert request.network_type is expected
        assert request.job_id is BackgroundJobId.IMAGE_CACHE


class TestScheduleImageCacheJob:
    def test_hands_request_to_scheduler(self) -> None:
        scheduler = MagicMock(spec=JobSchedulerInterface)

        request = schedule_image_cache_job(scheduler, image_only_on_wifi=True)

        scheduler.schedule.assert_called_once_with(request)
        assert request is not None
        assert request.network_type is NetworkType.UNMETERED

    def test_logs_network_type(self, caplog: pytest.LogCaptureFixture) -> None:
        scheduler = MagicMock(spec=JobSchedulerInterface)

        with caplog.at_level(logging.INFO, logger="feedcache"):
            schedule_image_cache_job(scheduler, image_only_on_wifi=False)

        assert "Scheduling image cache job: networkType=ANY" in caplog.text

    def test_missing_scheduler_is_logged_not_raised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="feedcache"):
            request = schedule_image_cache_job(None, image_only_on_wifi=False)

        assert request is None
        assert "Job scheduler not available" in caplog.text

    @pytest.mark.parametrize(
        ("preference", "expected"),
        [(True, NetworkType.UNMETERED), (False, NetworkType.ANY)],
    )
    def test_preference_read_from_settings(
        self,
        monkeypatch: pytest.MonkeyPatch,
        preference: bool,
        expected: NetworkType,
    ) -> None:
        monkeypatch.setattr(scheduling.settings, "image_only_on_wifi", preference)
        scheduler = MagicMock(spec=JobSchedulerInterface)

        request = schedule_image_cache_job(scheduler)

        assert request is not None
        assert request.network_type is expected
        scheduler.schedule.assert_called_once_with(request)
