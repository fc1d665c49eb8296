"""
Trigger path for the image cache job.

Decides the network constraint the job runs under from the user's
"load images only on Wi-Fi" preference and hands the request to the
job scheduler. When the job actually runs is up to the scheduler.
"""

from __future__ import annotations

import logging

from feedcache.config.settings import settings
from feedcache.models.enums import BackgroundJobId, NetworkType
from feedcache.models.precache import JobRequest
from feedcache.services.interfaces import JobSchedulerInterface

logger = logging.getLogger(__name__)


def build_image_cache_job_request(*, image_only_on_wifi: bool) -> JobRequest:
    """Build the scheduling request for the image cache job."""
    network_type = NetworkType.UNMETERED if image_only_on_wifi else NetworkType.ANY
    return JobRequest(job_id=BackgroundJobId.IMAGE_CACHE, network_type=network_type)


def schedule_image_cache_job(
    scheduler: JobSchedulerInterface | None,
    *,
    image_only_on_wifi: bool | None = None,
) -> JobRequest | None:
    """Schedule a one-off image cache run.

    Parameters
    ----------
    scheduler : JobSchedulerInterface | None
        Scheduling facility; ``None`` when the platform provides none.
    image_only_on_wifi : bool | None
        Restrict the run to unmetered networks. Defaults to the
        ``image_only_on_wifi`` setting.

    Returns
    -------
    JobRequest | None
        The request handed to the scheduler, or ``None`` if no scheduler
        is available.
    """
    if scheduler is None:
        logger.error("Job scheduler not available; image cache job not scheduled")
        return None

    if image_only_on_wifi is None:
        image_only_on_wifi = settings.image_only_on_wifi

    request = build_image_cache_job_request(image_only_on_wifi=image_only_on_wifi)
    logger.info(
        "Scheduling image cache job: networkType=%s",
        request.network_type.value.upper(),
    )
    scheduler.schedule(request)
    return request
