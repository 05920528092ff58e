"""HttpxTransport — fires a schedule's HTTP request with httpx."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from pendulum_runner.config import settings

if TYPE_CHECKING:
    from pendulum_runner.scheduler.models import Schedule

logger = logging.getLogger(__name__)

# Recorded as the response status when the request never got a response
# (DNS failure, connection refused, timeout, malformed URL).
TRANSPORT_FAILURE_STATUS = 0


class HttpxTransport:
    """Sends ``schedule.http_method`` to ``schedule.target_url``.

    Any response, 2xx or not, is reported by its status code. Transport
    errors are logged and reported as ``TRANSPORT_FAILURE_STATUS``.

    Args:
        timeout: Per-request timeout in seconds (default from settings).
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = settings.http_timeout_seconds if timeout is None else timeout

    async def send(self, schedule: Schedule) -> int:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.request(schedule.http_method, schedule.target_url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(
                "Request for schedule '%s' (%s) failed: %s %s: %s",
                schedule.name,
                schedule.id,
                schedule.http_method,
                schedule.target_url,
                exc,
            )
            return TRANSPORT_FAILURE_STATUS

        if resp.is_success:
            logger.info(
                "Schedule '%s' (%s) -> %d", schedule.name, schedule.id, resp.status_code
            )
        else:
            logger.warning(
                "Schedule '%s' (%s) -> %d: %s",
                schedule.name,
                schedule.id,
                resp.status_code,
                resp.text[:200],
            )
        return resp.status_code
