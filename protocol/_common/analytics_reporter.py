import asyncio
import os
from typing import final

from structlog import get_logger

from core.services.dashboard_service import DashboardService
from core.utils.coroutines import capture_errors

_log = get_logger(__name__)

_REPORT_INTERVAL_VAR = "DASHBOARDS_REPORT_INTERVAL_SECONDS"


def report_interval_from_env() -> float | None:
    raw = os.environ.get(_REPORT_INTERVAL_VAR)
    if not raw:
        return None
    try:
        interval = float(raw)
    except ValueError:
        _log.warning("Invalid report interval, reporting is disabled", value=raw)
        return None
    return interval if interval > 0 else None


@final
class AnalyticsReporter:
    """Periodically computes the dashboards report over all stored documents and logs it"""

    def __init__(self, dashboard_service: DashboardService, interval_seconds: float):
        self._dashboard_service = dashboard_service
        self._interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None

    async def report_once(self) -> None:
        with capture_errors(_log, "Failed to compute dashboards report"):
            info = await self._dashboard_service.dashboards_info()
            _log.info("Dashboards report", report=info)

    async def _run(self):
        while True:
            await asyncio.sleep(self._interval_seconds)
            await self.report_once()

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        _ = self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
