import copy
from datetime import datetime
from typing import Any, override

from core.domain.dashboard import Dashboard, DashboardData
from core.domain.exceptions import DuplicateValueError, ObjectNotFoundError
from core.storage.dashboard_storage import DashboardStorage


class MemoryDashboardStorage(DashboardStorage):
    """Dashboard storage kept in process, used when no database is configured and in tests"""

    def __init__(self):
        self._dashboards: dict[str, Dashboard] = {}
        self._last_id = 0

    def _get(self, uuid: str) -> Dashboard:
        try:
            return self._dashboards[uuid]
        except KeyError:
            raise ObjectNotFoundError(f"no dashboard found with uuid: {uuid}", object_type="dashboard") from None

    @override
    async def create_dashboard(self, dashboard: Dashboard) -> Dashboard:
        if dashboard.uuid in self._dashboards:
            raise DuplicateValueError(f"Dashboard with uuid {dashboard.uuid} already exists")
        self._last_id += 1
        stored = dashboard.model_copy(update={"id": self._last_id, "data": copy.deepcopy(dashboard.data)})
        self._dashboards[dashboard.uuid] = stored
        return stored.model_copy(deep=True)

    @override
    async def list_dashboards(self) -> list[Dashboard]:
        return [d.model_copy(deep=True) for d in self._dashboards.values()]

    @override
    async def retrieve_dashboard(self, uuid: str) -> Dashboard:
        return self._get(uuid).model_copy(deep=True)

    @override
    async def update_dashboard(
        self,
        uuid: str,
        data: DashboardData,
        updated_by: str | None,
        updated_at: datetime,
    ) -> None:
        dashboard = self._get(uuid)
        dashboard.data = copy.deepcopy(data)
        dashboard.updated_by = updated_by
        dashboard.updated_at = updated_at

    @override
    async def delete_dashboard(self, uuid: str) -> None:
        _ = self._get(uuid)
        del self._dashboards[uuid]

    @override
    async def set_locked(self, uuid: str, locked: bool) -> None:
        # Mirrors an UPDATE statement, unknown uuids are a no-op
        if dashboard := self._dashboards.get(uuid):
            dashboard.locked = locked

    @override
    async def list_dashboard_data(self) -> list[tuple[str, Any]]:
        return [(uuid, copy.deepcopy(d.data)) for uuid, d in self._dashboards.items()]

    @override
    async def migrate(self) -> None:
        pass

    @override
    async def close(self) -> None:
        pass
