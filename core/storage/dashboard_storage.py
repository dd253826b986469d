from datetime import datetime
from typing import Any, Protocol

from core.domain.dashboard import Dashboard, DashboardData


class DashboardStorage(Protocol):
    async def create_dashboard(self, dashboard: Dashboard) -> Dashboard: ...

    async def list_dashboards(self) -> list[Dashboard]: ...

    async def retrieve_dashboard(self, uuid: str) -> Dashboard: ...

    async def update_dashboard(
        self,
        uuid: str,
        data: DashboardData,
        updated_by: str | None,
        updated_at: datetime,
    ) -> None: ...

    async def delete_dashboard(self, uuid: str) -> None: ...

    async def set_locked(self, uuid: str, locked: bool) -> None: ...

    async def list_dashboard_data(self) -> list[tuple[str, Any]]:
        """Return the uuid and the raw stored data of every dashboard.

        The data is returned as stored, parsing it is left to the caller.
        """
        ...

    async def migrate(self) -> None: ...

    async def close(self) -> None: ...
