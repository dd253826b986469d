import json
from datetime import datetime
from typing import Any, override

from pydantic import ValidationError
from structlog import get_logger

from core.domain.dashboard import Dashboard, DashboardData
from core.domain.exceptions import InvalidDocumentError, ObjectNotFoundError
from core.storage.dashboard_storage import DashboardStorage
from core.storage.psql._psql_base_storage import JSONDict, PsqlBaseRow, PsqlBaseStorage
from core.storage.psql.migrations.migrate import migrate
from core.utils.iter_utils import safe_map

_log = get_logger(__name__)


def _not_found(uuid: str) -> ObjectNotFoundError:
    return ObjectNotFoundError(f"no dashboard found with uuid: {uuid}", object_type="dashboard")


class PsqlDashboardStorage(PsqlBaseStorage, DashboardStorage):
    @override
    @classmethod
    def table(cls) -> str:
        return "dashboards"

    @override
    async def create_dashboard(self, dashboard: Dashboard) -> Dashboard:
        async with self._connect() as connection:
            dashboard.id = await self._insert(connection, _DashboardRow.from_domain(dashboard))
        return dashboard

    @override
    async def list_dashboards(self) -> list[Dashboard]:
        async with self._connect() as connection:
            rows = await connection.fetch("SELECT * FROM dashboards ORDER BY id")
            return safe_map(rows, lambda x: self._validate(_DashboardRow, x).to_domain(), _log)

    @override
    async def retrieve_dashboard(self, uuid: str) -> Dashboard:
        async with self._connect() as connection:
            row = await connection.fetchrow("SELECT * FROM dashboards WHERE uuid = $1", uuid)
        if not row:
            raise _not_found(uuid)
        try:
            return self._validate(_DashboardRow, row).to_domain()
        except ValidationError as e:
            raise InvalidDocumentError(f"Stored dashboard {uuid} is not a valid document") from e

    @override
    async def update_dashboard(
        self,
        uuid: str,
        data: DashboardData,
        updated_by: str | None,
        updated_at: datetime,
    ) -> None:
        async with self._connect() as connection:
            status = await connection.execute(
                "UPDATE dashboards SET updated_at = $1, updated_by = $2, data = $3 WHERE uuid = $4",
                self._map_value(updated_at),
                updated_by,
                json.dumps(data),
                uuid,
            )
        if _affected_rows(status) == 0:
            raise _not_found(uuid)

    @override
    async def delete_dashboard(self, uuid: str) -> None:
        async with self._connect() as connection:
            status = await connection.execute("DELETE FROM dashboards WHERE uuid = $1", uuid)
        if _affected_rows(status) == 0:
            raise _not_found(uuid)

    @override
    async def set_locked(self, uuid: str, locked: bool) -> None:
        async with self._connect() as connection:
            _ = await connection.execute("UPDATE dashboards SET locked = $1 WHERE uuid = $2", locked, uuid)

    @override
    async def list_dashboard_data(self) -> list[tuple[str, Any]]:
        async with self._connect() as connection:
            rows = await connection.fetch("SELECT uuid, data FROM dashboards ORDER BY id")
        return [(row["uuid"], row["data"]) for row in rows]

    @override
    async def migrate(self) -> None:
        async with self._pool.acquire() as connection:
            await migrate(connection)

    @override
    async def close(self) -> None:
        await self._pool.close()


def _affected_rows(status: str) -> int:
    # asyncpg returns the command tag, e.g. "DELETE 1"
    try:
        return int(status.rsplit(" ", 1)[-1])
    except ValueError:
        return 0


class _DashboardRow(PsqlBaseRow):
    uuid: str = ""
    created_by: str | None = None
    updated_by: str | None = None
    data: JSONDict
    locked: bool = False

    def to_domain(self) -> Dashboard:
        return Dashboard(
            id=self.id or 0,
            uuid=self.uuid,
            created_at=self.created_at,
            created_by=self.created_by,
            updated_at=self.updated_at,
            updated_by=self.updated_by,
            data=self.data,
            locked=self.locked,
        )

    @classmethod
    def from_domain(cls, dashboard: Dashboard):
        return cls(
            uuid=dashboard.uuid,
            created_at=dashboard.created_at,
            created_by=dashboard.created_by,
            updated_at=dashboard.updated_at,
            updated_by=dashboard.updated_by,
            data=dashboard.data,
            locked=dashboard.locked,
        )
