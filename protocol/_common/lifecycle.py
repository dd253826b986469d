import os
from typing import final

from structlog import get_logger

from core.services.dashboard_service import DashboardService
from core.storage.dashboard_storage import DashboardStorage

_log = get_logger(__name__)


@final
class LifecycleDependencies:
    def __init__(self, dashboard_storage: DashboardStorage):
        self.dashboard_storage = dashboard_storage

    def dashboard_service(self) -> DashboardService:
        return DashboardService(self.dashboard_storage)

    async def close(self):
        await self.dashboard_storage.close()

    shared: "LifecycleDependencies | None" = None


async def startup() -> LifecycleDependencies:
    if LifecycleDependencies.shared:
        # We already started
        return LifecycleDependencies.shared

    shared_dependencies = LifecycleDependencies(await _default_dashboard_storage())
    LifecycleDependencies.shared = shared_dependencies
    return shared_dependencies


async def shutdown(dependencies: LifecycleDependencies):
    await dependencies.close()
    if LifecycleDependencies.shared is dependencies:
        LifecycleDependencies.shared = None


async def _default_dashboard_storage() -> DashboardStorage:
    if dsn := os.environ.get("PSQL_DSN"):
        import asyncpg

        from core.storage.psql.psql_dashboard_storage import PsqlDashboardStorage

        pool = await asyncpg.create_pool(dsn=dsn)
        return PsqlDashboardStorage(pool)

    _log.warning("No dashboard storage configured, using memory")
    from core.storage.memory.memory_dashboard_storage import MemoryDashboardStorage

    return MemoryDashboardStorage()
