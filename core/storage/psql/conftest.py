import asyncpg
import pytest


@pytest.fixture
def dashboard_storage(purged_psql: asyncpg.Pool):
    from core.storage.psql.psql_dashboard_storage import PsqlDashboardStorage

    return PsqlDashboardStorage(pool=purged_psql)
