import uuid
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, final

from structlog import get_logger

from core.domain.dashboard import Dashboard, DashboardData, DashboardsInfo, MetricUsage
from core.domain.exceptions import BadRequestError
from core.services.dashboards.dashboard_analyzer import summarize_dashboards
from core.services.dashboards.documents import parse_document, parse_documents
from core.services.dashboards.metric_usage import index_metric_usage
from core.services.dashboards.widget_diff import check_panel_deletion
from core.storage.dashboard_storage import DashboardStorage
from core.utils.dicts import get_str
from core.utils.strings import slugify_title

_log = get_logger(__name__)


def validate_post_data(data: Any) -> DashboardData:
    document = parse_document(data)
    if document.get("title") is None:
        raise BadRequestError("title not found in post data")
    return document


def _with_slug(dashboard: Dashboard) -> Dashboard:
    dashboard.slug = slugify_title(dashboard.title)
    return dashboard


@final
class DashboardService:
    def __init__(self, dashboard_storage: DashboardStorage):
        self._dashboard_storage = dashboard_storage

    async def create_dashboard(self, data: DashboardData, user_email: str | None) -> Dashboard:
        now = datetime.now(UTC)
        dashboard = Dashboard(
            # A uuid provided in the document is kept so that imported dashboards keep their id
            uuid=get_str(data, "uuid") or str(uuid.uuid4()),
            created_at=now,
            created_by=user_email,
            updated_at=now,
            updated_by=user_email,
            data=data,
        )
        created = await self._dashboard_storage.create_dashboard(dashboard)
        _log.info("Created dashboard", dashboard_uuid=created.uuid)
        return _with_slug(created)

    async def list_dashboards(self) -> list[Dashboard]:
        dashboards = await self._dashboard_storage.list_dashboards()
        return [_with_slug(d) for d in dashboards]

    async def get_dashboard(self, dashboard_uuid: str) -> Dashboard:
        return _with_slug(await self._dashboard_storage.retrieve_dashboard(dashboard_uuid))

    def _raise_if_locked(self, dashboard: Dashboard, user_email: str | None, action: str):
        # Locks only apply to requests made on behalf of a user
        if user_email is not None and dashboard.locked:
            raise BadRequestError(f"dashboard is locked, please unlock the dashboard to be able to {action} it")

    async def update_dashboard(self, dashboard_uuid: str, data: DashboardData, user_email: str | None) -> Dashboard:
        dashboard = await self._dashboard_storage.retrieve_dashboard(dashboard_uuid)
        self._raise_if_locked(dashboard, user_email, "edit")

        removed = check_panel_deletion(dashboard.data, data)
        if removed:
            _log.info("Removing panel from dashboard", dashboard_uuid=dashboard_uuid, removed_ids=removed)

        dashboard.updated_at = datetime.now(UTC)
        dashboard.updated_by = user_email
        dashboard.data = data
        await self._dashboard_storage.update_dashboard(
            dashboard_uuid,
            data,
            updated_by=user_email,
            updated_at=dashboard.updated_at,
        )
        return _with_slug(dashboard)

    async def delete_dashboard(self, dashboard_uuid: str, user_email: str | None) -> None:
        dashboard = await self._dashboard_storage.retrieve_dashboard(dashboard_uuid)
        self._raise_if_locked(dashboard, user_email, "delete")
        await self._dashboard_storage.delete_dashboard(dashboard_uuid)
        _log.info("Deleted dashboard", dashboard_uuid=dashboard_uuid)

    async def lock_dashboard(self, dashboard_uuid: str, lock: bool) -> None:
        await self._dashboard_storage.set_locked(dashboard_uuid, lock)

    async def dashboards_info(self) -> DashboardsInfo:
        rows = await self._dashboard_storage.list_dashboard_data()
        documents = (document for _, document in parse_documents(rows))
        return summarize_dashboards(documents, total_dashboards=len(rows))

    async def dashboards_with_metric_names(self, metric_names: Sequence[str]) -> dict[str, list[MetricUsage]]:
        rows = await self._dashboard_storage.list_dashboard_data()
        return index_metric_usage(rows, metric_names)
