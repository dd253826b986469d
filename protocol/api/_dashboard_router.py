from typing import Annotated, Any

from fastapi import APIRouter, Body

from core.services.dashboard_service import validate_post_data
from core.services.dashboards.documents import parse_document
from protocol.api._api_models import Dashboard, DashboardsByMetricRequest, DashboardsInfo, MetricUsage, Page
from protocol.api._dependencies._services import DashboardServiceDep, UserEmailDep
from protocol.api._services.conversions import (
    dashboard_from_domain,
    dashboards_info_from_domain,
    metric_usage_from_domain,
)

router = APIRouter(prefix="/api/v1/dashboards")


@router.get("")
async def list_dashboards(dashboard_service: DashboardServiceDep) -> Page[Dashboard]:
    dashboards = await dashboard_service.list_dashboards()
    return Page(items=[dashboard_from_domain(d) for d in dashboards], total=len(dashboards))


@router.post("")
async def create_dashboard(
    dashboard_service: DashboardServiceDep,
    user_email: UserEmailDep,
    data: Annotated[Any, Body()],
) -> Dashboard:
    created = await dashboard_service.create_dashboard(validate_post_data(data), user_email)
    return dashboard_from_domain(created)


# Static routes must be declared before the ones matching a dashboard uuid


@router.get("/info")
async def get_dashboards_info(dashboard_service: DashboardServiceDep) -> DashboardsInfo:
    return dashboards_info_from_domain(await dashboard_service.dashboards_info())


@router.post("/metrics")
async def get_dashboards_by_metric(
    dashboard_service: DashboardServiceDep,
    request: DashboardsByMetricRequest,
) -> dict[str, list[MetricUsage]]:
    usages = await dashboard_service.dashboards_with_metric_names(request.metric_names)
    return {name: [metric_usage_from_domain(u) for u in items] for name, items in usages.items()}


@router.get("/{dashboard_uuid}")
async def get_dashboard(dashboard_service: DashboardServiceDep, dashboard_uuid: str) -> Dashboard:
    return dashboard_from_domain(await dashboard_service.get_dashboard(dashboard_uuid))


@router.put("/{dashboard_uuid}")
async def update_dashboard(
    dashboard_service: DashboardServiceDep,
    user_email: UserEmailDep,
    dashboard_uuid: str,
    data: Annotated[Any, Body()],
) -> Dashboard:
    updated = await dashboard_service.update_dashboard(dashboard_uuid, parse_document(data), user_email)
    return dashboard_from_domain(updated)


@router.delete("/{dashboard_uuid}", status_code=204)
async def delete_dashboard(
    dashboard_service: DashboardServiceDep,
    user_email: UserEmailDep,
    dashboard_uuid: str,
) -> None:
    await dashboard_service.delete_dashboard(dashboard_uuid, user_email)


@router.put("/{dashboard_uuid}/lock", status_code=204)
async def lock_dashboard(dashboard_service: DashboardServiceDep, dashboard_uuid: str) -> None:
    await dashboard_service.lock_dashboard(dashboard_uuid, lock=True)


@router.put("/{dashboard_uuid}/unlock", status_code=204)
async def unlock_dashboard(dashboard_service: DashboardServiceDep, dashboard_uuid: str) -> None:
    await dashboard_service.lock_dashboard(dashboard_uuid, lock=False)
