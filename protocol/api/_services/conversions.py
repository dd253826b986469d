from core.domain.dashboard import Dashboard as DomainDashboard
from core.domain.dashboard import DashboardsInfo as DomainDashboardsInfo
from core.domain.dashboard import MetricUsage as DomainMetricUsage
from protocol.api._api_models import Dashboard, DashboardsInfo, MetricUsage


def dashboard_from_domain(dashboard: DomainDashboard) -> Dashboard:
    return Dashboard(
        id=dashboard.id,
        uuid=dashboard.uuid,
        slug=dashboard.slug,
        created_at=dashboard.created_at,
        created_by=dashboard.created_by,
        updated_at=dashboard.updated_at,
        updated_by=dashboard.updated_by,
        data=dashboard.data,
        is_locked=dashboard.locked,
    )


def metric_usage_from_domain(usage: DomainMetricUsage) -> MetricUsage:
    return MetricUsage(
        dashboard_id=usage.dashboard_id,
        dashboard_title=usage.dashboard_title,
        widget_id=usage.widget_id,
        widget_title=usage.widget_title,
    )


def dashboards_info_from_domain(info: DomainDashboardsInfo) -> DashboardsInfo:
    return DashboardsInfo.model_validate(info.model_dump())
