from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class Page[T](BaseModel):
    items: list[T]
    total: int


class Dashboard(BaseModel):
    id: int
    uuid: str
    slug: str = ""
    created_at: datetime | None = None
    created_by: str | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None
    data: dict[str, Any]
    is_locked: bool = Field(default=False, serialization_alias="isLocked")


class MetricUsage(BaseModel):
    dashboard_id: str
    dashboard_title: str
    widget_id: str
    widget_title: str


class DashboardsByMetricRequest(BaseModel):
    metric_names: list[str] = Field(min_length=1)


class DashboardsInfo(BaseModel):
    total_dashboards: int
    total_dashboards_with_panel_and_name: int
    dashboard_names: list[str]
    logs_based_panels: int
    traces_based_panels: int
    metric_based_panels: int
    logs_panels_with_attr_contains_op: int
    dashboards_with_logs_ch_query: int
    dashboards_with_trace_ch_query: int
    dashboard_names_with_trace_ch_query: list[str]
    queries_with_ts_v2: int
    queries_with_tag_attrs: int
