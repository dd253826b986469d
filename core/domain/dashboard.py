from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

type DashboardData = dict[str, Any]


class Dashboard(BaseModel):
    id: int = 0
    uuid: str = ""
    # Computed from the title, never stored
    slug: str = Field(default="", exclude=True)
    created_at: datetime | None = None
    created_by: str | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None
    data: DashboardData = Field(default_factory=dict)
    locked: bool = False

    @property
    def title(self) -> str:
        title = self.data.get("title")
        return title if isinstance(title, str) else ""


class DashboardAnalytics(BaseModel):
    """Per dashboard summary computed from a document snapshot"""

    title: str = ""
    has_panel_and_name: bool = False

    logs_based_panels: int = 0
    traces_based_panels: int = 0
    metric_based_panels: int = 0
    logs_panels_with_attr_contains_op: int = 0

    has_logs_ch_query: bool = False
    has_traces_ch_query: bool = False

    uses_time_series_v2: bool = False
    uses_tag_attributes: bool = False


class DashboardsInfo(BaseModel):
    """Aggregated analytics across all stored dashboards"""

    total_dashboards: int = 0
    total_dashboards_with_panel_and_name: int = 0
    dashboard_names: list[str] = Field(default_factory=list)

    logs_based_panels: int = 0
    traces_based_panels: int = 0
    metric_based_panels: int = 0
    logs_panels_with_attr_contains_op: int = 0

    dashboards_with_logs_ch_query: int = 0
    dashboards_with_trace_ch_query: int = 0
    dashboard_names_with_trace_ch_query: list[str] = Field(default_factory=list)

    queries_with_ts_v2: int = 0
    queries_with_tag_attrs: int = 0


class MetricUsage(BaseModel):
    dashboard_id: str
    dashboard_title: str = ""
    widget_id: str = ""
    widget_title: str = ""
