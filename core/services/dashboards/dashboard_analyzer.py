from collections.abc import Iterable
from typing import Any

from core.domain.dashboard import DashboardAnalytics, DashboardsInfo
from core.services.dashboards.query_classifier import (
    classify_query,
    has_logs_ch_query,
    has_traces_ch_query,
    uses_tag_attributes,
    uses_time_series_v2,
)
from core.services.dashboards.widget_walker import walk_widgets
from core.utils.dicts import get_list, get_str

# Title given to new dashboards by the frontend, such dashboards are not considered named
PLACEHOLDER_TITLE = "Sample Title"


def dashboard_title(document: Any) -> str:
    return get_str(document, "title") or ""


def has_panel_and_name(document: Any) -> bool:
    title = dashboard_title(document)
    if not title or title == PLACEHOLDER_TITLE:
        return False
    return bool(get_list(document, "widgets"))


def analyze_dashboard(document: Any) -> DashboardAnalytics:
    analytics = DashboardAnalytics(
        title=dashboard_title(document),
        has_panel_and_name=has_panel_and_name(document),
        uses_time_series_v2=uses_time_series_v2(document),
        uses_tag_attributes=uses_tag_attributes(document),
    )

    has_raw_query = False
    for widget in walk_widgets(document):
        classification = classify_query(widget.query)
        analytics.traces_based_panels += classification.traces
        analytics.metric_based_panels += classification.metrics
        analytics.logs_based_panels += classification.logs
        analytics.logs_panels_with_attr_contains_op += classification.logs_with_attr_contains_op
        has_raw_query = has_raw_query or classification.is_raw

    # The raw query sniffs look at the whole document so they run at most once
    if has_raw_query:
        analytics.has_logs_ch_query = has_logs_ch_query(document)
        analytics.has_traces_ch_query = has_traces_ch_query(document)

    return analytics


def summarize_dashboards(documents: Iterable[Any], total_dashboards: int | None = None) -> DashboardsInfo:
    """Aggregate the analytics of a batch of documents into a global report

    Args:
        documents: the parsed dashboard documents
        total_dashboards: the number of stored dashboards, including ones that could not be
            parsed. Defaults to the number of documents.
    """
    info = DashboardsInfo()
    count = 0
    for document in documents:
        count += 1
        analytics = analyze_dashboard(document)

        if analytics.has_panel_and_name:
            info.total_dashboards_with_panel_and_name += 1
        if analytics.title:
            info.dashboard_names.append(analytics.title)

        info.logs_based_panels += analytics.logs_based_panels
        info.traces_based_panels += analytics.traces_based_panels
        info.metric_based_panels += analytics.metric_based_panels
        info.logs_panels_with_attr_contains_op += analytics.logs_panels_with_attr_contains_op

        if analytics.has_logs_ch_query:
            info.dashboards_with_logs_ch_query += 1
        if analytics.has_traces_ch_query:
            info.dashboards_with_trace_ch_query += 1
            info.dashboard_names_with_trace_ch_query.append(analytics.title)

        if analytics.uses_time_series_v2:
            info.queries_with_ts_v2 += 1
        if analytics.uses_tag_attributes:
            info.queries_with_tag_attrs += 1

    info.total_dashboards = count if total_dashboards is None else total_dashboards
    return info
