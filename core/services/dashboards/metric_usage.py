from collections.abc import Iterable, Sequence
from typing import Any

from core.domain.dashboard import MetricUsage
from core.services.dashboards.documents import parse_documents
from core.services.dashboards.query_classifier import DataSource, builder_query_items, data_source
from core.services.dashboards.widget_walker import walk_widgets
from core.utils.dicts import get_str


def index_metric_usage(
    dashboards: Iterable[tuple[str, Any]],
    metric_names: Sequence[str],
) -> dict[str, list[MetricUsage]]:
    """Find the dashboard widgets that aggregate any of 'metric_names'.

    Args:
        dashboards: (dashboard id, raw data) pairs. The raw data can be a document or a
            serialized document. Invalid documents are skipped.
        metric_names: the metric names to look for. A name matches when it is strictly
            equal to the aggregate attribute key stripped of surrounding whitespace.

    Returns:
        a mapping from metric name to the usages found, in dashboard then widget order.
        Metrics without any usage are not included.
    """
    result: dict[str, list[MetricUsage]] = {}
    if not metric_names:
        return result

    for dashboard_id, document in parse_documents(dashboards):
        dashboard_title = get_str(document, "title") or ""
        for widget in walk_widgets(document):
            for item in builder_query_items(widget.query):
                if data_source(item) != DataSource.METRICS:
                    continue
                key = get_str(item, "aggregateAttribute", "key")
                if key is None:
                    continue
                key = key.strip()
                for metric_name in metric_names:
                    if key != metric_name:
                        continue
                    result.setdefault(metric_name, []).append(
                        MetricUsage(
                            dashboard_id=dashboard_id,
                            dashboard_title=dashboard_title,
                            widget_id=widget.id or "",
                            widget_title=widget.title,
                        ),
                    )
    return result
