"""Query dialect and data source classification for dashboard panels.

Builder queries are classified structurally. Raw clickhouse queries are free text in a
backend specific dialect, so they are detected by searching the serialized document for
table name fingerprints. The sniffing helpers are document level signals: a document
matches or it does not, regardless of how many panels reference the tables.
"""

from enum import StrEnum
from typing import Any, NamedTuple

from core.utils.dicts import contains_any, get_dict, get_list, get_str


class QueryType(StrEnum):
    BUILDER = "builder"
    CLICKHOUSE_SQL = "clickhouse_sql"


class DataSource(StrEnum):
    TRACES = "traces"
    METRICS = "metrics"
    LOGS = "logs"


FLAGGED_FILTER_OPS = frozenset(("contains", "ncontains", "like", "nlike"))
# Attribute that is allowed to use the flagged operators
RESERVED_FILTER_KEY = "body"

LOGS_CH_FINGERPRINTS = (
    "signoz_logs.distributed_logs",
    "signoz_logs.logs",
)
TRACES_CH_FINGERPRINTS = (
    "signoz_traces.distributed_signoz_index_v2",
    "signoz_traces.distributed_signoz_spans",
    "signoz_traces.distributed_signoz_error_index_v2",
)
TIME_SERIES_V2_FINGERPRINTS = ("time_series_v2",)
TAG_ATTRIBUTES_FINGERPRINTS = ("span_attributes", "tag_attributes")


class QueryClassification(NamedTuple):
    query_type: QueryType | None = None
    traces: int = 0
    metrics: int = 0
    logs: int = 0
    logs_with_attr_contains_op: int = 0

    @property
    def is_raw(self) -> bool:
        return self.query_type == QueryType.CLICKHOUSE_SQL


def query_type(query_spec: Any) -> QueryType | None:
    raw = get_str(query_spec, "queryType")
    if raw is None:
        return None
    try:
        return QueryType(raw)
    except ValueError:
        return None


def builder_query_items(query_spec: Any) -> list[dict[str, Any]]:
    """The mapping items of `builder.queryData`, other elements are dropped"""
    items = get_list(query_spec, "builder", "queryData")
    if not items:
        return []
    return [item for raw in items if (item := get_dict(raw)) is not None]


def data_source(query_item: Any) -> DataSource | None:
    raw = get_str(query_item, "dataSource")
    if raw is None:
        return None
    try:
        return DataSource(raw)
    except ValueError:
        return None


def count_flagged_log_filters(query_item: Any) -> int:
    """Number of filter items using a substring operator on an attribute other than the body"""
    items = get_list(query_item, "filters", "items")
    if not items:
        return 0

    count = 0
    for item in items:
        if get_str(item, "op") not in FLAGGED_FILTER_OPS:
            continue
        key = get_str(item, "key", "key")
        # A filter without a readable attribute name is not flagged
        if key is not None and key != RESERVED_FILTER_KEY:
            count += 1
    return count


def is_raw_query(query_spec: Any) -> bool:
    return query_type(query_spec) == QueryType.CLICKHOUSE_SQL and _has_value(query_spec, "clickhouse_sql")


def _has_value(query_spec: Any, key: str) -> bool:
    spec = get_dict(query_spec)
    return spec is not None and spec.get(key) is not None


def classify_query(query_spec: Any) -> QueryClassification:
    match query_type(query_spec):
        case QueryType.BUILDER:
            return _classify_builder(query_spec)
        case QueryType.CLICKHOUSE_SQL if is_raw_query(query_spec):
            return QueryClassification(query_type=QueryType.CLICKHOUSE_SQL)
        case _:
            return QueryClassification()


def _classify_builder(query_spec: Any) -> QueryClassification:
    traces = metrics = logs = flagged = 0
    for item in builder_query_items(query_spec):
        match data_source(item):
            case DataSource.TRACES:
                traces += 1
            case DataSource.METRICS:
                metrics += 1
            case DataSource.LOGS:
                logs += 1
                flagged += count_flagged_log_filters(item)
            case None:
                pass
    return QueryClassification(
        query_type=QueryType.BUILDER,
        traces=traces,
        metrics=metrics,
        logs=logs,
        logs_with_attr_contains_op=flagged,
    )


def has_logs_ch_query(document: Any) -> bool:
    return contains_any(document, *LOGS_CH_FINGERPRINTS)


def has_traces_ch_query(document: Any) -> bool:
    return contains_any(document, *TRACES_CH_FINGERPRINTS)


def uses_time_series_v2(document: Any) -> bool:
    return contains_any(document, *TIME_SERIES_V2_FINGERPRINTS)


def uses_tag_attributes(document: Any) -> bool:
    return contains_any(document, *TAG_ATTRIBUTES_FINGERPRINTS)
