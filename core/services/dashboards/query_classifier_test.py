from typing import Any

import pytest

from core.services.dashboards.query_classifier import (
    QueryClassification,
    QueryType,
    classify_query,
    count_flagged_log_filters,
    has_logs_ch_query,
    has_traces_ch_query,
    is_raw_query,
    uses_tag_attributes,
    uses_time_series_v2,
)


def _builder(*items: Any) -> dict[str, Any]:
    return {"queryType": "builder", "builder": {"queryData": list(items)}}


def _log_filter(op: Any, key: Any) -> dict[str, Any]:
    return {"op": op, "key": {"key": key, "dataType": "string", "type": "tag"}}


class TestClassifyQuery:
    def test_builder_by_data_source(self):
        query = _builder(
            {"dataSource": "traces"},
            {"dataSource": "metrics", "aggregateAttribute": {"key": "cpu"}},
            {"dataSource": "metrics"},
            {"dataSource": "logs"},
            {"dataSource": "events"},
            {"dataSource": None},
            "not an item",
        )
        assert classify_query(query) == QueryClassification(
            query_type=QueryType.BUILDER,
            traces=1,
            metrics=2,
            logs=1,
        )

    def test_builder_logs_with_flagged_filter(self):
        query = _builder({"dataSource": "logs", "filters": {"items": [_log_filter("contains", "message")]}})
        classification = classify_query(query)
        assert classification.logs == 1
        assert classification.logs_with_attr_contains_op == 1

    def test_builder_flagged_filters_ignored_for_other_sources(self):
        query = _builder({"dataSource": "traces", "filters": {"items": [_log_filter("contains", "message")]}})
        assert classify_query(query).logs_with_attr_contains_op == 0

    def test_raw_query(self):
        query = {"queryType": "clickhouse_sql", "clickhouse_sql": [{"query": "SELECT 1"}]}
        classification = classify_query(query)
        assert classification == QueryClassification(query_type=QueryType.CLICKHOUSE_SQL)
        assert classification.is_raw
        assert is_raw_query(query)

    def test_raw_query_without_body(self):
        query = {"queryType": "clickhouse_sql"}
        assert not classify_query(query).is_raw
        assert not is_raw_query(query)

    @pytest.mark.parametrize(
        "query",
        [
            pytest.param({"queryType": "promql", "promql": [{"query": "up"}]}, id="other dialect"),
            pytest.param({}, id="no query type"),
            pytest.param({"queryType": 1}, id="query type not a string"),
            pytest.param("builder", id="not a mapping"),
            pytest.param(None, id="null"),
            pytest.param({"queryType": "builder"}, id="builder without body"),
            pytest.param({"queryType": "builder", "builder": {"queryData": {"dataSource": "logs"}}}, id="query data not a list"),
            pytest.param({"queryType": "builder", "builder": []}, id="builder not a mapping"),
        ],
    )
    def test_malformed_queries_count_nothing(self, query: Any):
        classification = classify_query(query)
        assert (classification.traces, classification.metrics, classification.logs) == (0, 0, 0)
        assert not classification.is_raw


class TestCountFlaggedLogFilters:
    @pytest.mark.parametrize("op", ["contains", "ncontains", "like", "nlike"])
    def test_flagged_ops(self, op: str):
        assert count_flagged_log_filters({"filters": {"items": [_log_filter(op, "message")]}}) == 1

    def test_body_is_not_flagged(self):
        assert count_flagged_log_filters({"filters": {"items": [_log_filter("contains", "body")]}}) == 0

    def test_other_ops_not_flagged(self):
        items = [_log_filter("=", "message"), _log_filter("in", "message"), _log_filter("CONTAINS", "message")]
        assert count_flagged_log_filters({"filters": {"items": items}}) == 0

    def test_multiple_items(self):
        items = [
            _log_filter("contains", "message"),
            _log_filter("like", "service.name"),
            _log_filter("nlike", "body"),
            _log_filter("contains", None),
            {"op": "contains", "key": "message"},
            {"op": "contains"},
            "garbage",
        ]
        assert count_flagged_log_filters({"filters": {"items": items}}) == 2

    @pytest.mark.parametrize(
        "item",
        [
            pytest.param({}, id="no filters"),
            pytest.param({"filters": None}, id="null filters"),
            pytest.param({"filters": {"items": "contains"}}, id="items not a list"),
            pytest.param({"filters": [_log_filter("contains", "message")]}, id="filters is a list"),
        ],
    )
    def test_malformed(self, item: dict[str, Any]):
        assert count_flagged_log_filters(item) == 0


class TestDocumentSniffs:
    @pytest.mark.parametrize(
        "table",
        ["signoz_logs.distributed_logs", "signoz_logs.logs"],
    )
    def test_logs_tables(self, table: str):
        assert has_logs_ch_query({"widgets": [{"query": {"clickhouse_sql": [{"query": f"SELECT * FROM {table}"}]}}]})

    def test_logs_table_anywhere(self):
        assert has_logs_ch_query({"description": "migrated from signoz_logs.logs"})

    @pytest.mark.parametrize(
        "table",
        [
            "signoz_traces.distributed_signoz_index_v2",
            "signoz_traces.distributed_signoz_spans",
            "signoz_traces.distributed_signoz_error_index_v2",
        ],
    )
    def test_traces_tables(self, table: str):
        assert has_traces_ch_query({"widgets": [{"query": {"clickhouse_sql": [{"query": f"SELECT * FROM {table}"}]}}]})

    def test_no_match(self):
        document = {"widgets": [{"query": {"clickhouse_sql": [{"query": "SELECT * FROM signoz_metrics.samples_v4"}]}}]}
        assert not has_logs_ch_query(document)
        assert not has_traces_ch_query(document)

    def test_migration_fingerprints(self):
        assert uses_time_series_v2({"q": "SELECT * FROM signoz_metrics.time_series_v2"})
        assert not uses_time_series_v2({"q": "SELECT * FROM signoz_metrics.time_series_v4"})
        assert uses_tag_attributes({"q": "span_attributes['http.method']"})
        assert uses_tag_attributes({"q": "tag_attributes"})
        assert not uses_tag_attributes({"q": "attributes_string"})
