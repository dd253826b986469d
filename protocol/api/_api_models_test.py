import pytest
from pydantic import ValidationError

from protocol.api._api_models import Dashboard, DashboardsByMetricRequest


class TestDashboard:
    def test_serializes_lock_with_alias(self):
        dashboard = Dashboard(id=1, uuid="d1", data={"title": "Hosts"}, is_locked=True)
        dumped = dashboard.model_dump(by_alias=True)
        assert dumped["isLocked"] is True
        assert "is_locked" not in dumped


class TestDashboardsByMetricRequest:
    def test_minimal_payload(self):
        request = DashboardsByMetricRequest.model_validate({"metric_names": ["cpu_usage"]})
        assert request.metric_names == ["cpu_usage"]

    @pytest.mark.parametrize("payload", [{}, {"metric_names": []}, {"metric_names": "cpu_usage"}])
    def test_invalid_payload(self, payload: dict[str, object]):
        with pytest.raises(ValidationError):
            _ = DashboardsByMetricRequest.model_validate(payload)
