from structlog import get_logger
from structlog.testing import capture_logs

from core.utils.iter_utils import safe_map


def _parse(value: str) -> int:
    return int(value)


class TestSafeMap:
    def test_skips_errors(self):
        assert safe_map(["1", "a", "3"], _parse) == [1, 3]

    def test_logs_errors(self):
        with capture_logs() as cap_logs:
            assert safe_map(["a"], _parse, get_logger(__name__)) == []
        assert len(cap_logs) == 1
        assert cap_logs[0]["log_level"] == "error"
