import json
from collections.abc import Iterable, Iterator
from typing import Any

from structlog import get_logger

from core.domain.dashboard import DashboardData
from core.domain.exceptions import InvalidDocumentError

_log = get_logger(__name__)


def parse_document(raw: Any) -> DashboardData:
    """Convert a stored or posted dashboard into a document tree.

    Raises:
        InvalidDocumentError: if the value is not a JSON object or a serialized JSON object
    """
    if isinstance(raw, dict):
        return raw  # pyright: ignore [reportUnknownVariableType]
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            parsed = json.loads(raw)
        except ValueError as e:
            raise InvalidDocumentError(f"Dashboard data is not valid JSON: {e}") from e
        except RecursionError as e:
            raise InvalidDocumentError("Dashboard data is nested too deeply") from e
        if isinstance(parsed, dict):
            return parsed  # pyright: ignore [reportUnknownVariableType]
    raise InvalidDocumentError("Dashboard data must be a JSON object")


def parse_documents(rows: Iterable[tuple[str, Any]]) -> Iterator[tuple[str, DashboardData]]:
    """Parse a batch of (dashboard id, raw data) rows, skipping the ones that are not documents"""
    for dashboard_id, raw in rows:
        try:
            yield dashboard_id, parse_document(raw)
        except InvalidDocumentError as e:
            _log.warning("Skipping invalid dashboard document", dashboard_id=dashboard_id, error=str(e))
