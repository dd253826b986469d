from collections.abc import Iterable
from typing import Any

from structlog import get_logger

from core.domain.exceptions import PanelDeletionError
from core.services.dashboards.widget_walker import widget_ids

_log = get_logger(__name__)

# Maximum number of panels a single update is allowed to remove
MAX_REMOVED_WIDGETS = 1


def removed_widget_ids(existing_ids: Iterable[str], new_ids: Iterable[str]) -> list[str]:
    """Ids from 'existing_ids' that are absent from 'new_ids', deduplicated in first seen order"""
    kept = set(new_ids)
    seen: set[str] = set()
    removed: list[str] = []
    for widget_id in existing_ids:
        if widget_id in kept or widget_id in seen:
            continue
        seen.add(widget_id)
        removed.append(widget_id)
    return removed


def check_panel_deletion(existing_document: Any, new_document: Any) -> list[str]:
    """Enforce that an update removes at most one panel.

    A panel whose id was regenerated counts as removed, so edits that regenerate
    several ids at once are rejected as well.

    Returns:
        the removed widget ids, when the update is allowed

    Raises:
        PanelDeletionError: when more than one widget would be removed
    """
    removed = removed_widget_ids(widget_ids(existing_document), widget_ids(new_document))
    if len(removed) > MAX_REMOVED_WIDGETS:
        _log.info("Rejecting dashboard update removing multiple panels", removed_ids=removed)
        raise PanelDeletionError(removed)
    return removed
