from collections.abc import Iterator
from typing import Any, NamedTuple

from core.utils.dicts import get_dict, get_list, get_str


class Widget(NamedTuple):
    # None when the stored id is not a string
    id: str | None
    title: str
    query: Any


def walk_widgets(document: Any) -> Iterator[Widget]:
    """Yield the widgets of a dashboard document that carry both an id and a query.

    Elements of `widgets` that are not mappings, or that lack an id or a query, are
    skipped. Source order is preserved. Each call builds a new generator so the walk can
    be repeated on the same document.
    """
    widgets = get_list(document, "widgets")
    if not widgets:
        return
    for raw in widgets:
        widget = get_dict(raw)
        if widget is None or widget.get("id") is None or widget.get("query") is None:
            continue
        yield Widget(
            id=get_str(widget, "id"),
            title=get_str(widget, "title") or "",
            query=widget["query"],
        )


def widget_ids(document: Any) -> list[str]:
    return [w.id for w in walk_widgets(document) if w.id is not None]
