from collections.abc import Callable, Iterable

from structlog.typing import FilteringBoundLogger


def safe_map[T, T2](
    iterable: Iterable[T],
    func: Callable[[T], T2],
    logger: FilteringBoundLogger | None = None,
) -> list[T2]:
    """Map 'iterable' with 'func' and return a list of results, ignoring any errors."""

    results: list[T2] = []
    for item in iterable:
        try:
            results.append(func(item))
        except Exception as e:
            if logger:
                logger.exception(str(e))

    return results
