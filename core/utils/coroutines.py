from contextlib import AbstractContextManager
from types import TracebackType
from typing import override

from structlog.typing import FilteringBoundLogger


class capture_errors(AbstractContextManager[None]):  # noqa: N801
    """Log and suppress any exception raised in the block"""

    def __init__(self, logger: FilteringBoundLogger, msg: str):
        super().__init__()
        self._logger = logger
        self._msg = msg

    def __enter__(self):
        pass

    # Returning a bool here makes pyright understand that the context manager can suppress exceptions
    @override
    def __exit__(
        self,
        exctype: type[BaseException] | None,
        excinst: BaseException | None,
        exctb: TracebackType | None,
    ) -> bool:
        if exctype is None or not issubclass(exctype, Exception):
            return False

        self._logger.exception(self._msg, exc_info=excinst)
        return True
