from typing import Any

from pydantic import BaseModel
from structlog.types import EventDict

from core.domain.exceptions import DefaultError


def _serialize(value: Any) -> Any:
    match value:
        case BaseModel():
            return value.model_dump(exclude_none=True)
        case DefaultError():
            return value.serialized().model_dump(exclude_none=True)
        case _:
            return value


def domain_processor(logger: Any, log_method: str, event_dict: EventDict) -> EventDict:
    """Render pydantic models and domain errors as plain dicts"""
    for k, v in event_dict.items():
        if k == "exc_info":
            continue
        if isinstance(v, (list, set, tuple)):
            event_dict[k] = [_serialize(item) for item in v]  # pyright: ignore [reportUnknownVariableType]
        else:
            event_dict[k] = _serialize(v)
    return event_dict
