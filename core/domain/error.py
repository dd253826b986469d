from typing import Any

from pydantic import BaseModel, Field


class Error(BaseModel):
    code: str
    message: str
    status_code: int = Field(default=500, exclude=True)
    details: dict[str, Any] | None = None
