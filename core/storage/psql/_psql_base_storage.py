import json
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Annotated, Any

import asyncpg
from asyncpg.pool import PoolConnectionProxy
from pydantic import BaseModel, BeforeValidator, PlainSerializer

from core.domain.exceptions import DuplicateValueError


class PsqlBaseStorage:
    def __init__(self, pool: asyncpg.Pool):
        self._pool: asyncpg.Pool = pool

    def _map_value(self, v: Any) -> Any:
        match v:
            case datetime():
                return v.replace(tzinfo=None) if v.tzinfo else v
            case _:
                return v

    @asynccontextmanager
    async def _connect(self):
        async with self._pool.acquire() as conn, conn.transaction():
            yield conn

    def _validate[B: BaseModel](self, b: type[B], row: asyncpg.Record):
        return b.model_validate(dict(row))

    @classmethod
    def table(cls) -> str:
        raise NotImplementedError("Subclass must implement table method")

    async def _insert(
        self,
        conn: PoolConnectionProxy,
        row: BaseModel,
        table: str | None = None,
    ) -> int:
        dumped = row.model_dump(exclude_none=True, exclude={"id"})
        columns: list[str] = []
        values: list[Any] = []

        for k, v in dumped.items():
            columns.append(k)
            values.append(self._map_value(v))

        columns_str = ", ".join(f'"{c}"' for c in columns)
        values_str = ", ".join(f"${i + 1}" for i in range(len(values)))

        insert = f"INSERT INTO {table or self.table()} ({columns_str}) VALUES ({values_str}) RETURNING id"  # noqa: S608

        try:
            return await conn.fetchval(insert, *values)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateValueError("Duplicate object") from e


class PsqlBaseRow(BaseModel):
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def _serialize_json(value: Any):
    return json.dumps(value)


def _deserialize_json(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    return json.loads(value)


JSONValidator = BeforeValidator(_deserialize_json)
JSONSerializer = PlainSerializer(_serialize_json)


type JSONDict = Annotated[dict[str, Any], JSONValidator, JSONSerializer]
