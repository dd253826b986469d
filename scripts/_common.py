import os
from contextlib import asynccontextmanager
from enum import StrEnum
from typing import Annotated

import asyncpg
import typer

PSQL_DSN_VAR = "PSQL_DSN"

LOCAL_PREFIX = "LOCAL_"
STAGING_PREFIX = "STAGING_"
PROD_PREFIX = "PROD_"


class EnvName(StrEnum):
    STAGING = "staging"
    PROD = "prod"
    LOCAL = "local"


EnvNameOption = Annotated[EnvName, typer.Option()]


def prefixed_var(env_name: EnvName, var: str):
    if env_name == "prod":
        return os.environ[f"{PROD_PREFIX}{var}"]
    if env_name == "staging":
        return os.environ[f"{STAGING_PREFIX}{var}"]
    if env_name == "local":
        return os.environ.get(f"{LOCAL_PREFIX}{var}", os.environ[var])
    raise ValueError(f"Invalid env name: {env_name}")


@asynccontextmanager
async def get_psql_conn(env_name: EnvName):
    dsn = prefixed_var(env_name, var=PSQL_DSN_VAR)
    conn = await asyncpg.connect(dsn)
    try:
        yield conn
    finally:
        await conn.close()
