import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from structlog import get_logger

import core.logs.global_setup  # setup logs globally
from core.domain.exceptions import DefaultError
from protocol._common import probes_router
from protocol._common.analytics_reporter import AnalyticsReporter, report_interval_from_env
from protocol._common.lifecycle import shutdown, startup
from protocol.api import _dashboard_router
from protocol.api._api_utils import convert_error_response

_log = get_logger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    dependencies = await startup()
    app.state.dependencies = dependencies

    if os.getenv("MIGRATE_STORAGE_ON_STARTUP") == "1":
        _log.info("Migrating storage on startup")
        await dependencies.dashboard_storage.migrate()
        _log.info("Storage migrated")

    reporter = None
    if interval := report_interval_from_env():
        reporter = AnalyticsReporter(dependencies.dashboard_service(), interval)
        reporter.start()

    yield

    if reporter:
        await reporter.stop()
    await shutdown(dependencies)


api = FastAPI(title="Dashboards", lifespan=_lifespan)

if origins := os.environ.get("ALLOWED_ORIGINS", "*"):
    api.add_middleware(
        CORSMiddleware,
        allow_origins=origins.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@api.exception_handler(DefaultError)
async def default_error_handler(request: Request, exc: DefaultError):
    if exc.capture:
        _log.error("Unhandled error", exc_info=exc, path=request.url.path)
    return convert_error_response(exc.serialized())


api.include_router(probes_router.router)
api.include_router(_dashboard_router.router)

if __name__ == "__main__":
    import uvicorn
    from dotenv import load_dotenv

    _ = load_dotenv(override=True)
    uvicorn.run(api, port=8000)
