from fastapi import APIRouter, Response

from protocol._common.lifecycle import LifecycleDependencies

router = APIRouter(prefix="/probes", include_in_schema=False)


@router.head("/health")
async def health_head() -> Response:
    return Response(status_code=200)


@router.get("/health")
async def health() -> Response:
    return Response(status_code=200)


@router.get("/readiness")
async def readiness() -> Response:
    # Ready once the storage has been built during startup
    if LifecycleDependencies.shared is None:
        return Response(status_code=503)
    return Response(status_code=200)
