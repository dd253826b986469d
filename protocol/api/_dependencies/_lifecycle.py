from typing import Annotated

from fastapi import Depends, Request

from core.domain.exceptions import InternalError
from protocol._common.lifecycle import LifecycleDependencies


def lifecycle_dependencies(request: Request) -> LifecycleDependencies:
    # Set by the lifespan, the shared instance is used when the app is mounted elsewhere
    dependencies = getattr(request.app.state, "dependencies", None) or LifecycleDependencies.shared
    if dependencies is None:
        raise InternalError("Lifecycle dependencies are not initialized")
    return dependencies


LifecycleDependenciesDep = Annotated[LifecycleDependencies, Depends(lifecycle_dependencies)]
