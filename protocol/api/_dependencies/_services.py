from typing import Annotated

from fastapi import Depends, Header

from core.services.dashboard_service import DashboardService
from protocol.api._dependencies._lifecycle import LifecycleDependenciesDep


def dashboard_service(dependencies: LifecycleDependenciesDep) -> DashboardService:
    return dependencies.dashboard_service()


DashboardServiceDep = Annotated[DashboardService, Depends(dashboard_service)]


def user_email(x_user_email: Annotated[str | None, Header()] = None) -> str | None:
    # Sessions are resolved upstream, the authenticated user's email is forwarded as a header
    return x_user_email or None


UserEmailDep = Annotated[str | None, Depends(user_email)]
