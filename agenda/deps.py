"""Common FastAPI dependencies for consistent type annotations.

Usage:
    from agenda.deps import CurrentPrincipal, DbSession

    async def my_endpoint(db: DbSession, principal: CurrentPrincipal):
        ...
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.auth import get_current_principal, get_optional_principal
from agenda.core.authorization import Principal
from agenda.core.clock import Clock, get_clock
from agenda.database import get_db

DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
OptionalPrincipal = Annotated[Principal | None, Depends(get_optional_principal)]
ClockDep = Annotated[Clock, Depends(get_clock)]

__all__ = ["ClockDep", "CurrentPrincipal", "DbSession", "OptionalPrincipal"]
