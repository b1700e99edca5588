"""
Service CRUD operations.

Name-based lookups for ServiceModel used when resolving route entries
to service entities.

Dependencies: sqlalchemy, jobtrack.boundary.db.models
System role: Service registry persistence
"""

from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtrack.boundary.db.CRUD.base_crud import BaseCRUD
from jobtrack.boundary.db.models.service_model import ServiceModel


class ServiceCRUD(BaseCRUD[ServiceModel]):
    """CRUD operations for ServiceModel."""

    def __init__(self) -> None:
        """Initialize ServiceCRUD with ServiceModel."""
        super().__init__(ServiceModel)

    async def get_by_name(
        self,
        session: AsyncSession,
        name: str,
    ) -> ServiceModel | None:
        """
        Retrieve a service by its unique name.

        Args:
            session: Async database session
            name: Service name as used in routes

        Returns:
            ServiceModel if registered, None otherwise
        """
        stmt = select(ServiceModel).where(ServiceModel.name == name)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_names(
        self,
        session: AsyncSession,
        names: Iterable[str],
    ) -> Sequence[ServiceModel]:
        """
        Retrieve every registered service among names in one query.

        Args:
            session: Async database session
            names: Service names; unknown names are ignored

        Returns:
            Sequence of matching ServiceModels
        """
        wanted = sorted(set(names))
        if not wanted:
            return []
        stmt = select(ServiceModel).where(ServiceModel.name.in_(wanted))
        result = await session.execute(stmt)
        return result.scalars().all()


service_crud = ServiceCRUD()
