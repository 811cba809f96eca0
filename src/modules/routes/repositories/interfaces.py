"""Route repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.routes.models import Route


class IRouteRepository(IRepository["Route"]):
    """Repository contract for the Route registry."""

    @abstractmethod
    def save(self, entity: Route) -> Route:
        """Persist (create or update) a route."""
