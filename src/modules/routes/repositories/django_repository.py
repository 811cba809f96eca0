"""Django ORM implementation of the Route repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog

from modules.routes.models import Route
from modules.routes.repositories.interfaces import IRouteRepository

logger = structlog.get_logger(__name__)


class RouteDjangoRepository(IRouteRepository):
    """Concrete Route repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Route]:
        return Route.objects.filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Route]:
        queryset = Route.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: Route) -> Route:
        is_new = entity._state.adding
        entity.save()
        logger.info("route.saved", route_id=entity.id, is_new=is_new)
        return entity

    def exists(self, id: int) -> bool:
        """Single ``EXISTS`` query instead of loading the row."""
        return Route.objects.filter(id=id).exists()
