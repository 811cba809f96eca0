"""Route domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class RouteNotFound(NotFoundError):
    """The route referenced by an order does not exist."""
