"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The DRF exception handler translates them into HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class CustomerNotFound(NotFoundError):
    """The customer referenced by an order does not exist."""
