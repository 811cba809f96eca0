"""Page/limit pagination used by the paginated order listing.

Query parameters are lenient: a missing, zero or unparseable ``page`` falls
back to 1 and ``limit`` to 10; ``limit`` is clamped to ``1..100``.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence

from rest_framework.pagination import BasePagination
from rest_framework.request import Request
from rest_framework.response import Response

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _parse_clamped(raw: Optional[str], default: int, upper: Optional[int] = None) -> int:
    """Unparseable or zero values take ``default``; negatives clamp to 1."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    if value == 0:
        return default
    value = max(1, value)
    return min(upper, value) if upper else value


class PageLimitPagination(BasePagination):
    """Returns ``{data, page, limit, total, totalPages}``."""

    page_query_param = "page"
    limit_query_param = "limit"

    def paginate_queryset(
        self, queryset: Any, request: Request, view: Any = None
    ) -> List[Any]:
        self.page = _parse_clamped(
            request.query_params.get(self.page_query_param), DEFAULT_PAGE
        )
        self.limit = _parse_clamped(
            request.query_params.get(self.limit_query_param),
            DEFAULT_LIMIT,
            upper=MAX_LIMIT,
        )
        self.total = queryset.count()
        offset = (self.page - 1) * self.limit
        return list(queryset[offset : offset + self.limit])

    def get_paginated_response(self, data: Sequence[Any]) -> Response:
        return Response(
            {
                "data": data,
                "page": self.page,
                "limit": self.limit,
                "total": self.total,
                "totalPages": max(math.ceil(self.total / self.limit), 1),
            }
        )

    def get_paginated_response_schema(self, schema: dict) -> dict:
        return {
            "type": "object",
            "properties": {
                "data": schema,
                "page": {"type": "integer", "example": 1},
                "limit": {"type": "integer", "example": DEFAULT_LIMIT},
                "total": {"type": "integer", "example": 42},
                "totalPages": {"type": "integer", "example": 5},
            },
        }
