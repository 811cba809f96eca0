"""Boundary normalization for request values.

Every function here is total: malformed input yields ``None`` (or an empty
list) instead of an exception, and the caller decides how to report it.
Nothing in this module touches the database.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Iterable, List, Optional

from modules.orders.constants import LEGACY_STATUS_ALIASES, OrderStatus

PROFILES = ("admin", "backoffice", "vendedor", "motorista")

_WHITESPACE_RUN = re.compile(r"\s+")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DIGITS = re.compile(r"^\d+$")


def normalize_status(value: Any) -> Optional[OrderStatus]:
    """Parse a status token.

    Trims, uppercases and turns inner whitespace into ``_`` so that
    ``" em espera "`` becomes ``EM_ESPERA``.  The legacy ``OK`` token maps to
    ``EFETIVADO``.
    """
    if value is None:
        return None
    token = _WHITESPACE_RUN.sub("_", str(value).strip().upper())
    token = LEGACY_STATUS_ALIASES.get(token, token)
    if token in OrderStatus.values:
        return OrderStatus(token)
    return None


def normalize_date(value: Any) -> Optional[date]:
    """Accept only ``YYYY-MM-DD`` calendar dates, with no time component."""
    if isinstance(value, datetime):
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    if not _ISO_DATE.match(candidate):
        return None
    try:
        return date.fromisoformat(candidate)
    except ValueError:
        return None


def normalize_profile(value: Any) -> Optional[str]:
    if value is None:
        return None
    profile = str(value).strip().lower()
    return profile if profile in PROFILES else None


def normalize_image_url(value: Any) -> Optional[str]:
    if value is None:
        return None
    url = str(value).strip()
    return url or None


def normalize_id_list(values: Iterable[Any]) -> List[int]:
    """Keep the positive integer ids, deduplicated, in first-seen order.

    Integral floats (``3.0``) and digit strings (``"3"``) are accepted;
    booleans, fractions, negatives and anything else are dropped.
    """
    ids: List[int] = []
    seen = set()
    for raw in values:
        parsed = _parse_id(raw)
        if parsed is None or parsed in seen:
            continue
        seen.add(parsed)
        ids.append(parsed)
    return ids


def _parse_id(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        number = raw
    elif isinstance(raw, float) and raw.is_integer():
        number = int(raw)
    elif isinstance(raw, str) and _DIGITS.match(raw.strip()):
        number = int(raw.strip())
    else:
        return None
    return number if number > 0 else None
