"""Remaneio (delivery sequence) batch reordering.

The remaneio is the ordered list of orders in CONFERIR.  A reorder request
names some of those orders; they move to the front in the given order and
every other CONFERIR order keeps its relative position behind them.

Business rules enforced:
- Ids are deduplicated and validated before the database is touched.
- Every requested id must be an order currently in CONFERIR; otherwise the
  whole batch is rejected with the offending ids and nothing is written.
- Positions are rewritten as ``1..N`` in a single UPDATE inside the same
  transaction that read (and locked) the current sequence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence

import structlog
from django.db import transaction

from modules.core.exceptions import DomainValidationError
from modules.core.normalization import normalize_id_list
from modules.orders.exceptions import InvalidRemaneioSequence

if TYPE_CHECKING:
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

EMPTY_BATCH_MESSAGE = "pedido_ids é obrigatório e deve ter ao menos 1 item."
INVALID_BATCH_MESSAGE = "pedido_ids inválido."


class RemaneioSequencer:
    """Rewrites ``ordem_remaneio`` for the CONFERIR orders."""

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    def reorder(self, order_ids: Sequence[Any], user_id: Optional[int] = None) -> int:
        """Put ``order_ids`` first and return the size of the final sequence.

        Raises:
            DomainValidationError: empty batch, or no usable id in it.
            InvalidRemaneioSequence: some ids are not orders in CONFERIR.
        """
        if not order_ids:
            raise DomainValidationError(EMPTY_BATCH_MESSAGE, attr="pedido_ids")
        requested = normalize_id_list(order_ids)
        if not requested:
            raise DomainValidationError(INVALID_BATCH_MESSAGE, attr="pedido_ids")

        log = logger.bind(user_id=user_id, requested=requested)

        with transaction.atomic():
            current = self._order_repo.awaiting_review_sequence()
            current_ids = set(current)
            invalid = [order_id for order_id in requested if order_id not in current_ids]
            if invalid:
                log.warning("remaneio.rejected", invalid_ids=invalid)
                raise InvalidRemaneioSequence(invalid)

            requested_ids = set(requested)
            final_sequence = requested + [
                order_id for order_id in current if order_id not in requested_ids
            ]
            self._order_repo.assign_remaneio_positions(final_sequence, user_id)

        log.info("remaneio.reordered", total=len(final_sequence))
        return len(final_sequence)
