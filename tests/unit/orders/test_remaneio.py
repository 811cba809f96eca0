"""Unit tests for RemaneioSequencer.

Covers:
- Deterministic reordering: requested ids first, others keep relative order.
- Orders without a position trail the positioned ones, newest first.
- Rejection of ids outside CONFERIR, with the store left untouched.
- Input validation before any database access.
"""

from __future__ import annotations

from datetime import date

import pytest

from modules.core.exceptions import DomainValidationError
from modules.orders.constants import OrderStatus
from modules.orders.exceptions import InvalidRemaneioSequence
from modules.orders.models import Order

pytestmark = pytest.mark.unit


def _positions(orders):
    return [Order.objects.get(id=o.id).remaneio_position for o in orders]


@pytest.fixture()
def review_orders(make_order):
    """Four CONFERIR orders at positions 1..4."""
    return [make_order(status=OrderStatus.AWAITING_REVIEW) for _ in range(4)]


class TestReorder:
    def test_requested_ids_move_to_front(self, sequencer, review_orders):
        first, second, third, fourth = review_orders

        total = sequencer.reorder([third.id, fourth.id])

        assert total == 4
        assert _positions([third, fourth, first, second]) == [1, 2, 3, 4]

    def test_full_permutation(self, sequencer, review_orders):
        reversed_orders = list(reversed(review_orders))
        sequencer.reorder([o.id for o in reversed_orders])
        assert _positions(reversed_orders) == [1, 2, 3, 4]

    def test_is_deterministic(self, sequencer, review_orders):
        ids = [review_orders[2].id, review_orders[0].id]
        sequencer.reorder(ids)
        once = _positions(review_orders)
        sequencer.reorder(ids)
        assert _positions(review_orders) == once

    def test_duplicates_and_string_ids_are_normalized(self, sequencer, review_orders):
        target = review_orders[3]
        total = sequencer.reorder([str(target.id), target.id, float(target.id)])
        assert total == 4
        assert _positions([target]) == [1]

    def test_closes_gaps_in_positions(self, sequencer, review_orders):
        Order.objects.filter(id=review_orders[1].id).update(remaneio_position=10)
        sequencer.reorder([review_orders[0].id])
        assert sorted(_positions(review_orders)) == [1, 2, 3, 4]

    def test_unpositioned_orders_follow_positioned_newest_first(
        self, sequencer, make_order
    ):
        days = (1, 5, 2, 1, 1)
        a, b, c, d, e = [
            make_order(status=OrderStatus.AWAITING_REVIEW, order_date=date(2024, 3, day))
            for day in days
        ]
        Order.objects.filter(id__in=[b.id, d.id, e.id]).update(remaneio_position=None)

        sequencer.reorder([a.id])

        assert _positions([a, c, b, e, d]) == [1, 2, 3, 4, 5]

    def test_other_statuses_are_untouched(self, sequencer, review_orders, make_order):
        waiting = make_order()
        sequencer.reorder([review_orders[1].id])
        waiting.refresh_from_db()
        assert waiting.remaneio_position is None
        assert waiting.status == OrderStatus.WAITING

    def test_records_updater(self, sequencer, review_orders, user):
        sequencer.reorder([review_orders[0].id], user_id=user.id)
        assert all(
            Order.objects.get(id=o.id).updated_by_id == user.id for o in review_orders
        )


class TestReorderRejection:
    def test_order_not_in_conferir_rejects_whole_batch(
        self, sequencer, review_orders, make_order
    ):
        waiting = make_order()
        before = _positions(review_orders)

        with pytest.raises(InvalidRemaneioSequence) as excinfo:
            sequencer.reorder([review_orders[3].id, waiting.id])

        assert excinfo.value.invalid_ids == [waiting.id]
        assert _positions(review_orders) == before

    def test_unknown_ids_are_reported(self, sequencer, review_orders):
        with pytest.raises(InvalidRemaneioSequence) as excinfo:
            sequencer.reorder([999998, review_orders[0].id, 999999])
        assert excinfo.value.invalid_ids == [999998, 999999]

    def test_empty_batch(self, sequencer):
        with pytest.raises(DomainValidationError, match="ao menos 1 item"):
            sequencer.reorder([])

    def test_no_usable_ids(self, sequencer):
        with pytest.raises(DomainValidationError, match="pedido_ids inválido"):
            sequencer.reorder([True, -1, "abc", 0])
