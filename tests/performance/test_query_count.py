"""Performance regression tests: constant query count (N+1 prevention).

Verifies that list and retrieve endpoints execute a bounded number of
SQL queries regardless of the number of records, proving that
``select_related`` / ``prefetch_related`` are correctly applied, and that
order creation checks all products in one query.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

from modules.exchanges.models import Exchange
from modules.orders.dtos import CreateOrderDTO, OrderItemDTO
from modules.products.models import Product


@pytest.fixture()
def products():
    return [
        Product.objects.create(code=f"PERF-{i:03d}", name=f"Product {i}")
        for i in range(5)
    ]


@pytest.fixture()
def orders_with_items(make_order, products):
    """Create multiple orders each with several lines and one exchange."""
    orders = []
    for _ in range(10):
        order = make_order(
            items=[
                OrderItemDTO(product_id=p.id, quantity=Decimal("1"), unit_price=Decimal("2"))
                for p in products[:3]
            ]
        )
        Exchange.objects.create(order=order, product=products[4], quantity=1)
        orders.append(order)
    return orders


class TestQueryCount:
    def test_order_list_constant_queries(
        self, auth_client, orders_with_items, django_assert_max_num_queries
    ):
        # main query + lines prefetch + exchanges prefetch
        with django_assert_max_num_queries(4):
            response = auth_client.get("/pedidos")
        assert response.status_code == 200
        assert len(response.json()) == 10

    def test_paginated_list_constant_queries(
        self, auth_client, orders_with_items, django_assert_max_num_queries
    ):
        with django_assert_max_num_queries(5):
            response = auth_client.get("/pedidos/paginado", {"limit": 10})
        assert response.status_code == 200
        assert len(response.json()["data"]) == 10

    def test_order_detail_constant_queries(
        self, auth_client, orders_with_items, django_assert_max_num_queries
    ):
        with django_assert_max_num_queries(4):
            response = auth_client.get(f"/pedidos/{orders_with_items[0].id}")
        assert response.status_code == 200

    def test_product_check_is_batched(self, order_service, customer, products):
        many_lines = [
            OrderItemDTO(product_id=p.id, quantity=Decimal("1"), unit_price=Decimal("1"))
            for p in products
        ]
        few_lines = many_lines[:1]

        def count(order_key, items):
            with CaptureQueriesContext(connection) as ctx:
                order_service.create_order(
                    CreateOrderDTO(
                        customer_id=customer.id,
                        order_date="2024-03-01",
                        order_key=order_key,
                        items=items,
                    )
                )
            return len(ctx.captured_queries)

        assert count("PERF-MANY", many_lines) == count("PERF-FEW", few_lines)
