from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.customers.repositories import CustomerDjangoRepository
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, OrderItemDTO
from modules.orders.remaneio import RemaneioSequencer
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories import ProductDjangoRepository
from modules.routes.models import Route
from modules.routes.repositories import RouteDjangoRepository

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def user():
    return User.objects.create_user(username="backoffice", password="testpass123")


@pytest.fixture()
def auth_client(user):
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


@pytest.fixture()
def route():
    return Route.objects.create(name="Centro")


@pytest.fixture()
def customer(route):
    return Customer.objects.create(code="C001", name="Mercado Bom Preço", route=route)


@pytest.fixture()
def other_customer():
    return Customer.objects.create(code="C002", name="Padaria Central")


@pytest.fixture()
def product_a():
    return Product.objects.create(
        code="P001", name="Pão Francês", packaging="KG", base_price=Decimal("14.90")
    )


@pytest.fixture()
def product_b():
    return Product.objects.create(
        code="P002", name="Bolo de Chocolate", packaging="UN", base_price=Decimal("32.00")
    )


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.fixture()
def order_repository():
    return OrderDjangoRepository()


@pytest.fixture()
def order_service(order_repository):
    return OrderService(
        order_repository=order_repository,
        customer_repository=CustomerDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        route_repository=RouteDjangoRepository(),
    )


@pytest.fixture()
def sequencer(order_repository):
    return RemaneioSequencer(order_repository=order_repository)


@pytest.fixture()
def make_order(order_service, customer, product_a):
    """Factory creating an order through the service.

    Defaults to one line of ``product_a`` (2 x 10.00) in EM_ESPERA.
    """

    def _make(
        status=OrderStatus.WAITING,
        order_date=date(2024, 3, 1),
        order_key=None,
        items=None,
        customer_id=None,
    ):
        items = items or [
            OrderItemDTO(
                product_id=product_a.id,
                quantity=Decimal("2"),
                unit_price=Decimal("10.00"),
            )
        ]
        dto = CreateOrderDTO(
            customer_id=customer_id or customer.id,
            route_id=customer.route_id,
            order_date=order_date,
            status=status,
            order_key=order_key,
            items=items,
        )
        return order_service.create_order(dto)

    return _make
