"""Order API views.

Exposes ``OrderService`` and ``RemaneioSequencer`` via HTTP using a DRF
ViewSet.  Domain exceptions propagate to
``modules.core.exceptions.api_exception_handler``, which renders them in
the standard error envelope; the view never swallows exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.dtos import build_dto
from modules.core.pagination import PageLimitPagination
from modules.customers.repositories import CustomerDjangoRepository
from modules.exchanges.repositories import ExchangeDjangoRepository
from modules.exchanges.serializers import ExchangeSerializer
from modules.exchanges.services import ExchangeService
from modules.orders.dtos import CreateOrderDTO, ReplaceOrderDTO, StatusTransitionDTO
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.remaneio import RemaneioSequencer
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderRowSerializer,
    OrderSerializer,
    RemaneioOrderSerializer,
    ReplaceOrderSerializer,
    StatusTransitionSerializer,
)
from modules.orders.services import OrderService
from modules.products.repositories import ProductDjangoRepository
from modules.routes.repositories import RouteDjangoRepository


class OrderViewSet(GenericViewSet):
    """ViewSet for ``/pedidos``.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]
    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        exchange_repository = ExchangeDjangoRepository()
        self._order_repo = OrderDjangoRepository(exchange_repository=exchange_repository)
        self._service = OrderService(
            order_repository=self._order_repo,
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            route_repository=RouteDjangoRepository(),
        )
        self._sequencer = RemaneioSequencer(order_repository=self._order_repo)
        self._exchange_service = ExchangeService(
            exchange_repository=exchange_repository,
            order_repository=self._order_repo,
            product_repository=ProductDjangoRepository(),
        )

    def get_queryset(self):
        return self._service.list_orders()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /pedidos

        Filters: ``data``, ``rota_id``, ``cliente_id``, ``status``, ``q``.
        Not paginated; every matching order is returned with its lines.
        """
        queryset = self.filter_queryset(self.get_queryset())
        serializer = OrderSerializer(queryset, many=True)
        return Response(serializer.data)

    @action(detail=False, methods=["get"])
    def paginado(self, request: Request) -> Response:
        """GET /pedidos/paginado?page=&limit=

        Same filters and ordering as the plain listing.
        """
        queryset = self.filter_queryset(self.get_queryset())
        paginator = PageLimitPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = OrderSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /pedidos/{pk}"""
        order = self._service.get_order(int(pk))
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Create / Replace
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /pedidos"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = build_dto(CreateOrderDTO, serializer.validated_data)
        order = self._service.create_order(dto, user_id=request.user.id)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /pedidos/{pk}

        Only the supplied fields change; ``itens`` replaces every line.
        """
        serializer = ReplaceOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = build_dto(ReplaceOrderDTO, serializer.validated_data)
        order = self._service.replace_order(int(pk), dto, user_id=request.user.id)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status / Remaneio
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="status")
    def transition_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /pedidos/{pk}/status"""
        serializer = StatusTransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = build_dto(StatusTransitionDTO, serializer.validated_data)
        order = self._service.transition_status(int(pk), dto, user_id=request.user.id)
        return Response(OrderRowSerializer(order).data)

    @action(detail=False, methods=["patch"], url_path="remaneio/ordem")
    def reorder_remaneio(self, request: Request) -> Response:
        """PATCH /pedidos/remaneio/ordem  ``{"pedido_ids": [...]}``"""
        serializer = RemaneioOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        total = self._sequencer.reorder(
            serializer.validated_data["pedido_ids"], user_id=request.user.id
        )
        return Response({"ok": True, "total": total})

    # ------------------------------------------------------------------
    # Exchanges of an order
    # ------------------------------------------------------------------

    @action(detail=True, methods=["get"])
    def trocas(self, request: Request, pk: str | None = None) -> Response:
        """GET /pedidos/{pk}/trocas, newest first."""
        exchanges = self._exchange_service.list_for_order(int(pk))
        return Response(ExchangeSerializer(exchanges, many=True).data)
