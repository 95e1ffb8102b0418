"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions propagate to ``modules.core.error_handler``, which
turns them into structured error responses.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from config.bootstrap import build_order_service
from modules.core.filters import StableOrderingFilter
from modules.core.pagination import StandardResultsSetPagination
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO, ListOrdersQueryDTO
from modules.orders.serializers import (
    CreateOrderSerializer,
    ListOrdersQuerySerializer,
    OrderSerializer,
)


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` built by the composition root.  Does **not**
    extend ``ModelViewSet``: all ORM access goes through the
    service/repository layer.
    """

    serializer_class = OrderSerializer
    pagination_class = StandardResultsSetPagination
    filter_backends = [StableOrderingFilter]
    ordering_fields = ["order_date", "cancellation_date", "customer_name", "total"]
    ordering = ["-order_date", "-id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_order_service()

    def get_queryset(self):
        query = ListOrdersQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return self._service.list_orders(ListOrdersQueryDTO(**query.validated_data))

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        dto = CreateOrderDTO(
            customer_name=data["customer_name"],
            items=[
                CreateOrderItemDTO(
                    product_name=item["product_name"],
                    quantity=item["quantity"],
                )
                for item in data["items"]
            ],
        )
        order = self._service.create_order(dto)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Optional ``created_start``/``created_end`` and
        ``cancelled_start``/``cancelled_end`` (ISO 8601 date-times) narrow
        the listing; ``ordering``, ``page`` and ``page_size`` pass through
        to the store.
        """
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order(pk)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Cancel (dedicated action)
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post", "put"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST|PUT /api/v1/orders/{pk}/cancel/"""
        order = self._service.cancel_order(pk)
        return Response(OrderSerializer(order).data)
