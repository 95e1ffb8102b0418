"""Product API views.

Exposes the ``CatalogService`` via HTTP using a DRF ViewSet.
Domain exceptions propagate to ``modules.core.error_handler``, which
turns them into structured error responses.

Reads require an authenticated user; writes require a staff user.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import BasePermission, IsAdminUser, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from config.bootstrap import build_catalog_service
from modules.products.dtos import UpsertProductDTO
from modules.products.serializers import (
    PartialUpdateProductSerializer,
    ProductSerializer,
    UpsertProductSerializer,
)

WRITE_ACTIONS = {"create", "update", "partial_update"}


class ProductViewSet(GenericViewSet):
    """ViewSet for catalog operations.

    Does **not** extend ``ModelViewSet``: every ORM access goes through
    the service/repository layer so that cache invalidation and version
    checks cannot be bypassed.
    """

    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_catalog_service()

    def get_permissions(self) -> list[BasePermission]:
        if self.action in WRITE_ACTIONS:
            return [IsAuthenticated(), IsAdminUser()]
        return [IsAuthenticated()]

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/ (served from the catalog cache)."""
        products = self._service.list_products()
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._service.get_product(pk)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/

        Creates a product, or updates one when the body carries ``id``
        (and the ``version`` last read).
        """
        serializer = UpsertProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = UpsertProductDTO(**serializer.validated_data)
        product = self._service.upsert_product(dto)

        code = status.HTTP_201_CREATED if dto.is_new else status.HTTP_200_OK
        return Response(ProductSerializer(product).data, status=code)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/ (``version`` required)."""
        serializer = UpsertProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = {**serializer.validated_data, "id": pk}
        product = self._service.upsert_product(UpsertProductDTO(**data))
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/

        Missing ``name``/``price`` keep their current values.  The write
        is still conditioned on ``version``.
        """
        serializer = PartialUpdateProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        current = self._service.get_product(pk)
        data = serializer.validated_data
        dto = UpsertProductDTO(
            id=current.id,
            name=data.get("name", current.name),
            price=data.get("price", current.price),
            version=data["version"],
        )
        product = self._service.upsert_product(dto)
        return Response(ProductSerializer(product).data)
