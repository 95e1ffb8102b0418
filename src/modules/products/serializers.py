"""Product DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class UpsertProductSerializer(serializers.Serializer):
    """Validates a create-or-update request body.

    ``id`` and ``version`` are only meaningful for updates; the view
    supplies ``id`` from the URL on ``PUT``/``PATCH``.
    """

    id = serializers.UUIDField(required=False, allow_null=True)
    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    version = serializers.IntegerField(required=False, allow_null=True, min_value=0)


class PartialUpdateProductSerializer(serializers.Serializer):
    """``PATCH`` body: name/price are optional, version is not."""

    name = serializers.CharField(max_length=255, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    version = serializers.IntegerField(min_value=0)


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for catalog entries."""

    class Meta:
        model = Product
        fields = ["id", "name", "price", "version"]
        read_only_fields = fields
