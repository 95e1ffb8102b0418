"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderLine

DISPLAY_DATE_FORMAT = "%d/%m/%Y"

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    product_name = serializers.CharField(max_length=255)
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    customer_name = serializers.CharField(max_length=255)
    items = CreateOrderItemSerializer(many=True, allow_empty=False)


class ListOrdersQuerySerializer(serializers.Serializer):
    """Validates the optional date-time range query parameters."""

    created_start = serializers.DateTimeField(required=False)
    created_end = serializers.DateTimeField(required=False)
    cancelled_start = serializers.DateTimeField(required=False)
    cancelled_end = serializers.DateTimeField(required=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class PurchasedItemSerializer(serializers.ModelSerializer):
    """Read serializer for an order line with its snapshot price."""

    price = serializers.DecimalField(
        source="unit_price", max_digits=10, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderLine
        fields = ["product_name", "price", "quantity"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with their purchased items."""

    order_date = serializers.DateTimeField(format=DISPLAY_DATE_FORMAT, read_only=True)
    cancellation_date = serializers.DateTimeField(
        format=DISPLAY_DATE_FORMAT, read_only=True
    )
    purchased_items = PurchasedItemSerializer(source="items", many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_date",
            "customer_name",
            "purchased_items",
            "subtotal",
            "vat",
            "total",
            "status",
            "cancellation_date",
        ]
        read_only_fields = fields
