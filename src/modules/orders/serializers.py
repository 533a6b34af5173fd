"""Order DRF serializers for API input.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.  Responses are rendered from the
invoice projection (``modules.orders.invoices``), not from serializers.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.constants import MAX_STOCK


class OrderLineRequestSerializer(serializers.Serializer):
    """Validates a single requested line."""

    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_STOCK)


class OrderItemsSerializer(serializers.Serializer):
    """Validates the line list for order creation and update."""

    items = OrderLineRequestSerializer(many=True, allow_empty=False)
