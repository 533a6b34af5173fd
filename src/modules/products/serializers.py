"""Product DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.products.constants import MAX_STOCK
from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    class Meta:
        model = Product
        fields = [
            "id",
            "lot_code",
            "name",
            "description",
            "price",
            "stock",
            "is_active",
            "entry_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CreateProductSerializer(serializers.Serializer):
    lot_code = serializers.CharField(
        min_length=3, max_length=50, required=False, allow_null=True
    )
    name = serializers.CharField(min_length=3, max_length=100)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01")
    )
    stock = serializers.IntegerField(min_value=0, max_value=MAX_STOCK)
    description = serializers.CharField(
        max_length=500, required=False, allow_blank=True, default=""
    )
    entry_date = serializers.DateField(required=False, allow_null=True)


class UpdateProductSerializer(serializers.Serializer):
    lot_code = serializers.CharField(min_length=3, max_length=50, required=False)
    name = serializers.CharField(min_length=3, max_length=100, required=False)
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.01"),
        required=False,
    )
    description = serializers.CharField(
        max_length=500, required=False, allow_blank=True
    )
    entry_date = serializers.DateField(required=False)
    is_active = serializers.BooleanField(required=False)


class StockAdjustmentSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_STOCK)
