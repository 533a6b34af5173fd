"""Product API views (ADMIN only).

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
Domain exceptions propagate to the project exception handler.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.core.responses import success_response
from modules.products.dtos import (
    CreateProductDTO,
    StockAdjustmentDTO,
    UpdateProductDTO,
)
from modules.products.filters import ProductFilter
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    CreateProductSerializer,
    ProductSerializer,
    StockAdjustmentSerializer,
    UpdateProductSerializer,
)
from modules.products.services import ProductService
from modules.users.permissions import IsAdmin


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD and stock adjustment.

    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    permission_classes = [IsAdmin]
    serializer_class = ProductSerializer
    pagination_class = StandardResultsSetPagination
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    ordering_fields = ["name", "price", "stock", "entry_date", "created_at"]
    ordering = ["-created_at", "-id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def get_queryset(self):
        include_inactive = (
            self.request.query_params.get("include_inactive", "").lower() == "true"
        )
        return self._service.list_products(include_inactive=include_inactive)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        data = ProductSerializer(page, many=True).data
        return self.get_paginated_response(data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._service.get_product(pk)
        return success_response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        serializer = CreateProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = CreateProductDTO(**serializer.validated_data)

        product = self._service.create_product(dto)
        return success_response(
            ProductSerializer(product).data,
            message="Product created.",
            status_code=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/"""
        serializer = UpdateProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = UpdateProductDTO(**serializer.validated_data)

        product = self._service.update_product(pk, dto)
        return success_response(
            ProductSerializer(product).data, message="Product updated."
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/ (soft delete)"""
        self._service.delete_product(pk)
        return success_response(message="Product deactivated.")

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    def _stock_dto(self, request: Request) -> StockAdjustmentDTO:
        serializer = StockAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return StockAdjustmentDTO(**serializer.validated_data)

    @action(detail=True, methods=["patch"], url_path="add-stock")
    def add_stock(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/add-stock/"""
        dto = self._stock_dto(request)
        product = self._service.add_stock(pk, dto.quantity)
        return success_response(ProductSerializer(product).data, message="Stock added.")

    @action(detail=True, methods=["patch"], url_path="remove-stock")
    def remove_stock(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/remove-stock/"""
        dto = self._stock_dto(request)
        product = self._service.remove_stock(pk, dto.quantity)
        return success_response(
            ProductSerializer(product).data, message="Stock removed."
        )
