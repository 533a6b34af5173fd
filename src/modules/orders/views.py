"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.  Domain
exceptions propagate to the project exception handler, which renders
the error envelope; every success answers with the invoice projection.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import BasePermission, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.core.responses import success_response
from modules.orders.dtos import OrderLineRequestDTO, PlaceOrderDTO
from modules.orders.filters import OrderFilter
from modules.orders.invoices import to_invoice
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderItemsSerializer
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.users.dtos import CallerDTO
from modules.users.permissions import IsAdmin, IsClient


class OrderViewSet(GenericViewSet):
    """ViewSet for the order lifecycle.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    serializer_class = OrderItemsSerializer
    pagination_class = StandardResultsSetPagination
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    ordering_fields = ["created_at", "total", "status"]
    ordering = ["-created_at", "-id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def get_permissions(self) -> list[BasePermission]:
        if self.action in {"create", "history"}:
            return [IsClient()]
        if self.action == "complete":
            return [IsAdmin()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        """Throttle scopes per action."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve", "history"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Order.objects.none()
        caller = CallerDTO.from_user(self.request.user)
        return self._service.list_orders(caller.id, caller.role)

    def _place_order_dto(self, request: Request) -> PlaceOrderDTO:
        serializer = OrderItemsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return PlaceOrderDTO(
            items=[
                OrderLineRequestDTO(
                    product_id=item["product_id"], quantity=item["quantity"]
                )
                for item in serializer.validated_data["items"]
            ]
        )

    def _paginated_invoices(self, queryset, message: str) -> Response:
        queryset = self.filter_queryset(queryset)
        page = self.paginate_queryset(queryset)
        data = [to_invoice(order).model_dump() for order in page]
        return self.paginator.get_paginated_response(data, message=message)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/ (CLIENT)"""
        dto = self._place_order_dto(request)
        invoice = self._service.create_order(request.user.id, dto)
        return success_response(
            invoice.model_dump(),
            message="Order created.",
            status_code=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/ replaces the lines of a PENDING order."""
        caller = CallerDTO.from_user(request.user)
        dto = self._place_order_dto(request)
        invoice = self._service.update_order(pk, caller.id, caller.role, dto)
        return success_response(invoice.model_dump(), message="Order updated.")

    @action(detail=True, methods=["patch"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/cancel/"""
        caller = CallerDTO.from_user(request.user)
        invoice = self._service.cancel_order(pk, caller.id, caller.role)
        return success_response(invoice.model_dump(), message="Order cancelled.")

    @action(detail=True, methods=["patch"])
    def complete(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/complete/ (ADMIN)"""
        caller = CallerDTO.from_user(request.user)
        invoice = self._service.complete_order(pk, caller.id, caller.role)
        return success_response(invoice.model_dump(), message="Order completed.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        ADMIN sees every order (``?user=`` narrows to one owner); CLIENT
        sees only their own.  Filters: ``status``, ``start_date``,
        ``end_date``.
        """
        return self._paginated_invoices(self.get_queryset(), "Orders retrieved.")

    @action(detail=False, methods=["get"])
    def history(self, request: Request) -> Response:
        """GET /api/v1/orders/history/ (CLIENT)"""
        return self._paginated_invoices(
            self._service.order_history(request.user.id), "Order history retrieved."
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        caller = CallerDTO.from_user(request.user)
        invoice = self._service.get_order(pk, caller.id, caller.role)
        return success_response(invoice.model_dump())
