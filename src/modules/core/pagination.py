"""Page-number pagination reporting ``meta.pagination`` in the envelope."""

from __future__ import annotations

import math
from typing import Any, Dict

from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from modules.core.responses import envelope


class StandardResultsSetPagination(PageNumberPagination):
    """``?page=N&limit=M`` pagination, capped at ``MAX_PAGE_SIZE``."""

    page_size_query_param = "limit"

    def __init__(self) -> None:
        self.page_size = settings.REST_FRAMEWORK.get("PAGE_SIZE", 10)
        self.max_page_size = getattr(settings, "MAX_PAGE_SIZE", 100)

    def get_pagination_meta(self) -> Dict[str, Any]:
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return {
            "page": self.page.number,
            "limit": limit,
            "total": total,
            "totalPages": math.ceil(total / limit) if limit else 0,
        }

    def get_paginated_response(self, data: Any, message: str = "OK") -> Response:
        return Response(
            envelope(data, message, meta={"pagination": self.get_pagination_meta()})
        )
