"""Success envelope for API responses.

Every successful endpoint answers with::

    {"success": true, "message": "...", "data": ..., "timestamp": "..."}

plus an optional ``meta`` block (pagination).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response


def envelope(
    data: Any = None,
    message: str = "OK",
    meta: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "success": True,
        "message": message,
        "timestamp": timezone.now().isoformat(),
    }
    if data is not None:
        body["data"] = data
    if meta is not None:
        body["meta"] = meta
    return body


def success_response(
    data: Any = None,
    message: str = "OK",
    status_code: int = status.HTTP_200_OK,
    meta: Optional[Dict[str, Any]] = None,
) -> Response:
    """Wrap *data* in the success envelope."""
    return Response(envelope(data, message, meta), status=status_code)
