from __future__ import annotations

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class DefaultPagination(PageNumberPagination):
    page_size = 50
    page_size_query_param = "page_size"
    max_page_size = 500


def paginate(request, queryset, serializer_class, *, paginator: PageNumberPagination | None = None) -> Response:
    """
    Shared pagination helper to enforce a stable contract:
      { count, next, previous, results }
    """
    p = paginator or DefaultPagination()
    page = p.paginate_queryset(queryset, request)
    if page is not None:
        ser = serializer_class(page, many=True)
        return p.get_paginated_response(ser.data)

    ser = serializer_class(queryset, many=True)
    return Response(ser.data)


def clamp_window(limit, offset, *, default_limit: int = 100, max_limit: int = 500) -> tuple[int, int]:
    """
    Normalise limit/offset query input for windowed (non-page) listings.
    """
    try:
        limit_n = int(limit) if limit not in (None, "") else default_limit
    except (TypeError, ValueError):
        limit_n = default_limit
    try:
        offset_n = int(offset) if offset not in (None, "") else 0
    except (TypeError, ValueError):
        offset_n = 0
    return max(1, min(limit_n, max_limit)), max(0, offset_n)
