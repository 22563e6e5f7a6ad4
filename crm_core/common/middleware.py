# backend/crm_core/common/middleware.py
from __future__ import annotations

from django.utils.deprecation import MiddlewareMixin

from crm_core.common.api.exceptions import ensure_request_id


class RequestIdMiddleware(MiddlewareMixin):
    """
    Tags every request with a request_id (client-supplied X-Request-Id wins)
    and echoes it back, so error envelopes and logs can be correlated.
    """

    HEADER = "HTTP_X_REQUEST_ID"

    def process_request(self, request):
        incoming = (request.META.get(self.HEADER) or "").strip()
        if incoming and len(incoming) <= 64:
            request.request_id = incoming
        ensure_request_id(request)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid and not response.has_header("X-Request-Id"):
            response["X-Request-Id"] = rid
        return response
