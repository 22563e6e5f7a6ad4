# backend/crm_core/iam/auth.py

from __future__ import annotations

import logging

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger(__name__)


def jwt_cookie_names() -> tuple[str, str]:
    """
    (access, refresh) cookie names from SIMPLE_JWT.
    """
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    return jwt_cfg.get("AUTH_COOKIE", "crm_access"), jwt_cfg.get("AUTH_COOKIE_REFRESH", "crm_refresh")


class CookieOrHeaderJWTAuthentication(JWTAuthentication):
    """
    Authorization: Bearer <access> wins; otherwise the HttpOnly access cookie.

    A bad Bearer header is rejected (401). A stale cookie is treated as
    anonymous so login/refresh keep working for a browser holding an expired token.
    """

    def authenticate(self, request):
        if self.get_header(request):
            return super().authenticate(request)

        access_name, _ = jwt_cookie_names()
        raw_token = request.COOKIES.get(access_name)
        if not raw_token:
            return None

        try:
            validated_token = self.get_validated_token(raw_token)
        except InvalidToken:
            logger.debug("Ignoring invalid %s cookie", access_name)
            return None
        return self.get_user(validated_token), validated_token
