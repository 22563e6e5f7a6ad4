from drf_spectacular.extensions import OpenApiAuthenticationExtension

from crm_core.iam.auth import jwt_cookie_names


class CookieOrHeaderJWTAuthenticationScheme(OpenApiAuthenticationExtension):
    """
    Documents both ways in: Bearer header (usable from Swagger "Authorize")
    and the HttpOnly access cookie the browser client relies on.
    """
    target_class = "crm_core.iam.auth.CookieOrHeaderJWTAuthentication"
    name = ["BearerJWT", "CookieJWT"]

    def get_security_definition(self, auto_schema):
        access_cookie, _ = jwt_cookie_names()
        return [
            {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
            },
            {
                "type": "apiKey",
                "in": "cookie",
                "name": access_cookie,
                "description": "Set by POST /api/v1/auth/login/.",
            },
        ]
