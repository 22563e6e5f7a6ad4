# backend/crm_core/iam/tests/test_auth_and_me.py
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

pytestmark = pytest.mark.django_db


def test_login_sets_cookies_and_cookie_auth_works(user):
    c = APIClient()
    res = c.post("/api/v1/auth/login/", {"username": "lawyer", "password": "testpass"}, format="json")
    assert res.status_code == 200
    assert "crm_access" in res.cookies
    assert "crm_refresh" in res.cookies
    assert res.cookies["crm_access"]["httponly"]

    me = c.get("/api/v1/me/")
    assert me.status_code == 200
    body = me.json()
    assert body["username"] == "lawyer"
    assert body["role"] == "user"
    assert body["last_signed_in"] is not None


def test_bad_credentials(user):
    res = APIClient().post("/api/v1/auth/login/", {"username": "lawyer", "password": "nope"}, format="json")
    assert res.status_code == 401
    assert "error" in res.json()


def test_bearer_header_auth(user):
    access = str(RefreshToken.for_user(user).access_token)
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

    res = c.get("/api/v1/me/")
    assert res.status_code == 200
    assert res.json()["email"] == "layla@example.com"


def test_refresh_and_logout(user):
    c = APIClient()
    c.post("/api/v1/auth/login/", {"username": "lawyer", "password": "testpass"}, format="json")

    res = c.post("/api/v1/auth/refresh/")
    assert res.status_code == 200
    assert "crm_access" in res.cookies

    res = c.post("/api/v1/auth/logout/")
    assert res.status_code == 200
    assert res.cookies["crm_access"].value == ""


def test_update_own_preferences(api_client, user):
    res = api_client.patch("/api/v1/me/", {"notification_method": "both"}, format="json")
    assert res.status_code == 200
    assert res.json()["notification_method"] == "both"

    user = get_user_model().objects.get(pk=user.id)
    assert user.crm_profile.wants_email
    assert user.crm_profile.wants_in_app

    res = api_client.patch("/api/v1/me/", {"email_notifications": "sometimes"}, format="json")
    assert res.status_code == 400


def test_stale_cookie_does_not_block_login(user):
    c = APIClient()
    c.cookies["crm_access"] = "not-a-jwt"

    assert c.get("/api/v1/me/").status_code == 401

    res = c.post("/api/v1/auth/login/", {"username": "lawyer", "password": "testpass"}, format="json")
    assert res.status_code == 200
    assert c.get("/api/v1/me/").status_code == 200


def test_bad_bearer_header_is_rejected(user):
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
    res = c.get("/api/v1/me/")
    assert res.status_code == 401
