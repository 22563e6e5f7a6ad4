# backend/crm_core/iam/tests/test_users_api.py
import datetime

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone
from rest_framework.test import APIClient

from crm_core.iam.identity import get_profile
from crm_core.iam.models import AccountStatus, UserRole

pytestmark = pytest.mark.django_db

USERS = "/api/v1/users/"


def test_non_admin_role_change_is_403_with_message(api_client, admin):
    res = api_client.post(f"{USERS}{admin.id}/role/", {"role": "user"}, format="json")
    assert res.status_code == 403
    err = res.json()["error"]
    assert err["code"] == "authorization_error"
    assert err["message"] == "Admin access required"

    assert get_profile(get_user_model().objects.get(pk=admin.id)).role == UserRole.ADMIN


def test_admin_self_change_is_403(admin_api_client, admin):
    res = admin_api_client.post(f"{USERS}{admin.id}/status/", {"status": "inactive"}, format="json")
    assert res.status_code == 403
    assert res.json()["error"]["message"] == "You cannot change your own role or status."


def test_admin_changes_other_user(admin_api_client, user):
    res = admin_api_client.post(f"{USERS}{user.id}/role/", {"role": "admin"}, format="json")
    assert res.status_code == 200
    assert res.json() == {"success": True}

    res = admin_api_client.post(f"{USERS}{user.id}/status/", {"status": "bogus"}, format="json")
    assert res.status_code == 400

    res = admin_api_client.post(f"{USERS}999/role/", {"role": "user"}, format="json")
    assert res.status_code == 404


def test_suspended_account_is_locked_out(user, admin_api_client):
    admin_api_client.post(f"{USERS}{user.id}/status/", {"status": AccountStatus.SUSPENDED}, format="json")

    c = APIClient()
    c.force_authenticate(user=get_user_model().objects.get(pk=user.id))
    res = c.get("/api/v1/enquiries/")
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "permission_denied"

    # /me stays reachable so the client can show why
    res = c.get("/api/v1/me/")
    assert res.status_code == 200
    assert res.json()["status"] == "suspended"


def test_list_most_recent_sign_in_first(api_client, user, admin):
    User = get_user_model()
    now = timezone.now()
    User.objects.filter(pk=user.id).update(last_login=now - datetime.timedelta(days=2))
    User.objects.filter(pk=admin.id).update(last_login=now)
    idle = User.objects.create_user(username="idle", password="x")

    res = api_client.get(USERS)
    assert res.status_code == 200
    body = res.json()
    assert [r["username"] for r in body["results"]] == ["partner", "lawyer", "idle"]
    assert body["results"][0]["role"] == "admin"
    assert body["results"][1]["name"] == "Layla Haddad"
    assert body["results"][2]["last_signed_in"] is None
    assert idle.crm_profile.role == UserRole.USER


def test_activity_stats(api_client, make_enquiry, user, admin):
    make_enquiry()
    make_enquiry()
    make_enquiry(actor=admin)

    res = api_client.get(f"{USERS}{user.id}/activity/")
    assert res.status_code == 200
    body = res.json()
    assert body["user_id"] == user.id
    assert body["enquiries_created"] == 2
    assert body["audit_entries"] == 2

    assert api_client.get(f"{USERS}999/activity/").status_code == 404


def test_owner_account_starts_as_admin(settings):
    settings.CRM_OWNER_USERNAME = "owner"
    owner = get_user_model().objects.create_user(username="owner", password="x")
    other = get_user_model().objects.create_user(username="someone", password="x")

    assert owner.crm_profile.role == UserRole.ADMIN
    assert other.crm_profile.role == UserRole.USER


def test_ensure_owner_command(user):
    call_command("ensure_owner", username="lawyer")
    assert get_profile(get_user_model().objects.get(pk=user.id)).role == UserRole.ADMIN

    with pytest.raises(CommandError):
        call_command("ensure_owner", username="nobody")
