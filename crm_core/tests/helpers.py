# backend/crm_core/tests/helpers.py
from crm_core.iam.identity import get_profile


def set_role(user, role):
    """
    Give an existing account a practice role (profiles default to "user").
    """
    profile = get_profile(user)
    profile.role = role
    profile.save(update_fields=["role", "updated_at"])
    return user
