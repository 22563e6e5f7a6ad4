# backend/crm_core/iam/identity.py
from __future__ import annotations

from dataclasses import dataclass

from crm_core.iam.models import UserProfile, UserRole


@dataclass(frozen=True)
class Actor:
    """
    Caller identity handed to every core operation by the auth layer.
    """
    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def get_profile(user) -> UserProfile:
    """
    Return the user's CRM profile, creating a default one for accounts that
    predate the profile table (e.g. users loaded from fixtures).
    """
    profile = getattr(user, "crm_profile", None) if hasattr(user, "crm_profile") else None
    if profile is not None:
        return profile
    profile, _ = UserProfile.objects.get_or_create(user=user)
    return profile


def actor_for(user) -> Actor:
    profile = get_profile(user)
    return Actor(user_id=user.id, role=profile.role)
