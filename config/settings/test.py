# config/settings/test.py
from .base import *  # noqa

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

CRM_OWNER_USERNAME = "owner"
CRM_NOTIFICATIONS_ENABLED = True

LOGGING["loggers"]["crm_core"]["level"] = "WARNING"  # noqa: F405
