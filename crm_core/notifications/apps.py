from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "crm_core.notifications"

    def ready(self) -> None:
        from crm_core.notifications import subscribers  # noqa: F401
