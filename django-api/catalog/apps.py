from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Library"

    def ready(self) -> None:
        from catalog import signals  # noqa: F401
