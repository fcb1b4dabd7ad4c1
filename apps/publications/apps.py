from django.apps import AppConfig


class PublicationsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.publications'
    label = 'publications'

    def ready(self):
        """Import signals when app is ready."""
        import apps.publications.signals  # noqa
