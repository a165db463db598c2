from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'

    def ready(self):
        from .backend import BackendClient

        # One client per process; views only read it
        self.backend = BackendClient()
