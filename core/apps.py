from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
    verbose_name = 'Gestão de Contratos'

    def ready(self):
        """Registra os sinais quando a app é carregada."""
        import core.signals  # noqa
