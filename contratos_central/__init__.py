# Gestão de Contratos DICA

# Importa o app Celery para que seja carregado quando o Django iniciar
from .celery import app as celery_app

__all__ = ('celery_app',)
