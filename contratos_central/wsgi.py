"""
WSGI config for Gestão de Contratos DICA.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'contratos_central.settings')

application = get_wsgi_application()
