"""
Configuração Celery para Gestão de Contratos DICA.

Executa as rotinas periódicas: resumo diário por e-mail, aviso de
vencimento de documentos e geração de alertas.
"""
import os
from celery import Celery

# Define o módulo de configuração do Django
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'contratos_central.settings')

app = Celery('contratos_central')

# Carrega configurações do Django (prefixo CELERY_)
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-descobre tarefas em apps instalados
app.autodiscover_tasks()
