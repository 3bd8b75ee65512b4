"""
Comando para avisar por e-mail sobre documentos vencidos e a vencer.

Uso:
  python manage.py avisar_vencimento_documentos
  python manage.py avisar_vencimento_documentos --days=15
"""
from django.conf import settings
from django.core.management.base import BaseCommand

from core.notifications import send_document_expiration_notification


class Command(BaseCommand):
    help = "Envia aviso de documentos vencidos e que vencem nos próximos dias."

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=settings.DOCUMENT_EXPIRATION_WARNING_DAYS,
            help='Janela de aviso em dias',
        )

    def handle(self, *args, **options):
        if send_document_expiration_notification(options['days']):
            self.stdout.write(self.style.SUCCESS('Aviso de vencimento enviado.'))
        else:
            self.stdout.write('Nenhum aviso enviado.')
