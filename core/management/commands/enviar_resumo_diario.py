"""
Comando para enviar o resumo diário de pendências por e-mail.

Uso:
  python manage.py enviar_resumo_diario
  python manage.py enviar_resumo_diario --date=2025-02-18

Em hosts sem broker Celery, agende este comando no cron.
"""
from datetime import datetime
from django.core.management.base import BaseCommand
from django.utils import timezone

from core.notifications import send_daily_summary


class Command(BaseCommand):
    help = "Envia o resumo diário (ocorrências, postos sem alocação e documentos) aos assinantes."

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            type=str,
            default=None,
            help='Data no formato AAAA-MM-DD (padrão: hoje)',
        )

    def handle(self, *args, **options):
        date_str = options.get('date')
        if date_str:
            try:
                target_date = datetime.strptime(date_str, '%Y-%m-%d').date()
            except ValueError:
                self.stderr.write(self.style.ERROR(f'Data inválida: {date_str}. Use AAAA-MM-DD.'))
                return
        else:
            target_date = timezone.localdate()

        self.stdout.write(f'Montando resumo de {target_date.strftime("%d/%m/%Y")}...')
        sent = send_daily_summary(target_date)
        if sent is None:
            self.stdout.write('Sem pendências. Resumo não enviado.')
        elif sent:
            self.stdout.write(self.style.SUCCESS('Resumo enviado.'))
        else:
            self.stdout.write(self.style.WARNING('Resumo não enviado (e-mail não configurado ou sem destinatários).'))
