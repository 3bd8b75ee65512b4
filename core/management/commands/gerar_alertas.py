"""
Comando para gerar os alertas automáticos do dia.

Uso:
  python manage.py gerar_alertas
  python manage.py gerar_alertas --date=2025-02-18
"""
from datetime import datetime
from django.core.management.base import BaseCommand, CommandError

from core.services import AlertService


class Command(BaseCommand):
    help = "Gera alertas de colaboradores sem alocação, documentos vencidos e ocorrências não tratadas."

    def add_arguments(self, parser):
        parser.add_argument('--date', type=str, default=None, help='Data no formato AAAA-MM-DD (padrão: hoje)')

    def handle(self, *args, **options):
        target_date = None
        if options.get('date'):
            try:
                target_date = datetime.strptime(options['date'], '%Y-%m-%d').date()
            except ValueError:
                raise CommandError(f"Data inválida: {options['date']}. Use AAAA-MM-DD.")

        result = AlertService.generate(target_date)
        for alert_type, count in result['by_type'].items():
            self.stdout.write(f'  {alert_type}: {count}')
        self.stdout.write(self.style.SUCCESS(f"Alertas criados: {result['created']}"))
