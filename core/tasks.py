"""
Tarefas Celery da Gestão de Contratos.

Agendadas pelo CELERY_BEAT_SCHEDULE:
- Resumo diário por e-mail
- Aviso de vencimento de documentos
- Geração automática de alertas
"""
import logging

from celery import shared_task

from .notifications import send_daily_summary, send_document_expiration_notification
from .services import AlertService

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def send_daily_summary_task(self):
    """
    Envia o resumo diário para os assinantes.

    Returns:
        bool | None: resultado do envio; None quando não há pendências
    """
    try:
        return send_daily_summary()
    except Exception as exc:
        logger.error(f"Erro ao montar resumo diário: {exc}", exc_info=True)
        raise self.retry(exc=exc, countdown=60 * (self.request.retries + 1))


@shared_task(bind=True, max_retries=3)
def send_document_expiration_task(self, days=None):
    try:
        return send_document_expiration_notification(days)
    except Exception as exc:
        logger.error(f"Erro ao enviar aviso de vencimento de documentos: {exc}", exc_info=True)
        raise self.retry(exc=exc, countdown=60 * (self.request.retries + 1))


@shared_task
def generate_alerts_task():
    """Gera alertas do dia e retorna o total criado."""
    result = AlertService.generate()
    logger.info(f"Tarefa de alertas concluída: {result['created']} criado(s)")
    return result['created']
