"""
Notificações por e-mail da Gestão de Contratos.

Destinatários são as NotificationSettings ativas com o tipo de notificação
habilitado. Usado pelos sinais (nova ocorrência), pela API de notificações,
pelos comandos de gerenciamento e pelas tarefas Celery.
"""
import logging
from datetime import timedelta

from django.conf import settings
from django.core.mail import EmailMessage
from django.utils import timezone

from .models import Allocation, Document, NotificationSettings, Occurrence, ServicePost

logger = logging.getLogger(__name__)

NOTIFICATION_TYPES = {
    'occurrences': 'notify_new_occurrences',
    'allocations': 'notify_missing_allocations',
    'documents': 'notify_document_expiration',
    'daily': 'notify_daily_summary',
}

SIGNATURE = """
Atenciosamente,

DICA - Gestão de Contratos
Mensagem automática. Não responda a este e-mail.
"""


def is_email_configured():
    backend = getattr(settings, 'EMAIL_BACKEND', '')
    return bool(backend) and not backend.endswith('dummy.EmailBackend') and bool(settings.DEFAULT_FROM_EMAIL)


def get_recipients(notification_type):
    """E-mails ativos que assinaram o tipo de notificação."""
    field = NOTIFICATION_TYPES.get(notification_type)
    if field is None:
        raise ValueError(f'Tipo de notificação desconhecido: {notification_type}')
    return list(
        NotificationSettings.objects
        .filter(is_active=True, **{field: True})
        .values_list('email', flat=True)
        .distinct()
    )


def send_email(recipients, subject, body):
    """
    Envia um e-mail para cada destinatário.

    Returns:
        bool: True se ao menos um envio teve sucesso
    """
    if not is_email_configured():
        logger.warning("E-mail não configurado; notificação '%s' não enviada.", subject)
        return False
    if not recipients:
        return False

    sent = 0
    for address in recipients:
        try:
            EmailMessage(
                subject=subject,
                body=body,
                from_email=settings.DEFAULT_FROM_EMAIL,
                to=[address],
            ).send(fail_silently=False)
            sent += 1
        except Exception as e:
            logger.exception("Erro ao enviar '%s' para %s: %s", subject, address, e)
    if sent:
        logger.info("Notificação '%s' enviada para %s destinatário(s).", subject, sent)
    return sent > 0


def send_new_occurrence_notification(occurrence):
    subject = f"Nova ocorrência registrada - {occurrence.get_category_display()}"
    body = f"""Uma nova ocorrência foi registrada.

Data: {occurrence.date.strftime('%d/%m/%Y')}
Categoria: {occurrence.get_category_display()}
Colaborador: {occurrence.employee.name if occurrence.employee else '-'}
Posto: {occurrence.post if occurrence.post else '-'}

Descrição:
{occurrence.description}

Acesse: {settings.SITE_URL}
{SIGNATURE}"""
    return send_email(get_recipients('occurrences'), subject, body)


def posts_without_allocation(on_date):
    allocated = Allocation.objects.filter(date=on_date).values('post_id')
    return ServicePost.objects.exclude(id__in=allocated).order_by('post_code')


def send_missing_allocation_notification(on_date=None):
    """Avisa sobre postos sem nenhuma alocação na data."""
    on_date = on_date or timezone.localdate()
    posts = list(posts_without_allocation(on_date))
    if not posts:
        return False
    lines = '\n'.join(f"- {post.post_code} - {post.post_name}" for post in posts)
    subject = f"Alerta de alocação pendente - {on_date.strftime('%d/%m/%Y')}"
    body = f"""Os postos abaixo não possuem colaboradores alocados em {on_date.strftime('%d/%m/%Y')}:

{lines}

Revise e atualize a grade de alocação.
{SIGNATURE}"""
    return send_email(get_recipients('allocations'), subject, body)


def send_document_expiration_notification(days=None):
    """Lista documentos vencidos e a vencer nos próximos dias."""
    days = days if days is not None else settings.DOCUMENT_EXPIRATION_WARNING_DAYS
    today = timezone.localdate()
    documents = list(
        Document.objects
        .filter(expiration_date__isnull=False, expiration_date__lte=today + timedelta(days=days))
        .select_related('employee', 'post')
        .order_by('expiration_date')
    )
    if not documents:
        return False

    expired = [d for d in documents if d.expiration_date < today]
    expiring = [d for d in documents if d.expiration_date >= today]

    def _format(docs):
        return '\n'.join(
            f"- {d.original_name} ({d.get_document_type_display()}) - vence em "
            f"{d.expiration_date.strftime('%d/%m/%Y')} - "
            f"{d.employee.name if d.employee else (d.post.post_name if d.post else '-')}"
            for d in docs
        ) or '- nenhum'

    subject = f"Vencimento de documentos - {len(expired)} vencido(s), {len(expiring)} a vencer"
    body = f"""Documentos vencidos:
{_format(expired)}

Documentos a vencer nos próximos {days} dias:
{_format(expiring)}

Envie versões atualizadas quando necessário.
{SIGNATURE}"""
    return send_email(get_recipients('documents'), subject, body)


def build_daily_summary(on_date=None):
    on_date = on_date or timezone.localdate()
    return {
        'date': on_date,
        'new_occurrences': Occurrence.objects.filter(date=on_date).count(),
        'missing_allocations': posts_without_allocation(on_date).count(),
        'expired_documents': Document.objects.filter(expiration_date__lt=on_date).count(),
        'expiring_documents': Document.objects.filter(
            expiration_date__gte=on_date,
            expiration_date__lte=on_date + timedelta(days=settings.DOCUMENT_EXPIRATION_WARNING_DAYS),
        ).count(),
    }


def send_daily_summary(on_date=None):
    """
    Envia o resumo diário. Não envia nada quando não há pendências.

    Returns:
        bool | None: None quando o resumo foi dispensado por não haver pendências
    """
    summary = build_daily_summary(on_date)
    if not any(value for key, value in summary.items() if key != 'date'):
        logger.info("Resumo diário de %s sem pendências; envio dispensado.", summary['date'])
        return None

    day = summary['date'].strftime('%d/%m/%Y')
    subject = f"Resumo diário - {day}"
    body = f"""Resumo diário de {day}

Novas ocorrências: {summary['new_occurrences']}
Postos sem alocação: {summary['missing_allocations']}
Documentos vencidos: {summary['expired_documents']}
Documentos a vencer ({settings.DOCUMENT_EXPIRATION_WARNING_DAYS} dias): {summary['expiring_documents']}

Acesse o sistema para revisar: {settings.SITE_URL}
{SIGNATURE}"""
    return send_email(get_recipients('daily'), subject, body)


def send_test_email(address):
    subject = 'Teste de notificação - Gestão de Contratos'
    body = f"""Este é um e-mail de teste.

Se você recebeu esta mensagem, as notificações estão configuradas corretamente.
{SIGNATURE}"""
    return send_email([address], subject, body)
