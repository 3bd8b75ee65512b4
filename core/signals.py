"""
Sinais do app core.
"""
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Occurrence
from .notifications import send_new_occurrence_notification

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Occurrence)
def notify_new_occurrence(sender, instance, created, **kwargs):
    """Envia e-mail aos assinantes quando uma ocorrência é registrada."""
    if not created:
        return
    try:
        send_new_occurrence_notification(instance)
    except Exception as e:
        logger.error(f"Erro ao notificar ocorrência {instance.pk}: {e}", exc_info=True)
