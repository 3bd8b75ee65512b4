"""
Sinais do app accounts.
Garante que todo usuário tenha um UserProfile.
"""
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import UserProfile, UserRole


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created, **kwargs):
    """Cria o perfil ao criar o usuário. Superusers começam como admin."""
    if created:
        role = UserRole.ADMIN if instance.is_superuser else UserRole.VIEWER
        UserProfile.objects.get_or_create(user=instance, defaults={'role': role})
