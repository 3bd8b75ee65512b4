"""
Accounts app - Usuários e Perfis de Acesso

Modelos:
- User: padrão Django (django.contrib.auth.models.User).
- UserProfile: perfil de acesso (role) e vínculo com o provedor de identidade.
"""

from django.db import models
from django.conf import settings


class UserRole(models.TextChoices):
    """Perfis de acesso do sistema."""
    ADMIN = 'admin', 'Administrador'
    ADMIN_DICA = 'admin_dica', 'Administrador DICA'
    OPERATOR_DICA = 'operator_dica', 'Operador DICA'
    FISCAL_PETROBRAS = 'fiscal_petrobras', 'Fiscal Petrobras'
    VIEWER = 'viewer', 'Visualizador'


class UserProfile(models.Model):
    """
    Perfil de acesso do usuário.

    Criado automaticamente para cada User (ver accounts.signals). Usuários
    autenticados pelo provedor de identidade guardam o identificador externo
    em external_id e recebem o perfil declarado em app_metadata.role.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile',
        verbose_name='Usuário',
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.VIEWER,
        verbose_name='Perfil',
        help_text='Define o que o usuário pode visualizar, editar ou exportar',
    )
    external_id = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
        verbose_name='ID Externo',
        help_text='Identificador do usuário no provedor de identidade',
    )
    profile_image_url = models.URLField(
        max_length=500,
        blank=True,
        verbose_name='Foto',
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Perfil de usuário'
        verbose_name_plural = 'Perfis de usuário'
        ordering = ['user__username']
        indexes = [
            models.Index(fields=['role'], name='accounts_profile_role_idx'),
        ]

    def __str__(self):
        return f"{self.user.username} ({self.get_role_display()})"
