"""
Constantes centralizadas para os perfis de acesso do sistema.

Cada usuário tem UM perfil (UserProfile.role). As permissões efetivas são
derivadas do perfil:

  ┌──────────────────┬──────────┬──────────┬────────────┬──────────────┐
  │ PERFIL           │ is_admin │ can_edit │ can_export │ is_view_only │
  ├──────────────────┼──────────┼──────────┼────────────┼──────────────┤
  │ admin            │    x     │    x     │     x      │              │
  │ admin_dica       │    x     │    x     │     x      │              │
  │ operator_dica    │          │    x     │            │              │
  │ fiscal_petrobras │          │          │     x      │      x       │
  │ viewer           │          │          │            │      x       │
  └──────────────────┴──────────┴──────────┴────────────┴──────────────┘

Uso:
    from accounts.roles import PERFIS, get_effective_role, derive_permissions

    if get_effective_role(request) in PERFIS.EDITORES:
        ...
"""
from django.conf import settings

from .models import UserRole


class _Perfis:
    """
    Container para os nomes de perfis do sistema.
    Evita typos e centraliza alterações.
    """

    ADMIN = UserRole.ADMIN.value
    ADMIN_DICA = UserRole.ADMIN_DICA.value
    OPERATOR_DICA = UserRole.OPERATOR_DICA.value
    FISCAL_PETROBRAS = UserRole.FISCAL_PETROBRAS.value
    VIEWER = UserRole.VIEWER.value

    @property
    def ADMINISTRADORES(self):
        """Perfis com acesso total (is_admin)."""
        return [self.ADMIN, self.ADMIN_DICA]

    @property
    def EDITORES(self):
        """Perfis que podem criar e alterar registros (can_edit)."""
        return self.ADMINISTRADORES + [self.OPERATOR_DICA]

    @property
    def EXPORTADORES(self):
        """Perfis que podem exportar dados e baixar documentos (can_export)."""
        return self.ADMINISTRADORES + [self.FISCAL_PETROBRAS]

    @property
    def SOMENTE_LEITURA(self):
        """Perfis sem nenhuma ação de escrita na interface (is_view_only)."""
        return [self.VIEWER, self.FISCAL_PETROBRAS]

    @property
    def TODOS(self):
        return [
            self.ADMIN, self.ADMIN_DICA, self.OPERATOR_DICA,
            self.FISCAL_PETROBRAS, self.VIEWER,
        ]


# Instância singleton para importar diretamente
PERFIS = _Perfis()

# Apelidos aceitos no cabeçalho X-Dev-Role e em app_metadata.role
DEV_ROLE_MAP = {
    'admin': PERFIS.ADMIN,
    'fiscal': PERFIS.FISCAL_PETROBRAS,
    'operador': PERFIS.OPERATOR_DICA,
    'visualizador': PERFIS.VIEWER,
}


def normalize_role(value):
    """
    Converte um nome de perfil (canônico ou apelido) no valor canônico.

    Returns:
        str | None: perfil canônico, ou None se o valor não for reconhecido
    """
    if not value:
        return None
    value = str(value).strip().lower()
    if value in PERFIS.TODOS:
        return value
    return DEV_ROLE_MAP.get(value)


def derive_permissions(role):
    """
    Deriva as quatro flags de permissão a partir do perfil.

    Perfis desconhecidos não recebem nenhuma permissão de escrita.
    """
    is_admin = role in PERFIS.ADMINISTRADORES
    return {
        'is_admin': is_admin,
        'can_edit': is_admin or role == PERFIS.OPERATOR_DICA,
        'can_export': is_admin or role == PERFIS.FISCAL_PETROBRAS,
        'is_view_only': role in PERFIS.SOMENTE_LEITURA,
    }


def get_user_role(user):
    """Perfil persistido do usuário. Superusers são sempre admin."""
    if not user or not user.is_authenticated:
        return None
    if user.is_superuser:
        return PERFIS.ADMIN
    profile = getattr(user, 'profile', None)
    if profile is None:
        return PERFIS.VIEWER
    return profile.role


def dev_role_switcher_enabled():
    return getattr(settings, 'DEV_ROLE_SWITCHER_ENABLED', False)


def get_effective_role(request):
    """
    Perfil efetivo da requisição.

    Em desenvolvimento o cabeçalho X-Dev-Role (lido por DevRoleMiddleware)
    substitui o perfil persistido. Em produção ele é ignorado.
    """
    user = getattr(request, 'user', None)
    if not user or not user.is_authenticated:
        return None
    dev_role = getattr(request, 'dev_role', None)
    if dev_role and dev_role_switcher_enabled():
        return dev_role
    return get_user_role(user)


def get_request_permissions(request):
    return derive_permissions(get_effective_role(request))
