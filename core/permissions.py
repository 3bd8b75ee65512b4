"""
Permissões da API baseadas no perfil de acesso.

O perfil efetivo da requisição vem de accounts.roles.get_effective_role,
que respeita o seletor X-Dev-Role apenas em desenvolvimento.
"""
from rest_framework import permissions

from accounts.roles import get_request_permissions


class RoleBasedPermission(permissions.BasePermission):
    """
    Permissão padrão dos cadastros.

    Regras:
    - Leitura (GET, HEAD, OPTIONS): qualquer usuário autenticado
    - Criação e alteração (POST, PUT, PATCH): perfis com can_edit
    - Exclusão (DELETE): apenas administradores
    """
    message = 'Seu perfil não permite esta operação.'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        perms = get_request_permissions(request)
        if request.method == 'DELETE':
            return perms['is_admin']
        return perms['can_edit']


class CanExportData(permissions.BasePermission):
    """Exportações e download de documentos: administradores e fiscais."""
    message = 'Seu perfil não permite exportar dados.'

    def has_permission(self, request, view):
        return (
            request.user and
            request.user.is_authenticated and
            get_request_permissions(request)['can_export']
        )


class IsAdminRole(permissions.BasePermission):
    """Logs de auditoria, logs LGPD, usuários e configurações de notificação."""
    message = 'Apenas administradores podem acessar este recurso.'

    def has_permission(self, request, view):
        return (
            request.user and
            request.user.is_authenticated and
            get_request_permissions(request)['is_admin']
        )
