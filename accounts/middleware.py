"""
Middleware do seletor de perfil de desenvolvimento.
"""
from django.utils.deprecation import MiddlewareMixin

from .roles import dev_role_switcher_enabled, normalize_role


class DevRoleMiddleware(MiddlewareMixin):
    """
    Lê o cabeçalho X-Dev-Role e guarda o perfil em request.dev_role.

    Só tem efeito quando DEV_ROLE_SWITCHER_ENABLED está ligado; em produção
    request.dev_role é sempre None.
    """

    def process_request(self, request):
        request.dev_role = None
        if not dev_role_switcher_enabled():
            return None
        request.dev_role = normalize_role(request.headers.get('X-Dev-Role'))
        return None
