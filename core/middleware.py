"""
Middleware de cabeçalhos de segurança e controle de cache da API.
"""
from django.utils.deprecation import MiddlewareMixin


class SecurityHeadersMiddleware(MiddlewareMixin):
    """
    Adiciona Content-Security-Policy restritiva e desabilita cache das
    respostas da API, que carregam dados pessoais.
    """

    API_CSP = "default-src 'none'; frame-ancestors 'none';"
    ADMIN_CSP = (
        "default-src 'self'; "
        "img-src 'self' data:; "
        "style-src 'self' 'unsafe-inline'; "
        "frame-ancestors 'self';"
    )

    def process_response(self, request, response):
        if 'X-XSS-Protection' in response:
            del response['X-XSS-Protection']

        if 'Content-Security-Policy' not in response:
            if request.path.startswith('/api/'):
                response['Content-Security-Policy'] = self.API_CSP
            else:
                response['Content-Security-Policy'] = self.ADMIN_CSP

        response.setdefault('X-Content-Type-Options', 'nosniff')

        if request.path.startswith('/static/'):
            response['Cache-Control'] = 'public, max-age=31536000, immutable'
        elif request.path.startswith('/api/'):
            response['Cache-Control'] = 'no-cache, no-store, must-revalidate'
            response['Pragma'] = 'no-cache'
            response['Expires'] = '0'

        return response
