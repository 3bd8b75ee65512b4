"""
URL configuration for Gestão de Contratos DICA.

Estrutura de URLs:
  /api/auth/      -> Usuário autenticado e perfis (accounts)
  /api/           -> API REST do domínio (core)
  /admin/         -> Django Admin
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('accounts.urls')),
    path('api/', include('core.api_urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
