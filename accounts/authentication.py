"""
Autenticação da API por token Bearer emitido pelo provedor de identidade.

O token é validado a cada requisição consultando o endpoint /auth/v1/user do
provedor. O usuário local (User + UserProfile) é criado ou atualizado com os
dados retornados, e o perfil vem de app_metadata.role.
"""
import logging

import requests
from django.conf import settings
from django.contrib.auth.models import User
from django.db import transaction
from rest_framework import authentication, exceptions

from .models import UserProfile
from .roles import normalize_role

logger = logging.getLogger(__name__)


class IdentityProviderClient:
    """Cliente HTTP mínimo do provedor de identidade."""

    def __init__(self, base_url=None, api_key=None, timeout=None):
        self.base_url = (base_url if base_url is not None else settings.IDENTITY_PROVIDER_URL).rstrip('/')
        self.api_key = api_key if api_key is not None else settings.IDENTITY_PROVIDER_API_KEY
        self.timeout = timeout or settings.IDENTITY_PROVIDER_TIMEOUT

    @property
    def configured(self):
        return bool(self.base_url)

    def get_user(self, token):
        """
        Retorna os dados do usuário dono do token.

        Raises:
            requests.RequestException: falha de rede ou resposta não-2xx
        """
        headers = {
            'Authorization': f'Bearer {token}',
            'Accept': 'application/json',
        }
        if self.api_key:
            headers['apikey'] = self.api_key
        response = requests.get(f'{self.base_url}/auth/v1/user', headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.json()


@transaction.atomic
def sync_user(claims):
    """
    Cria ou atualiza o usuário local a partir dos dados do provedor.

    O perfil só é alterado quando o provedor informa um perfil reconhecido;
    caso contrário o perfil local é preservado.
    """
    external_id = str(claims.get('id') or '').strip()
    if not external_id:
        raise exceptions.AuthenticationFailed('Token sem identificação de usuário')

    email = claims.get('email') or ''
    metadata = claims.get('user_metadata') or {}
    app_metadata = claims.get('app_metadata') or {}

    profile = UserProfile.objects.select_related('user').filter(external_id=external_id).first()
    if profile:
        user = profile.user
    else:
        username = (email or external_id)[:150]
        user, _ = User.objects.get_or_create(username=username, defaults={'email': email})
        profile, _ = UserProfile.objects.get_or_create(user=user)
        profile.external_id = external_id

    user.email = email or user.email
    user.first_name = (metadata.get('first_name') or user.first_name)[:150]
    user.last_name = (metadata.get('last_name') or user.last_name)[:150]
    user.save(update_fields=['email', 'first_name', 'last_name'])

    role = normalize_role(app_metadata.get('role'))
    if role:
        profile.role = role
    profile.profile_image_url = metadata.get('avatar_url') or profile.profile_image_url
    profile.save()
    # o sinal de criação deixa em cache uma cópia do perfil com o papel padrão
    user.profile = profile
    return user


class IdentityProviderTokenAuthentication(authentication.BaseAuthentication):
    """
    Autenticação DRF por cabeçalho `Authorization: Bearer <token>`.

    Sem cabeçalho, devolve None para que a autenticação por sessão seja
    tentada. authenticate_header faz o DRF responder 401 em vez de 403.
    """
    keyword = 'Bearer'
    client_class = IdentityProviderClient

    def authenticate(self, request):
        auth = authentication.get_authorization_header(request).split()
        if not auth:
            return None
        if auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise exceptions.AuthenticationFailed('Cabeçalho Authorization inválido')

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed('Token com caracteres inválidos')

        client = self.client_class()
        if not client.configured:
            logger.error('IDENTITY_PROVIDER_URL não configurado; token Bearer recusado')
            raise exceptions.AuthenticationFailed('Autenticação indisponível')

        try:
            claims = client.get_user(token)
        except requests.HTTPError:
            raise exceptions.AuthenticationFailed('Token inválido ou expirado')
        except requests.RequestException as e:
            logger.warning(f"Falha ao consultar provedor de identidade: {e}")
            raise exceptions.AuthenticationFailed('Falha na autenticação')

        user = sync_user(claims)
        if not user.is_active:
            raise exceptions.AuthenticationFailed('Usuário inativo')
        return (user, token)

    def authenticate_header(self, request):
        return self.keyword
