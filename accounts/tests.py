"""
Testes de perfis de acesso, seletor de perfil de desenvolvimento e
autenticação por token do provedor de identidade.
"""
from unittest import mock

import requests
from django.contrib.auth.models import User
from django.test import RequestFactory, TestCase, override_settings
from rest_framework.test import APIClient

from core.models import AuditLog
from .models import UserProfile, UserRole
from .roles import derive_permissions, get_effective_role, normalize_role


class RolesTestCase(TestCase):

    def test_derived_permissions(self):
        self.assertEqual(derive_permissions('admin_dica'), {
            'is_admin': True, 'can_edit': True, 'can_export': True, 'is_view_only': False,
        })
        self.assertEqual(derive_permissions('operator_dica'), {
            'is_admin': False, 'can_edit': True, 'can_export': False, 'is_view_only': False,
        })
        self.assertEqual(derive_permissions('fiscal_petrobras'), {
            'is_admin': False, 'can_edit': False, 'can_export': True, 'is_view_only': True,
        })
        self.assertEqual(derive_permissions('viewer'), {
            'is_admin': False, 'can_edit': False, 'can_export': False, 'is_view_only': True,
        })

    def test_unknown_role_has_no_permissions(self):
        self.assertFalse(any(derive_permissions('gerente').values()))

    def test_normalize_role_accepts_aliases(self):
        self.assertEqual(normalize_role('Fiscal'), 'fiscal_petrobras')
        self.assertEqual(normalize_role('operador'), 'operator_dica')
        self.assertEqual(normalize_role('visualizador'), 'viewer')
        self.assertEqual(normalize_role('admin_dica'), 'admin_dica')
        self.assertIsNone(normalize_role('root'))
        self.assertIsNone(normalize_role(''))

    def test_profile_created_with_default_role(self):
        user = User.objects.create_user(username='novo', password='x')
        self.assertEqual(user.profile.role, UserRole.VIEWER)
        superuser = User.objects.create_superuser(username='root', email='root@dica.com.br', password='x')
        self.assertEqual(superuser.profile.role, UserRole.ADMIN)


class DevRoleSwitcherTestCase(TestCase):

    def setUp(self):
        self.factory = RequestFactory()
        self.user = User.objects.create_user(username='visualizador', password='x')

    def _request(self, dev_role):
        request = self.factory.get('/api/auth/user/')
        request.user = self.user
        request.dev_role = dev_role
        return request

    @override_settings(DEV_ROLE_SWITCHER_ENABLED=True)
    def test_dev_role_overrides_when_enabled(self):
        self.assertEqual(get_effective_role(self._request('fiscal_petrobras')), 'fiscal_petrobras')

    @override_settings(DEV_ROLE_SWITCHER_ENABLED=False)
    def test_dev_role_ignored_in_production(self):
        self.assertEqual(get_effective_role(self._request('admin')), 'viewer')

    @override_settings(DEV_ROLE_SWITCHER_ENABLED=True)
    def test_current_user_endpoint_uses_header(self):
        client = APIClient()
        client.force_authenticate(user=self.user)
        response = client.get('/api/auth/user/', HTTP_X_DEV_ROLE='fiscal')
        self.assertEqual(response.data['role'], 'fiscal_petrobras')
        self.assertTrue(response.data['permissions']['can_export'])
        self.assertFalse(response.data['permissions']['can_edit'])


def _idp_response(claims=None, error=None):
    response = mock.Mock()
    response.json.return_value = claims or {}
    if error:
        response.raise_for_status.side_effect = error
    return response


@override_settings(IDENTITY_PROVIDER_URL='https://idp.dica.test', IDENTITY_PROVIDER_API_KEY='chave')
class TokenAuthenticationTestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.claims = {
            'id': 'b3c1e1b0-0000-4000-8000-000000000001',
            'email': 'maria@dica.com.br',
            'user_metadata': {'first_name': 'Maria', 'last_name': 'Oliveira'},
            'app_metadata': {'role': 'operador'},
        }

    @mock.patch('accounts.authentication.requests.get')
    def test_valid_token_creates_local_user(self, mock_get):
        mock_get.return_value = _idp_response(self.claims)

        response = self.client.get('/api/auth/user/', HTTP_AUTHORIZATION='Bearer token-valido')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['email'], 'maria@dica.com.br')
        self.assertEqual(response.data['role'], 'operator_dica')
        profile = UserProfile.objects.get(external_id=self.claims['id'])
        self.assertEqual(profile.user.first_name, 'Maria')

        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], 'https://idp.dica.test/auth/v1/user')
        self.assertEqual(kwargs['headers']['Authorization'], 'Bearer token-valido')
        self.assertEqual(kwargs['headers']['apikey'], 'chave')

    @mock.patch('accounts.authentication.requests.get')
    def test_new_operator_can_write_on_first_request(self, mock_get):
        mock_get.return_value = _idp_response(self.claims)

        response = self.client.post(
            '/api/service-posts/', {'post_code': 'P-100', 'post_name': 'Guarita'},
            format='json', HTTP_AUTHORIZATION='Bearer primeiro-acesso',
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(UserProfile.objects.get(external_id=self.claims['id']).role, 'operator_dica')

    @mock.patch('accounts.authentication.requests.get')
    def test_second_login_reuses_user(self, mock_get):
        mock_get.return_value = _idp_response(self.claims)
        self.client.get('/api/auth/user/', HTTP_AUTHORIZATION='Bearer a')
        self.client.get('/api/auth/user/', HTTP_AUTHORIZATION='Bearer b')
        self.assertEqual(User.objects.filter(email='maria@dica.com.br').count(), 1)

    @mock.patch('accounts.authentication.requests.get')
    def test_unknown_role_keeps_local_role(self, mock_get):
        self.claims['app_metadata'] = {'role': 'superpoderes'}
        mock_get.return_value = _idp_response(self.claims)
        response = self.client.get('/api/auth/user/', HTTP_AUTHORIZATION='Bearer a')
        self.assertEqual(response.data['role'], 'viewer')

    @mock.patch('accounts.authentication.requests.get')
    def test_rejected_token_returns_401(self, mock_get):
        mock_get.return_value = _idp_response(error=requests.HTTPError('401 Unauthorized'))
        response = self.client.get('/api/auth/user/', HTTP_AUTHORIZATION='Bearer expirado')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['message'], 'Token inválido ou expirado')

    @mock.patch('accounts.authentication.requests.get')
    def test_provider_unreachable_returns_401(self, mock_get):
        mock_get.side_effect = requests.ConnectionError('sem rede')
        response = self.client.get('/api/auth/user/', HTTP_AUTHORIZATION='Bearer a')
        self.assertEqual(response.status_code, 401)

    @override_settings(IDENTITY_PROVIDER_URL='')
    def test_provider_not_configured(self):
        response = self.client.get('/api/auth/user/', HTTP_AUTHORIZATION='Bearer a')
        self.assertEqual(response.status_code, 401)

    def test_malformed_header(self):
        response = self.client.get('/api/auth/user/', HTTP_AUTHORIZATION='Bearer')
        self.assertEqual(response.status_code, 401)


class UserRoleManagementTestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(username='admin', password='x')
        self.admin.profile.role = UserRole.ADMIN
        self.admin.profile.save()
        self.target = User.objects.create_user(username='joao', password='x')

    def test_admin_changes_role_and_is_audited(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(f'/api/users/{self.target.id}/role/', {'role': 'fiscal'}, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['role'], 'fiscal_petrobras')
        log = AuditLog.objects.get(action='change_role')
        self.assertEqual(log.diff_before, {'role': 'viewer'})
        self.assertEqual(log.diff_after, {'role': 'fiscal_petrobras'})

    def test_invalid_role(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(f'/api/users/{self.target.id}/role/', {'role': 'chefe'}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_non_admin_cannot_list_users(self):
        self.client.force_authenticate(user=self.target)
        self.assertEqual(self.client.get('/api/users/').status_code, 403)

    def test_admin_lists_users_with_roles(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get('/api/users/')
        roles = {u['username']: u['role'] for u in response.data}
        self.assertEqual(roles, {'admin': 'admin', 'joao': 'viewer'})
