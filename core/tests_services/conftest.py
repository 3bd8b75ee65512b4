"""
Fixtures compartilhadas para os testes dos services de Gestão de Contratos.
"""
import pytest
from datetime import date
from django.contrib.auth.models import User

from core.models import Employee, EmployeeStatus, NotificationSettings, ServiceActivity, ServicePost


@pytest.fixture
def user_admin(db):
    """Cria um usuário com perfil admin_dica."""
    user = User.objects.create_user(username='admin_teste', email='admin@test.com', password='test123')
    user.profile.role = 'admin_dica'
    user.profile.save()
    return user


@pytest.fixture
def post(db):
    return ServicePost.objects.create(post_code='P-001', post_name='Portaria Principal')


@pytest.fixture
def other_post(db):
    return ServicePost.objects.create(post_code='P-002', post_name='Almoxarifado')


@pytest.fixture
def employee(db):
    return Employee.objects.create(name='Ana Souza', cpf='111.111.111-11', function_post='Vigilante')


@pytest.fixture
def employee_b(db):
    return Employee.objects.create(name='Bruno Lima', cpf='222.222.222-22', function_post='Vigilante')


@pytest.fixture
def inactive_employee(db):
    return Employee.objects.create(
        name='Carlos Inativo',
        cpf='333.333.333-33',
        function_post='Porteiro',
        status=EmployeeStatus.INACTIVE,
    )


@pytest.fixture
def activity(db, post):
    """Atividade PPU diária do posto P-001."""
    return ServiceActivity.objects.create(service_post=post, name='Ronda', ppu_unit='ronda')


@pytest.fixture
def subscriber(db):
    """Assinante ativo de todas as notificações."""
    return NotificationSettings.objects.create(
        email='gestor@dica.com.br',
        notify_daily_summary=True,
    )


@pytest.fixture
def reference_day():
    return date(2024, 3, 15)
