"""
Testes da API de Gestão de Contratos

Cobre:
- Permissões por perfil (viewer, operador, fiscal, admin)
- Grade de alocação, upsert, lote, importação CSV e cópia de mês
- Relatório previsto x realizado e exportações
- Auditoria, LGPD, ocorrências, férias, alertas e notificações
"""
import shutil
import tempfile
from datetime import date, datetime, time, timedelta

from django.contrib.auth.models import User
from django.core import mail
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import UserRole
from .models import (
    ActivityExecution,
    ActivityExecutionAttachment,
    Alert,
    AlertStatus,
    AlertType,
    Allocation,
    AllocationStatus,
    AuditLog,
    Document,
    Employee,
    EmployeeStatus,
    LgpdLog,
    NotificationSettings,
    Occurrence,
    OccurrenceCategory,
    ServiceActivity,
    ServicePost,
)


def create_user(username, role):
    user = User.objects.create_user(username=username, email=f'{username}@dica.com.br', password='test123')
    user.profile.role = role
    user.profile.save()
    return user


class ApiTestCase(TestCase):
    """Base com usuários de cada perfil, dois postos e colaboradores."""

    def setUp(self):
        self.client = APIClient()
        self.admin = create_user('admin', UserRole.ADMIN_DICA)
        self.operator = create_user('operador', UserRole.OPERATOR_DICA)
        self.fiscal = create_user('fiscal', UserRole.FISCAL_PETROBRAS)
        self.viewer = create_user('visualizador', UserRole.VIEWER)

        self.post = ServicePost.objects.create(post_code='P-001', post_name='Portaria Principal')
        self.other_post = ServicePost.objects.create(post_code='P-002', post_name='Almoxarifado')
        self.ana = Employee.objects.create(name='Ana Souza', cpf='111.111.111-11', function_post='Vigilante')
        self.bruno = Employee.objects.create(name='Bruno Lima', cpf='222.222.222-22', function_post='Vigilante')
        self.carlos = Employee.objects.create(
            name='Carlos Inativo', cpf='333.333.333-33', function_post='Porteiro',
            status=EmployeeStatus.INACTIVE,
        )

    def login(self, user):
        self.client.force_authenticate(user=user)


class RolePermissionTestCase(ApiTestCase):
    """Regras de permissão aplicadas no servidor."""

    def test_unauthenticated_request_returns_401(self):
        response = self.client.get('/api/employees/')
        self.assertEqual(response.status_code, 401)

    def test_viewer_can_read_but_not_create(self):
        self.login(self.viewer)
        self.assertEqual(self.client.get('/api/employees/').status_code, 200)

        response = self.client.post('/api/employees/', {
            'name': 'Novo', 'cpf': '444.444.444-44', 'function_post': 'Vigilante',
        }, format='json')
        self.assertEqual(response.status_code, 403)
        self.assertIn('message', response.data)

    def test_viewer_user_endpoint_reports_no_edit(self):
        self.login(self.viewer)
        response = self.client.get('/api/auth/user/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['role'], 'viewer')
        self.assertFalse(response.data['permissions']['can_edit'])
        self.assertTrue(response.data['permissions']['is_view_only'])

    def test_operator_can_edit_but_not_delete(self):
        self.login(self.operator)
        response = self.client.patch(f'/api/employees/{self.ana.id}/', {'unit': 'Base Sul'}, format='json')
        self.assertEqual(response.status_code, 200)

        response = self.client.delete(f'/api/employees/{self.ana.id}/')
        self.assertEqual(response.status_code, 403)
        self.assertTrue(Employee.objects.filter(pk=self.ana.id).exists())

    def test_admin_can_delete(self):
        self.login(self.admin)
        response = self.client.delete(f'/api/employees/{self.carlos.id}/')
        self.assertEqual(response.status_code, 204)

    def test_export_requires_can_export(self):
        self.login(self.operator)
        self.assertEqual(self.client.get('/api/allocations/export/?month=2024-01').status_code, 403)

        self.login(self.fiscal)
        response = self.client.get('/api/allocations/export/?month=2024-01')
        self.assertEqual(response.status_code, 200)
        self.assertIn('text/csv', response['Content-Type'])

    def test_audit_logs_are_admin_only(self):
        self.login(self.fiscal)
        self.assertEqual(self.client.get('/api/admin/audit-logs/').status_code, 403)
        self.login(self.admin)
        self.assertEqual(self.client.get('/api/admin/audit-logs/').status_code, 200)

    @override_settings(DEV_ROLE_SWITCHER_ENABLED=True)
    def test_dev_role_header_changes_effective_permissions(self):
        self.login(self.viewer)
        response = self.client.post('/api/service-posts/', {
            'post_code': 'P-010', 'post_name': 'Recepção',
        }, format='json', HTTP_X_DEV_ROLE='operador')
        self.assertEqual(response.status_code, 201)

    @override_settings(DEV_ROLE_SWITCHER_ENABLED=False)
    def test_dev_role_header_ignored_when_disabled(self):
        self.login(self.viewer)
        response = self.client.post('/api/service-posts/', {
            'post_code': 'P-010', 'post_name': 'Recepção',
        }, format='json', HTTP_X_DEV_ROLE='admin')
        self.assertEqual(response.status_code, 403)


class AllocationGridTestCase(ApiTestCase):

    def test_grid_excludes_inactive_employees(self):
        self.login(self.viewer)
        response = self.client.get(f'/api/allocations/grid/?post={self.post.id}&month=2024-02')
        self.assertEqual(response.status_code, 200)

        names = [row['employee_name'] for row in response.data['rows']]
        self.assertEqual(names, ['Ana Souza', 'Bruno Lima'])
        self.assertEqual(len(response.data['days']), 29)

    def test_grid_cells_show_only_selected_post(self):
        Allocation.objects.create(employee=self.ana, post=self.post, date=date(2024, 2, 5),
                                  status=AllocationStatus.ABSENT)
        Allocation.objects.create(employee=self.bruno, post=self.other_post, date=date(2024, 2, 5))

        self.login(self.viewer)
        response = self.client.get(f'/api/allocations/grid/?post={self.post.id}&month=2024-02')
        rows = {row['employee_name']: row for row in response.data['rows']}

        self.assertEqual(rows['Ana Souza']['cells'][4]['status'], 'absent')
        self.assertEqual(rows['Bruno Lima']['cells'][4]['status'], '-')
        self.assertEqual(rows['Ana Souza']['cells'][0]['status'], '-')

    def test_grid_flags_weekends(self):
        self.login(self.viewer)
        response = self.client.get(f'/api/allocations/grid/?post={self.post.id}&month=2024-06')
        # 01/06/2024 é sábado
        self.assertTrue(response.data['days'][0]['is_weekend'])
        self.assertFalse(response.data['days'][2]['is_weekend'])

    def test_grid_requires_valid_month(self):
        self.login(self.viewer)
        response = self.client.get(f'/api/allocations/grid/?post={self.post.id}&month=2024-13')
        self.assertEqual(response.status_code, 400)
        response = self.client.get('/api/allocations/grid/?month=2024-01')
        self.assertEqual(response.status_code, 400)

    def test_grid_writes_lgpd_log(self):
        self.login(self.viewer)
        self.client.get(f'/api/allocations/grid/?post={self.post.id}&month=2024-02')
        self.assertTrue(LgpdLog.objects.filter(entity_type='allocation', user=self.viewer).exists())


class AllocationWriteTestCase(ApiTestCase):

    def test_create_upserts_by_employee_and_date(self):
        self.login(self.operator)
        payload = {'employee': self.ana.id, 'post': self.post.id, 'date': '2024-01-10', 'status': 'present'}
        response = self.client.post('/api/allocations/', payload, format='json')
        self.assertEqual(response.status_code, 201)

        payload.update({'post': self.other_post.id, 'status': 'absent'})
        response = self.client.post('/api/allocations/', payload, format='json')
        self.assertEqual(response.status_code, 200)

        allocations = Allocation.objects.filter(employee=self.ana, date=date(2024, 1, 10))
        self.assertEqual(allocations.count(), 1)
        self.assertEqual(allocations.get().post, self.other_post)
        self.assertEqual(allocations.get().status, 'absent')
        self.assertTrue(AuditLog.objects.filter(action='update', entity_type='allocation').exists())

    def test_update_onto_occupied_date_returns_400(self):
        Allocation.objects.create(employee=self.ana, post=self.post, date=date(2024, 3, 1))
        moved = Allocation.objects.create(employee=self.ana, post=self.post, date=date(2024, 3, 2))

        self.login(self.operator)
        response = self.client.patch(f'/api/allocations/{moved.id}/', {'date': '2024-03-01'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('date', response.data['errors'])
        moved.refresh_from_db()
        self.assertEqual(moved.date, date(2024, 3, 2))

        response = self.client.patch(f'/api/allocations/{moved.id}/', {'status': 'absent'}, format='json')
        self.assertEqual(response.status_code, 200)

    def test_batch_saves_in_one_transaction(self):
        self.login(self.operator)
        response = self.client.post('/api/allocations/batch/', {
            'post_id': self.post.id,
            'changes': [
                {'employee_id': self.ana.id, 'date': '2024-01-02', 'status': 'present'},
                {'employee_id': self.bruno.id, 'date': '2024-01-02', 'status': 'vacation'},
            ],
        }, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['saved'], 2)
        self.assertTrue(AuditLog.objects.filter(action='bulk_save').exists())

    def test_batch_with_invalid_item_rolls_back(self):
        self.login(self.operator)
        response = self.client.post('/api/allocations/batch/', {
            'post_id': self.post.id,
            'changes': [
                {'employee_id': self.ana.id, 'date': '2024-01-03', 'status': 'present'},
                {'employee_id': self.bruno.id, 'date': '2024-01-03', 'status': 'dormindo'},
            ],
        }, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('Item 2', response.data['message'])
        self.assertFalse(Allocation.objects.exists())

    def test_import_csv_reports_invalid_rows(self):
        content = (
            'EMPLOYEE_ID,Date,Status\n'
            f'{self.ana.id},2024-01-15,present\n'
            f'{self.bruno.id},2024-01-15,invalid\n'
            '99999,2024-01-16,present\n'
            f'{self.bruno.id},15/01/2024,absent\n'
        )
        upload = SimpleUploadedFile('alocacoes.csv', content.encode('utf-8'), content_type='text/csv')

        self.login(self.operator)
        response = self.client.post('/api/allocations/import-csv/', {
            'file': upload, 'post_id': self.post.id,
        }, format='multipart')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['imported'], 1)
        self.assertEqual(response.data['error_count'], 3)
        self.assertEqual([e['row'] for e in response.data['errors']], [3, 4, 5])
        self.assertEqual(Allocation.objects.count(), 1)

    def test_import_csv_rejects_missing_headers(self):
        upload = SimpleUploadedFile('alocacoes.csv', b'nome,data\nAna,2024-01-01\n', content_type='text/csv')
        self.login(self.operator)
        response = self.client.post('/api/allocations/import-csv/', {
            'file': upload, 'post_id': self.post.id,
        }, format='multipart')
        self.assertEqual(response.status_code, 400)

    def test_csv_template(self):
        self.login(self.viewer)
        response = self.client.get('/api/allocations/csv-template/')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.content.decode().startswith('employee_id,date,status'))

    def test_copy_month_mirrors_day_of_month(self):
        for day in (15, 30, 31):
            Allocation.objects.create(employee=self.ana, post=self.post, date=date(2024, 1, day))
        Allocation.objects.create(employee=self.bruno, post=self.post, date=date(2024, 2, 20))

        self.login(self.operator)
        response = self.client.post('/api/allocations/copy-month/', {
            'post_id': self.post.id, 'month': '2024-02',
        }, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['copied'], 1)
        self.assertEqual(response.data['deleted'], 1)
        self.assertEqual(response.data['skipped'], 2)
        february = Allocation.objects.filter(date__range=(date(2024, 2, 1), date(2024, 2, 29)))
        self.assertEqual(list(february.values_list('employee_id', 'date')), [(self.ana.id, date(2024, 2, 15))])

    def test_list_filters_by_date_range(self):
        Allocation.objects.create(employee=self.ana, post=self.post, date=date(2024, 1, 5))
        Allocation.objects.create(employee=self.ana, post=self.post, date=date(2024, 1, 20))
        self.login(self.viewer)
        response = self.client.get('/api/allocations/?start_date=2024-01-10&end_date=2024-01-31')
        self.assertEqual(len(response.data), 1)


class ReportTestCase(ApiTestCase):

    def test_previsto_realizado_compliance(self):
        Allocation.objects.create(employee=self.ana, post=self.post, date=date(2024, 3, 1))
        Allocation.objects.create(employee=self.bruno, post=self.post, date=date(2024, 3, 1))
        Allocation.objects.create(employee=self.ana, post=self.post, date=date(2024, 3, 2),
                                  status=AllocationStatus.ABSENT)

        self.login(self.viewer)
        response = self.client.get('/api/reports/previsto-realizado/?month=2024-03')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['summary'], {'previsto': 3, 'realizado': 2, 'compliance': 66.7})
        self.assertEqual(response.data['by_post'][0]['post_code'], 'P-001')
        self.assertEqual([d['date'] for d in response.data['by_date']], ['2024-03-01', '2024-03-02'])
        self.assertEqual(response.data['by_date'][1]['compliance'], 0.0)

    def test_compliance_rounds_ties_up(self):
        for day in range(1, 17):
            Allocation.objects.create(
                employee=self.ana, post=self.post, date=date(2024, 3, day),
                status=AllocationStatus.PRESENT if day == 1 else AllocationStatus.ABSENT,
            )
        self.login(self.viewer)
        response = self.client.get('/api/reports/previsto-realizado/?month=2024-03')
        self.assertEqual(response.data['summary'], {'previsto': 16, 'realizado': 1, 'compliance': 6.3})

    def test_previsto_realizado_without_allocations(self):
        self.login(self.viewer)
        response = self.client.get('/api/reports/previsto-realizado/?month=2024-04')
        self.assertEqual(response.data['summary']['compliance'], 0)

    def test_export_csv_and_pdf(self):
        Allocation.objects.create(employee=self.ana, post=self.post, date=date(2024, 3, 1))
        self.login(self.fiscal)

        response = self.client.get('/api/reports/previsto-realizado/export/?month=2024-03&format=csv')
        self.assertEqual(response.status_code, 200)
        self.assertIn('P-001 - Portaria Principal', response.content.decode('utf-8-sig'))

        response = self.client.get('/api/reports/previsto-realizado/export/?month=2024-03&format=pdf')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertTrue(response.content.startswith(b'%PDF'))

    def test_dashboard_analytics(self):
        today = timezone.localdate()
        Allocation.objects.create(employee=self.ana, post=self.post, date=today)
        Allocation.objects.create(employee=self.bruno, post=self.post, date=today,
                                  status=AllocationStatus.ABSENT)
        Occurrence.objects.create(date=today, description='Atraso', category=OccurrenceCategory.ISSUE)

        self.login(self.viewer)
        stats = self.client.get('/api/dashboard/stats/').data
        self.assertEqual(stats['total_employees'], 3)
        self.assertEqual(stats['active_employees'], 2)
        self.assertEqual(stats['today_present'], 1)
        self.assertEqual(stats['today_absent'], 1)

        metrics = self.client.get('/api/dashboard/analytics/').data['compliance_metrics']
        self.assertEqual(metrics['attendance_rate'], 50.0)
        self.assertEqual(metrics['active_employee_rate'], 66.7)
        self.assertEqual(metrics['documentation_rate'], 0.0)
        self.assertEqual(metrics['occurrence_rate'], 0.5)


class AuditLogTestCase(ApiTestCase):

    def test_create_and_update_write_snapshots(self):
        self.login(self.operator)
        response = self.client.post('/api/service-posts/', {
            'post_code': 'P-003', 'post_name': 'Guarita',
        }, format='json')
        post_id = response.data['id']
        self.client.patch(f'/api/service-posts/{post_id}/', {'post_name': 'Guarita Norte'}, format='json')

        created = AuditLog.objects.get(action='create', entity_type='service_post')
        self.assertEqual(created.entity_id, str(post_id))
        self.assertIsNone(created.diff_before)
        self.assertEqual(created.diff_after['post_name'], 'Guarita')

        updated = AuditLog.objects.get(action='update', entity_type='service_post')
        self.assertEqual(updated.diff_before['post_name'], 'Guarita')
        self.assertEqual(updated.diff_after['post_name'], 'Guarita Norte')
        self.assertEqual(updated.user, self.operator)

    def test_end_date_includes_whole_day(self):
        today = timezone.localdate()
        late = timezone.make_aware(datetime.combine(today, time(23, 30)))
        AuditLog.objects.create(action='update', entity_type='employee', entity_id='1', timestamp=late)
        AuditLog.objects.create(action='update', entity_type='employee', entity_id='2',
                                timestamp=late - timedelta(days=3))

        self.login(self.admin)
        response = self.client.get(f'/api/admin/audit-logs/?start_date={today}&end_date={today}')
        self.assertEqual([log['entity_id'] for log in response.data], ['1'])

    def test_limit_and_distinct_values(self):
        for i in range(3):
            AuditLog.objects.create(action='create', entity_type='employee', entity_id=str(i))
        AuditLog.objects.create(action='delete', entity_type='document', entity_id='9')

        self.login(self.admin)
        self.assertEqual(len(self.client.get('/api/admin/audit-logs/?limit=2').data), 2)
        self.assertEqual(self.client.get('/api/admin/audit-logs/entity-types/').data, ['document', 'employee'])
        actions = [a['value'] for a in self.client.get('/api/admin/audit-logs/actions/').data]
        self.assertEqual(actions, ['create', 'delete'])

    def test_filter_by_user_id(self):
        AuditLog.objects.create(user=self.operator, action='create', entity_type='employee', entity_id='1')
        AuditLog.objects.create(user=self.admin, action='create', entity_type='employee', entity_id='2')

        self.login(self.admin)
        response = self.client.get(f'/api/admin/audit-logs/?user_id={self.operator.id}')
        self.assertEqual([log['entity_id'] for log in response.data], ['1'])

    def test_non_numeric_user_id_returns_400(self):
        self.login(self.admin)
        response = self.client.get('/api/admin/audit-logs/?user_id=abc')
        self.assertEqual(response.status_code, 400)
        self.assertIn('user_id', response.data['message'])

        response = self.client.get('/api/admin/lgpd-logs/?user=abc')
        self.assertEqual(response.status_code, 400)

    def test_export_csv(self):
        AuditLog.objects.create(user=self.operator, action='create', entity_type='employee',
                                entity_id='1', diff_after={'name': 'Ana'})
        self.login(self.admin)
        response = self.client.get('/api/admin/audit-logs/export/')
        self.assertEqual(response.status_code, 200)
        content = response.content.decode('utf-8-sig')
        self.assertIn('Criação', content)
        self.assertIn('"{""name"": ""Ana""}"', content)


TEST_MEDIA_ROOT = tempfile.mkdtemp(prefix='contratos-media-')


@override_settings(MEDIA_ROOT=TEST_MEDIA_ROOT)
class OccurrenceAndDocumentTestCase(ApiTestCase):

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(TEST_MEDIA_ROOT, ignore_errors=True)

    def test_treat_occurrence(self):
        occurrence = Occurrence.objects.create(date=date(2024, 1, 5), description='Falta',
                                               category=OccurrenceCategory.ABSENCE, employee=self.ana)
        self.login(self.operator)
        response = self.client.post(f'/api/occurrences/{occurrence.id}/treat/')
        self.assertEqual(response.status_code, 200)
        occurrence.refresh_from_db()
        self.assertTrue(occurrence.treated)
        self.assertEqual(occurrence.treated_by, self.operator)

        response = self.client.post(f'/api/occurrences/{occurrence.id}/treat/')
        self.assertEqual(response.status_code, 400)

    def test_ferias_start_after_end_is_rejected(self):
        self.login(self.operator)
        response = self.client.post('/api/ferias-licencas/', {
            'employee': self.ana.id, 'type': 'ferias',
            'start_date': '2024-07-20', 'end_date': '2024-07-10', 'status': 'pendente',
        }, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('end_date', response.data['errors'])

    def test_ferias_records_creator(self):
        self.login(self.operator)
        response = self.client.post('/api/ferias-licencas/', {
            'employee': self.ana.id, 'type': 'ferias',
            'start_date': '2024-07-10', 'end_date': '2024-07-20', 'status': 'aprovado',
        }, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['created_by'], self.operator.id)

    def test_document_upload_and_new_version(self):
        self.login(self.operator)
        upload = SimpleUploadedFile('aso_ana.pdf', b'%PDF-1.4 teste', content_type='application/pdf')
        response = self.client.post('/api/documents/', {
            'file': upload, 'document_type': 'aso', 'category': 'atestados', 'employee': self.ana.id,
        }, format='multipart')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['original_name'], 'aso_ana.pdf')
        document_id = response.data['id']

        upload = SimpleUploadedFile('aso_ana_v2.pdf', b'%PDF-1.4 nova', content_type='application/pdf')
        response = self.client.post(f'/api/documents/{document_id}/new-version/', {'file': upload},
                                    format='multipart')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['version'], 2)
        self.assertEqual(response.data['previous_version'], document_id)

        versions = self.client.get(f"/api/documents/{response.data['id']}/versions/").data
        self.assertEqual([v['version'] for v in versions], [2, 1])

    def test_document_rejects_disallowed_extension(self):
        self.login(self.operator)
        upload = SimpleUploadedFile('script.exe', b'MZ', content_type='application/octet-stream')
        response = self.client.post('/api/documents/', {'file': upload, 'document_type': 'other'},
                                    format='multipart')
        self.assertEqual(response.status_code, 400)


class AlertTestCase(ApiTestCase):

    def test_generate_does_not_duplicate_pending_alerts(self):
        today = timezone.localdate()
        Allocation.objects.create(employee=self.ana, post=self.post, date=today)
        Occurrence.objects.create(date=today - timedelta(days=5), description='Antiga',
                                  category=OccurrenceCategory.ISSUE)
        Document.objects.create(file='documents/antigo.pdf', original_name='antigo.pdf',
                                document_type='aso', expiration_date=today - timedelta(days=1))

        self.login(self.operator)
        response = self.client.post('/api/alerts/generate/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['by_type'][AlertType.UNALLOCATED_EMPLOYEE], 1)
        self.assertEqual(response.data['by_type'][AlertType.EXPIRED_DOCUMENT], 1)
        self.assertEqual(response.data['by_type'][AlertType.UNTREATED_OCCURRENCE], 1)

        response = self.client.post('/api/alerts/generate/')
        self.assertEqual(response.data['created'], 0)

    def test_resolve_alert(self):
        alert = Alert.objects.create(type=AlertType.EXPIRED_DOCUMENT, message='Vencido',
                                     entity_type='document', entity_id=1)
        self.login(self.operator)
        response = self.client.post(f'/api/alerts/{alert.id}/resolve/')
        self.assertEqual(response.status_code, 200)
        alert.refresh_from_db()
        self.assertEqual(alert.status, AlertStatus.RESOLVED)
        self.assertEqual(alert.resolved_by, self.operator)

        self.assertEqual(self.client.post(f'/api/alerts/{alert.id}/resolve/').status_code, 400)


@override_settings(EMAIL_BACKEND='django.core.mail.backends.locmem.EmailBackend')
class NotificationTestCase(ApiTestCase):

    def setUp(self):
        super().setUp()
        NotificationSettings.objects.create(email='gestor@dica.com.br')
        NotificationSettings.objects.create(email='inativo@dica.com.br', is_active=False)

    def test_new_occurrence_sends_email_to_active_recipients(self):
        Occurrence.objects.create(date=date(2024, 1, 5), description='Substituição no turno',
                                  category=OccurrenceCategory.SUBSTITUTION)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['gestor@dica.com.br'])
        self.assertIn('Substituição', mail.outbox[0].subject)

    def test_status_endpoint(self):
        self.login(self.admin)
        response = self.client.get('/api/notifications/status/')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['configured'])
        self.assertEqual(response.data['recipients']['occurrences'], 1)
        self.assertEqual(response.data['recipients']['daily'], 0)

    def test_send_requires_known_type(self):
        self.login(self.admin)
        response = self.client.post('/api/notifications/send/', {'type': 'sms'}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_send_test_email(self):
        self.login(self.admin)
        response = self.client.post('/api/notifications/test/', {'email': 'teste@dica.com.br'}, format='json')
        self.assertTrue(response.data['sent'])
        self.assertEqual(mail.outbox[-1].to, ['teste@dica.com.br'])


ATTACHMENT_MEDIA_ROOT = tempfile.mkdtemp(prefix='contratos-anexos-')
PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 16


@override_settings(MEDIA_ROOT=ATTACHMENT_MEDIA_ROOT)
class ActivityExecutionAttachmentTestCase(ApiTestCase):
    """Envio, listagem, download e exclusão de anexos de execução."""

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(ATTACHMENT_MEDIA_ROOT, ignore_errors=True)

    def setUp(self):
        super().setUp()
        activity = ServiceActivity.objects.create(service_post=self.post, name='Ronda', ppu_unit='ronda')
        self.execution = ActivityExecution.objects.create(
            service_activity=activity, service_post=self.post, date=date(2024, 3, 1), quantity=2,
        )

    def _upload(self, name='foto_portaria.png', content=PNG_BYTES, content_type='image/png'):
        upload = SimpleUploadedFile(name, content, content_type=content_type)
        return self.client.post(
            f'/api/activity-executions/{self.execution.id}/attachments/', {'file': upload}, format='multipart',
        )

    def test_upload_and_list(self):
        self.login(self.operator)
        response = self._upload()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['file_name'], 'foto_portaria.png')
        self.assertEqual(response.data['mime_type'], 'image/png')
        self.assertEqual(response.data['size'], len(PNG_BYTES))

        listed = self.client.get(f'/api/activity-executions/{self.execution.id}/attachments/')
        self.assertEqual([a['file_name'] for a in listed.data], ['foto_portaria.png'])
        self.assertTrue(AuditLog.objects.filter(
            action='create', entity_type='activity_execution_attachment',
        ).exists())

    def test_upload_rejects_disallowed_file(self):
        self.login(self.operator)
        response = self._upload(name='planilha.exe', content=b'MZ', content_type='application/octet-stream')
        self.assertEqual(response.status_code, 400)
        self.assertFalse(ActivityExecutionAttachment.objects.exists())

    def test_upload_requires_file(self):
        self.login(self.operator)
        response = self.client.post(f'/api/activity-executions/{self.execution.id}/attachments/', {},
                                    format='multipart')
        self.assertEqual(response.status_code, 400)

    def test_viewer_cannot_upload(self):
        self.login(self.viewer)
        self.assertEqual(self._upload().status_code, 403)

    def test_download(self):
        self.login(self.operator)
        attachment_id = self._upload().data['id']

        self.login(self.viewer)
        response = self.client.get(f'/api/activity-execution-attachments/{attachment_id}/download/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(b''.join(response.streaming_content), PNG_BYTES)
        self.assertIn('foto_portaria.png', response['Content-Disposition'])
        response.close()

    def test_delete_removes_stored_file(self):
        self.login(self.operator)
        attachment_id = self._upload().data['id']
        stored_name = ActivityExecutionAttachment.objects.get(pk=attachment_id).file.name
        self.assertTrue(default_storage.exists(stored_name))

        response = self.client.delete(f'/api/activity-execution-attachments/{attachment_id}/')
        self.assertEqual(response.status_code, 403)

        self.login(self.admin)
        response = self.client.delete(f'/api/activity-execution-attachments/{attachment_id}/')
        self.assertEqual(response.status_code, 204)
        self.assertFalse(ActivityExecutionAttachment.objects.filter(pk=attachment_id).exists())
        self.assertFalse(default_storage.exists(stored_name))
        self.assertTrue(AuditLog.objects.filter(
            action='delete', entity_type='activity_execution_attachment', entity_id=str(attachment_id),
        ).exists())
