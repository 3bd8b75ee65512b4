"""
Testes dos relatórios, indicadores do dashboard, alertas e auditoria.
"""
import pytest
from datetime import date, timedelta
from django.core.exceptions import ValidationError
from django.utils import timezone

from core.models import (
    Alert,
    AlertStatus,
    AlertType,
    Allocation,
    AllocationStatus,
    AuditLog,
    Document,
    Occurrence,
    OccurrenceCategory,
)
from core.services import AlertService, AuditService, DashboardService, ReportService


class TestPrevistoRealizado:

    def test_groups_by_post_and_date(self, db, employee, employee_b, post, other_post):
        Allocation.objects.create(employee=employee, post=other_post, date=date(2024, 5, 2))
        Allocation.objects.create(employee=employee_b, post=post, date=date(2024, 5, 1),
                                  status=AllocationStatus.ABSENT)
        Allocation.objects.create(employee=employee, post=post, date=date(2024, 5, 1))

        report = ReportService.previsto_realizado('2024-05')

        assert report['period'] == {'month': '2024-05', 'start_date': '2024-05-01', 'end_date': '2024-05-31'}
        assert report['summary'] == {'previsto': 3, 'realizado': 2, 'compliance': 66.7}
        assert [p['post_code'] for p in report['by_post']] == ['P-001', 'P-002']
        assert report['by_post'][0]['compliance'] == 50.0
        assert report['by_post'][1]['compliance'] == 100.0

    def test_filters_by_post(self, db, employee, post, other_post):
        Allocation.objects.create(employee=employee, post=other_post, date=date(2024, 5, 2))
        report = ReportService.previsto_realizado('2024-05', post.id)
        assert report['summary'] == {'previsto': 0, 'realizado': 0, 'compliance': 0.0}
        assert report['by_post'] == []


class TestComplianceMetrics:

    def test_zero_when_no_data(self, db):
        metrics = DashboardService.compliance_metrics()
        assert metrics == {
            'attendance_rate': 0.0,
            'documentation_rate': 0.0,
            'active_employee_rate': 0.0,
            'occurrence_rate': 0.0,
        }

    def test_documentation_rate_counts_employees_with_documents(self, db, employee, employee_b):
        Document.objects.create(file='documents/a.pdf', original_name='a.pdf', document_type='aso',
                                employee=employee)
        Document.objects.create(file='documents/b.pdf', original_name='b.pdf', document_type='aso',
                                employee=employee)
        assert DashboardService.compliance_metrics()['documentation_rate'] == 50.0


class TestAlertService:

    def test_generate_for_reference_day(self, db, employee, post, reference_day):
        Occurrence.objects.create(date=reference_day - timedelta(days=4), description='Pendente',
                                  category=OccurrenceCategory.ISSUE)
        Occurrence.objects.create(date=reference_day - timedelta(days=1), description='Recente',
                                  category=OccurrenceCategory.ISSUE)

        result = AlertService.generate(reference_day)

        assert result['by_type'][AlertType.UNALLOCATED_EMPLOYEE] == 1
        assert result['by_type'][AlertType.UNTREATED_OCCURRENCE] == 1
        assert result['by_type'][AlertType.EXPIRED_DOCUMENT] == 0
        alert = Alert.objects.get(type=AlertType.UNALLOCATED_EMPLOYEE)
        assert alert.entity_id == employee.id
        assert '15/03/2024' in alert.message

    def test_resolved_alert_allows_new_pending(self, db, employee, user_admin, reference_day):
        AlertService.generate(reference_day)
        alert = Alert.objects.get()
        AlertService.resolve(alert, user_admin)

        assert AlertService.generate(reference_day)['created'] == 1
        assert Alert.objects.filter(status=AlertStatus.PENDING).count() == 1

    def test_resolve_twice_fails(self, db, user_admin):
        alert = Alert.objects.create(type=AlertType.EXPIRED_DOCUMENT, message='x')
        AlertService.resolve(alert, user_admin)
        with pytest.raises(ValidationError):
            AlertService.resolve(alert, user_admin)


class TestAuditService:

    def test_log_serializes_dates(self, db, user_admin):
        log = AuditService.log(user_admin, 'update', 'employee', 7,
                               before={'admission_date': date(2024, 1, 1)},
                               after={'admission_date': date(2024, 2, 1)})
        assert log.entity_id == '7'
        assert log.diff_before == {'admission_date': '2024-01-01'}

    def test_resolve_limit(self, settings):
        settings.AUDIT_LOG_DEFAULT_LIMIT = 500
        assert AuditService.resolve_limit(None) == 500
        assert AuditService.resolve_limit('20') == 20
        with pytest.raises(ValidationError):
            AuditService.resolve_limit('0')

    def test_filter_by_action_and_period(self, db, user_admin):
        now = timezone.now()
        AuditLog.objects.create(user=user_admin, action='create', entity_type='employee', timestamp=now)
        AuditLog.objects.create(action='delete', entity_type='employee', timestamp=now)
        AuditLog.objects.create(action='create', entity_type='employee', timestamp=now - timedelta(days=10))

        today = timezone.localdate().isoformat()
        logs = AuditService.filter_logs({'action': 'create', 'start_date': today, 'end_date': today})
        assert logs.count() == 1
        assert logs.get().user == user_admin
