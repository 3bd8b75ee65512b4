"""
Testes das execuções de atividades (PPU).
"""
import pytest
from datetime import date
from django.core.exceptions import ValidationError

from core.models import ActivityExecution, ServiceActivity
from core.services import ActivityExecutionService


class TestBulkUpsert:

    def test_upsert_by_activity_post_and_date(self, db, activity, post, employee):
        item = {'service_activity_id': activity.id, 'service_post_id': post.id, 'date': '2024-03-01'}
        ActivityExecutionService.bulk_upsert([dict(item, quantity=2)])
        ActivityExecutionService.bulk_upsert([dict(item, quantity=5, employee_id=employee.id)])

        execution = ActivityExecution.objects.get()
        assert execution.quantity == 5
        assert execution.employee == employee

    def test_quantity_defaults_to_one(self, db, activity, post):
        executions = ActivityExecutionService.bulk_upsert([
            {'service_activity_id': activity.id, 'service_post_id': post.id, 'date': '2024-03-01'},
        ])
        assert executions[0].quantity == 1

    def test_negative_quantity_rolls_back(self, db, activity, post):
        with pytest.raises(ValidationError):
            ActivityExecutionService.bulk_upsert([
                {'service_activity_id': activity.id, 'service_post_id': post.id, 'date': '2024-03-01'},
                {'service_activity_id': activity.id, 'service_post_id': post.id, 'date': '2024-03-02',
                 'quantity': -1},
            ])
        assert ActivityExecution.objects.count() == 0

    def test_activity_must_belong_to_post(self, db, activity, other_post):
        with pytest.raises(ValidationError) as excinfo:
            ActivityExecutionService.bulk_upsert([
                {'service_activity_id': activity.id, 'service_post_id': other_post.id, 'date': '2024-03-01'},
            ])
        assert 'não pertence' in excinfo.value.messages[0]


class TestReport:

    def test_summary_by_post_and_activity(self, db, activity, post, other_post):
        cleaning = ServiceActivity.objects.create(service_post=other_post, name='Limpeza', ppu_unit='m²')
        ActivityExecution.objects.create(service_activity=activity, service_post=post,
                                         date=date(2024, 3, 1), quantity=3)
        ActivityExecution.objects.create(service_activity=activity, service_post=post,
                                         date=date(2024, 3, 2), quantity=2)
        ActivityExecution.objects.create(service_activity=cleaning, service_post=other_post,
                                         date=date(2024, 4, 1), quantity=10)

        report = ActivityExecutionService.report('2024-03-01', '2024-03-31')

        assert report['summary'] == {'total_activities': 2, 'total_executions': 2, 'total_quantity': 5}
        assert report['by_post'][0]['post_code'] == 'P-001'
        assert report['by_activity'][0]['name'] == 'Ronda'

    def test_grid_cells(self, db, activity, post):
        ActivityExecution.objects.create(service_activity=activity, service_post=post,
                                         date=date(2024, 2, 10), quantity=4)
        grid = ActivityExecutionService.build_grid(post, '2024-02')
        cells = grid['rows'][0]['cells']
        assert cells[9]['quantity'] == 4
        assert cells[0]['execution_id'] is None
