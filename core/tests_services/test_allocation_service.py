"""
Testes do AllocationService: upsert, lote, importação CSV e cópia de mês.
"""
import io
import pytest
from datetime import date
from decimal import Decimal
from django.core.exceptions import ValidationError

from core.models import Allocation, AllocationStatus
from core.services import AllocationService, parse_month, round_half_up, safe_percentage


class TestHelpers:

    def test_parse_month_returns_first_and_last_day(self):
        assert parse_month('2024-02') == (date(2024, 2, 1), date(2024, 2, 29))
        assert parse_month('2023-12') == (date(2023, 12, 1), date(2023, 12, 31))

    @pytest.mark.parametrize('value', ['2024', '2024-00', 'fev/2024', None])
    def test_parse_month_rejects_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_month(value)

    def test_safe_percentage(self):
        assert safe_percentage(2, 3) == 66.7
        assert safe_percentage(5, 0) == 0.0

    @pytest.mark.parametrize('part,total,expected', [(1, 16, 6.3), (3, 16, 18.8), (1, 8, 12.5), (1, 3, 33.3)])
    def test_safe_percentage_rounds_half_up(self, part, total, expected):
        assert safe_percentage(part, total) == expected

    def test_round_half_up(self):
        assert round_half_up(Decimal('0.25')) == 0.3
        assert round_half_up(Decimal('0.35')) == 0.4


class TestSaveAllocation:

    def test_second_save_updates_same_row(self, db, employee, post, other_post):
        first, previous = AllocationService.save_allocation(employee.id, post.id, '2024-01-10', 'present')
        assert previous is None

        second, previous = AllocationService.save_allocation(employee.id, other_post.id, '2024-01-10', 'ABSENT')
        assert second.pk == first.pk
        assert previous == {'post': post.id, 'status': 'present', 'notes': ''}
        assert second.post_id == other_post.id
        assert second.status == AllocationStatus.ABSENT

    def test_rejects_unknown_status(self, db, employee, post):
        with pytest.raises(ValidationError):
            AllocationService.save_allocation(employee.id, post.id, '2024-01-10', 'folga')

    def test_rejects_unknown_employee(self, db, post):
        with pytest.raises(ValidationError):
            AllocationService.save_allocation(999, post.id, '2024-01-10', 'present')


class TestBatchSave:

    def test_counts_created_and_updated(self, db, employee, employee_b, post):
        Allocation.objects.create(employee=employee, post=post, date=date(2024, 1, 2))
        result = AllocationService.batch_save([
            {'employee_id': employee.id, 'date': '2024-01-02', 'status': 'justified'},
            {'employee_id': employee_b.id, 'date': '2024-01-02', 'status': 'present'},
        ], default_post_id=post.id)
        assert result == {'saved': 2, 'created': 1, 'updated': 1}

    def test_invalid_item_rolls_back_everything(self, db, employee, employee_b, post):
        with pytest.raises(ValidationError) as excinfo:
            AllocationService.batch_save([
                {'employee_id': employee.id, 'date': '2024-01-02', 'status': 'present'},
                {'employee_id': employee_b.id, 'date': '02/01/2024', 'status': 'present'},
            ], default_post_id=post.id)
        assert 'Item 2' in excinfo.value.messages[0]
        assert Allocation.objects.count() == 0

    def test_empty_batch_is_rejected(self, db):
        with pytest.raises(ValidationError):
            AllocationService.batch_save([])


class TestImportCsv:

    def test_valid_rows_commit_and_invalid_rows_are_reported(self, db, employee, post):
        content = (
            'employee_id,date,status\n'
            f'{employee.id},2024-01-15,present\n'
            f'{employee.id},2024-01-16,sumido\n'
            '\n'
            f'{employee.id},2024-01-17,Medical_Leave\n'
        )
        result = AllocationService.import_csv(io.BytesIO(content.encode('utf-8-sig')), post)

        assert result['imported'] == 2
        assert result['error_count'] == 1
        assert result['errors'][0]['row'] == 3
        assert 'Status inválido' in result['errors'][0]['error']
        assert set(Allocation.objects.values_list('status', flat=True)) == {'present', 'medical_leave'}

    def test_missing_columns(self, db, post):
        with pytest.raises(ValidationError):
            AllocationService.import_csv(io.BytesIO(b'employee_id,date\n1,2024-01-01\n'), post)


class TestCopyPreviousMonth:

    def test_copies_from_february_to_march(self, db, employee, employee_b, post):
        """Fevereiro tem 29 dias em 2024: todas as alocações cabem em março."""
        for day in (1, 15, 29):
            Allocation.objects.create(employee=employee, post=post, date=date(2024, 2, day),
                                      status=AllocationStatus.PRESENT)
        Allocation.objects.create(employee=employee_b, post=post, date=date(2024, 2, 10),
                                  status=AllocationStatus.VACATION)

        result = AllocationService.copy_previous_month(post, '2024-03')

        assert result['source_month'] == '2024-02'
        assert result['copied'] == 4
        assert result['skipped'] == 0
        march = Allocation.objects.filter(date__month=3, date__year=2024)
        assert march.count() == 4
        assert march.get(employee=employee_b).status == AllocationStatus.VACATION

    def test_skips_employee_allocated_on_other_post(self, db, employee, post, other_post):
        Allocation.objects.create(employee=employee, post=post, date=date(2024, 2, 5))
        Allocation.objects.create(employee=employee, post=other_post, date=date(2024, 3, 5))

        result = AllocationService.copy_previous_month(post, '2024-03')

        assert result == {'source_month': '2024-02', 'target_month': '2024-03',
                          'copied': 0, 'deleted': 0, 'skipped': 1}

    def test_january_copies_from_previous_december(self, db, employee, post):
        Allocation.objects.create(employee=employee, post=post, date=date(2023, 12, 31))
        result = AllocationService.copy_previous_month(post, '2024-01')
        assert result['source_month'] == '2023-12'
        assert Allocation.objects.filter(date=date(2024, 1, 31)).exists()


class TestGrid:

    def test_rows_are_active_employees_only(self, db, employee, employee_b, inactive_employee, post):
        grid = AllocationService.build_grid(post, '2024-04')
        assert [row['employee_name'] for row in grid['rows']] == ['Ana Souza', 'Bruno Lima']
        assert len(grid['days']) == 30
        assert all(cell['status'] == '-' for cell in grid['rows'][0]['cells'])
