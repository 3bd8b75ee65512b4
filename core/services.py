"""
Services Layer para Gestão de Contratos DICA

Este módulo contém a lógica de negócio:
- Grade de alocação mensal, salvamento em lote, importação CSV e cópia de mês
- Execuções de atividades (PPU) e seu relatório
- Relatório previsto x realizado e indicadores do dashboard
- Auditoria de alterações e registro de acessos LGPD
- Geração e resolução de alertas
"""
import calendar
import csv
import io
import json
import logging
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from django.conf import settings
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from .models import (
    Alert,
    AlertStatus,
    AlertType,
    Allocation,
    AllocationStatus,
    ActivityExecution,
    AuditLog,
    Document,
    Employee,
    EmployeeStatus,
    FeriasLicencas,
    FeriasLicencasStatus,
    LgpdLog,
    Occurrence,
    OccurrenceCategory,
    ServiceActivity,
    ServicePost,
)

logger = logging.getLogger(__name__)

UNSET_STATUS = '-'
ONE_DECIMAL = Decimal('0.1')
CSV_IMPORT_HEADERS = ('employee_id', 'date', 'status')
CSV_TEMPLATE = 'employee_id,date,status\n1,2024-01-15,present\n'


# ==============================================================================
# HELPERS
# ==============================================================================

def parse_month(value):
    """
    Converte 'YYYY-MM' no primeiro e no último dia do mês.

    Raises:
        ValidationError: formato inválido
    """
    try:
        year, month = (int(part) for part in str(value).split('-'))
        first_day = date(year, month, 1)
    except (TypeError, ValueError):
        raise ValidationError('Mês inválido. Use o formato YYYY-MM.')
    last_day = first_day.replace(day=calendar.monthrange(year, month)[1])
    return first_day, last_day


def parse_date(value, field='date'):
    """Converte 'YYYY-MM-DD' em date. Aceita objetos date."""
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError(f'Data inválida em {field}: "{value}". Use o formato YYYY-MM-DD.')


def month_days(first_day, last_day):
    return [first_day + timedelta(days=n) for n in range((last_day - first_day).days + 1)]


def round_half_up(value):
    """Uma casa decimal, empates arredondados para cima (6,25 vira 6,3)."""
    return float(Decimal(value).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def safe_percentage(part, total):
    """Percentual com uma casa decimal; 0 quando o total é zero."""
    if not total or total <= 0:
        return 0.0
    return round_half_up(Decimal(part) * 100 / Decimal(total))


def to_json(data):
    """Converte dados serializados em estrutura compatível com JSONField."""
    if data is None:
        return None
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


def get_client_ip(request):
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR') or None


def filter_period(queryset, params, field='timestamp'):
    """
    Filtra por start_date/end_date (YYYY-MM-DD).

    end_date é inclusivo até 23:59:59 do dia informado.
    """
    tz = timezone.get_current_timezone()
    start_date = params.get('start_date')
    if start_date:
        start = datetime.combine(parse_date(start_date, 'start_date'), time.min)
        queryset = queryset.filter(**{f'{field}__gte': timezone.make_aware(start, tz)})
    end_date = params.get('end_date')
    if end_date:
        end = datetime.combine(parse_date(end_date, 'end_date'), time(23, 59, 59, 999999))
        queryset = queryset.filter(**{f'{field}__lte': timezone.make_aware(end, tz)})
    return queryset


def _parse_int(value, field):
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'{field} inválido: "{value}"')


# ==============================================================================
# AUDITORIA E LGPD
# ==============================================================================

class AuditService:
    """
    Service para registro e consulta dos logs de auditoria.

    Falhas ao gravar o log nunca interrompem a operação de negócio.
    """

    ACTION_LABELS = {
        'create': 'Criação',
        'update': 'Atualização',
        'delete': 'Exclusão',
        'bulk_save': 'Salvamento em Lote',
        'bulk_copy': 'Cópia em Lote',
        'bulk_import': 'Importação em Lote',
        'bulk_upsert': 'Atualização em Lote',
        'send_notification': 'Envio de Notificação',
        'mark_treated': 'Marcar como Tratado',
        'resolve': 'Resolver',
        'change_role': 'Alteração de Perfil',
        'upload_version': 'Nova Versão',
        'export': 'Exportação',
    }

    @staticmethod
    def log(user, action, entity_type, entity_id=None, details=None, before=None, after=None):
        """Grava um AuditLog. Retorna None se a gravação falhar."""
        try:
            with transaction.atomic():
                return AuditLog.objects.create(
                    user=user if user is not None and user.is_authenticated else None,
                    action=action,
                    entity_type=entity_type,
                    entity_id='' if entity_id is None else str(entity_id),
                    details=to_json(details),
                    diff_before=to_json(before),
                    diff_after=to_json(after),
                )
        except Exception:
            logger.error(f"Falha ao gravar auditoria {action} {entity_type}#{entity_id}", exc_info=True)
            return None

    @staticmethod
    def filter_logs(params):
        """
        Filtra logs por usuário, entidade, ação e período.

        end_date é inclusivo até 23:59:59 do dia informado.
        """
        queryset = AuditLog.objects.select_related('user').order_by('-timestamp')

        user_id = params.get('user_id')
        if user_id:
            queryset = queryset.filter(user_id=_parse_int(user_id, 'user_id'))
        entity_type = params.get('entity_type')
        if entity_type:
            queryset = queryset.filter(entity_type=entity_type)
        action = params.get('action')
        if action:
            queryset = queryset.filter(action=action)

        return filter_period(queryset, params)

    @staticmethod
    def resolve_limit(value):
        default = settings.AUDIT_LOG_DEFAULT_LIMIT
        if value in (None, ''):
            return default
        limit = _parse_int(value, 'limit')
        if limit <= 0:
            raise ValidationError('limit deve ser maior que zero.')
        return limit


class LgpdService:
    """Registro de acessos a dados pessoais (LGPD)."""

    @staticmethod
    def log(request, access_type, data_category, entity_type, entity_id=None, details=None):
        try:
            user = request.user if request.user.is_authenticated else None
            with transaction.atomic():
                return LgpdLog.objects.create(
                    user=user,
                    access_type=access_type,
                    data_category=data_category,
                    entity_type=entity_type,
                    entity_id='' if entity_id is None else str(entity_id),
                    ip_address=get_client_ip(request),
                    user_agent=request.META.get('HTTP_USER_AGENT', ''),
                    details=to_json(details),
                )
        except Exception:
            logger.error(f"Falha ao gravar log LGPD {access_type} {entity_type}", exc_info=True)
            return None

    @staticmethod
    def filter_logs(params):
        queryset = LgpdLog.objects.select_related('user').order_by('-timestamp')
        user_id = params.get('user_id')
        if user_id:
            queryset = queryset.filter(user_id=_parse_int(user_id, 'user_id'))
        for field in ('access_type', 'data_category', 'entity_type'):
            value = params.get(field)
            if value:
                queryset = queryset.filter(**{field: value})

        return filter_period(queryset, params)


# ==============================================================================
# ALOCAÇÕES
# ==============================================================================

class AllocationService:
    """
    Service da grade de alocação.

    Um colaborador tem no máximo uma alocação por data; todas as escritas
    usam a chave (colaborador, data).
    """

    @staticmethod
    def build_grid(post: ServicePost, month: str) -> dict:
        """
        Monta a grade colaborador x dia de um posto no mês.

        Apenas colaboradores ativos geram linhas. Dias sem alocação aparecem
        com status '-'. Fins de semana são apenas sinalizados.
        """
        first_day, last_day = parse_month(month)
        days = month_days(first_day, last_day)

        allocations = {
            (a.employee_id, a.date): a
            for a in Allocation.objects.filter(post=post, date__range=(first_day, last_day))
        }
        employees = Employee.objects.filter(status=EmployeeStatus.ACTIVE).order_by('name')

        rows = []
        for employee in employees:
            cells = []
            for day in days:
                allocation = allocations.get((employee.id, day))
                cells.append({
                    'date': day.isoformat(),
                    'status': allocation.status if allocation else UNSET_STATUS,
                    'allocation_id': allocation.id if allocation else None,
                    'notes': allocation.notes if allocation else '',
                })
            rows.append({
                'employee_id': employee.id,
                'employee_name': employee.name,
                'function_post': employee.function_post,
                'cells': cells,
            })

        return {
            'post': {'id': post.id, 'post_code': post.post_code, 'post_name': post.post_name},
            'month': first_day.strftime('%Y-%m'),
            'days': [
                {
                    'date': day.isoformat(),
                    'day': day.day,
                    'weekday': day.weekday(),
                    'is_weekend': day.weekday() >= 5,
                }
                for day in days
            ],
            'rows': rows,
        }

    @staticmethod
    def save_allocation(employee_id, post_id, day, status, notes=None):
        """
        Cria ou atualiza a alocação do colaborador na data.

        Returns:
            tuple: (allocation, previous) onde previous é o estado anterior
            (dict) ou None quando a alocação foi criada
        """
        status = (status or '').strip().lower()
        if status not in AllocationStatus.values:
            raise ValidationError(
                f'Status inválido: "{status}". Valores aceitos: {", ".join(AllocationStatus.values)}'
            )
        employee_id = _parse_int(employee_id, 'employee_id')
        post_id = _parse_int(post_id, 'post_id')
        day = parse_date(day)

        if not Employee.objects.filter(pk=employee_id).exists():
            raise ValidationError(f'Colaborador {employee_id} não encontrado.')
        if not ServicePost.objects.filter(pk=post_id).exists():
            raise ValidationError(f'Posto {post_id} não encontrado.')

        allocation = Allocation.objects.filter(employee_id=employee_id, date=day).first()
        if allocation is None:
            allocation = Allocation.objects.create(
                employee_id=employee_id,
                post_id=post_id,
                date=day,
                status=status,
                notes=notes or '',
            )
            return allocation, None

        previous = {
            'post': allocation.post_id,
            'status': allocation.status,
            'notes': allocation.notes,
        }
        allocation.post_id = post_id
        allocation.status = status
        if notes is not None:
            allocation.notes = notes
        allocation.save()
        return allocation, previous

    @staticmethod
    @transaction.atomic
    def batch_save(changes, default_post_id=None) -> dict:
        """
        Salva o buffer de edições da grade em UMA transação.

        Qualquer item inválido desfaz o lote inteiro.
        """
        if not isinstance(changes, list) or not changes:
            raise ValidationError('Nenhuma alteração enviada.')

        created = updated = 0
        for index, change in enumerate(changes, start=1):
            if not isinstance(change, dict):
                raise ValidationError(f'Item {index}: formato inválido.')
            try:
                _, previous = AllocationService.save_allocation(
                    change.get('employee_id'),
                    change.get('post_id') or default_post_id,
                    change.get('date'),
                    change.get('status'),
                    change.get('notes'),
                )
            except ValidationError as e:
                raise ValidationError(f'Item {index}: {"; ".join(e.messages)}')
            if previous is None:
                created += 1
            else:
                updated += 1

        return {'saved': created + updated, 'created': created, 'updated': updated}

    @staticmethod
    def _read_csv(file):
        raw = file.read()
        if isinstance(raw, bytes):
            try:
                raw = raw.decode('utf-8-sig')
            except UnicodeDecodeError:
                raw = raw.decode('latin-1')
        return raw

    @staticmethod
    @transaction.atomic
    def import_csv(file, post: ServicePost) -> dict:
        """
        Importa alocações de um CSV com colunas employee_id,date,status.

        Cabeçalhos não diferenciam maiúsculas de minúsculas. Linhas inválidas
        não são importadas e aparecem em errors com o número da linha.
        """
        reader = csv.DictReader(io.StringIO(AllocationService._read_csv(file)))
        headers = [(h or '').strip().lower() for h in (reader.fieldnames or [])]
        missing = [h for h in CSV_IMPORT_HEADERS if h not in headers]
        if missing:
            raise ValidationError(
                f'Cabeçalho inválido. Colunas ausentes: {", ".join(missing)}. '
                f'Colunas esperadas: {",".join(CSV_IMPORT_HEADERS)}'
            )

        imported = 0
        errors = []
        for raw_row in reader:
            line_number = reader.line_num
            row = {
                (key or '').strip().lower(): (value or '').strip()
                for key, value in raw_row.items()
                if isinstance(value, str) or value is None
            }
            if not any(row.values()):
                continue
            try:
                with transaction.atomic():
                    AllocationService.save_allocation(
                        row.get('employee_id'), post.id, row.get('date'), row.get('status'),
                    )
                imported += 1
            except ValidationError as e:
                errors.append({'row': line_number, 'error': '; '.join(e.messages)})

        if errors:
            logger.info(f"Importação CSV posto {post.post_code}: {imported} importadas, {len(errors)} com erro")
        return {'imported': imported, 'errors': errors, 'error_count': len(errors)}

    @staticmethod
    @transaction.atomic
    def copy_previous_month(post: ServicePost, month: str) -> dict:
        """
        Copia as alocações do mês anterior para o mês informado.

        As alocações do mês de destino no posto são apagadas antes da cópia.
        Cada alocação vai para o mesmo dia do mês; dias inexistentes no
        destino (ex.: 31) e colaboradores já alocados em outro posto na data
        são ignorados e contados em skipped.
        """
        target_first, target_last = parse_month(month)
        source_last = target_first - timedelta(days=1)
        source_first = source_last.replace(day=1)

        deleted, _ = Allocation.objects.filter(post=post, date__range=(target_first, target_last)).delete()

        source = Allocation.objects.filter(post=post, date__range=(source_first, source_last))
        occupied = set(
            Allocation.objects
            .filter(date__range=(target_first, target_last))
            .values_list('employee_id', 'date')
        )

        new_allocations = []
        skipped = 0
        for allocation in source:
            if allocation.date.day > target_last.day:
                skipped += 1
                continue
            target_date = target_first.replace(day=allocation.date.day)
            if (allocation.employee_id, target_date) in occupied:
                skipped += 1
                continue
            occupied.add((allocation.employee_id, target_date))
            new_allocations.append(Allocation(
                employee_id=allocation.employee_id,
                post=post,
                date=target_date,
                status=allocation.status,
                notes=allocation.notes,
            ))
        Allocation.objects.bulk_create(new_allocations)

        return {
            'source_month': source_first.strftime('%Y-%m'),
            'target_month': target_first.strftime('%Y-%m'),
            'copied': len(new_allocations),
            'deleted': deleted,
            'skipped': skipped,
        }


# ==============================================================================
# EXECUÇÕES DE ATIVIDADES
# ==============================================================================

class ActivityExecutionService:
    """Service das execuções de atividades (PPU) por posto e dia."""

    @staticmethod
    def build_grid(post: ServicePost, month: str) -> dict:
        """Grade atividade x dia com a execução registrada em cada célula."""
        first_day, last_day = parse_month(month)
        days = month_days(first_day, last_day)
        activities = ServiceActivity.objects.filter(service_post=post).order_by('name')
        executions = {
            (e.service_activity_id, e.date): e
            for e in (
                ActivityExecution.objects
                .filter(service_post=post, date__range=(first_day, last_day))
                .annotate(attachments_count=Count('attachments'))
            )
        }

        rows = []
        for activity in activities:
            cells = []
            for day in days:
                execution = executions.get((activity.id, day))
                cells.append({
                    'date': day.isoformat(),
                    'execution_id': execution.id if execution else None,
                    'quantity': execution.quantity if execution else None,
                    'employee_id': execution.employee_id if execution else None,
                    'notes': execution.notes if execution else '',
                    'attachments_count': execution.attachments_count if execution else 0,
                })
            rows.append({
                'activity_id': activity.id,
                'name': activity.name,
                'ppu_unit': activity.ppu_unit,
                'frequency': activity.frequency,
                'cells': cells,
            })

        return {
            'post': {'id': post.id, 'post_code': post.post_code, 'post_name': post.post_name},
            'month': first_day.strftime('%Y-%m'),
            'days': [{'date': d.isoformat(), 'day': d.day, 'is_weekend': d.weekday() >= 5} for d in days],
            'rows': rows,
        }

    @staticmethod
    @transaction.atomic
    def bulk_upsert(items) -> list:
        """
        Cria ou atualiza execuções pela chave (atividade, posto, data).

        O lote é atômico: um item inválido desfaz todos.
        """
        if not isinstance(items, list) or not items:
            raise ValidationError('Nenhuma execução enviada.')

        executions = []
        for index, item in enumerate(items, start=1):
            try:
                activity_id = _parse_int(item.get('service_activity_id'), 'service_activity_id')
                post_id = _parse_int(item.get('service_post_id'), 'service_post_id')
                day = parse_date(item.get('date'))
                quantity = _parse_int(item.get('quantity', 1), 'quantity')
                if quantity < 0:
                    raise ValidationError('A quantidade não pode ser negativa.')
                if not ServiceActivity.objects.filter(pk=activity_id, service_post_id=post_id).exists():
                    raise ValidationError(f'Atividade {activity_id} não pertence ao posto {post_id}.')
                employee_id = item.get('employee_id') or None
                if employee_id is not None:
                    employee_id = _parse_int(employee_id, 'employee_id')
                    if not Employee.objects.filter(pk=employee_id).exists():
                        raise ValidationError(f'Colaborador {employee_id} não encontrado.')
            except ValidationError as e:
                raise ValidationError(f'Item {index}: {"; ".join(e.messages)}')
            except AttributeError:
                raise ValidationError(f'Item {index}: formato inválido.')

            execution, _ = ActivityExecution.objects.update_or_create(
                service_activity_id=activity_id,
                service_post_id=post_id,
                date=day,
                defaults={
                    'quantity': quantity,
                    'employee_id': employee_id,
                    'notes': item.get('notes') or '',
                },
            )
            executions.append(execution)
        return executions

    @staticmethod
    def report(start_date=None, end_date=None, post_id=None) -> dict:
        """Resumo de execuções no período, por posto e por atividade."""
        queryset = ActivityExecution.objects.all()
        activities = ServiceActivity.objects.all()
        if start_date:
            queryset = queryset.filter(date__gte=parse_date(start_date, 'start_date'))
        if end_date:
            queryset = queryset.filter(date__lte=parse_date(end_date, 'end_date'))
        if post_id:
            queryset = queryset.filter(service_post_id=post_id)
            activities = activities.filter(service_post_id=post_id)

        totals = queryset.aggregate(executions=Count('id'), quantity=Sum('quantity'))

        by_post = [
            {
                'post_id': row['service_post_id'],
                'post_code': row['service_post__post_code'],
                'post_name': row['service_post__post_name'],
                'executions': row['executions'],
                'quantity': row['quantity'] or 0,
            }
            for row in (
                queryset
                .values('service_post_id', 'service_post__post_code', 'service_post__post_name')
                .annotate(executions=Count('id'), quantity=Sum('quantity'))
                .order_by('service_post__post_code')
            )
        ]
        by_activity = [
            {
                'activity_id': row['service_activity_id'],
                'name': row['service_activity__name'],
                'ppu_unit': row['service_activity__ppu_unit'],
                'post_code': row['service_post__post_code'],
                'executions': row['executions'],
                'quantity': row['quantity'] or 0,
            }
            for row in (
                queryset
                .values(
                    'service_activity_id', 'service_activity__name',
                    'service_activity__ppu_unit', 'service_post__post_code',
                )
                .annotate(executions=Count('id'), quantity=Sum('quantity'))
                .order_by('service_post__post_code', 'service_activity__name')
            )
        ]

        return {
            'summary': {
                'total_activities': activities.count(),
                'total_executions': totals['executions'] or 0,
                'total_quantity': totals['quantity'] or 0,
            },
            'by_post': by_post,
            'by_activity': by_activity,
        }


# ==============================================================================
# RELATÓRIOS E DASHBOARD
# ==============================================================================

class ReportService:
    """
    Relatório previsto x realizado.

    previsto = total de alocações; realizado = alocações com status
    'present'; conformidade = realizado / previsto * 100 (uma casa decimal,
    0 quando não há previsto).
    """

    @staticmethod
    def previsto_realizado(month: str, post_id: Optional[int] = None) -> dict:
        first_day, last_day = parse_month(month)
        queryset = Allocation.objects.filter(date__range=(first_day, last_day))
        if post_id:
            queryset = queryset.filter(post_id=post_id)

        present = Count('id', filter=Q(status=AllocationStatus.PRESENT))
        totals = queryset.aggregate(previsto=Count('id'), realizado=present)

        by_post = []
        for row in (
            queryset
            .values('post_id', 'post__post_code', 'post__post_name')
            .annotate(previsto=Count('id'), realizado=present)
            .order_by('post__post_code')
        ):
            by_post.append({
                'post_id': row['post_id'],
                'post_code': row['post__post_code'],
                'post_name': row['post__post_name'],
                'previsto': row['previsto'],
                'realizado': row['realizado'],
                'compliance': safe_percentage(row['realizado'], row['previsto']),
            })

        by_date = []
        for row in queryset.values('date').annotate(previsto=Count('id'), realizado=present).order_by('date'):
            by_date.append({
                'date': row['date'].isoformat(),
                'previsto': row['previsto'],
                'realizado': row['realizado'],
                'compliance': safe_percentage(row['realizado'], row['previsto']),
            })

        return {
            'period': {
                'month': first_day.strftime('%Y-%m'),
                'start_date': first_day.isoformat(),
                'end_date': last_day.isoformat(),
            },
            'summary': {
                'previsto': totals['previsto'],
                'realizado': totals['realizado'],
                'compliance': safe_percentage(totals['realizado'], totals['previsto']),
            },
            'by_post': by_post,
            'by_date': by_date,
        }


class DashboardService:
    """Indicadores do dashboard."""

    @staticmethod
    def stats() -> dict:
        today = timezone.localdate()
        warning_limit = today + timedelta(days=settings.DOCUMENT_EXPIRATION_WARNING_DAYS)
        employees = Employee.objects.aggregate(
            total=Count('id'),
            active=Count('id', filter=Q(status=EmployeeStatus.ACTIVE)),
        )
        today_allocations = Allocation.objects.filter(date=today).aggregate(
            total=Count('id'),
            present=Count('id', filter=Q(status=AllocationStatus.PRESENT)),
            absent=Count('id', filter=Q(status=AllocationStatus.ABSENT)),
        )
        return {
            'total_employees': employees['total'],
            'active_employees': employees['active'],
            'total_posts': ServicePost.objects.count(),
            'today_allocations': today_allocations['total'],
            'today_present': today_allocations['present'],
            'today_absent': today_allocations['absent'],
            'today_other': today_allocations['total'] - today_allocations['present'] - today_allocations['absent'],
            'untreated_occurrences': Occurrence.objects.filter(treated=False).count(),
            'expiring_documents': Document.objects.filter(
                expiration_date__gte=today, expiration_date__lte=warning_limit,
            ).count(),
            'pending_alerts': Alert.objects.filter(status=AlertStatus.PENDING).count(),
        }

    @staticmethod
    def allocation_trends(days: int = 30) -> list:
        """Total de alocações por status em cada dia do período."""
        start = timezone.localdate() - timedelta(days=days)
        series = {}
        for row in (
            Allocation.objects
            .filter(date__gte=start)
            .values('date', 'status')
            .annotate(total=Count('id'))
            .order_by('date')
        ):
            entry = series.setdefault(row['date'], {status: 0 for status in AllocationStatus.values})
            entry[row['status']] = row['total']
        return [{'date': day.isoformat(), **counts} for day, counts in sorted(series.items())]

    @staticmethod
    def occurrences_by_category(days: int = 30) -> list:
        start = timezone.localdate() - timedelta(days=days)
        labels = dict(OccurrenceCategory.choices)
        return [
            {'category': row['category'], 'label': labels.get(row['category'], row['category']), 'total': row['total']}
            for row in (
                Occurrence.objects
                .filter(date__gte=start)
                .values('category')
                .annotate(total=Count('id'))
                .order_by('-total', 'category')
            )
        ]

    @staticmethod
    def compliance_metrics(days: int = 30) -> dict:
        start = timezone.localdate() - timedelta(days=days)
        allocations = Allocation.objects.filter(date__gte=start).aggregate(
            total=Count('id'),
            present=Count('id', filter=Q(status=AllocationStatus.PRESENT)),
        )
        employees = Employee.objects.aggregate(
            total=Count('id'),
            active=Count('id', filter=Q(status=EmployeeStatus.ACTIVE)),
        )
        employees_with_docs = (
            Document.objects.filter(employee__isnull=False)
            .values('employee_id').distinct().count()
        )
        occurrences = Occurrence.objects.filter(date__gte=start).count()

        return {
            'attendance_rate': safe_percentage(allocations['present'], allocations['total']),
            'documentation_rate': safe_percentage(employees_with_docs, employees['total']),
            'active_employee_rate': safe_percentage(employees['active'], employees['total']),
            'occurrence_rate': (
                round_half_up(Decimal(occurrences) / Decimal(employees['active']))
                if employees['active'] > 0 else 0.0
            ),
        }

    @staticmethod
    def analytics(days: int = 30) -> dict:
        return {
            'allocation_trends': DashboardService.allocation_trends(days),
            'occurrences_by_category': DashboardService.occurrences_by_category(days),
            'compliance_metrics': DashboardService.compliance_metrics(days),
        }


# ==============================================================================
# DOCUMENTOS E FÉRIAS
# ==============================================================================

class DocumentService:

    @staticmethod
    def expiring(days: Optional[int] = None):
        """Documentos que vencem entre hoje e hoje + days."""
        if days is None:
            days = settings.DOCUMENT_EXPIRATION_WARNING_DAYS
        today = timezone.localdate()
        return (
            Document.objects
            .filter(expiration_date__gte=today, expiration_date__lte=today + timedelta(days=days))
            .select_related('employee', 'post')
            .order_by('expiration_date')
        )

    @staticmethod
    def expired():
        return (
            Document.objects
            .filter(expiration_date__lt=timezone.localdate())
            .select_related('employee', 'post')
            .order_by('expiration_date')
        )

    @staticmethod
    def checklist_compliance(post_id=None) -> list:
        """
        Para cada posto, indica quais itens obrigatórios do checklist já têm
        documento do tipo correspondente enviado.
        """
        posts = ServicePost.objects.prefetch_related('document_checklists').order_by('post_code')
        if post_id:
            posts = posts.filter(pk=post_id)

        result = []
        for post in posts:
            document_types = set(Document.objects.filter(post=post).values_list('document_type', flat=True))
            items = []
            for item in post.document_checklists.all():
                items.append({
                    'id': item.id,
                    'name': item.name,
                    'document_type': item.document_type,
                    'is_required': item.is_required,
                    'fulfilled': item.document_type in document_types,
                })
            required = [i for i in items if i['is_required']]
            fulfilled = [i for i in required if i['fulfilled']]
            result.append({
                'post_id': post.id,
                'post_code': post.post_code,
                'post_name': post.post_name,
                'required_items': len(required),
                'fulfilled_items': len(fulfilled),
                'compliance': safe_percentage(len(fulfilled), len(required)),
                'items': items,
            })
        return result


class FeriasLicencasService:

    @staticmethod
    def active(on_date: Optional[date] = None):
        """Férias/licenças vigentes na data (aprovadas ou em andamento)."""
        on_date = on_date or timezone.localdate()
        return (
            FeriasLicencas.objects
            .filter(
                start_date__lte=on_date,
                end_date__gte=on_date,
                status__in=[FeriasLicencasStatus.APROVADO, FeriasLicencasStatus.EM_ANDAMENTO],
            )
            .select_related('employee')
            .order_by('end_date')
        )


# ==============================================================================
# ALERTAS
# ==============================================================================

class AlertService:
    """Geração automática e resolução de alertas."""

    @staticmethod
    def _create_if_missing(alert_type, entity_type, entity_id, message):
        exists = Alert.objects.filter(
            type=alert_type,
            entity_type=entity_type,
            entity_id=entity_id,
            status=AlertStatus.PENDING,
        ).exists()
        if exists:
            return None
        return Alert.objects.create(
            type=alert_type,
            entity_type=entity_type,
            entity_id=entity_id,
            message=message,
        )

    @staticmethod
    @transaction.atomic
    def generate(on_date: Optional[date] = None) -> dict:
        """
        Gera alertas pendentes para:
        - colaboradores ativos sem alocação na data
        - documentos vencidos
        - ocorrências não tratadas há mais de OCCURRENCE_ALERT_DAYS dias

        Não duplica alerta pendente para a mesma entidade.
        """
        on_date = on_date or timezone.localdate()
        created = {alert_type: 0 for alert_type in AlertType.values}

        allocated = Allocation.objects.filter(date=on_date).values('employee_id')
        for employee in Employee.objects.filter(status=EmployeeStatus.ACTIVE).exclude(id__in=allocated):
            if AlertService._create_if_missing(
                AlertType.UNALLOCATED_EMPLOYEE, 'employee', employee.id,
                f'{employee.name} não possui alocação em {on_date:%d/%m/%Y}.',
            ):
                created[AlertType.UNALLOCATED_EMPLOYEE] += 1

        for document in Document.objects.filter(expiration_date__lt=on_date):
            if AlertService._create_if_missing(
                AlertType.EXPIRED_DOCUMENT, 'document', document.id,
                f'Documento "{document.original_name}" vencido em {document.expiration_date:%d/%m/%Y}.',
            ):
                created[AlertType.EXPIRED_DOCUMENT] += 1

        limit = on_date - timedelta(days=settings.OCCURRENCE_ALERT_DAYS)
        for occurrence in Occurrence.objects.filter(treated=False, date__lt=limit):
            if AlertService._create_if_missing(
                AlertType.UNTREATED_OCCURRENCE, 'occurrence', occurrence.id,
                f'Ocorrência de {occurrence.date:%d/%m/%Y} ainda não foi tratada.',
            ):
                created[AlertType.UNTREATED_OCCURRENCE] += 1

        total = sum(created.values())
        if total:
            logger.info(f"{total} alertas gerados: {created}")
        return {'created': total, 'by_type': created}

    @staticmethod
    def resolve(alert: Alert, user: User) -> Alert:
        if alert.status == AlertStatus.RESOLVED:
            raise ValidationError('Este alerta já foi resolvido.')
        alert.status = AlertStatus.RESOLVED
        alert.resolved_by = user
        alert.resolved_at = timezone.now()
        alert.save(update_fields=['status', 'resolved_by', 'resolved_at'])
        return alert
