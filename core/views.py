"""
ViewSets DRF para Gestão de Contratos DICA

ViewSets com permissões por perfil, auditoria de alterações, registro de
acessos LGPD e ações específicas (grade de alocação, relatórios, alertas).
"""
import logging

from django.http import FileResponse, HttpResponse
from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .exports import (
    allocations_csv,
    audit_logs_csv,
    lgpd_logs_csv,
    occurrences_csv,
    previsto_realizado_csv,
    previsto_realizado_pdf,
)
from .filters import (
    ActivityExecutionFilter,
    AlertFilter,
    AllocationFilter,
    DocumentFilter,
    FeriasLicencasFilter,
    OccurrenceFilter,
)
from .mixins import AuditedModelMixin, LgpdAccessLogMixin
from .models import (
    Alert,
    Allocation,
    ActivityExecution,
    ActivityExecutionAttachment,
    AuditLog,
    Document,
    DocumentChecklist,
    Employee,
    FeriasLicencas,
    LgpdAccessType,
    LgpdDataCategory,
    LgpdLog,
    NotificationSettings,
    Occurrence,
    ServiceActivity,
    ServicePost,
)
from .notifications import (
    NOTIFICATION_TYPES,
    get_recipients,
    is_email_configured,
    send_daily_summary,
    send_document_expiration_notification,
    send_missing_allocation_notification,
    send_test_email,
)
from .permissions import CanExportData, IsAdminRole, RoleBasedPermission
from .serializers import (
    ActivityExecutionAttachmentSerializer,
    ActivityExecutionSerializer,
    AlertSerializer,
    AllocationSerializer,
    AuditLogSerializer,
    DocumentChecklistSerializer,
    DocumentSerializer,
    EmployeeSerializer,
    FeriasLicencasSerializer,
    LgpdLogSerializer,
    NotificationSettingsSerializer,
    OccurrenceSerializer,
    ServiceActivitySerializer,
    ServicePostSerializer,
)
from .services import (
    CSV_TEMPLATE,
    ActivityExecutionService,
    AlertService,
    AllocationService,
    AuditService,
    DashboardService,
    DocumentService,
    FeriasLicencasService,
    LgpdService,
    ReportService,
    parse_month,
)
from .utils.file_validators import validate_csv_file, validate_execution_attachment

logger = logging.getLogger(__name__)


def _require(params, name, label=None):
    value = params.get(name)
    if value in (None, ''):
        raise ValidationError({name: f'{label or name} é obrigatório.'})
    return value


def _get_post(value):
    """Busca o posto pelo id recebido em query string ou corpo."""
    if value in (None, ''):
        raise ValidationError({'post': 'Informe o posto.'})
    try:
        return ServicePost.objects.get(pk=int(value))
    except (TypeError, ValueError):
        raise ValidationError({'post': f'Posto inválido: "{value}".'})
    except ServicePost.DoesNotExist:
        raise NotFound('Posto não encontrado.')


def _get_days(params, default=30):
    value = params.get('days')
    if value in (None, ''):
        return default
    try:
        days = int(value)
    except (TypeError, ValueError):
        raise ValidationError({'days': 'Informe um número inteiro de dias.'})
    if days < 0:
        raise ValidationError({'days': 'O número de dias não pode ser negativo.'})
    return days


# ==============================================================================
# CADASTROS
# ==============================================================================

class ServicePostViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    """
    ViewSet para ServicePost.

    Permite CRUD completo de postos de serviço.
    """
    queryset = ServicePost.objects.all()
    serializer_class = ServicePostSerializer
    permission_classes = [RoleBasedPermission]
    filterset_fields = ['modality', 'unit', 'post_code']
    search_fields = ['post_code', 'post_name', 'description', 'unit']
    ordering_fields = ['post_code', 'post_name', 'created_at']
    ordering = ['post_code']
    audit_entity_type = 'service_post'


class EmployeeViewSet(LgpdAccessLogMixin, AuditedModelMixin, viewsets.ModelViewSet):
    """ViewSet para Employee. Listagem e detalhe geram log de acesso LGPD."""
    queryset = Employee.objects.select_related('linked_post').all()
    serializer_class = EmployeeSerializer
    permission_classes = [RoleBasedPermission]
    filterset_fields = ['status', 'unit', 'linked_post']
    search_fields = ['name', 'cpf', 'function_post']
    ordering_fields = ['name', 'admission_date', 'created_at']
    ordering = ['name']
    audit_entity_type = 'employee'
    lgpd_entity_type = 'employee'


class AllocationViewSet(LgpdAccessLogMixin, AuditedModelMixin, viewsets.ModelViewSet):
    """
    ViewSet para Allocation.

    A criação é um upsert pela chave (colaborador, data): se já existir
    alocação do colaborador na data, ela é atualizada.
    """
    queryset = Allocation.objects.select_related('employee', 'post').all()
    serializer_class = AllocationSerializer
    permission_classes = [RoleBasedPermission]
    filterset_class = AllocationFilter
    search_fields = ['employee__name', 'post__post_code', 'notes']
    ordering_fields = ['date', 'employee__name', 'status']
    ordering = ['date', 'employee__name']
    audit_entity_type = 'allocation'
    lgpd_entity_type = 'allocation'

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        allocation, previous = AllocationService.save_allocation(
            data['employee'].id,
            data['post'].id,
            data['date'],
            data.get('status', 'present'),
            data.get('notes'),
        )
        after = self.snapshot(allocation)
        AuditService.log(
            request.user, 'create' if previous is None else 'update',
            self.audit_entity_type, allocation.pk, before=previous, after=after,
        )
        return Response(after, status=status.HTTP_201_CREATED if previous is None else status.HTTP_200_OK)

    @action(detail=False, methods=['get'])
    def grid(self, request):
        """Grade colaborador x dia do posto no mês (?post=&month=YYYY-MM)."""
        post = _get_post(request.query_params.get('post'))
        month = _require(request.query_params, 'month', 'Mês')
        grid = AllocationService.build_grid(post, month)
        LgpdService.log(request, LgpdAccessType.VIEW, LgpdDataCategory.PERSONAL_DATA, 'allocation',
                        details={'post': post.id, 'month': grid['month']})
        return Response(grid)

    @action(detail=False, methods=['post'])
    def batch(self, request):
        """
        Salva o buffer de edições da grade em uma única transação.

        Corpo: {"post_id": 1, "changes": [{employee_id, date, status, notes}]}
        ou diretamente a lista de alterações.
        """
        if isinstance(request.data, list):
            changes, default_post_id = request.data, None
        else:
            changes = request.data.get('changes')
            default_post_id = request.data.get('post_id')
        result = AllocationService.batch_save(changes, default_post_id)
        AuditService.log(request.user, 'bulk_save', 'allocation', details=result)
        return Response(result)

    @action(detail=False, methods=['post'], url_path='import-csv')
    def import_csv(self, request):
        upload = request.FILES.get('file')
        if upload is None:
            raise ValidationError({'file': 'Envie o arquivo CSV.'})
        validate_csv_file(upload)
        post = _get_post(request.data.get('post_id'))
        result = AllocationService.import_csv(upload, post)
        AuditService.log(
            request.user, 'bulk_import', 'allocation',
            details={'post': post.id, 'file': upload.name, 'imported': result['imported'],
                     'error_count': result['error_count']},
        )
        return Response(result)

    @action(detail=False, methods=['get'], url_path='csv-template')
    def csv_template(self, request):
        response = HttpResponse(CSV_TEMPLATE, content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = 'attachment; filename="modelo_alocacoes.csv"'
        return response

    @action(detail=False, methods=['post'], url_path='copy-month')
    def copy_month(self, request):
        """Copia as alocações do mês anterior para o mês informado."""
        post = _get_post(request.data.get('post_id'))
        month = _require(request.data, 'month', 'Mês')
        result = AllocationService.copy_previous_month(post, month)
        AuditService.log(request.user, 'bulk_copy', 'allocation', details={'post': post.id, **result})
        return Response(result)

    @action(detail=False, methods=['get'], permission_classes=[CanExportData])
    def export(self, request):
        month = _require(request.query_params, 'month', 'Mês')
        first_day, last_day = parse_month(month)
        queryset = Allocation.objects.filter(date__range=(first_day, last_day)).order_by('date', 'employee__name')
        post_id = request.query_params.get('post')
        if post_id:
            queryset = queryset.filter(post=_get_post(post_id))
        LgpdService.log(request, LgpdAccessType.EXPORT, LgpdDataCategory.PERSONAL_DATA, 'allocation',
                        details={'month': month, 'post': post_id})
        return allocations_csv(queryset, f"alocacoes_{first_day:%Y_%m}.csv")


class OccurrenceViewSet(LgpdAccessLogMixin, AuditedModelMixin, viewsets.ModelViewSet):
    queryset = Occurrence.objects.select_related('employee', 'post', 'treated_by').all()
    serializer_class = OccurrenceSerializer
    permission_classes = [RoleBasedPermission]
    filterset_class = OccurrenceFilter
    search_fields = ['description', 'employee__name', 'post__post_code']
    ordering_fields = ['date', 'created_at', 'category']
    ordering = ['-date', '-created_at']
    audit_entity_type = 'occurrence'
    lgpd_entity_type = 'occurrence'

    @action(detail=True, methods=['post'])
    def treat(self, request, pk=None):
        """Marca a ocorrência como tratada pelo usuário atual."""
        occurrence = self.get_object()
        if occurrence.treated:
            raise ValidationError({'treated': 'Esta ocorrência já foi tratada.'})
        before = self.snapshot(occurrence)
        occurrence.mark_treated(request.user)
        after = self.snapshot(occurrence)
        AuditService.log(request.user, 'mark_treated', self.audit_entity_type, occurrence.pk,
                         before=before, after=after)
        return Response(after)

    @action(detail=False, methods=['get'], permission_classes=[CanExportData])
    def export(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        LgpdService.log(request, LgpdAccessType.EXPORT, LgpdDataCategory.PERSONAL_DATA, 'occurrence',
                        details={'filters': dict(request.query_params.items())})
        return occurrences_csv(queryset, f"ocorrencias_{timezone.localdate():%Y_%m_%d}.csv")


class DocumentViewSet(LgpdAccessLogMixin, AuditedModelMixin, viewsets.ModelViewSet):
    """
    ViewSet para Document.

    Upload em multipart. Download exige permissão de exportação.
    """
    queryset = Document.objects.select_related('employee', 'post', 'uploaded_by').all()
    serializer_class = DocumentSerializer
    permission_classes = [RoleBasedPermission]
    filterset_class = DocumentFilter
    search_fields = ['original_name', 'observations', 'employee__name']
    ordering_fields = ['created_at', 'expiration_date', 'original_name']
    ordering = ['-created_at']
    audit_entity_type = 'document'
    lgpd_entity_type = 'document'

    def get_create_kwargs(self):
        return {'uploaded_by': self.request.user}

    @action(detail=True, methods=['get'], permission_classes=[CanExportData])
    def download(self, request, pk=None):
        document = self.get_object()
        try:
            handle = document.file.open('rb')
        except (FileNotFoundError, ValueError):
            logger.error(f"Arquivo do documento {document.pk} não encontrado: {document.file.name}")
            raise NotFound('Arquivo não encontrado.')
        LgpdService.log(request, LgpdAccessType.EXPORT, LgpdDataCategory.PERSONAL_DATA, 'document', document.pk)
        return FileResponse(
            handle,
            as_attachment=True,
            filename=document.original_name,
            content_type=document.mime_type or 'application/octet-stream',
        )

    @action(detail=True, methods=['get'])
    def versions(self, request, pk=None):
        """Cadeia de versões, da mais nova para a mais antiga."""
        chain = self.get_object().get_version_chain()
        return Response(self.get_serializer(chain, many=True).data)

    @action(detail=True, methods=['post'], url_path='new-version')
    def new_version(self, request, pk=None):
        current = self.get_object()
        data = {
            'file': request.FILES.get('file'),
            'document_type': request.data.get('document_type', current.document_type),
            'category': request.data.get('category', current.category),
            'employee': current.employee_id,
            'post': current.post_id,
            'month_year': request.data.get('month_year', current.month_year),
            'expiration_date': request.data.get('expiration_date', current.expiration_date),
            'observations': request.data.get('observations', current.observations),
        }
        serializer = self.get_serializer(data=data)
        serializer.is_valid(raise_exception=True)
        document = serializer.save(
            uploaded_by=request.user,
            version=current.version + 1,
            previous_version=current,
        )
        AuditService.log(
            request.user, 'upload_version', self.audit_entity_type, document.pk,
            details={'previous_version': current.pk, 'version': document.version},
            after=self.snapshot(document),
        )
        return Response(self.snapshot(document), status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def expiring(self, request):
        documents = DocumentService.expiring(_get_days(request.query_params, default=None))
        return Response(self.get_serializer(documents, many=True).data)

    @action(detail=False, methods=['get'])
    def expired(self, request):
        return Response(self.get_serializer(DocumentService.expired(), many=True).data)


class DocumentChecklistViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    queryset = DocumentChecklist.objects.select_related('post').all()
    serializer_class = DocumentChecklistSerializer
    permission_classes = [RoleBasedPermission]
    filterset_fields = ['post', 'document_type', 'is_required']
    search_fields = ['name', 'description']
    ordering = ['post__post_code', 'name']
    audit_entity_type = 'document_checklist'

    @action(detail=False, methods=['get'])
    def compliance(self, request):
        post_id = request.query_params.get('post')
        if post_id:
            post_id = _get_post(post_id).id
        return Response(DocumentService.checklist_compliance(post_id))


class FeriasLicencasViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    queryset = FeriasLicencas.objects.select_related('employee', 'created_by').all()
    serializer_class = FeriasLicencasSerializer
    permission_classes = [RoleBasedPermission]
    filterset_class = FeriasLicencasFilter
    search_fields = ['employee__name', 'observations']
    ordering_fields = ['start_date', 'end_date', 'created_at']
    ordering = ['-start_date']
    audit_entity_type = 'ferias_licencas'

    def get_create_kwargs(self):
        return {'created_by': self.request.user}

    @action(detail=False, methods=['get'])
    def active(self, request):
        """Férias/licenças vigentes hoje."""
        return Response(self.get_serializer(FeriasLicencasService.active(), many=True).data)


# ==============================================================================
# ATIVIDADES (PPU)
# ==============================================================================

class ServiceActivityViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    queryset = ServiceActivity.objects.select_related('service_post').all()
    serializer_class = ServiceActivitySerializer
    permission_classes = [RoleBasedPermission]
    filterset_fields = ['service_post', 'frequency', 'required']
    search_fields = ['name', 'description']
    ordering = ['service_post__post_code', 'name']
    audit_entity_type = 'service_activity'


class ActivityExecutionViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    queryset = ActivityExecution.objects.select_related(
        'service_activity', 'service_post', 'employee'
    ).prefetch_related('attachments').all()
    serializer_class = ActivityExecutionSerializer
    permission_classes = [RoleBasedPermission]
    filterset_class = ActivityExecutionFilter
    search_fields = ['service_activity__name', 'notes']
    ordering_fields = ['date', 'quantity']
    ordering = ['-date']
    audit_entity_type = 'activity_execution'

    @action(detail=False, methods=['post'])
    def bulk(self, request):
        """Cria ou atualiza várias execuções em uma transação."""
        items = request.data if isinstance(request.data, list) else request.data.get('executions')
        executions = ActivityExecutionService.bulk_upsert(items)
        AuditService.log(
            request.user, 'bulk_upsert', self.audit_entity_type,
            details={'count': len(executions), 'ids': [e.pk for e in executions]},
        )
        return Response(self.get_serializer(executions, many=True).data)

    @action(detail=False, methods=['get'])
    def grid(self, request):
        post = _get_post(request.query_params.get('post'))
        month = _require(request.query_params, 'month', 'Mês')
        return Response(ActivityExecutionService.build_grid(post, month))

    @action(detail=True, methods=['get', 'post'])
    def attachments(self, request, pk=None):
        """
        GET: lista os anexos da execução
        POST: envia um novo anexo (multipart, campo "file")
        """
        execution = self.get_object()
        if request.method == 'GET':
            serializer = ActivityExecutionAttachmentSerializer(execution.attachments.all(), many=True)
            return Response(serializer.data)

        upload = request.FILES.get('file')
        if upload is None:
            raise ValidationError({'file': 'Envie o arquivo.'})
        validate_execution_attachment(upload)
        attachment = ActivityExecutionAttachment.objects.create(
            execution=execution,
            file=upload,
            file_name=upload.name,
            mime_type=getattr(upload, 'content_type', '') or '',
            size=upload.size,
        )
        data = ActivityExecutionAttachmentSerializer(attachment).data
        AuditService.log(request.user, 'create', 'activity_execution_attachment', attachment.pk, after=data)
        return Response(data, status=status.HTTP_201_CREATED)


class ActivityExecutionAttachmentViewSet(AuditedModelMixin,
                                         mixins.RetrieveModelMixin,
                                         mixins.DestroyModelMixin,
                                         viewsets.GenericViewSet):
    queryset = ActivityExecutionAttachment.objects.select_related('execution').all()
    serializer_class = ActivityExecutionAttachmentSerializer
    permission_classes = [RoleBasedPermission]
    audit_entity_type = 'activity_execution_attachment'

    def perform_destroy(self, instance):
        storage, name = instance.file.storage, instance.file.name
        super().perform_destroy(instance)
        if name and storage.exists(name):
            storage.delete(name)

    @action(detail=True, methods=['get'])
    def download(self, request, pk=None):
        attachment = self.get_object()
        try:
            handle = attachment.file.open('rb')
        except (FileNotFoundError, ValueError):
            raise NotFound('Arquivo não encontrado.')
        return FileResponse(
            handle,
            as_attachment=True,
            filename=attachment.file_name,
            content_type=attachment.mime_type or 'application/octet-stream',
        )


# ==============================================================================
# RELATÓRIOS E DASHBOARD
# ==============================================================================

class ReportViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'], url_path='previsto-realizado')
    def previsto_realizado(self, request):
        month = _require(request.query_params, 'month', 'Mês')
        post_id = request.query_params.get('post')
        if post_id:
            post_id = _get_post(post_id).id
        return Response(ReportService.previsto_realizado(month, post_id))

    @action(detail=False, methods=['get'], url_path='previsto-realizado/export',
            permission_classes=[CanExportData])
    def previsto_realizado_export(self, request):
        """Exporta o relatório previsto x realizado (?format=csv|pdf)."""
        month = _require(request.query_params, 'month', 'Mês')
        post_id = request.query_params.get('post')
        if post_id:
            post_id = _get_post(post_id).id
        export_format = (request.query_params.get('format') or 'csv').lower()
        if export_format not in ('csv', 'pdf'):
            raise ValidationError({'format': 'Formato deve ser csv ou pdf.'})

        report = ReportService.previsto_realizado(month, post_id)
        filename = f"previsto_realizado_{report['period']['month'].replace('-', '_')}.{export_format}"
        AuditService.log(request.user, 'export', 'report',
                         details={'report': 'previsto_realizado', 'month': month, 'format': export_format})
        if export_format == 'pdf':
            return previsto_realizado_pdf(report, filename)
        return previsto_realizado_csv(report, filename)

    @action(detail=False, methods=['get'], url_path='activity-executions')
    def activity_executions(self, request):
        post_id = request.query_params.get('post')
        if post_id:
            post_id = _get_post(post_id).id
        return Response(ActivityExecutionService.report(
            request.query_params.get('start_date'),
            request.query_params.get('end_date'),
            post_id,
        ))


class DashboardViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'])
    def stats(self, request):
        return Response(DashboardService.stats())

    @action(detail=False, methods=['get'])
    def analytics(self, request):
        return Response(DashboardService.analytics(_get_days(request.query_params)))


# ==============================================================================
# ADMINISTRAÇÃO: AUDITORIA E LGPD
# ==============================================================================

class AuditLogViewSet(viewsets.GenericViewSet):
    """
    Consulta dos logs de auditoria (somente administradores).

    Filtros: user_id, entity_type, action, start_date, end_date, limit.
    """
    serializer_class = AuditLogSerializer
    permission_classes = [IsAdminRole]
    filter_backends = []

    def get_queryset(self):
        return AuditService.filter_logs(self.request.query_params)

    def _limited(self):
        return self.get_queryset()[:AuditService.resolve_limit(self.request.query_params.get('limit'))]

    def list(self, request):
        return Response(self.get_serializer(self._limited(), many=True).data)

    @action(detail=False, methods=['get'], url_path='entity-types')
    def entity_types(self, request):
        values = AuditLog.objects.order_by('entity_type').values_list('entity_type', flat=True).distinct()
        return Response(list(values))

    @action(detail=False, methods=['get'], url_path='actions')
    def action_list(self, request):
        values = AuditLog.objects.order_by('action').values_list('action', flat=True).distinct()
        return Response([
            {'value': value, 'label': AuditService.ACTION_LABELS.get(value, value)}
            for value in values
        ])

    @action(detail=False, methods=['get'])
    def export(self, request):
        LgpdService.log(request, LgpdAccessType.EXPORT, LgpdDataCategory.PERSONAL_DATA, 'audit_log',
                        details={'filters': dict(request.query_params.items())})
        return audit_logs_csv(self._limited(), f"auditoria_{timezone.localdate():%Y_%m_%d}.csv")


class LgpdLogViewSet(viewsets.GenericViewSet):
    """Consulta dos registros de acesso a dados pessoais (somente administradores)."""
    serializer_class = LgpdLogSerializer
    permission_classes = [IsAdminRole]
    filter_backends = []

    def get_queryset(self):
        params = self.request.query_params.copy()
        if params.get('user') and not params.get('user_id'):
            params['user_id'] = params['user']
        return LgpdService.filter_logs(params)

    def _limited(self):
        return self.get_queryset()[:AuditService.resolve_limit(self.request.query_params.get('limit'))]

    def list(self, request):
        return Response(self.get_serializer(self._limited(), many=True).data)

    @action(detail=False, methods=['get'], url_path='access-types')
    def access_types(self, request):
        return Response([{'value': v, 'label': label} for v, label in LgpdAccessType.choices])

    @action(detail=False, methods=['get'], url_path='data-categories')
    def data_categories(self, request):
        return Response([{'value': v, 'label': label} for v, label in LgpdDataCategory.choices])

    @action(detail=False, methods=['get'], url_path='entity-types')
    def entity_types(self, request):
        values = LgpdLog.objects.order_by('entity_type').values_list('entity_type', flat=True).distinct()
        return Response(list(values))

    @action(detail=False, methods=['get'])
    def export(self, request):
        return lgpd_logs_csv(self._limited(), f"lgpd_{timezone.localdate():%Y_%m_%d}.csv")


# ==============================================================================
# ALERTAS E NOTIFICAÇÕES
# ==============================================================================

class AlertViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Alert.objects.select_related('resolved_by').all()
    serializer_class = AlertSerializer
    permission_classes = [RoleBasedPermission]
    filterset_class = AlertFilter
    search_fields = ['message']
    ordering_fields = ['created_at', 'type', 'status']
    ordering = ['-created_at']

    @action(detail=False, methods=['post'])
    def generate(self, request):
        result = AlertService.generate()
        AuditService.log(request.user, 'create', 'alert', details=result)
        return Response(result)

    @action(detail=True, methods=['post'])
    def resolve(self, request, pk=None):
        alert = AlertService.resolve(self.get_object(), request.user)
        data = self.get_serializer(alert).data
        AuditService.log(request.user, 'resolve', 'alert', alert.pk, after=data)
        return Response(data)


class NotificationSettingsViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    queryset = NotificationSettings.objects.select_related('user').all()
    serializer_class = NotificationSettingsSerializer
    permission_classes = [IsAdminRole]
    filterset_fields = ['is_active', 'user']
    search_fields = ['email']
    ordering = ['email']
    audit_entity_type = 'notification_settings'


class NotificationViewSet(viewsets.ViewSet):
    """Status do e-mail, envio de teste e disparo manual das notificações."""
    permission_classes = [IsAdminRole]

    SENDERS = {
        'allocations': send_missing_allocation_notification,
        'documents': send_document_expiration_notification,
        'daily': send_daily_summary,
    }

    @action(detail=False, methods=['get'])
    def status(self, request):
        return Response({
            'configured': is_email_configured(),
            'recipients': {kind: len(get_recipients(kind)) for kind in NOTIFICATION_TYPES},
            'active_settings': NotificationSettings.objects.filter(is_active=True).count(),
        })

    @action(detail=False, methods=['post'])
    def test(self, request):
        email = request.data.get('email') or request.user.email
        if not email:
            raise ValidationError({'email': 'Informe o e-mail de destino.'})
        sent = send_test_email(email)
        return Response({'sent': sent, 'email': email})

    @action(detail=False, methods=['post'])
    def send(self, request):
        kind = request.data.get('type')
        sender = self.SENDERS.get(kind)
        if sender is None:
            raise ValidationError({'type': f'Tipo deve ser um de: {", ".join(self.SENDERS)}.'})
        sent = sender()
        AuditService.log(request.user, 'send_notification', 'notification', details={'type': kind, 'sent': sent})
        return Response({'type': kind, 'sent': bool(sent), 'skipped': sent is None})
