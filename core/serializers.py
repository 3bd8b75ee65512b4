"""
Serializers DRF para Gestão de Contratos DICA

Serializers para todos os modelos com validações e relacionamentos.
"""
from rest_framework import serializers
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError as DjangoValidationError

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
    LgpdLog,
    NotificationSettings,
    Occurrence,
    ServiceActivity,
    ServicePost,
)
from .utils.file_validators import validate_document_file


class UserSerializer(serializers.ModelSerializer):
    """Serializer para User (apenas campos essenciais)."""
    full_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'full_name']
        read_only_fields = fields

    def get_full_name(self, obj):
        """Retorna nome completo ou username."""
        return obj.get_full_name() or obj.username


class ServicePostSerializer(serializers.ModelSerializer):
    """Serializer para ServicePost."""
    activities_count = serializers.SerializerMethodField()

    class Meta:
        model = ServicePost
        fields = [
            'id', 'post_code', 'post_name', 'description', 'unit', 'modality',
            'tipo_posto', 'horario_trabalho', 'escala_regime', 'quantidade_prevista',
            'activities_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_activities_count(self, obj):
        return obj.activities.count()


class EmployeeSerializer(serializers.ModelSerializer):
    """Serializer para Employee. O CPF é validado no formato XXX.XXX.XXX-XX."""
    linked_post_code = serializers.CharField(source='linked_post.post_code', read_only=True, default=None)

    class Meta:
        model = Employee
        fields = [
            'id', 'name', 'cpf', 'function_post', 'unit', 'status', 'admission_date',
            'linked_post', 'linked_post_code', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class AllocationSerializer(serializers.ModelSerializer):
    """
    Serializer para Allocation.

    A unicidade (colaborador, data) é tratada pelo upsert da view, por isso
    o validador automático da constraint é removido.
    """
    employee_name = serializers.CharField(source='employee.name', read_only=True)
    post_code = serializers.CharField(source='post.post_code', read_only=True)

    class Meta:
        model = Allocation
        fields = [
            'id', 'employee', 'employee_name', 'post', 'post_code', 'date',
            'status', 'notes', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        validators = []

    def validate(self, data):
        # na criação a colisão vira atualização (upsert na view)
        if self.instance is None:
            return data
        employee = data.get('employee', self.instance.employee)
        day = data.get('date', self.instance.date)
        collision = (
            Allocation.objects.filter(employee=employee, date=day)
            .exclude(pk=self.instance.pk)
            .exists()
        )
        if collision:
            raise serializers.ValidationError({
                'date': f'{employee.name} já possui alocação em {day:%d/%m/%Y}.'
            })
        return data


class OccurrenceSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source='employee.name', read_only=True, default=None)
    post_code = serializers.CharField(source='post.post_code', read_only=True, default=None)
    treated_by = UserSerializer(read_only=True)

    class Meta:
        model = Occurrence
        fields = [
            'id', 'date', 'employee', 'employee_name', 'post', 'post_code',
            'description', 'category', 'treated', 'treated_by', 'treated_at',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'treated', 'treated_by', 'treated_at', 'created_at', 'updated_at']


class DocumentSerializer(serializers.ModelSerializer):
    """
    Serializer para Document.

    O arquivo é enviado em multipart; nome original, tamanho e tipo MIME são
    preenchidos a partir do upload.
    """
    uploaded_by = UserSerializer(read_only=True)
    is_expired = serializers.BooleanField(read_only=True)

    class Meta:
        model = Document
        fields = [
            'id', 'file', 'original_name', 'mime_type', 'size', 'document_type',
            'category', 'employee', 'post', 'month_year', 'expiration_date',
            'observations', 'uploaded_by', 'version', 'previous_version',
            'is_expired', 'created_at',
        ]
        read_only_fields = [
            'id', 'original_name', 'mime_type', 'size', 'uploaded_by',
            'version', 'previous_version', 'created_at',
        ]
        extra_kwargs = {
            'file': {'write_only': True},
        }

    def validate_file(self, value):
        original_name = value.name
        try:
            validate_document_file(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.messages)
        self.context['original_name'] = original_name
        return value

    def validate_month_year(self, value):
        if value:
            parts = value.split('-')
            if len(parts) != 2 or len(parts[0]) != 4 or not all(p.isdigit() for p in parts) \
                    or not 1 <= int(parts[1]) <= 12:
                raise serializers.ValidationError('Competência deve estar no formato YYYY-MM.')
        return value

    def create(self, validated_data):
        upload = validated_data['file']
        validated_data['original_name'] = self.context.get('original_name') or upload.name
        validated_data['size'] = upload.size
        validated_data['mime_type'] = getattr(upload, 'content_type', '') or ''
        return super().create(validated_data)


class DocumentChecklistSerializer(serializers.ModelSerializer):
    class Meta:
        model = DocumentChecklist
        fields = ['id', 'post', 'document_type', 'name', 'description', 'is_required', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class FeriasLicencasSerializer(serializers.ModelSerializer):
    """Serializer para FeriasLicencas. Data de início não pode ser posterior ao término."""
    employee_name = serializers.CharField(source='employee.name', read_only=True)

    class Meta:
        model = FeriasLicencas
        fields = [
            'id', 'employee', 'employee_name', 'type', 'start_date', 'end_date',
            'status', 'observations', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']

    def validate(self, data):
        start_date = data.get('start_date', getattr(self.instance, 'start_date', None))
        end_date = data.get('end_date', getattr(self.instance, 'end_date', None))
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({
                'end_date': 'A data de término deve ser igual ou posterior à data de início.'
            })
        return data


class ServiceActivitySerializer(serializers.ModelSerializer):
    class Meta:
        model = ServiceActivity
        fields = [
            'id', 'service_post', 'name', 'description', 'ppu_unit',
            'frequency', 'required', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class ActivityExecutionAttachmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = ActivityExecutionAttachment
        fields = ['id', 'execution', 'file_name', 'mime_type', 'size', 'uploaded_at']
        read_only_fields = fields


class ActivityExecutionSerializer(serializers.ModelSerializer):
    """Serializer para ActivityExecution. Quantidade é inteiro não negativo."""
    activity_name = serializers.CharField(source='service_activity.name', read_only=True)
    attachments = ActivityExecutionAttachmentSerializer(many=True, read_only=True)

    class Meta:
        model = ActivityExecution
        fields = [
            'id', 'service_activity', 'activity_name', 'service_post', 'employee',
            'date', 'quantity', 'notes', 'attachments', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, data):
        activity = data.get('service_activity', getattr(self.instance, 'service_activity', None))
        post = data.get('service_post', getattr(self.instance, 'service_post', None))
        if activity and post and activity.service_post_id != post.id:
            raise serializers.ValidationError({
                'service_activity': 'A atividade não pertence ao posto informado.'
            })
        return data


class AuditLogSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            'id', 'user', 'action', 'entity_type', 'entity_id',
            'details', 'diff_before', 'diff_after', 'timestamp',
        ]
        read_only_fields = fields


class LgpdLogSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)

    class Meta:
        model = LgpdLog
        fields = [
            'id', 'user', 'access_type', 'data_category', 'entity_type', 'entity_id',
            'ip_address', 'user_agent', 'details', 'timestamp',
        ]
        read_only_fields = fields


class AlertSerializer(serializers.ModelSerializer):
    resolved_by = UserSerializer(read_only=True)

    class Meta:
        model = Alert
        fields = [
            'id', 'type', 'status', 'message', 'entity_type', 'entity_id',
            'resolved_by', 'resolved_at', 'created_at',
        ]
        read_only_fields = fields


class NotificationSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = NotificationSettings
        fields = [
            'id', 'user', 'email', 'notify_new_occurrences', 'notify_missing_allocations',
            'notify_document_expiration', 'notify_daily_summary', 'is_active',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
