"""
Django Admin da Gestão de Contratos.
"""
from django.contrib import admin

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


@admin.register(ServicePost)
class ServicePostAdmin(admin.ModelAdmin):
    list_display = ['post_code', 'post_name', 'unit', 'modality', 'quantidade_prevista']
    list_filter = ['modality']
    search_fields = ['post_code', 'post_name', 'unit']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['name', 'cpf', 'function_post', 'status', 'linked_post']
    list_filter = ['status', 'unit']
    search_fields = ['name', 'cpf', 'function_post']
    autocomplete_fields = ['linked_post']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Allocation)
class AllocationAdmin(admin.ModelAdmin):
    list_display = ['date', 'employee', 'post', 'status']
    list_filter = ['status', 'post', 'date']
    search_fields = ['employee__name', 'post__post_code']
    date_hierarchy = 'date'
    autocomplete_fields = ['employee', 'post']


@admin.register(Occurrence)
class OccurrenceAdmin(admin.ModelAdmin):
    list_display = ['date', 'category', 'employee', 'post', 'description_short', 'treated']
    list_filter = ['category', 'treated', 'date']
    search_fields = ['description', 'employee__name']
    readonly_fields = ['treated_by', 'treated_at', 'created_at', 'updated_at']

    def description_short(self, obj):
        return obj.description[:60] + '...' if len(obj.description) > 60 else obj.description
    description_short.short_description = 'Descrição'


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ['original_name', 'document_type', 'category', 'employee', 'post', 'version', 'expiration_date']
    list_filter = ['document_type', 'category']
    search_fields = ['original_name', 'observations']
    readonly_fields = ['mime_type', 'size', 'uploaded_by', 'created_at']


@admin.register(DocumentChecklist)
class DocumentChecklistAdmin(admin.ModelAdmin):
    list_display = ['name', 'post', 'document_type', 'is_required']
    list_filter = ['document_type', 'is_required']


@admin.register(FeriasLicencas)
class FeriasLicencasAdmin(admin.ModelAdmin):
    list_display = ['employee', 'type', 'start_date', 'end_date', 'status']
    list_filter = ['type', 'status']
    search_fields = ['employee__name']


@admin.register(ServiceActivity)
class ServiceActivityAdmin(admin.ModelAdmin):
    list_display = ['name', 'service_post', 'ppu_unit', 'frequency', 'required']
    list_filter = ['frequency', 'required']
    search_fields = ['name']


class ActivityExecutionAttachmentInline(admin.TabularInline):
    model = ActivityExecutionAttachment
    extra = 0
    readonly_fields = ['file_name', 'mime_type', 'size', 'uploaded_at']


@admin.register(ActivityExecution)
class ActivityExecutionAdmin(admin.ModelAdmin):
    list_display = ['date', 'service_activity', 'service_post', 'quantity', 'employee']
    list_filter = ['service_post', 'date']
    inlines = [ActivityExecutionAttachmentInline]


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Logs de auditoria são somente leitura."""
    list_display = ['timestamp', 'user', 'action', 'entity_type', 'entity_id']
    list_filter = ['action', 'entity_type']
    search_fields = ['entity_id', 'user__username']
    readonly_fields = ['user', 'action', 'entity_type', 'entity_id', 'details', 'diff_before', 'diff_after', 'timestamp']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(LgpdLog)
class LgpdLogAdmin(admin.ModelAdmin):
    list_display = ['timestamp', 'user', 'access_type', 'data_category', 'entity_type', 'ip_address']
    list_filter = ['access_type', 'data_category', 'entity_type']
    readonly_fields = [
        'user', 'access_type', 'data_category', 'entity_type', 'entity_id',
        'ip_address', 'user_agent', 'details', 'timestamp',
    ]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Alert)
class AlertAdmin(admin.ModelAdmin):
    list_display = ['created_at', 'type', 'status', 'entity_type', 'entity_id']
    list_filter = ['type', 'status']
    readonly_fields = ['resolved_by', 'resolved_at', 'created_at']


@admin.register(NotificationSettings)
class NotificationSettingsAdmin(admin.ModelAdmin):
    list_display = [
        'email', 'user', 'notify_new_occurrences', 'notify_missing_allocations',
        'notify_document_expiration', 'notify_daily_summary', 'is_active',
    ]
    list_filter = ['is_active']
    search_fields = ['email']
