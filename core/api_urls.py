"""
URLs da API REST (DRF), montadas em /api/.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    ActivityExecutionAttachmentViewSet,
    ActivityExecutionViewSet,
    AlertViewSet,
    AllocationViewSet,
    AuditLogViewSet,
    DashboardViewSet,
    DocumentChecklistViewSet,
    DocumentViewSet,
    EmployeeViewSet,
    FeriasLicencasViewSet,
    LgpdLogViewSet,
    NotificationSettingsViewSet,
    NotificationViewSet,
    OccurrenceViewSet,
    ReportViewSet,
    ServiceActivityViewSet,
    ServicePostViewSet,
)

router = DefaultRouter()
router.register(r'service-posts', ServicePostViewSet, basename='service-post')
router.register(r'employees', EmployeeViewSet, basename='employee')
router.register(r'allocations', AllocationViewSet, basename='allocation')
router.register(r'occurrences', OccurrenceViewSet, basename='occurrence')
router.register(r'documents', DocumentViewSet, basename='document')
router.register(r'document-checklists', DocumentChecklistViewSet, basename='document-checklist')
router.register(r'ferias-licencas', FeriasLicencasViewSet, basename='ferias-licencas')
router.register(r'service-activities', ServiceActivityViewSet, basename='service-activity')
router.register(r'activity-executions', ActivityExecutionViewSet, basename='activity-execution')
router.register(r'activity-execution-attachments', ActivityExecutionAttachmentViewSet,
                basename='activity-execution-attachment')
router.register(r'reports', ReportViewSet, basename='report')
router.register(r'dashboard', DashboardViewSet, basename='dashboard')
router.register(r'admin/audit-logs', AuditLogViewSet, basename='audit-log')
router.register(r'admin/lgpd-logs', LgpdLogViewSet, basename='lgpd-log')
router.register(r'alerts', AlertViewSet, basename='alert')
router.register(r'notification-settings', NotificationSettingsViewSet, basename='notification-settings')
router.register(r'notifications', NotificationViewSet, basename='notification')

urlpatterns = [
    path('', include(router.urls)),
]
