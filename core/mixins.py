"""
Mixins de ViewSet para auditoria e registro de acessos LGPD.
"""
from .models import LgpdAccessType, LgpdDataCategory
from .services import AuditService, LgpdService


class AuditedModelMixin:
    """
    Registra AuditLog em create/update/destroy de um ModelViewSet.

    diff_before e diff_after são o registro serializado antes e depois da
    alteração. audit_entity_type identifica a entidade no log.
    """
    audit_entity_type = None

    def get_audit_entity_type(self):
        return self.audit_entity_type or self.queryset.model._meta.model_name

    def snapshot(self, instance):
        return self.get_serializer_class()(instance, context=self.get_serializer_context()).data

    def get_create_kwargs(self):
        """Campos extras gravados na criação (ex.: usuário responsável)."""
        return {}

    def perform_create(self, serializer):
        instance = serializer.save(**self.get_create_kwargs())
        AuditService.log(
            self.request.user, 'create', self.get_audit_entity_type(), instance.pk,
            after=self.snapshot(instance),
        )

    def perform_update(self, serializer):
        before = self.snapshot(serializer.instance)
        instance = serializer.save()
        AuditService.log(
            self.request.user, 'update', self.get_audit_entity_type(), instance.pk,
            before=before, after=self.snapshot(instance),
        )

    def perform_destroy(self, instance):
        before = self.snapshot(instance)
        entity_id = instance.pk
        instance.delete()
        AuditService.log(
            self.request.user, 'delete', self.get_audit_entity_type(), entity_id,
            before=before,
        )


class LgpdAccessLogMixin:
    """Registra acesso a dados pessoais em list e retrieve."""
    lgpd_entity_type = None
    lgpd_data_category = LgpdDataCategory.PERSONAL_DATA

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        details = {'filters': dict(request.query_params.items())} if request.query_params else None
        access_type = LgpdAccessType.SEARCH if request.query_params.get('search') else LgpdAccessType.VIEW
        LgpdService.log(request, access_type, self.lgpd_data_category, self.lgpd_entity_type, details=details)
        return response

    def retrieve(self, request, *args, **kwargs):
        response = super().retrieve(request, *args, **kwargs)
        LgpdService.log(
            request, LgpdAccessType.VIEW, self.lgpd_data_category,
            self.lgpd_entity_type, kwargs.get(self.lookup_url_kwarg or self.lookup_field),
        )
        return response
