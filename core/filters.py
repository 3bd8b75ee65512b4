"""
FilterSets django-filter com filtros por período (start_date/end_date).
"""
import django_filters

from .models import ActivityExecution, Alert, Allocation, Document, FeriasLicencas, Occurrence


class AllocationFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    end_date = django_filters.DateFilter(field_name='date', lookup_expr='lte')

    class Meta:
        model = Allocation
        fields = ['post', 'employee', 'status', 'date']


class OccurrenceFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    end_date = django_filters.DateFilter(field_name='date', lookup_expr='lte')

    class Meta:
        model = Occurrence
        fields = ['post', 'employee', 'category', 'treated']


class DocumentFilter(django_filters.FilterSet):
    expires_before = django_filters.DateFilter(field_name='expiration_date', lookup_expr='lte')

    class Meta:
        model = Document
        fields = ['document_type', 'category', 'employee', 'post', 'month_year']


class FeriasLicencasFilter(django_filters.FilterSet):
    """Períodos que se sobrepõem a [start_date, end_date]."""
    start_date = django_filters.DateFilter(field_name='end_date', lookup_expr='gte')
    end_date = django_filters.DateFilter(field_name='start_date', lookup_expr='lte')

    class Meta:
        model = FeriasLicencas
        fields = ['employee', 'type', 'status']


class ActivityExecutionFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    end_date = django_filters.DateFilter(field_name='date', lookup_expr='lte')

    class Meta:
        model = ActivityExecution
        fields = ['service_post', 'service_activity', 'employee']


class AlertFilter(django_filters.FilterSet):
    class Meta:
        model = Alert
        fields = ['status', 'type', 'entity_type']
