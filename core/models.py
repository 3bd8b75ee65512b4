"""
Models para Gestão de Contratos DICA

Este módulo contém os modelos principais para:
- Cadastro de colaboradores e postos de serviço
- Alocação diária (presença) de colaboradores nos postos
- Ocorrências, documentos e férias/licenças
- Atividades de serviço (PPU) e suas execuções
- Auditoria de alterações, registro de acessos LGPD e alertas
"""
import mimetypes
import os

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.db import models
from django.utils import timezone


CPF_REGEX = r'^\d{3}\.\d{3}\.\d{3}-\d{2}$'

cpf_validator = RegexValidator(
    regex=CPF_REGEX,
    message='CPF deve estar no formato XXX.XXX.XXX-XX',
)


# ==============================================================================
# ENUMS
# ==============================================================================

class EmployeeStatus(models.TextChoices):
    ACTIVE = 'active', 'Ativo'
    INACTIVE = 'inactive', 'Inativo'


class Modality(models.TextChoices):
    """Modalidade de execução do posto."""
    ONSITE = 'onsite', 'Presencial'
    HYBRID = 'hybrid', 'Híbrido'
    REMOTE = 'remote', 'Remoto'


class AllocationStatus(models.TextChoices):
    """Status de presença de um colaborador em uma data."""
    PRESENT = 'present', 'Presente'
    ABSENT = 'absent', 'Ausente'
    JUSTIFIED = 'justified', 'Justificado'
    VACATION = 'vacation', 'Férias'
    MEDICAL_LEAVE = 'medical_leave', 'Licença Médica'


class OccurrenceCategory(models.TextChoices):
    ABSENCE = 'absence', 'Falta'
    SUBSTITUTION = 'substitution', 'Substituição'
    ISSUE = 'issue', 'Problema'
    NOTE = 'note', 'Observação'


class DocumentType(models.TextChoices):
    ASO = 'aso', 'ASO'
    CERTIFICATION = 'certification', 'Certificação'
    EVIDENCE = 'evidence', 'Evidência'
    CONTRACT = 'contract', 'Contrato'
    OTHER = 'other', 'Outro'


class DocumentCategory(models.TextChoices):
    ATESTADOS = 'atestados', 'Atestados'
    COMPROVANTES = 'comprovantes', 'Comprovantes'
    RELATORIOS_MENSAIS = 'relatorios_mensais', 'Relatórios Mensais'
    EVIDENCIAS_POSTO = 'evidencias_posto', 'Evidências do Posto'
    TREINAMENTOS = 'treinamentos', 'Treinamentos'
    CERTIDOES = 'certidoes', 'Certidões'
    OUTROS = 'outros', 'Outros'


class AlertType(models.TextChoices):
    UNALLOCATED_EMPLOYEE = 'unallocated_employee', 'Colaborador sem alocação'
    EXPIRED_DOCUMENT = 'expired_document', 'Documento vencido'
    UNTREATED_OCCURRENCE = 'untreated_occurrence', 'Ocorrência não tratada'


class AlertStatus(models.TextChoices):
    PENDING = 'pending', 'Pendente'
    RESOLVED = 'resolved', 'Resolvido'


class LgpdAccessType(models.TextChoices):
    VIEW = 'view', 'Visualização'
    EXPORT = 'export', 'Exportação'
    SEARCH = 'search', 'Pesquisa'


class LgpdDataCategory(models.TextChoices):
    PERSONAL_DATA = 'personal_data', 'Dados Pessoais'
    SENSITIVE_DATA = 'sensitive_data', 'Dados Sensíveis'
    FINANCIAL_DATA = 'financial_data', 'Dados Financeiros'


class FeriasLicencasType(models.TextChoices):
    FERIAS = 'ferias', 'Férias'
    LICENCA_MEDICA = 'licenca_medica', 'Licença Médica'
    LICENCA_MATERNIDADE = 'licenca_maternidade', 'Licença Maternidade'
    LICENCA_PATERNIDADE = 'licenca_paternidade', 'Licença Paternidade'
    LICENCA_NOJO = 'licenca_nojo', 'Licença Nojo'
    LICENCA_CASAMENTO = 'licenca_casamento', 'Licença Casamento'
    OUTROS = 'outros', 'Outros'


class FeriasLicencasStatus(models.TextChoices):
    PENDENTE = 'pendente', 'Pendente'
    APROVADO = 'aprovado', 'Aprovado'
    REJEITADO = 'rejeitado', 'Rejeitado'
    EM_ANDAMENTO = 'em_andamento', 'Em Andamento'
    CONCLUIDO = 'concluido', 'Concluído'


class ActivityFrequency(models.TextChoices):
    DAILY = 'daily', 'Diária'
    WEEKLY = 'weekly', 'Semanal'
    MONTHLY = 'monthly', 'Mensal'
    ON_DEMAND = 'on_demand', 'Sob Demanda'


# ==============================================================================
# CADASTROS
# ==============================================================================

class ServicePost(models.Model):
    """
    Posto de serviço do contrato.

    Cada posto recebe colaboradores alocados diariamente e pode ter
    atividades recorrentes (PPU) configuradas.
    """
    post_code = models.CharField(
        max_length=50,
        unique=True,
        verbose_name='Código do Posto',
        help_text='Código único do posto no contrato (ex: P-001)'
    )
    post_name = models.CharField(max_length=255, verbose_name='Nome do Posto')
    description = models.TextField(blank=True, verbose_name='Descrição')
    unit = models.CharField(max_length=255, blank=True, verbose_name='Unidade')
    modality = models.CharField(
        max_length=10,
        choices=Modality.choices,
        default=Modality.ONSITE,
        verbose_name='Modalidade'
    )
    tipo_posto = models.CharField(max_length=100, blank=True, verbose_name='Tipo de Posto')
    horario_trabalho = models.CharField(max_length=100, blank=True, verbose_name='Horário de Trabalho')
    escala_regime = models.CharField(max_length=100, blank=True, verbose_name='Escala/Regime')
    quantidade_prevista = models.PositiveIntegerField(
        default=1,
        verbose_name='Quantidade Prevista',
        help_text='Número de colaboradores previstos para o posto'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Posto de Serviço'
        verbose_name_plural = 'Postos de Serviço'
        ordering = ['post_code']

    def __str__(self):
        return f"{self.post_code} - {self.post_name}"


class Employee(models.Model):
    """Colaborador alocado no contrato."""
    name = models.CharField(max_length=255, verbose_name='Nome')
    cpf = models.CharField(
        max_length=14,
        unique=True,
        validators=[cpf_validator],
        verbose_name='CPF',
        help_text='Formato XXX.XXX.XXX-XX'
    )
    function_post = models.CharField(max_length=255, verbose_name='Função')
    unit = models.CharField(max_length=255, blank=True, verbose_name='Unidade')
    status = models.CharField(
        max_length=10,
        choices=EmployeeStatus.choices,
        default=EmployeeStatus.ACTIVE,
        verbose_name='Status'
    )
    admission_date = models.DateField(null=True, blank=True, verbose_name='Data de Admissão')
    linked_post = models.ForeignKey(
        ServicePost,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='linked_employees',
        verbose_name='Posto Vinculado'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Colaborador'
        verbose_name_plural = 'Colaboradores'
        ordering = ['name']
        indexes = [
            models.Index(fields=['status'], name='core_employee_status_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_active(self):
        return self.status == EmployeeStatus.ACTIVE


class Allocation(models.Model):
    """
    Alocação diária de um colaborador em um posto.

    Um colaborador tem no máximo UMA alocação por data; alterações na grade
    são feitas pela chave (colaborador, data).
    """
    employee = models.ForeignKey(
        Employee,
        on_delete=models.CASCADE,
        related_name='allocations',
        verbose_name='Colaborador'
    )
    post = models.ForeignKey(
        ServicePost,
        on_delete=models.CASCADE,
        related_name='allocations',
        verbose_name='Posto'
    )
    date = models.DateField(verbose_name='Data')
    status = models.CharField(
        max_length=20,
        choices=AllocationStatus.choices,
        default=AllocationStatus.PRESENT,
        verbose_name='Status'
    )
    notes = models.TextField(blank=True, verbose_name='Observações')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Alocação'
        verbose_name_plural = 'Alocações'
        ordering = ['date', 'employee__name']
        constraints = [
            models.UniqueConstraint(fields=['employee', 'date'], name='unique_allocation_employee_date'),
        ]
        indexes = [
            models.Index(fields=['post', 'date'], name='core_alloc_post_date_idx'),
        ]

    def __str__(self):
        return f"{self.employee} - {self.date} ({self.get_status_display()})"


class Occurrence(models.Model):
    """Ocorrência registrada no dia a dia do contrato (faltas, substituições, problemas)."""
    date = models.DateField(verbose_name='Data')
    employee = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='occurrences',
        verbose_name='Colaborador'
    )
    post = models.ForeignKey(
        ServicePost,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='occurrences',
        verbose_name='Posto'
    )
    description = models.TextField(verbose_name='Descrição')
    category = models.CharField(
        max_length=20,
        choices=OccurrenceCategory.choices,
        verbose_name='Categoria'
    )
    treated = models.BooleanField(default=False, verbose_name='Tratada')
    treated_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='treated_occurrences',
        verbose_name='Tratada por'
    )
    treated_at = models.DateTimeField(null=True, blank=True, verbose_name='Tratada em')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Ocorrência'
        verbose_name_plural = 'Ocorrências'
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.get_category_display()} - {self.date}"

    def mark_treated(self, user):
        self.treated = True
        self.treated_by = user
        self.treated_at = timezone.now()
        self.save(update_fields=['treated', 'treated_by', 'treated_at', 'updated_at'])


def document_upload_path(instance, filename):
    """Organiza os documentos por ano/mês de envio."""
    return timezone.now().strftime('documents/%Y/%m/') + filename


class Document(models.Model):
    """
    Documento do contrato (ASO, certificações, evidências, contratos).

    Novas versões apontam para a versão anterior em previous_version.
    """
    file = models.FileField(upload_to=document_upload_path, max_length=500, verbose_name='Arquivo')
    original_name = models.CharField(max_length=255, verbose_name='Nome Original')
    mime_type = models.CharField(max_length=100, blank=True, verbose_name='Tipo MIME')
    size = models.PositiveIntegerField(default=0, verbose_name='Tamanho (bytes)')
    document_type = models.CharField(
        max_length=20,
        choices=DocumentType.choices,
        verbose_name='Tipo de Documento'
    )
    category = models.CharField(
        max_length=30,
        choices=DocumentCategory.choices,
        blank=True,
        verbose_name='Categoria'
    )
    employee = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='documents',
        verbose_name='Colaborador'
    )
    post = models.ForeignKey(
        ServicePost,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='documents',
        verbose_name='Posto'
    )
    month_year = models.CharField(
        max_length=7,
        blank=True,
        verbose_name='Competência',
        help_text='Mês de referência no formato YYYY-MM'
    )
    expiration_date = models.DateField(null=True, blank=True, verbose_name='Data de Vencimento')
    observations = models.TextField(blank=True, verbose_name='Observações')
    uploaded_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='uploaded_documents',
        verbose_name='Enviado por'
    )
    version = models.PositiveIntegerField(default=1, verbose_name='Versão')
    previous_version = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='next_versions',
        verbose_name='Versão Anterior'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Enviado em')

    class Meta:
        verbose_name = 'Documento'
        verbose_name_plural = 'Documentos'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['expiration_date'], name='core_document_expiration_idx'),
        ]

    def __str__(self):
        return f"{self.original_name} (v{self.version})"

    def save(self, *args, **kwargs):
        """Preenche tamanho e tipo MIME a partir do arquivo."""
        if self.file:
            if not self.original_name:
                self.original_name = os.path.basename(self.file.name)
            if not self.size:
                try:
                    self.size = self.file.size
                except (OSError, ValueError):
                    self.size = 0
            if not self.mime_type:
                self.mime_type = mimetypes.guess_type(self.file.name)[0] or 'application/octet-stream'
        super().save(*args, **kwargs)

    @property
    def is_expired(self):
        return bool(self.expiration_date and self.expiration_date < timezone.localdate())

    def get_version_chain(self):
        """Retorna esta versão e todas as anteriores, da mais nova para a mais antiga."""
        chain = []
        seen = set()
        current = self
        while current is not None and current.pk not in seen:
            chain.append(current)
            seen.add(current.pk)
            current = current.previous_version
        return chain


class DocumentChecklist(models.Model):
    """Documento exigido para um posto (checklist de conformidade)."""
    post = models.ForeignKey(
        ServicePost,
        on_delete=models.CASCADE,
        related_name='document_checklists',
        verbose_name='Posto'
    )
    document_type = models.CharField(
        max_length=20,
        choices=DocumentType.choices,
        verbose_name='Tipo de Documento'
    )
    name = models.CharField(max_length=255, verbose_name='Nome')
    description = models.TextField(blank=True, verbose_name='Descrição')
    is_required = models.BooleanField(default=True, verbose_name='Obrigatório')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Item de Checklist'
        verbose_name_plural = 'Checklist de Documentos'
        ordering = ['post', 'name']

    def __str__(self):
        return f"{self.post.post_code} - {self.name}"


class FeriasLicencas(models.Model):
    """Férias e licenças de colaboradores."""
    employee = models.ForeignKey(
        Employee,
        on_delete=models.CASCADE,
        related_name='ferias_licencas',
        verbose_name='Colaborador'
    )
    type = models.CharField(
        max_length=30,
        choices=FeriasLicencasType.choices,
        verbose_name='Tipo'
    )
    start_date = models.DateField(verbose_name='Data de Início')
    end_date = models.DateField(verbose_name='Data de Término')
    status = models.CharField(
        max_length=20,
        choices=FeriasLicencasStatus.choices,
        default=FeriasLicencasStatus.PENDENTE,
        verbose_name='Status'
    )
    observations = models.TextField(blank=True, verbose_name='Observações')
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='ferias_licencas_criadas',
        verbose_name='Criado por'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Férias/Licença'
        verbose_name_plural = 'Férias e Licenças'
        ordering = ['-start_date']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_date__lte=models.F('end_date')),
                name='ferias_licencas_start_before_end',
            ),
        ]

    def __str__(self):
        return f"{self.employee} - {self.get_type_display()} ({self.start_date} a {self.end_date})"

    def clean(self):
        super().clean()
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError({'end_date': 'A data de término deve ser igual ou posterior à data de início.'})


# ==============================================================================
# ATIVIDADES (PPU)
# ==============================================================================

class ServiceActivity(models.Model):
    """Atividade recorrente configurada para um posto, medida em PPU."""
    service_post = models.ForeignKey(
        ServicePost,
        on_delete=models.CASCADE,
        related_name='activities',
        verbose_name='Posto'
    )
    name = models.CharField(max_length=255, verbose_name='Nome')
    description = models.TextField(blank=True, verbose_name='Descrição')
    ppu_unit = models.CharField(
        max_length=50,
        verbose_name='Unidade PPU',
        help_text='Unidade de medida da atividade (ex: unidade, hora, m²)'
    )
    frequency = models.CharField(
        max_length=20,
        choices=ActivityFrequency.choices,
        default=ActivityFrequency.DAILY,
        verbose_name='Frequência'
    )
    required = models.BooleanField(default=True, verbose_name='Obrigatória')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Atividade de Serviço'
        verbose_name_plural = 'Atividades de Serviço'
        ordering = ['service_post', 'name']

    def __str__(self):
        return f"{self.name} ({self.ppu_unit})"


class ActivityExecution(models.Model):
    """Execução de uma atividade em um dia: uma por (atividade, posto, data)."""
    service_activity = models.ForeignKey(
        ServiceActivity,
        on_delete=models.CASCADE,
        related_name='executions',
        verbose_name='Atividade'
    )
    service_post = models.ForeignKey(
        ServicePost,
        on_delete=models.CASCADE,
        related_name='activity_executions',
        verbose_name='Posto'
    )
    employee = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activity_executions',
        verbose_name='Responsável'
    )
    date = models.DateField(verbose_name='Data')
    quantity = models.PositiveIntegerField(default=1, verbose_name='Quantidade')
    notes = models.TextField(blank=True, verbose_name='Observações')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Execução de Atividade'
        verbose_name_plural = 'Execuções de Atividades'
        ordering = ['-date']
        constraints = [
            models.UniqueConstraint(
                fields=['service_activity', 'service_post', 'date'],
                name='unique_execution_activity_post_date',
            ),
        ]

    def __str__(self):
        return f"{self.service_activity.name} - {self.date}: {self.quantity}"


def execution_attachment_upload_path(instance, filename):
    return timezone.now().strftime('activity_executions/%Y/%m/') + filename


class ActivityExecutionAttachment(models.Model):
    """Arquivo anexado a uma execução de atividade."""
    execution = models.ForeignKey(
        ActivityExecution,
        on_delete=models.CASCADE,
        related_name='attachments',
        verbose_name='Execução'
    )
    file = models.FileField(upload_to=execution_attachment_upload_path, max_length=500, verbose_name='Arquivo')
    file_name = models.CharField(max_length=255, verbose_name='Nome do Arquivo')
    mime_type = models.CharField(max_length=100, blank=True, verbose_name='Tipo MIME')
    size = models.PositiveIntegerField(default=0, verbose_name='Tamanho (bytes)')
    uploaded_at = models.DateTimeField(auto_now_add=True, verbose_name='Enviado em')

    class Meta:
        verbose_name = 'Anexo de Execução'
        verbose_name_plural = 'Anexos de Execução'
        ordering = ['-uploaded_at']

    def __str__(self):
        return self.file_name

    def save(self, *args, **kwargs):
        if self.file:
            if not self.file_name:
                self.file_name = os.path.basename(self.file.name)
            if not self.size:
                try:
                    self.size = self.file.size
                except (OSError, ValueError):
                    self.size = 0
            if not self.mime_type:
                self.mime_type = mimetypes.guess_type(self.file.name)[0] or 'application/octet-stream'
        super().save(*args, **kwargs)


# ==============================================================================
# AUDITORIA, LGPD, ALERTAS E NOTIFICAÇÕES
# ==============================================================================

class AuditLog(models.Model):
    """
    Registro de alteração feita pela API.

    diff_before e diff_after guardam o registro serializado antes e depois
    da alteração; são opacos para o sistema e exibidos como JSON.
    """
    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        verbose_name='Usuário'
    )
    action = models.CharField(max_length=50, db_index=True, verbose_name='Ação')
    entity_type = models.CharField(max_length=50, db_index=True, verbose_name='Entidade')
    entity_id = models.CharField(max_length=50, blank=True, verbose_name='ID da Entidade')
    details = models.JSONField(null=True, blank=True, verbose_name='Detalhes')
    diff_before = models.JSONField(null=True, blank=True, verbose_name='Antes')
    diff_after = models.JSONField(null=True, blank=True, verbose_name='Depois')
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name='Data/Hora')

    class Meta:
        verbose_name = 'Log de Auditoria'
        verbose_name_plural = 'Logs de Auditoria'
        ordering = ['-timestamp']

    def __str__(self):
        return f"{self.action} {self.entity_type}#{self.entity_id} em {self.timestamp}"


class LgpdLog(models.Model):
    """Registro de acesso a dados pessoais (LGPD)."""
    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='lgpd_logs',
        verbose_name='Usuário'
    )
    access_type = models.CharField(
        max_length=10,
        choices=LgpdAccessType.choices,
        verbose_name='Tipo de Acesso'
    )
    data_category = models.CharField(
        max_length=20,
        choices=LgpdDataCategory.choices,
        verbose_name='Categoria de Dados'
    )
    entity_type = models.CharField(max_length=50, verbose_name='Entidade')
    entity_id = models.CharField(max_length=50, blank=True, verbose_name='ID da Entidade')
    ip_address = models.GenericIPAddressField(null=True, blank=True, verbose_name='Endereço IP')
    user_agent = models.TextField(blank=True, verbose_name='User Agent')
    details = models.JSONField(null=True, blank=True, verbose_name='Detalhes')
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name='Data/Hora')

    class Meta:
        verbose_name = 'Log LGPD'
        verbose_name_plural = 'Logs LGPD'
        ordering = ['-timestamp']

    def __str__(self):
        return f"{self.access_type} {self.entity_type} em {self.timestamp}"


class Alert(models.Model):
    """Alerta gerado automaticamente para pendências do contrato."""
    type = models.CharField(max_length=30, choices=AlertType.choices, verbose_name='Tipo')
    status = models.CharField(
        max_length=10,
        choices=AlertStatus.choices,
        default=AlertStatus.PENDING,
        verbose_name='Status'
    )
    message = models.TextField(verbose_name='Mensagem')
    entity_type = models.CharField(max_length=50, blank=True, verbose_name='Entidade')
    entity_id = models.PositiveBigIntegerField(null=True, blank=True, verbose_name='ID da Entidade')
    resolved_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='resolved_alerts',
        verbose_name='Resolvido por'
    )
    resolved_at = models.DateTimeField(null=True, blank=True, verbose_name='Resolvido em')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Alerta'
        verbose_name_plural = 'Alertas'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'type'], name='core_alert_status_type_idx'),
        ]

    def __str__(self):
        return f"{self.get_type_display()}: {self.message[:50]}"


class NotificationSettings(models.Model):
    """Destinatário de notificações por e-mail e os tipos que deseja receber."""
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notification_settings',
        verbose_name='Usuário'
    )
    email = models.EmailField(verbose_name='E-mail')
    notify_new_occurrences = models.BooleanField(default=True, verbose_name='Novas ocorrências')
    notify_missing_allocations = models.BooleanField(default=True, verbose_name='Alocações pendentes')
    notify_document_expiration = models.BooleanField(default=True, verbose_name='Vencimento de documentos')
    notify_daily_summary = models.BooleanField(default=False, verbose_name='Resumo diário')
    is_active = models.BooleanField(default=True, verbose_name='Ativo')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Configuração de Notificação'
        verbose_name_plural = 'Configurações de Notificação'
        ordering = ['-created_at']

    def __str__(self):
        return self.email
