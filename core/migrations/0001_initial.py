# Generated manually - modelos iniciais da Gestão de Contratos

import core.models
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ServicePost',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('post_code', models.CharField(help_text='Código único do posto no contrato (ex: P-001)', max_length=50, unique=True, verbose_name='Código do Posto')),
                ('post_name', models.CharField(max_length=255, verbose_name='Nome do Posto')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('unit', models.CharField(blank=True, max_length=255, verbose_name='Unidade')),
                ('modality', models.CharField(choices=[('onsite', 'Presencial'), ('hybrid', 'Híbrido'), ('remote', 'Remoto')], default='onsite', max_length=10, verbose_name='Modalidade')),
                ('tipo_posto', models.CharField(blank=True, max_length=100, verbose_name='Tipo de Posto')),
                ('horario_trabalho', models.CharField(blank=True, max_length=100, verbose_name='Horário de Trabalho')),
                ('escala_regime', models.CharField(blank=True, max_length=100, verbose_name='Escala/Regime')),
                ('quantidade_prevista', models.PositiveIntegerField(default=1, help_text='Número de colaboradores previstos para o posto', verbose_name='Quantidade Prevista')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
            ],
            options={
                'verbose_name': 'Posto de Serviço',
                'verbose_name_plural': 'Postos de Serviço',
                'ordering': ['post_code'],
            },
        ),
        migrations.CreateModel(
            name='Employee',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('cpf', models.CharField(help_text='Formato XXX.XXX.XXX-XX', max_length=14, unique=True, validators=[django.core.validators.RegexValidator(message='CPF deve estar no formato XXX.XXX.XXX-XX', regex='^\\d{3}\\.\\d{3}\\.\\d{3}-\\d{2}$')], verbose_name='CPF')),
                ('function_post', models.CharField(max_length=255, verbose_name='Função')),
                ('unit', models.CharField(blank=True, max_length=255, verbose_name='Unidade')),
                ('status', models.CharField(choices=[('active', 'Ativo'), ('inactive', 'Inativo')], default='active', max_length=10, verbose_name='Status')),
                ('admission_date', models.DateField(blank=True, null=True, verbose_name='Data de Admissão')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('linked_post', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='linked_employees', to='core.servicepost', verbose_name='Posto Vinculado')),
            ],
            options={
                'verbose_name': 'Colaborador',
                'verbose_name_plural': 'Colaboradores',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['status'], name='core_employee_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='Allocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(verbose_name='Data')),
                ('status', models.CharField(choices=[('present', 'Presente'), ('absent', 'Ausente'), ('justified', 'Justificado'), ('vacation', 'Férias'), ('medical_leave', 'Licença Médica')], default='present', max_length=20, verbose_name='Status')),
                ('notes', models.TextField(blank=True, verbose_name='Observações')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='core.employee', verbose_name='Colaborador')),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='core.servicepost', verbose_name='Posto')),
            ],
            options={
                'verbose_name': 'Alocação',
                'verbose_name_plural': 'Alocações',
                'ordering': ['date', 'employee__name'],
                'indexes': [models.Index(fields=['post', 'date'], name='core_alloc_post_date_idx')],
                'constraints': [models.UniqueConstraint(fields=('employee', 'date'), name='unique_allocation_employee_date')],
            },
        ),
        migrations.CreateModel(
            name='Occurrence',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(verbose_name='Data')),
                ('description', models.TextField(verbose_name='Descrição')),
                ('category', models.CharField(choices=[('absence', 'Falta'), ('substitution', 'Substituição'), ('issue', 'Problema'), ('note', 'Observação')], max_length=20, verbose_name='Categoria')),
                ('treated', models.BooleanField(default=False, verbose_name='Tratada')),
                ('treated_at', models.DateTimeField(blank=True, null=True, verbose_name='Tratada em')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='occurrences', to='core.employee', verbose_name='Colaborador')),
                ('post', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='occurrences', to='core.servicepost', verbose_name='Posto')),
                ('treated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='treated_occurrences', to=settings.AUTH_USER_MODEL, verbose_name='Tratada por')),
            ],
            options={
                'verbose_name': 'Ocorrência',
                'verbose_name_plural': 'Ocorrências',
                'ordering': ['-date', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Document',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('file', models.FileField(max_length=500, upload_to=core.models.document_upload_path, verbose_name='Arquivo')),
                ('original_name', models.CharField(max_length=255, verbose_name='Nome Original')),
                ('mime_type', models.CharField(blank=True, max_length=100, verbose_name='Tipo MIME')),
                ('size', models.PositiveIntegerField(default=0, verbose_name='Tamanho (bytes)')),
                ('document_type', models.CharField(choices=[('aso', 'ASO'), ('certification', 'Certificação'), ('evidence', 'Evidência'), ('contract', 'Contrato'), ('other', 'Outro')], max_length=20, verbose_name='Tipo de Documento')),
                ('category', models.CharField(blank=True, choices=[('atestados', 'Atestados'), ('comprovantes', 'Comprovantes'), ('relatorios_mensais', 'Relatórios Mensais'), ('evidencias_posto', 'Evidências do Posto'), ('treinamentos', 'Treinamentos'), ('certidoes', 'Certidões'), ('outros', 'Outros')], max_length=30, verbose_name='Categoria')),
                ('month_year', models.CharField(blank=True, help_text='Mês de referência no formato YYYY-MM', max_length=7, verbose_name='Competência')),
                ('expiration_date', models.DateField(blank=True, null=True, verbose_name='Data de Vencimento')),
                ('observations', models.TextField(blank=True, verbose_name='Observações')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='Versão')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Enviado em')),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='documents', to='core.employee', verbose_name='Colaborador')),
                ('post', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='documents', to='core.servicepost', verbose_name='Posto')),
                ('previous_version', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='next_versions', to='core.document', verbose_name='Versão Anterior')),
                ('uploaded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='uploaded_documents', to=settings.AUTH_USER_MODEL, verbose_name='Enviado por')),
            ],
            options={
                'verbose_name': 'Documento',
                'verbose_name_plural': 'Documentos',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['expiration_date'], name='core_document_expiration_idx')],
            },
        ),
        migrations.CreateModel(
            name='DocumentChecklist',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('document_type', models.CharField(choices=[('aso', 'ASO'), ('certification', 'Certificação'), ('evidence', 'Evidência'), ('contract', 'Contrato'), ('other', 'Outro')], max_length=20, verbose_name='Tipo de Documento')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('is_required', models.BooleanField(default=True, verbose_name='Obrigatório')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='document_checklists', to='core.servicepost', verbose_name='Posto')),
            ],
            options={
                'verbose_name': 'Item de Checklist',
                'verbose_name_plural': 'Checklist de Documentos',
                'ordering': ['post', 'name'],
            },
        ),
        migrations.CreateModel(
            name='FeriasLicencas',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('ferias', 'Férias'), ('licenca_medica', 'Licença Médica'), ('licenca_maternidade', 'Licença Maternidade'), ('licenca_paternidade', 'Licença Paternidade'), ('licenca_nojo', 'Licença Nojo'), ('licenca_casamento', 'Licença Casamento'), ('outros', 'Outros')], max_length=30, verbose_name='Tipo')),
                ('start_date', models.DateField(verbose_name='Data de Início')),
                ('end_date', models.DateField(verbose_name='Data de Término')),
                ('status', models.CharField(choices=[('pendente', 'Pendente'), ('aprovado', 'Aprovado'), ('rejeitado', 'Rejeitado'), ('em_andamento', 'Em Andamento'), ('concluido', 'Concluído')], default='pendente', max_length=20, verbose_name='Status')),
                ('observations', models.TextField(blank=True, verbose_name='Observações')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='ferias_licencas_criadas', to=settings.AUTH_USER_MODEL, verbose_name='Criado por')),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ferias_licencas', to='core.employee', verbose_name='Colaborador')),
            ],
            options={
                'verbose_name': 'Férias/Licença',
                'verbose_name_plural': 'Férias e Licenças',
                'ordering': ['-start_date'],
                'constraints': [models.CheckConstraint(condition=models.Q(('start_date__lte', models.F('end_date'))), name='ferias_licencas_start_before_end')],
            },
        ),
        migrations.CreateModel(
            name='ServiceActivity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('ppu_unit', models.CharField(help_text='Unidade de medida da atividade (ex: unidade, hora, m²)', max_length=50, verbose_name='Unidade PPU')),
                ('frequency', models.CharField(choices=[('daily', 'Diária'), ('weekly', 'Semanal'), ('monthly', 'Mensal'), ('on_demand', 'Sob Demanda')], default='daily', max_length=20, verbose_name='Frequência')),
                ('required', models.BooleanField(default=True, verbose_name='Obrigatória')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('service_post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activities', to='core.servicepost', verbose_name='Posto')),
            ],
            options={
                'verbose_name': 'Atividade de Serviço',
                'verbose_name_plural': 'Atividades de Serviço',
                'ordering': ['service_post', 'name'],
            },
        ),
        migrations.CreateModel(
            name='ActivityExecution',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(verbose_name='Data')),
                ('quantity', models.PositiveIntegerField(default=1, verbose_name='Quantidade')),
                ('notes', models.TextField(blank=True, verbose_name='Observações')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activity_executions', to='core.employee', verbose_name='Responsável')),
                ('service_activity', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='executions', to='core.serviceactivity', verbose_name='Atividade')),
                ('service_post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activity_executions', to='core.servicepost', verbose_name='Posto')),
            ],
            options={
                'verbose_name': 'Execução de Atividade',
                'verbose_name_plural': 'Execuções de Atividades',
                'ordering': ['-date'],
                'constraints': [models.UniqueConstraint(fields=('service_activity', 'service_post', 'date'), name='unique_execution_activity_post_date')],
            },
        ),
        migrations.CreateModel(
            name='ActivityExecutionAttachment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('file', models.FileField(max_length=500, upload_to=core.models.execution_attachment_upload_path, verbose_name='Arquivo')),
                ('file_name', models.CharField(max_length=255, verbose_name='Nome do Arquivo')),
                ('mime_type', models.CharField(blank=True, max_length=100, verbose_name='Tipo MIME')),
                ('size', models.PositiveIntegerField(default=0, verbose_name='Tamanho (bytes)')),
                ('uploaded_at', models.DateTimeField(auto_now_add=True, verbose_name='Enviado em')),
                ('execution', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attachments', to='core.activityexecution', verbose_name='Execução')),
            ],
            options={
                'verbose_name': 'Anexo de Execução',
                'verbose_name_plural': 'Anexos de Execução',
                'ordering': ['-uploaded_at'],
            },
        ),
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(db_index=True, max_length=50, verbose_name='Ação')),
                ('entity_type', models.CharField(db_index=True, max_length=50, verbose_name='Entidade')),
                ('entity_id', models.CharField(blank=True, max_length=50, verbose_name='ID da Entidade')),
                ('details', models.JSONField(blank=True, null=True, verbose_name='Detalhes')),
                ('diff_before', models.JSONField(blank=True, null=True, verbose_name='Antes')),
                ('diff_after', models.JSONField(blank=True, null=True, verbose_name='Depois')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Log de Auditoria',
                'verbose_name_plural': 'Logs de Auditoria',
                'ordering': ['-timestamp'],
            },
        ),
        migrations.CreateModel(
            name='LgpdLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('access_type', models.CharField(choices=[('view', 'Visualização'), ('export', 'Exportação'), ('search', 'Pesquisa')], max_length=10, verbose_name='Tipo de Acesso')),
                ('data_category', models.CharField(choices=[('personal_data', 'Dados Pessoais'), ('sensitive_data', 'Dados Sensíveis'), ('financial_data', 'Dados Financeiros')], max_length=20, verbose_name='Categoria de Dados')),
                ('entity_type', models.CharField(max_length=50, verbose_name='Entidade')),
                ('entity_id', models.CharField(blank=True, max_length=50, verbose_name='ID da Entidade')),
                ('ip_address', models.GenericIPAddressField(blank=True, null=True, verbose_name='Endereço IP')),
                ('user_agent', models.TextField(blank=True, verbose_name='User Agent')),
                ('details', models.JSONField(blank=True, null=True, verbose_name='Detalhes')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='lgpd_logs', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Log LGPD',
                'verbose_name_plural': 'Logs LGPD',
                'ordering': ['-timestamp'],
            },
        ),
        migrations.CreateModel(
            name='Alert',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('unallocated_employee', 'Colaborador sem alocação'), ('expired_document', 'Documento vencido'), ('untreated_occurrence', 'Ocorrência não tratada')], max_length=30, verbose_name='Tipo')),
                ('status', models.CharField(choices=[('pending', 'Pendente'), ('resolved', 'Resolvido')], default='pending', max_length=10, verbose_name='Status')),
                ('message', models.TextField(verbose_name='Mensagem')),
                ('entity_type', models.CharField(blank=True, max_length=50, verbose_name='Entidade')),
                ('entity_id', models.PositiveBigIntegerField(blank=True, null=True, verbose_name='ID da Entidade')),
                ('resolved_at', models.DateTimeField(blank=True, null=True, verbose_name='Resolvido em')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('resolved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='resolved_alerts', to=settings.AUTH_USER_MODEL, verbose_name='Resolvido por')),
            ],
            options={
                'verbose_name': 'Alerta',
                'verbose_name_plural': 'Alertas',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status', 'type'], name='core_alert_status_type_idx')],
            },
        ),
        migrations.CreateModel(
            name='NotificationSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('email', models.EmailField(max_length=254, verbose_name='E-mail')),
                ('notify_new_occurrences', models.BooleanField(default=True, verbose_name='Novas ocorrências')),
                ('notify_missing_allocations', models.BooleanField(default=True, verbose_name='Alocações pendentes')),
                ('notify_document_expiration', models.BooleanField(default=True, verbose_name='Vencimento de documentos')),
                ('notify_daily_summary', models.BooleanField(default=False, verbose_name='Resumo diário')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='notification_settings', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Configuração de Notificação',
                'verbose_name_plural': 'Configurações de Notificação',
                'ordering': ['-created_at'],
            },
        ),
    ]
