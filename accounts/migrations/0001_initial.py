# Generated manually - UserProfile

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='UserProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('admin', 'Administrador'), ('admin_dica', 'Administrador DICA'), ('operator_dica', 'Operador DICA'), ('fiscal_petrobras', 'Fiscal Petrobras'), ('viewer', 'Visualizador')], default='viewer', help_text='Define o que o usuário pode visualizar, editar ou exportar', max_length=20, verbose_name='Perfil')),
                ('external_id', models.CharField(blank=True, help_text='Identificador do usuário no provedor de identidade', max_length=255, null=True, unique=True, verbose_name='ID Externo')),
                ('profile_image_url', models.URLField(blank=True, max_length=500, verbose_name='Foto')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Perfil de usuário',
                'verbose_name_plural': 'Perfis de usuário',
                'ordering': ['user__username'],
                'indexes': [models.Index(fields=['role'], name='accounts_profile_role_idx')],
            },
        ),
    ]
