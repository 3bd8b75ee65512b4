"""
Comando para definir o perfil de acesso de um usuário.

Uso:
  python manage.py definir_perfil joao.silva admin_dica
  python manage.py definir_perfil joao@empresa.com.br fiscal
"""
from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError
from django.db.models import Q

from accounts.models import UserProfile
from accounts.roles import PERFIS, normalize_role


class Command(BaseCommand):
    help = "Define o perfil (role) de um usuário pelo username ou e-mail."

    def add_arguments(self, parser):
        parser.add_argument('usuario', help='Username ou e-mail')
        parser.add_argument('perfil', help=f'Um de: {", ".join(PERFIS.TODOS)} (ou apelido)')

    def handle(self, *args, **options):
        role = normalize_role(options['perfil'])
        if role is None:
            raise CommandError(f"Perfil desconhecido: {options['perfil']}")

        identifier = options['usuario']
        users = User.objects.filter(Q(username=identifier) | Q(email__iexact=identifier))
        if users.count() != 1:
            raise CommandError(f'Usuário não encontrado ou ambíguo: {identifier}')
        user = users.get()

        profile, _ = UserProfile.objects.get_or_create(user=user)
        profile.role = role
        profile.save(update_fields=['role', 'updated_at'])
        self.stdout.write(self.style.SUCCESS(f'{user.username}: perfil {profile.get_role_display()}'))
