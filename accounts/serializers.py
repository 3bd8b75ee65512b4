"""
Serializers de usuário com perfil de acesso e permissões derivadas.
"""
from django.contrib.auth.models import User
from rest_framework import serializers

from .models import UserRole
from .roles import derive_permissions, get_user_role, normalize_role


class UserWithRoleSerializer(serializers.ModelSerializer):
    """Usuário com perfil e as quatro flags de permissão."""
    full_name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()
    permissions = serializers.SerializerMethodField()
    profile_image_url = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'first_name', 'last_name', 'full_name',
            'is_active', 'role', 'permissions', 'profile_image_url', 'last_login',
        ]
        read_only_fields = fields

    def _role(self, obj):
        # role efetivo (X-Dev-Role) só vale para o próprio usuário da requisição
        role = self.context.get('effective_role')
        if role and self.context.get('request') and self.context['request'].user.pk == obj.pk:
            return role
        return get_user_role(obj)

    def get_full_name(self, obj):
        return obj.get_full_name() or obj.username

    def get_role(self, obj):
        return self._role(obj)

    def get_permissions(self, obj):
        return derive_permissions(self._role(obj))

    def get_profile_image_url(self, obj):
        profile = getattr(obj, 'profile', None)
        return profile.profile_image_url if profile else ''


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.CharField()

    def validate_role(self, value):
        role = normalize_role(value)
        if role is None:
            raise serializers.ValidationError(
                f'Perfil inválido. Valores aceitos: {", ".join(UserRole.values)}'
            )
        return role
