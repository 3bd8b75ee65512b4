"""
Views da API de usuários: usuário atual e gestão de perfis.
"""
import logging

from django.contrib.auth.models import User
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import IsAdminRole
from core.services import AuditService

from .models import UserProfile
from .roles import get_effective_role, get_user_role
from .serializers import RoleUpdateSerializer, UserWithRoleSerializer

logger = logging.getLogger(__name__)


class CurrentUserView(APIView):
    """
    GET /api/auth/user/

    Retorna o usuário autenticado com o perfil efetivo e as permissões
    derivadas (is_admin, can_edit, can_export, is_view_only).
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = UserWithRoleSerializer(
            request.user,
            context={'request': request, 'effective_role': get_effective_role(request)},
        )
        return Response(serializer.data)


class UserViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Listagem de usuários e alteração de perfil (somente administradores)."""
    queryset = User.objects.select_related('profile').order_by('username')
    serializer_class = UserWithRoleSerializer
    permission_classes = [IsAdminRole]
    filterset_fields = ['is_active', 'profile__role']
    search_fields = ['username', 'email', 'first_name', 'last_name']
    ordering_fields = ['username', 'email', 'date_joined']

    @action(detail=True, methods=['patch'])
    def role(self, request, pk=None):
        user = self.get_object()
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        previous = get_user_role(user)
        profile, _ = UserProfile.objects.get_or_create(user=user)
        profile.role = serializer.validated_data['role']
        profile.save(update_fields=['role', 'updated_at'])
        logger.info(f"Perfil de {user.username} alterado de {previous} para {profile.role} por {request.user.username}")

        AuditService.log(
            request.user, 'change_role', 'user', user.pk,
            before={'role': previous}, after={'role': profile.role},
        )
        user.refresh_from_db()
        return Response(self.get_serializer(user).data)
