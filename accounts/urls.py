"""
URLs da API de usuários, montadas em /api/.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import CurrentUserView, UserViewSet

router = DefaultRouter()
router.register(r'users', UserViewSet, basename='user')

urlpatterns = [
    path('auth/user/', CurrentUserView.as_view(), name='current-user'),
    path('', include(router.urls)),
]
