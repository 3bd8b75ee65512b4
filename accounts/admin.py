"""
Accounts app - Django Admin

Usa o UserAdmin padrão do Django com o perfil de acesso inline.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.contrib.auth.models import User

from .models import UserProfile


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    fields = ('role', 'external_id', 'profile_image_url')
    readonly_fields = ('external_id',)


class UserWithProfileAdmin(UserAdmin):
    inlines = [UserProfileInline]
    list_display = ('username', 'email', 'first_name', 'last_name', 'role', 'is_active')

    def role(self, obj):
        profile = getattr(obj, 'profile', None)
        return profile.get_role_display() if profile else '-'
    role.short_description = 'Perfil'


admin.site.unregister(User)
admin.site.register(User, UserWithProfileAdmin)


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'role', 'external_id', 'updated_at')
    list_filter = ('role',)
    search_fields = ('user__username', 'user__email', 'external_id')
    readonly_fields = ('created_at', 'updated_at')
