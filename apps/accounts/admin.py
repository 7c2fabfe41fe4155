"""
Accounts admin configuration.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from .models import Role, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """User admin configuration."""
    list_display = [
        'username', 'name', 'code', 'department', 'role',
        'is_active', 'is_deleted', 'created_at', 'last_login'
    ]
    list_filter = ['role', 'is_active', 'is_deleted', 'department']
    search_fields = ['username', 'name', 'code', 'email']
    ordering = ['-created_at']

    fieldsets = (
        (None, {'fields': ('username', 'password')}),
        (_('个人信息'), {'fields': ('name', 'code', 'email', 'department')}),
        (_('角色'), {'fields': ('role',)}),
        (_('权限'), {
            'fields': ('is_active', 'is_deleted', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        (_('重要日期'), {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'name', 'code', 'password1', 'password2', 'role'),
        }),
    )


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    """Role admin configuration."""
    list_display = ['name', 'description', 'is_deleted', 'created_at']
    list_filter = ['is_deleted']
    search_fields = ['name', 'description']
    ordering = ['id']
