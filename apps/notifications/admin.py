"""
Notifications admin configuration.
"""
from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Notification admin configuration."""
    list_display = [
        'recipient', 'module', 'type', 'title', 'related_id',
        'is_read', 'is_deleted', 'created_at'
    ]
    list_filter = ['module', 'type', 'is_read', 'is_deleted', 'created_at']
    search_fields = ['recipient__username', 'recipient__name', 'title', 'content']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'updated_at', 'read_at']

    fieldsets = (
        (None, {'fields': ('recipient', 'module', 'type', 'title', 'content')}),
        ('关联', {'fields': ('related_id',)}),
        ('状态', {'fields': ('is_read', 'read_at', 'is_deleted')}),
        ('时间', {'fields': ('created_at', 'updated_at')}),
    )
