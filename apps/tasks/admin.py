"""
Work task and schedule admin configuration.
"""
from django.contrib import admin
from .models import (
    Schedule, ScheduleAssignment, ScheduleComment,
    WorkTask, WorkTaskAssignment, WorkTaskComment,
)


class AssignmentInline(admin.TabularInline):
    extra = 0
    fields = ['user', 'position', 'created_at']
    readonly_fields = ['created_at']
    ordering = ['position']


class CommentInline(admin.TabularInline):
    extra = 0
    fields = ['user', 'content', 'is_system', 'is_deleted', 'created_at']
    readonly_fields = ['is_system', 'created_at']


class WorkItemAdmin(admin.ModelAdmin):
    """Shared admin for work tasks and schedules."""
    list_display = ['title', 'creator', 'status', 'company_id', 'is_deleted', 'created_at']
    list_filter = ['status', 'is_deleted', 'created_at']
    search_fields = ['title', 'description', 'creator__name']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        (None, {'fields': ('title', 'description')}),
        ('归属', {'fields': ('creator', 'company_id')}),
        ('状态', {'fields': ('status', 'is_deleted')}),
        ('时间', {'fields': ('created_at', 'updated_at')}),
    )


class CommentAdmin(admin.ModelAdmin):
    list_display = ['item', 'user', 'is_system', 'is_deleted', 'created_at']
    list_filter = ['is_system', 'is_deleted', 'created_at']
    search_fields = ['item__title', 'content']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'updated_at']


class WorkTaskAssignmentInline(AssignmentInline):
    model = WorkTaskAssignment


class WorkTaskCommentInline(CommentInline):
    model = WorkTaskComment


class ScheduleAssignmentInline(AssignmentInline):
    model = ScheduleAssignment


class ScheduleCommentInline(CommentInline):
    model = ScheduleComment


@admin.register(WorkTask)
class WorkTaskAdmin(WorkItemAdmin):
    inlines = [WorkTaskAssignmentInline, WorkTaskCommentInline]


@admin.register(Schedule)
class ScheduleAdmin(WorkItemAdmin):
    inlines = [ScheduleAssignmentInline, ScheduleCommentInline]


@admin.register(WorkTaskComment)
class WorkTaskCommentAdmin(CommentAdmin):
    pass


@admin.register(ScheduleComment)
class ScheduleCommentAdmin(CommentAdmin):
    pass
