"""
Item kind configuration.

Work tasks and schedules run through the same service; a kind bundles the
models, notification module, messages and the behaviour that differs
between them.
"""
from apps.notifications.models import NotificationModule

from .models import (
    Schedule, ScheduleAssignment, ScheduleComment,
    WorkTask, WorkTaskAssignment, WorkTaskComment,
)


class ItemKind:
    """Base item kind. Subclasses fill in every attribute."""
    key = ''
    label = ''
    model = None
    assignment_model = None
    comment_model = None
    notification_module = None
    # Request/response key carrying a comment's parent item id
    parent_field = ''

    not_found_code = None
    no_permission_code = None

    # Restricted assignees may change status/assignment, not only the creator
    assignee_can_update = False
    # Append a system comment when the status changes
    records_status_change = False
    # Authors and full permission roles may delete comments
    comments_deletable = False

    @classmethod
    def not_found_message(cls):
        return f'{cls.label}不存在'

    @classmethod
    def no_permission_message(cls):
        return f'无权限访问该{cls.label}'


class WorkTaskKind(ItemKind):
    key = 'workTask'
    label = '工作项'
    model = WorkTask
    assignment_model = WorkTaskAssignment
    comment_model = WorkTaskComment
    notification_module = NotificationModule.WORK
    parent_field = 'taskId'

    not_found_code = 3001
    no_permission_code = 3002

    comments_deletable = True


class ScheduleKind(ItemKind):
    key = 'schedule'
    label = '日程'
    model = Schedule
    assignment_model = ScheduleAssignment
    comment_model = ScheduleComment
    notification_module = NotificationModule.SCHEDULE
    parent_field = 'scheduleId'

    not_found_code = 3101
    no_permission_code = 3102

    assignee_can_update = True
    records_status_change = True
