"""
Notification services for OfficeDesk.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from config.exceptions import ResourceNotFound
from config.pagination import paginate_queryset
from config.permissions import is_notification_excluded_role

from .models import Notification, NotificationModule, NotificationType

logger = logging.getLogger(__name__)

OPERATION_CREATE = 'create'
OPERATION_UPDATE = 'update'
OPERATION_COMMENT = 'comment'

# module -> operation -> (type, title, content template)
NOTIFICATION_TEMPLATES = {
    NotificationModule.WORK: {
        OPERATION_CREATE: (NotificationType.ASSIGNED, '新的工作任务', '您有新的工作任务：{title}'),
        OPERATION_UPDATE: (NotificationType.UPDATED, '工作任务已更新', '工作任务"{title}"已更新，当前状态：{status}'),
        OPERATION_COMMENT: (NotificationType.COMMENTED, '工作任务有新回复', '工作任务"{title}"有新的回复'),
    },
    NotificationModule.SCHEDULE: {
        OPERATION_CREATE: (NotificationType.ASSIGNED, '新的日程', '您有新的日程：{title}'),
        OPERATION_UPDATE: (NotificationType.UPDATED, '日程状态更新', '日程"{title}"状态已更新为"{status}"'),
        OPERATION_COMMENT: (NotificationType.COMMENTED, '日程有新回复', '日程"{title}"有新的回复'),
    },
}


def resolve_recipients(creator_id, assigned_user_ids, operation, operator_id=None):
    """
    Work out who hears about an operation, in assignment order.

    Assignees minus the acting user (the creator on create, the operator
    otherwise); on update the creator is added when they are neither an
    assignee nor the operator.
    """
    excluded_actor = creator_id if operation == OPERATION_CREATE else operator_id
    recipients = []
    for user_id in assigned_user_ids:
        if user_id != excluded_actor and user_id not in recipients:
            recipients.append(user_id)

    if (operation == OPERATION_UPDATE
            and creator_id not in assigned_user_ids
            and creator_id != operator_id):
        recipients.append(creator_id)

    return recipients


class NotificationDispatcher:
    """
    Fan out notifications for one kind of work item.

    Dispatch is best effort: it writes every row or none, and a failure is
    logged instead of reaching the caller.
    """

    def __init__(self, item_model, module, excluded_roles=None):
        self.item_model = item_model
        self.module = module
        self.excluded_roles = excluded_roles

    def dispatch(self, item_id, creator_id, assigned_user_ids, operation, operator_id=None):
        """Create notifications for an item operation. Returns the number written."""
        templates = NOTIFICATION_TEMPLATES[self.module]
        if operation not in templates:
            raise ValueError(f'Unknown notification operation: {operation}')

        logger.info(
            '创建通知 - 模块: %s, 操作: %s, 关联ID: %s, 关联用户: %s个',
            self.module, operation, item_id, len(assigned_user_ids)
        )

        try:
            with transaction.atomic():
                written = self._dispatch(item_id, creator_id, assigned_user_ids, operation, operator_id)
        except Exception:
            logger.exception('[失败] 创建通知 - 模块: %s, 操作: %s, 关联ID: %s', self.module, operation, item_id)
            return 0

        if written:
            logger.info('创建通知成功 - 共创建 %s 条通知', written)
        return written

    def _dispatch(self, item_id, creator_id, assigned_user_ids, operation, operator_id):
        item = (
            self.item_model.objects
            .filter(id=item_id, is_deleted=False)
            .values('title', 'status')
            .first()
        )
        if item is None:
            logger.warning('[验证失败] 创建通知 - 关联ID %s 不存在', item_id)
            return 0

        recipient_ids = resolve_recipients(creator_id, assigned_user_ids, operation, operator_id)
        if not recipient_ids:
            return 0

        User = get_user_model()
        users = User.active.filter(id__in=recipient_ids).select_related('role')
        allowed = {
            user.id for user in users
            if not is_notification_excluded_role(user.role_name, self.excluded_roles)
        }

        notification_type, title, content = NOTIFICATION_TEMPLATES[self.module][operation]
        content = content.format(**item)
        notifications = [
            Notification(
                recipient_id=user_id,
                module=self.module,
                type=notification_type,
                title=title,
                content=content,
                related_id=item_id,
            )
            for user_id in recipient_ids
            if user_id in allowed
        ]
        if notifications:
            Notification.objects.bulk_create(notifications)
        return len(notifications)


class NotificationService:
    """Read side of a user's notifications."""

    @staticmethod
    def owned_queryset(user_id):
        return Notification.objects.filter(recipient_id=user_id, is_deleted=False)

    @staticmethod
    def list_notifications(user_id, page=None, page_size=None, is_read=None):
        """
        List a user's notifications, newest first.

        `page_size` absent or 0 returns every matching row; the unread badge
        relies on this to fetch all unread notifications at once.
        """
        logger.info('获取通知列表 - 用户: %s', user_id)
        queryset = NotificationService.owned_queryset(user_id)
        if is_read is not None:
            queryset = queryset.filter(is_read=bool(is_read))
        notifications = list(paginate_queryset(queryset.order_by('-created_at', '-id'), page, page_size))
        logger.info('获取通知列表成功 - 共 %s 条通知', len(notifications))
        return notifications

    @staticmethod
    def unread_count(user_id):
        return NotificationService.owned_queryset(user_id).filter(is_read=False).count()

    @staticmethod
    def mark_read(user_id, notification_id=None, ids=None):
        """Mark one or several owned notifications as read."""
        queryset = NotificationService.owned_queryset(user_id)
        if notification_id is not None:
            queryset = queryset.filter(id=notification_id)
        elif ids:
            queryset = queryset.filter(id__in=ids)
        else:
            return 0

        count = queryset.filter(is_read=False).update(
            is_read=True, read_at=timezone.now(), updated_at=timezone.now()
        )
        logger.info('标记通知已读 - 用户: %s, 数量: %s', user_id, count)
        return count

    @staticmethod
    def mark_all_read(user_id):
        count = NotificationService.owned_queryset(user_id).filter(is_read=False).update(
            is_read=True, read_at=timezone.now(), updated_at=timezone.now()
        )
        logger.info('标记所有通知已读 - 用户: %s, 数量: %s', user_id, count)
        return count

    @staticmethod
    def delete_notification(user_id, notification_id):
        notification = NotificationService.owned_queryset(user_id).filter(id=notification_id).first()
        if notification is None:
            logger.warning('[验证失败] 删除通知 - 通知ID %s 不存在或无权限', notification_id)
            raise ResourceNotFound('通知不存在', code=7001)

        notification.soft_delete()
        logger.info('删除通知成功 - ID: %s', notification_id)
        return True

    @staticmethod
    def soft_delete_related(module, related_id):
        """Soft delete every notification pointing at a removed item."""
        return Notification.objects.filter(
            module=module, related_id=related_id, is_deleted=False
        ).update(is_deleted=True, updated_at=timezone.now())
