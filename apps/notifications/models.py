"""
Notifications models for OfficeDesk.
"""
from django.db import models
from django.utils.translation import gettext_lazy as _


class NotificationModule(models.TextChoices):
    """Module the related item belongs to."""
    SCHEDULE = 'schedule', _('日程')
    WORK = 'work', _('工作项')


class NotificationType(models.TextChoices):
    """Notification type choices."""
    ASSIGNED = 'assigned', _('新的指派')
    UPDATED = 'updated', _('状态变更')
    COMMENTED = 'commented', _('新的回复')


class Notification(models.Model):
    """
    In-app notification created as a side effect of work item changes.
    """
    recipient = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='notifications',
        verbose_name=_('接收者')
    )
    module = models.CharField(
        _('模块'),
        max_length=20,
        choices=NotificationModule.choices
    )
    type = models.CharField(
        _('类型'),
        max_length=30,
        choices=NotificationType.choices
    )
    title = models.CharField(_('标题'), max_length=200)
    content = models.TextField(_('内容'))
    related_id = models.BigIntegerField(_('关联ID'), null=True, blank=True)
    is_read = models.BooleanField(_('是否已读'), default=False)
    read_at = models.DateTimeField(_('阅读时间'), null=True, blank=True)
    is_deleted = models.BooleanField(_('是否删除'), default=False)
    created_at = models.DateTimeField(_('创建时间'), auto_now_add=True)
    updated_at = models.DateTimeField(_('更新时间'), auto_now=True)

    class Meta:
        db_table = 'notifications'
        verbose_name = _('通知')
        verbose_name_plural = _('通知')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['recipient', 'is_read'], name='notification_unread_idx'),
            models.Index(fields=['recipient', 'created_at'], name='notification_recent_idx'),
            models.Index(fields=['module', 'related_id'], name='notification_related_idx'),
        ]

    def __str__(self):
        return f"{self.recipient_id} - {self.title}"

    def soft_delete(self):
        self.is_deleted = True
        self.save(update_fields=['is_deleted', 'updated_at'])
