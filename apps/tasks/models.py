"""
Work item models for OfficeDesk.

Work tasks and schedules share one abstract shape: an item with a creator,
an ordered set of assigned users (join table) and a comment thread.
"""
from django.db import models
from django.utils.translation import gettext_lazy as _


class WorkItemStatus(models.TextChoices):
    """Work item status choices."""
    PENDING = '未完成', _('未完成')
    IN_PROGRESS = '进行中', _('进行中')
    AT_RISK = '有风险', _('有风险')
    COMPLETED = '已完成', _('已完成')


class WorkItem(models.Model):
    """
    Abstract trackable item.
    """
    title = models.CharField(_('标题'), max_length=200)
    description = models.TextField(_('描述'))
    status = models.CharField(
        _('状态'),
        max_length=20,
        choices=WorkItemStatus.choices,
        default=WorkItemStatus.PENDING
    )
    creator = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('创建者')
    )
    company_id = models.CharField(_('公司ID'), max_length=64, null=True, blank=True)
    is_deleted = models.BooleanField(_('是否删除'), default=False)
    created_at = models.DateTimeField(_('创建时间'), auto_now_add=True)
    updated_at = models.DateTimeField(_('更新时间'), auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.title

    @property
    def assigned_user_ids(self):
        """Assigned user ids in submission order."""
        return [assignment.user_id for assignment in self.assignments.all()]

    def set_assigned_users(self, user_ids):
        """Replace the assignment rows, keeping the given order."""
        assignment_model = self.assignments.model
        self.assignments.all().delete()
        assignment_model.objects.bulk_create([
            assignment_model(item=self, user_id=user_id, position=position)
            for position, user_id in enumerate(user_ids)
        ])
        # Drop any stale prefetch so assigned_user_ids re-reads the rows
        prefetched = getattr(self, '_prefetched_objects_cache', None)
        if prefetched:
            prefetched.pop('assignments', None)


class Assignment(models.Model):
    """
    Abstract item/user assignment row.
    """
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='+',
        verbose_name=_('关联用户')
    )
    position = models.PositiveIntegerField(_('顺序'), default=0)
    created_at = models.DateTimeField(_('创建时间'), auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.item_id} -> {self.user_id}"


class Comment(models.Model):
    """
    Abstract comment on a work item.
    """
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('回复人')
    )
    content = models.TextField(_('回复内容'))
    is_system = models.BooleanField(_('系统生成'), default=False)
    is_deleted = models.BooleanField(_('是否删除'), default=False)
    created_at = models.DateTimeField(_('创建时间'), auto_now_add=True)
    updated_at = models.DateTimeField(_('更新时间'), auto_now=True)

    class Meta:
        abstract = True
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.item_id} - {self.content[:20]}"


class WorkTask(WorkItem):
    """Work task."""

    class Meta(WorkItem.Meta):
        db_table = 'work_tasks'
        verbose_name = _('工作项')
        verbose_name_plural = _('工作项')
        indexes = [
            models.Index(fields=['is_deleted', 'created_at'], name='work_task_alive_idx'),
            models.Index(fields=['status'], name='work_task_status_idx'),
        ]


class WorkTaskAssignment(Assignment):
    """Work task assignee."""
    item = models.ForeignKey(
        WorkTask,
        on_delete=models.CASCADE,
        related_name='assignments',
        verbose_name=_('工作项')
    )

    class Meta(Assignment.Meta):
        db_table = 'work_task_assignments'
        verbose_name = _('工作项关联人员')
        verbose_name_plural = _('工作项关联人员')
        constraints = [
            models.UniqueConstraint(fields=['item', 'user'], name='uniq_work_task_assignment'),
        ]


class WorkTaskComment(Comment):
    """Work task comment."""
    item = models.ForeignKey(
        WorkTask,
        on_delete=models.CASCADE,
        related_name='comments',
        verbose_name=_('工作项')
    )

    class Meta(Comment.Meta):
        db_table = 'work_task_comments'
        verbose_name = _('工作项回复')
        verbose_name_plural = _('工作项回复')


class Schedule(WorkItem):
    """Schedule."""

    class Meta(WorkItem.Meta):
        db_table = 'schedules'
        verbose_name = _('日程')
        verbose_name_plural = _('日程')
        indexes = [
            models.Index(fields=['is_deleted', 'created_at'], name='schedule_alive_idx'),
            models.Index(fields=['status'], name='schedule_status_idx'),
        ]


class ScheduleAssignment(Assignment):
    """Schedule assignee."""
    item = models.ForeignKey(
        Schedule,
        on_delete=models.CASCADE,
        related_name='assignments',
        verbose_name=_('日程')
    )

    class Meta(Assignment.Meta):
        db_table = 'schedule_assignments'
        verbose_name = _('日程关联人员')
        verbose_name_plural = _('日程关联人员')
        constraints = [
            models.UniqueConstraint(fields=['item', 'user'], name='uniq_schedule_assignment'),
        ]


class ScheduleComment(Comment):
    """Schedule comment."""
    item = models.ForeignKey(
        Schedule,
        on_delete=models.CASCADE,
        related_name='comments',
        verbose_name=_('日程')
    )

    class Meta(Comment.Meta):
        db_table = 'schedule_comments'
        verbose_name = _('日程回复')
        verbose_name_plural = _('日程回复')
