"""
Work item services for OfficeDesk.

One WorkItemService per item kind: role-scoped queries, the mutating use
cases and the notification side effects that follow them.
"""
import functools
import logging

from django.db import transaction
from django.db.models import Count, Prefetch, Q, Value
from django.db.models.functions import StrIndex
from django.db.models.lookups import GreaterThan
from django.utils import timezone

from apps.notifications.services import (
    OPERATION_COMMENT, OPERATION_CREATE, OPERATION_UPDATE,
    NotificationDispatcher, NotificationService,
)
from config.exceptions import BusinessError, NoPermission, PermissionDenied, ResourceNotFound
from config.pagination import default_page_size, paginate_queryset
from config.permissions import (
    can_access_item, can_delete_comment, can_modify_item, is_full_permission_role,
)

from .models import WorkItemStatus

logger = logging.getLogger(__name__)


def unique_ids(user_ids):
    """Drop repeated ids, keeping the first occurrence."""
    seen = []
    for user_id in user_ids:
        if user_id not in seen:
            seen.append(user_id)
    return seen


def keyword_filter(keyword):
    """
    Case-sensitive substring match on title or description.

    `__contains` is LIKE BINARY on MySQL but a case-insensitive LIKE on
    SQLite; INSTR (StrIndex) is case-sensitive on SQLite, so both must hold.
    """
    return (
        (Q(title__contains=keyword) & Q(GreaterThan(StrIndex('title', Value(keyword)), 0)))
        | (Q(description__contains=keyword) & Q(GreaterThan(StrIndex('description', Value(keyword)), 0)))
    )


def log_failures(operation):
    """Log unexpected errors with the operation name and re-raise them unchanged."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except BusinessError:
                raise
            except Exception:
                logger.exception('[失败] %s%s', operation, self.kind.label)
                raise
        return wrapper
    return decorator


class WorkItemService:
    """Use cases for one kind of work item (see apps.tasks.kinds)."""

    def __init__(self, kind):
        self.kind = kind
        self.model = kind.model
        self.dispatcher = NotificationDispatcher(kind.model, kind.notification_module)

    # Queries

    def alive(self):
        return self.model.objects.filter(is_deleted=False)

    def visibility_filter(self, user_id, role_name):
        """None for full permission roles, else creator-or-assignee."""
        if is_full_permission_role(role_name):
            return None
        assigned_item_ids = (
            self.kind.assignment_model.objects
            .filter(user_id=user_id)
            .values('item_id')
        )
        return Q(creator_id=user_id) | Q(id__in=assigned_item_ids)

    def scoped_queryset(self, user_id, role_name):
        queryset = self.alive()
        visibility = self.visibility_filter(user_id, role_name)
        if visibility is not None:
            queryset = queryset.filter(visibility)
        return queryset

    def with_assignments(self, queryset):
        assignments = Prefetch(
            'assignments',
            queryset=self.kind.assignment_model.objects.select_related('user')
        )
        return queryset.select_related('creator').prefetch_related(assignments)

    def with_comments(self, queryset):
        comments = Prefetch(
            'comments',
            queryset=(
                self.kind.comment_model.objects
                .filter(is_deleted=False)
                .select_related('user__role')
                .order_by('created_at', 'id')
            ),
            to_attr='visible_comments'
        )
        return queryset.prefetch_related(comments)

    def get_item(self, item_id, queryset=None):
        """Fetch a non-deleted item or raise ResourceNotFound."""
        if queryset is None:
            queryset = self.alive()
        item = queryset.filter(id=item_id).first()
        if item is None:
            logger.warning('[验证失败] %s不存在 - ID: %s', self.kind.label, item_id)
            raise ResourceNotFound(self.kind.not_found_message(), code=self.kind.not_found_code)
        return item

    def ensure_access(self, user_id, role_name, item):
        if not can_access_item(user_id, role_name, item):
            logger.warning('[权限拒绝] 用户 %s 无权限访问%s %s', user_id, self.kind.label, item.id)
            raise NoPermission(self.kind.no_permission_message(), code=self.kind.no_permission_code)

    # Use cases

    @log_failures('获取列表')
    def list_items(self, user_id, role_name, page=None, page_size=None, status=None, keyword=None):
        logger.info('获取%s列表 - 用户: %s, 角色: %s', self.kind.label, user_id, role_name)

        queryset = self.scoped_queryset(user_id, role_name)
        if status:
            queryset = queryset.filter(status=status)
        if keyword:
            # Separate filter() call: ANDed with the visibility group
            queryset = queryset.filter(keyword_filter(keyword))

        queryset = self.with_assignments(queryset).order_by('-created_at', '-id')
        items = list(paginate_queryset(queryset, page, page_size, default=default_page_size()))

        logger.info('获取%s列表成功 - 共 %s 条', self.kind.label, len(items))
        return items

    @log_failures('获取详情')
    def get_detail(self, user_id, role_name, item_id):
        logger.info('获取%s详情 - ID: %s, 用户: %s', self.kind.label, item_id, user_id)
        queryset = self.with_comments(self.with_assignments(self.alive()))
        item = self.get_item(item_id, queryset)
        self.ensure_access(user_id, role_name, item)
        return item

    @log_failures('创建')
    def create_item(self, user_id, title, description, assigned_user_ids, company_id=None):
        logger.info('创建%s - 标题: %s, 创建人: %s', self.kind.label, title, user_id)
        assigned_user_ids = unique_ids(assigned_user_ids)

        with transaction.atomic():
            item = self.model.objects.create(
                title=title,
                description=description,
                creator_id=user_id,
                company_id=company_id,
            )
            item.set_assigned_users(assigned_user_ids)

            if assigned_user_ids:
                self.dispatcher.dispatch(item.id, user_id, assigned_user_ids, OPERATION_CREATE)

        logger.info('创建%s成功 - ID: %s', self.kind.label, item.id)
        return item

    @log_failures('更新')
    def update_item(self, user_id, role_name, item_id, status=None, assigned_user_ids=None):
        logger.info('更新%s - ID: %s, 用户: %s', self.kind.label, item_id, user_id)
        item = self.get_item(item_id, self.alive().prefetch_related('assignments'))

        if not can_modify_item(user_id, role_name, item, allow_assignee=self.kind.assignee_can_update):
            logger.warning('[权限拒绝] 用户 %s 无权限修改%s %s', user_id, self.kind.label, item_id)
            raise NoPermission(f'无权限修改该{self.kind.label}', code=self.kind.no_permission_code)

        if not status and assigned_user_ids is None:
            logger.info('更新%s - ID: %s 无变更', self.kind.label, item_id)
            return item

        old_status = item.status
        with transaction.atomic():
            if status:
                item.status = status
            item.save(update_fields=['status', 'updated_at'])

            if assigned_user_ids is not None:
                item.set_assigned_users(unique_ids(assigned_user_ids))

            if self.kind.records_status_change and status and status != old_status:
                self.record_status_change(item, user_id, old_status, status)

            self.dispatcher.dispatch(
                item.id, item.creator_id, item.assigned_user_ids,
                OPERATION_UPDATE, operator_id=user_id
            )

        logger.info('更新%s成功 - ID: %s', self.kind.label, item_id)
        return item

    def record_status_change(self, item, user_id, old_status, new_status):
        """Append the system status comment; a failure here never fails the update."""
        content = f'状态已从"{old_status}"更新为"{new_status}"'
        try:
            with transaction.atomic():
                comment = self.kind.comment_model.objects.create(
                    item=item, user_id=user_id, content=content, is_system=True
                )
        except Exception:
            logger.exception('[失败] 创建状态更新回复 - %s ID: %s', self.kind.label, item.id)
            return None

        logger.info('自动创建状态更新回复 - %s ID: %s, 用户: %s', self.kind.label, item.id, user_id)
        return comment

    @log_failures('删除')
    def delete_item(self, user_id, role_name, item_id):
        logger.info('删除%s - ID: %s, 用户: %s', self.kind.label, item_id, user_id)

        if not is_full_permission_role(role_name):
            logger.warning('[权限拒绝] 用户 %s 无权限删除%s %s', user_id, self.kind.label, item_id)
            raise PermissionDenied(f'仅系统管理员和公司管理者可以删除{self.kind.label}', code=1010)

        item = self.get_item(item_id)
        now = timezone.now()
        with transaction.atomic():
            item.is_deleted = True
            item.save(update_fields=['is_deleted', 'updated_at'])

            self.kind.comment_model.objects.filter(item=item, is_deleted=False).update(
                is_deleted=True, updated_at=now
            )
            NotificationService.soft_delete_related(self.kind.notification_module, item.id)

        logger.info('删除%s成功 - ID: %s', self.kind.label, item_id)
        return True

    @log_failures('添加回复')
    def create_comment(self, user_id, role_name, item_id, content):
        logger.info('添加回复 - %s ID: %s, 用户: %s', self.kind.label, item_id, user_id)
        item = self.get_item(item_id, self.alive().prefetch_related('assignments'))
        self.ensure_access(user_id, role_name, item)

        with transaction.atomic():
            comment = self.kind.comment_model.objects.create(
                item=item, user_id=user_id, content=content
            )
            self.dispatcher.dispatch(
                item.id, item.creator_id, item.assigned_user_ids,
                OPERATION_COMMENT, operator_id=user_id
            )

        logger.info('添加回复成功 - ID: %s', comment.id)
        return comment

    @log_failures('删除回复')
    def delete_comment(self, user_id, role_name, comment_id):
        logger.info('删除回复 - %s回复ID: %s, 用户: %s', self.kind.label, comment_id, user_id)

        if not self.kind.comments_deletable:
            raise PermissionDenied(f'{self.kind.label}回复不允许删除', code=3103)

        comment = (
            self.kind.comment_model.objects
            .filter(id=comment_id, is_deleted=False, item__is_deleted=False)
            .first()
        )
        if comment is None:
            logger.warning('[验证失败] 删除回复 - 回复ID %s 不存在', comment_id)
            raise ResourceNotFound('回复不存在', code=3003)

        if not can_delete_comment(user_id, role_name, comment):
            logger.warning('[权限拒绝] 用户 %s 无权限删除回复 %s', user_id, comment_id)
            raise NoPermission('无权限删除该回复', code=3004)

        comment.is_deleted = True
        comment.save(update_fields=['is_deleted', 'updated_at'])

        logger.info('删除回复成功 - ID: %s', comment_id)
        return True

    @log_failures('获取统计')
    def statistics(self, user_id, role_name):
        """Counts of visible items that still need attention."""
        counts = self.scoped_queryset(user_id, role_name).aggregate(
            pending=Count('id', filter=Q(status=WorkItemStatus.PENDING)),
            in_progress=Count('id', filter=Q(status=WorkItemStatus.IN_PROGRESS)),
            at_risk=Count('id', filter=Q(status=WorkItemStatus.AT_RISK)),
        )
        logger.info('获取%s统计成功 - 用户: %s', self.kind.label, user_id)
        return counts
