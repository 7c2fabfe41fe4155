"""
Accounts models for OfficeDesk.
"""
from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
from django.utils.translation import gettext_lazy as _


class Role(models.Model):
    """
    Role model. Only the name takes part in permission checks.
    """
    name = models.CharField(_('角色名称'), max_length=50, unique=True)
    description = models.CharField(_('角色描述'), max_length=200, blank=True, default='')
    is_deleted = models.BooleanField(_('是否删除'), default=False)
    created_at = models.DateTimeField(_('创建时间'), auto_now_add=True)
    updated_at = models.DateTimeField(_('更新时间'), auto_now=True)

    class Meta:
        db_table = 'roles'
        verbose_name = _('角色')
        verbose_name_plural = _('角色')
        ordering = ['id']

    def __str__(self):
        return self.name


# Users that are neither soft-deleted nor deactivated
ACTIVE_USER_FILTER = {'is_deleted': False, 'is_active': True}


class ActiveUserManager(models.Manager):
    """Users matching ACTIVE_USER_FILTER."""

    def get_queryset(self):
        return super().get_queryset().filter(**ACTIVE_USER_FILTER)


class User(AbstractUser):
    """
    Custom User model with employee code, department and role.
    """
    name = models.CharField(_('姓名'), max_length=50, blank=True, default='')
    code = models.CharField(_('工号'), max_length=30, unique=True, null=True, blank=True)
    department = models.CharField(_('部门'), max_length=100, null=True, blank=True)
    role = models.ForeignKey(
        Role,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='users',
        verbose_name=_('角色')
    )
    is_deleted = models.BooleanField(_('是否删除'), default=False)
    created_at = models.DateTimeField(_('创建时间'), auto_now_add=True)
    updated_at = models.DateTimeField(_('更新时间'), auto_now=True)

    objects = UserManager()
    active = ActiveUserManager()

    class Meta:
        db_table = 'users'
        verbose_name = _('用户')
        verbose_name_plural = _('用户')
        ordering = ['-created_at']

    def __str__(self):
        return self.name or self.username

    @property
    def role_name(self):
        """Role name used by the permission policy ('' when unassigned)."""
        return self.role.name if self.role_id and self.role else ''

    @property
    def is_available(self):
        """In-memory counterpart of the `active` manager."""
        return all(getattr(self, field) == value for field, value in ACTIVE_USER_FILTER.items())

    def soft_delete(self):
        """Soft delete and deactivate so tokens stop authenticating."""
        self.is_deleted = True
        self.is_active = False
        self.save(update_fields=['is_deleted', 'is_active', 'updated_at'])
