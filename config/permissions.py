"""
Role-based permission policy for OfficeDesk.

Pure predicates over a role name string. The privileged role set comes from
settings (FULL_PERMISSION_ROLE_NAMES) unless a caller passes one explicitly.
"""
from django.conf import settings


def full_permission_role_names():
    return tuple(getattr(settings, 'FULL_PERMISSION_ROLE_NAMES', ()))


def notification_excluded_role_names():
    return tuple(getattr(settings, 'NOTIFICATION_EXCLUDED_ROLE_NAMES', ()))


def is_full_permission_role(role_name, full_permission_roles=None):
    """Check if the role sees and modifies every item."""
    if full_permission_roles is None:
        full_permission_roles = full_permission_role_names()
    return bool(role_name) and role_name in full_permission_roles


def is_restricted_role(role_name, full_permission_roles=None):
    """Check if the role is limited to items it created or is assigned to."""
    return not is_full_permission_role(role_name, full_permission_roles)


def is_notification_excluded_role(role_name, excluded_roles=None):
    """Check if users with this role never receive item notifications."""
    if excluded_roles is None:
        excluded_roles = notification_excluded_role_names()
    return bool(role_name) and role_name in excluded_roles


def can_access_item(user_id, role_name, item, full_permission_roles=None):
    """Full permission role, item creator, or assignee."""
    if is_full_permission_role(role_name, full_permission_roles):
        return True
    return item.creator_id == user_id or user_id in item.assigned_user_ids


def can_modify_item(user_id, role_name, item, allow_assignee=False, full_permission_roles=None):
    """Full permission role or creator; assignees only when the item kind allows it."""
    if is_full_permission_role(role_name, full_permission_roles):
        return True
    if item.creator_id == user_id:
        return True
    return allow_assignee and user_id in item.assigned_user_ids


def can_delete_comment(user_id, role_name, comment, full_permission_roles=None):
    """Full permission role or the comment author."""
    if is_full_permission_role(role_name, full_permission_roles):
        return True
    return comment.user_id == user_id
