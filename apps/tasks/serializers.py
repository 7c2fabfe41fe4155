"""
Work item serializers for OfficeDesk.

Request serializers validate POST bodies; response serializers shape the
camelCase DTOs. Both work for every item kind since the kinds share fields.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.accounts.serializers import UserBriefSerializer, UserWithRoleSerializer
from config.exceptions import ValidationError, get_error_message

from .models import WorkItemStatus


def validate_assignee_ids(value):
    """Every assignee must be an active user."""
    User = get_user_model()
    ids = set(value)
    found = set(User.active.filter(id__in=ids).values_list('id', flat=True))
    missing = sorted(ids - found)
    if missing:
        raise ValidationError(get_error_message(4001, missing), code=4001)
    return value


# Requests

class WorkItemListQuerySerializer(serializers.Serializer):
    """List body: {page?, pageSize?, status?, keyword?}."""
    page = serializers.IntegerField(required=False, min_value=1)
    pageSize = serializers.IntegerField(required=False, min_value=0)
    status = serializers.ChoiceField(choices=WorkItemStatus.choices, required=False, allow_blank=True)
    keyword = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)


class WorkItemIdSerializer(serializers.Serializer):
    id = serializers.IntegerField(error_messages={'required': 'ID不能为空'})


class WorkItemCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, error_messages={'required': '标题不能为空', 'blank': '标题不能为空'})
    description = serializers.CharField(error_messages={'required': '描述不能为空', 'blank': '描述不能为空'})
    assignedUserIds = serializers.ListField(child=serializers.IntegerField(), allow_empty=True)
    companyId = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=64)

    def validate_assignedUserIds(self, value):
        return validate_assignee_ids(value)


class WorkTaskUpdateSerializer(WorkItemIdSerializer):
    """Work task update: status and/or assignees."""
    status = serializers.ChoiceField(choices=WorkItemStatus.choices, required=False)
    assignedUserIds = serializers.ListField(child=serializers.IntegerField(), required=False, allow_empty=True)

    def validate_assignedUserIds(self, value):
        return validate_assignee_ids(value)


class ScheduleStatusUpdateSerializer(WorkItemIdSerializer):
    status = serializers.ChoiceField(choices=WorkItemStatus.choices, error_messages={'required': '状态不能为空'})


class WorkTaskCommentCreateSerializer(serializers.Serializer):
    taskId = serializers.IntegerField(error_messages={'required': '工作项ID不能为空'})
    content = serializers.CharField(error_messages={'required': '回复内容不能为空', 'blank': '回复内容不能为空'})


class ScheduleCommentCreateSerializer(serializers.Serializer):
    scheduleId = serializers.IntegerField(error_messages={'required': '日程ID不能为空'})
    content = serializers.CharField(error_messages={'required': '回复内容不能为空', 'blank': '回复内容不能为空'})


# Responses

class WorkItemRecordSerializer(serializers.Serializer):
    """The stored item as returned by create and update."""
    id = serializers.IntegerField(read_only=True)
    title = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    creatorId = serializers.IntegerField(source='creator_id', read_only=True)
    assignedUserIds = serializers.ListField(source='assigned_user_ids', read_only=True)
    companyId = serializers.CharField(source='company_id', read_only=True, allow_null=True)
    createTime = serializers.DateTimeField(source='created_at', read_only=True)
    updateTime = serializers.DateTimeField(source='updated_at', read_only=True)


class WorkItemSerializer(WorkItemRecordSerializer):
    """List item DTO with creator and resolved assignees."""
    creator = UserBriefSerializer(read_only=True)
    assignedUsers = serializers.SerializerMethodField()

    def get_assignedUsers(self, obj):
        """Assignees that are still active users."""
        users = [
            assignment.user for assignment in obj.assignments.all()
            if assignment.user.is_available
        ]
        return UserBriefSerializer(users, many=True).data


class CommentSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    content = serializers.CharField(read_only=True)
    isSystem = serializers.BooleanField(source='is_system', read_only=True)
    createTime = serializers.DateTimeField(source='created_at', read_only=True)
    updateTime = serializers.DateTimeField(source='updated_at', read_only=True)
    user = UserWithRoleSerializer(read_only=True)


class WorkItemDetailSerializer(WorkItemSerializer):
    comments = CommentSerializer(source='visible_comments', many=True, read_only=True)


class CommentRecordSerializer(serializers.Serializer):
    """
    Created comment. The parent id key follows the item kind
    (`taskId` or `scheduleId`), passed in as context['parent_field'].
    """
    id = serializers.IntegerField(read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    content = serializers.CharField(read_only=True)
    createTime = serializers.DateTimeField(source='created_at', read_only=True)
    updateTime = serializers.DateTimeField(source='updated_at', read_only=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data[self.context.get('parent_field', 'itemId')] = instance.item_id
        return data


class WorkItemStatisticsSerializer(serializers.Serializer):
    pending = serializers.IntegerField()
    inProgress = serializers.IntegerField(source='in_progress')
    atRisk = serializers.IntegerField(source='at_risk')
