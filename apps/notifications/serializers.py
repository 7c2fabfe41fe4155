"""
Notifications serializers for OfficeDesk.
"""
from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """Notification item with isRead as 0/1."""
    typeDisplay = serializers.CharField(source='get_type_display', read_only=True)
    relatedId = serializers.IntegerField(source='related_id', read_only=True, allow_null=True)
    isRead = serializers.SerializerMethodField()
    createTime = serializers.DateTimeField(source='created_at', read_only=True)
    updateTime = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Notification
        fields = [
            'id', 'module', 'type', 'typeDisplay', 'title', 'content',
            'relatedId', 'isRead', 'createTime', 'updateTime'
        ]
        read_only_fields = fields

    def get_isRead(self, obj):
        return 1 if obj.is_read else 0


class NotificationListQuerySerializer(serializers.Serializer):
    """
    List body: {page?, pageSize?, isRead?}.

    pageSize absent or 0 returns every matching notification.
    """
    page = serializers.IntegerField(required=False, min_value=1)
    pageSize = serializers.IntegerField(required=False, min_value=0)
    isRead = serializers.ChoiceField(choices=[0, 1], required=False, allow_null=True)


class MarkReadSerializer(serializers.Serializer):
    id = serializers.IntegerField(required=False)
    ids = serializers.ListField(child=serializers.IntegerField(), required=False, allow_empty=False)

    def validate(self, attrs):
        if attrs.get('id') is None and not attrs.get('ids'):
            raise serializers.ValidationError('通知ID不能为空')
        return attrs


class NotificationIdSerializer(serializers.Serializer):
    id = serializers.IntegerField(error_messages={'required': '通知ID不能为空'})


class UnreadCountSerializer(serializers.Serializer):
    count = serializers.IntegerField()
