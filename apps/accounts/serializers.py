"""
Accounts serializers for OfficeDesk.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Role

User = get_user_model()


class RoleBriefSerializer(serializers.ModelSerializer):
    """Role name only."""

    class Meta:
        model = Role
        fields = ['name']


class UserBriefSerializer(serializers.ModelSerializer):
    """Lightweight user record: {id, name, code, department}."""

    class Meta:
        model = User
        fields = ['id', 'name', 'code', 'department']


class UserWithRoleSerializer(UserBriefSerializer):
    """Lightweight user record plus role name, used for comment authors."""
    role = RoleBriefSerializer(read_only=True)

    class Meta(UserBriefSerializer.Meta):
        fields = UserBriefSerializer.Meta.fields + ['role']


class UserSerializer(serializers.ModelSerializer):
    """Current user profile."""
    roleName = serializers.CharField(source='role_name', read_only=True)
    createTime = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'name', 'code', 'department',
            'email', 'roleName', 'createTime'
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """User login serializer."""
    username = serializers.CharField(error_messages={'required': '用户名不能为空'})
    password = serializers.CharField(write_only=True, error_messages={'required': '密码不能为空'})


class TokenRefreshRequestSerializer(serializers.Serializer):
    refreshToken = serializers.CharField(error_messages={'required': '刷新令牌不能为空'})
