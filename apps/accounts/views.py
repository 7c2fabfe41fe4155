"""
Accounts views for OfficeDesk.
"""
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Q
from django.utils import timezone
from rest_framework import generics, permissions
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from config.exceptions import ValidationError

from .serializers import (
    TokenRefreshRequestSerializer, UserBriefSerializer,
    UserLoginSerializer, UserSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


class LoginView(generics.GenericAPIView):
    """Log in with username or employee code."""
    serializer_class = UserLoginSerializer
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        username = serializer.validated_data['username']
        password = serializer.validated_data['password']

        user = (
            User.objects
            .filter(Q(username=username) | Q(code=username), is_deleted=False)
            .select_related('role')
            .first()
        )
        if user is None or not user.check_password(password):
            logger.warning('[验证失败] 登录 - 用户名: %s', username)
            raise ValidationError('用户名或密码错误', code=1001)

        if not user.is_active:
            logger.warning('[验证失败] 登录 - 用户 %s 未激活', user.id)
            raise ValidationError('用户未激活', code=1004)

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])

        refresh = RefreshToken.for_user(user)
        logger.info('登录成功 - 用户: %s', user.id)

        return Response({
            'code': 200,
            'message': '登录成功',
            'data': {
                'accessToken': str(refresh.access_token),
                'refreshToken': str(refresh),
                'expiresAt': timezone.now() + refresh.access_token.lifetime,
                'user': UserSerializer(user).data
            }
        })


class TokenRefreshView(generics.GenericAPIView):
    """Exchange a refresh token for a new access token."""
    serializer_class = TokenRefreshRequestSerializer
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            refresh = RefreshToken(serializer.validated_data['refreshToken'])
        except TokenError:
            raise ValidationError('刷新令牌无效或已过期', code=1003)

        access_lifetime = settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME']

        return Response({
            'code': 200,
            'message': '刷新成功',
            'data': {
                'accessToken': str(refresh.access_token),
                'expiresAt': timezone.now() + access_lifetime
            }
        })


class CurrentUserView(generics.GenericAPIView):
    """Get current user info."""
    serializer_class = UserSerializer

    def post(self, request, *args, **kwargs):
        return Response({
            'code': 200,
            'message': 'success',
            'data': self.get_serializer(request.user).data
        })


class UserOptionsView(generics.GenericAPIView):
    """Active users for the assignee picker."""
    serializer_class = UserBriefSerializer

    def post(self, request, *args, **kwargs):
        users = User.active.order_by('id')
        return Response({
            'code': 200,
            'message': 'success',
            'data': self.get_serializer(users, many=True).data
        })
