"""
Notifications views for OfficeDesk.
"""
from rest_framework import generics
from rest_framework.response import Response

from .serializers import (
    MarkReadSerializer, NotificationIdSerializer,
    NotificationListQuerySerializer, NotificationSerializer,
    UnreadCountSerializer,
)
from .services import NotificationService


class NotificationListView(generics.GenericAPIView):
    """List notifications for current user."""
    serializer_class = NotificationListQuerySerializer

    def post(self, request, *args, **kwargs):
        query = self.get_serializer(data=request.data)
        query.is_valid(raise_exception=True)
        body = query.validated_data

        notifications = NotificationService.list_notifications(
            request.user.id,
            page=body.get('page'),
            page_size=body.get('pageSize'),
            is_read=body.get('isRead'),
        )

        return Response({
            'code': 200,
            'message': 'success',
            'data': NotificationSerializer(notifications, many=True).data
        })


class NotificationUnreadCountView(generics.GenericAPIView):
    """Unread notification count for the badge."""
    serializer_class = UnreadCountSerializer

    def post(self, request, *args, **kwargs):
        count = NotificationService.unread_count(request.user.id)
        return Response({
            'code': 200,
            'message': 'success',
            'data': {'count': count}
        })


class NotificationMarkReadView(generics.GenericAPIView):
    """Mark one or several notifications as read."""
    serializer_class = MarkReadSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        NotificationService.mark_read(
            request.user.id,
            notification_id=serializer.validated_data.get('id'),
            ids=serializer.validated_data.get('ids'),
        )

        return Response({
            'code': 200,
            'message': '已标记为已读',
            'data': True
        })


class NotificationMarkAllReadView(generics.GenericAPIView):
    """Mark all notifications as read."""

    def post(self, request, *args, **kwargs):
        NotificationService.mark_all_read(request.user.id)

        return Response({
            'code': 200,
            'message': '全部标记为已读',
            'data': True
        })


class NotificationDeleteView(generics.GenericAPIView):
    """Delete notification."""
    serializer_class = NotificationIdSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        NotificationService.delete_notification(request.user.id, serializer.validated_data['id'])

        return Response({
            'code': 200,
            'message': '通知已删除',
            'data': True
        })
