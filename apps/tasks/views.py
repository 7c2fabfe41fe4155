"""
Work item views for OfficeDesk.

Every view is bound to an item kind in the URL configuration, e.g.
`WorkItemListView.as_view(kind=ScheduleKind)`.
"""
from rest_framework import generics, status
from rest_framework.response import Response

from .serializers import (
    CommentRecordSerializer, ScheduleStatusUpdateSerializer,
    WorkItemCreateSerializer, WorkItemDetailSerializer, WorkItemIdSerializer,
    WorkItemListQuerySerializer, WorkItemRecordSerializer, WorkItemSerializer,
    WorkItemStatisticsSerializer, WorkTaskUpdateSerializer,
)
from .services import WorkItemService


class WorkItemView(generics.GenericAPIView):
    """Base view: item kind, service and the authenticated actor."""
    kind = None

    def get_service(self):
        return WorkItemService(self.kind)

    def get_actor(self):
        """(user id, role name) of the authenticated caller."""
        user = self.request.user
        return user.id, user.role_name

    def validated_body(self):
        serializer = self.get_serializer(data=self.request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class WorkItemListView(WorkItemView):
    """List items visible to the caller."""
    serializer_class = WorkItemListQuerySerializer

    def post(self, request, *args, **kwargs):
        body = self.validated_body()
        user_id, role_name = self.get_actor()

        items = self.get_service().list_items(
            user_id, role_name,
            page=body.get('page'),
            page_size=body.get('pageSize'),
            status=body.get('status'),
            keyword=body.get('keyword'),
        )

        return Response({
            'code': 200,
            'message': 'success',
            'data': WorkItemSerializer(items, many=True).data
        })


class WorkItemDetailView(WorkItemView):
    """Get item detail with comments."""
    serializer_class = WorkItemIdSerializer

    def post(self, request, *args, **kwargs):
        body = self.validated_body()
        user_id, role_name = self.get_actor()

        item = self.get_service().get_detail(user_id, role_name, body['id'])

        return Response({
            'code': 200,
            'message': 'success',
            'data': WorkItemDetailSerializer(item).data
        })


class WorkItemCreateView(WorkItemView):
    """Create item."""
    serializer_class = WorkItemCreateSerializer

    def post(self, request, *args, **kwargs):
        body = self.validated_body()
        user_id, _ = self.get_actor()

        item = self.get_service().create_item(
            user_id,
            title=body['title'],
            description=body['description'],
            assigned_user_ids=body['assignedUserIds'],
            company_id=body.get('companyId') or None,
        )

        return Response({
            'code': 201,
            'message': f'{self.kind.label}创建成功',
            'data': WorkItemRecordSerializer(item).data
        }, status=status.HTTP_201_CREATED)


class WorkTaskUpdateView(WorkItemView):
    """Update work task status and/or assignees."""
    serializer_class = WorkTaskUpdateSerializer

    def post(self, request, *args, **kwargs):
        body = self.validated_body()
        user_id, role_name = self.get_actor()

        item = self.get_service().update_item(
            user_id, role_name, body['id'],
            status=body.get('status'),
            assigned_user_ids=body.get('assignedUserIds'),
        )

        return Response({
            'code': 200,
            'message': f'{self.kind.label}更新成功',
            'data': WorkItemRecordSerializer(item).data
        })


class ScheduleStatusUpdateView(WorkItemView):
    """Update schedule status."""
    serializer_class = ScheduleStatusUpdateSerializer

    def post(self, request, *args, **kwargs):
        body = self.validated_body()
        user_id, role_name = self.get_actor()

        item = self.get_service().update_item(user_id, role_name, body['id'], status=body['status'])

        return Response({
            'code': 200,
            'message': '状态更新成功',
            'data': WorkItemRecordSerializer(item).data
        })


class WorkItemDeleteView(WorkItemView):
    """Soft delete item (full permission roles only)."""
    serializer_class = WorkItemIdSerializer

    def post(self, request, *args, **kwargs):
        body = self.validated_body()
        user_id, role_name = self.get_actor()

        result = self.get_service().delete_item(user_id, role_name, body['id'])

        return Response({
            'code': 200,
            'message': f'{self.kind.label}已删除',
            'data': result
        })


class CommentCreateView(WorkItemView):
    """
    Add a comment. Bound with the kind's request serializer, whose
    parent id field is named after kind.parent_field.
    """

    def post(self, request, *args, **kwargs):
        body = self.validated_body()
        user_id, role_name = self.get_actor()
        parent_field = self.kind.parent_field

        comment = self.get_service().create_comment(
            user_id, role_name, body[parent_field], body['content']
        )

        return Response({
            'code': 201,
            'message': '回复成功',
            'data': CommentRecordSerializer(comment, context={'parent_field': parent_field}).data
        }, status=status.HTTP_201_CREATED)


class CommentDeleteView(WorkItemView):
    """Delete a comment (author or full permission role)."""
    serializer_class = WorkItemIdSerializer

    def post(self, request, *args, **kwargs):
        body = self.validated_body()
        user_id, role_name = self.get_actor()

        result = self.get_service().delete_comment(user_id, role_name, body['id'])

        return Response({
            'code': 200,
            'message': '回复已删除',
            'data': result
        })


class WorkItemStatisticsView(WorkItemView):
    """Pending / in progress / at risk counts of visible items."""
    serializer_class = WorkItemStatisticsSerializer

    def post(self, request, *args, **kwargs):
        user_id, role_name = self.get_actor()
        counts = self.get_service().statistics(user_id, role_name)

        return Response({
            'code': 200,
            'message': 'success',
            'data': WorkItemStatisticsSerializer(counts).data
        })
