"""
Schedule URL configuration.
"""
from django.urls import path

from . import views
from .kinds import ScheduleKind
from .serializers import ScheduleCommentCreateSerializer

urlpatterns = [
    path('list', views.WorkItemListView.as_view(kind=ScheduleKind), name='schedule-list'),
    path('detail', views.WorkItemDetailView.as_view(kind=ScheduleKind), name='schedule-detail'),
    path('create', views.WorkItemCreateView.as_view(kind=ScheduleKind), name='schedule-create'),
    path('updateStatus', views.ScheduleStatusUpdateView.as_view(kind=ScheduleKind), name='schedule-update-status'),
    path('delete', views.WorkItemDeleteView.as_view(kind=ScheduleKind), name='schedule-delete'),
    path('statistics', views.WorkItemStatisticsView.as_view(kind=ScheduleKind), name='schedule-statistics'),

    # Comments
    path(
        'comment/create',
        views.CommentCreateView.as_view(kind=ScheduleKind, serializer_class=ScheduleCommentCreateSerializer),
        name='schedule-comment-create'
    ),
]
