"""
Work task URL configuration.
"""
from django.urls import path

from . import views
from .kinds import WorkTaskKind
from .serializers import WorkTaskCommentCreateSerializer

urlpatterns = [
    path('list', views.WorkItemListView.as_view(kind=WorkTaskKind), name='work-task-list'),
    path('detail', views.WorkItemDetailView.as_view(kind=WorkTaskKind), name='work-task-detail'),
    path('create', views.WorkItemCreateView.as_view(kind=WorkTaskKind), name='work-task-create'),
    path('update', views.WorkTaskUpdateView.as_view(kind=WorkTaskKind), name='work-task-update'),
    path('delete', views.WorkItemDeleteView.as_view(kind=WorkTaskKind), name='work-task-delete'),

    # Comments
    path(
        'comment/create',
        views.CommentCreateView.as_view(kind=WorkTaskKind, serializer_class=WorkTaskCommentCreateSerializer),
        name='work-task-comment-create'
    ),
    path('comment/delete', views.CommentDeleteView.as_view(kind=WorkTaskKind), name='work-task-comment-delete'),
]
