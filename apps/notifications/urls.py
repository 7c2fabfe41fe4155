"""
Notifications URL configuration.
"""
from django.urls import path
from . import views

urlpatterns = [
    path('list', views.NotificationListView.as_view(), name='notification-list'),
    path('unreadCount', views.NotificationUnreadCountView.as_view(), name='notification-unread-count'),
    path('markRead', views.NotificationMarkReadView.as_view(), name='notification-mark-read'),
    path('markAllRead', views.NotificationMarkAllReadView.as_view(), name='notification-mark-all-read'),
    path('delete', views.NotificationDeleteView.as_view(), name='notification-delete'),
]
