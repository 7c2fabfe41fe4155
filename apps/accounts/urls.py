"""
Accounts URL configuration.
"""
from django.urls import path
from . import views

urlpatterns = [
    path('login', views.LoginView.as_view(), name='login'),
    path('refresh', views.TokenRefreshView.as_view(), name='token-refresh'),
    path('me', views.CurrentUserView.as_view(), name='current-user'),
    path('userOptions', views.UserOptionsView.as_view(), name='user-options'),
]
