"""
Tests for notifications app.
"""
from django.contrib.auth import get_user_model
from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.test import APITestCase

from apps.accounts.models import Role

from .models import Notification, NotificationModule, NotificationType
from .services import (
    OPERATION_COMMENT, OPERATION_CREATE, OPERATION_UPDATE,
    NotificationService, resolve_recipients,
)

User = get_user_model()


class ResolveRecipientsTests(SimpleTestCase):
    """Tests for recipient resolution."""

    def test_create_skips_creator(self):
        self.assertEqual(resolve_recipients(1, [2, 1, 3], OPERATION_CREATE), [2, 3])

    def test_update_adds_creator_when_not_operator(self):
        self.assertEqual(resolve_recipients(1, [2, 3], OPERATION_UPDATE, operator_id=2), [3, 1])

    def test_update_by_creator(self):
        self.assertEqual(resolve_recipients(1, [2, 3], OPERATION_UPDATE, operator_id=1), [2, 3])

    def test_update_creator_already_assigned(self):
        self.assertEqual(resolve_recipients(1, [1, 2], OPERATION_UPDATE, operator_id=9), [1, 2])

    def test_comment_skips_operator_only(self):
        self.assertEqual(resolve_recipients(1, [2, 3], OPERATION_COMMENT, operator_id=3), [2])

    def test_empty_assignees(self):
        self.assertEqual(resolve_recipients(1, [], OPERATION_CREATE), [])
        self.assertEqual(resolve_recipients(1, [], OPERATION_COMMENT, operator_id=1), [])


class NotificationAPITests(APITestCase):
    """Tests for notification API."""

    def setUp(self):
        """Set up test data."""
        role = Role.objects.create(name='员工')
        self.user = User.objects.create_user(username='alice', password='testpass123', role=role)
        self.other = User.objects.create_user(username='bob', password='testpass123', role=role)

        self.unread = [self.notify(self.user, f'未读 {n}') for n in range(3)]
        self.read = self.notify(self.user, '已读', is_read=True)
        self.foreign = self.notify(self.other, '他人的通知')

        self.client.force_authenticate(user=self.user)

    def notify(self, recipient, title, **extra):
        return Notification.objects.create(
            recipient=recipient,
            module=NotificationModule.WORK,
            type=NotificationType.ASSIGNED,
            title=title,
            content=title,
            related_id=1,
            **extra
        )

    def test_list_notifications(self):
        """Test listing notifications."""
        response = self.client.post('/api/notification/list', {})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        data = response.data['data']
        self.assertEqual(len(data), 4)
        self.assertEqual(data[0]['id'], self.read.id)
        self.assertEqual(data[0]['isRead'], 1)
        self.assertNotIn(self.foreign.id, [row['id'] for row in data])

    def test_list_unread_filter(self):
        response = self.client.post('/api/notification/list', {'isRead': 0, 'pageSize': 0})
        ids = [row['id'] for row in response.data['data']]
        self.assertEqual(sorted(ids), sorted(n.id for n in self.unread))
        self.assertTrue(all(row['isRead'] == 0 for row in response.data['data']))

    def test_list_paginated(self):
        response = self.client.post('/api/notification/list', {'page': 2, 'pageSize': 3})
        self.assertEqual(len(response.data['data']), 1)

    def test_list_rejects_bad_read_flag(self):
        response = self.client.post('/api/notification/list', {'isRead': 5})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unread_count(self):
        response = self.client.post('/api/notification/unreadCount')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['count'], 3)

    def test_mark_read_single(self):
        """Test marking notification as read."""
        response = self.client.post('/api/notification/markRead', {'id': self.unread[0].id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['data'])

        notification = Notification.objects.get(id=self.unread[0].id)
        self.assertTrue(notification.is_read)
        self.assertIsNotNone(notification.read_at)

    def test_mark_read_many(self):
        ids = [self.unread[0].id, self.unread[1].id, self.foreign.id]
        self.client.post('/api/notification/markRead', {'ids': ids})

        self.assertEqual(NotificationService.unread_count(self.user.id), 1)
        self.assertFalse(Notification.objects.get(id=self.foreign.id).is_read)

    def test_mark_read_requires_id(self):
        response = self.client.post('/api/notification/markRead', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_mark_all_read_only_touches_own(self):
        """Test marking all notifications as read."""
        response = self.client.post('/api/notification/markAllRead')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.assertEqual(NotificationService.unread_count(self.user.id), 0)
        self.assertEqual(NotificationService.unread_count(self.other.id), 1)

    def test_delete_notification(self):
        response = self.client.post('/api/notification/delete', {'id': self.read.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(Notification.objects.get(id=self.read.id).is_deleted)

        response = self.client.post('/api/notification/list', {})
        self.assertNotIn(self.read.id, [row['id'] for row in response.data['data']])

    def test_delete_other_users_notification(self):
        response = self.client.post('/api/notification/delete', {'id': self.foreign.id})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 7001)
        self.assertFalse(Notification.objects.get(id=self.foreign.id).is_deleted)

    def test_soft_delete_related(self):
        count = NotificationService.soft_delete_related(NotificationModule.WORK, 1)
        self.assertEqual(count, 5)
        self.assertEqual(NotificationService.unread_count(self.user.id), 0)
        self.assertEqual(NotificationService.soft_delete_related(NotificationModule.SCHEDULE, 1), 0)
