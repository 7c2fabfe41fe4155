"""
Tests for accounts app.
"""
from io import StringIO

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from .models import Role

User = get_user_model()


class UserModelTests(TestCase):
    """Tests for User model."""

    def test_create_user(self):
        """Test creating a user."""
        role = Role.objects.create(name='员工')
        user = User.objects.create_user(
            username='testuser',
            name='张三',
            code='E001',
            password='testpass123',
            role=role
        )
        self.assertEqual(user.username, 'testuser')
        self.assertTrue(user.check_password('testpass123'))
        self.assertEqual(user.role_name, '员工')

    def test_role_name_empty_without_role(self):
        user = User.objects.create_user(username='norole', password='testpass123')
        self.assertEqual(user.role_name, '')

    def test_soft_delete_hides_from_active(self):
        user = User.objects.create_user(username='gone', password='testpass123')
        user.soft_delete()
        self.assertFalse(User.active.filter(id=user.id).exists())
        self.assertTrue(User.objects.filter(id=user.id).exists())


class InitRolesCommandTests(TestCase):
    """Tests for the init_roles management command."""

    def test_creates_builtin_roles_once(self):
        call_command('init_roles', stdout=StringIO())
        call_command('init_roles', stdout=StringIO())
        names = set(Role.objects.values_list('name', flat=True))
        self.assertEqual(names, set(settings.BUILTIN_ROLE_NAMES))

    def test_restores_deleted_role(self):
        Role.objects.create(name='员工', is_deleted=True)
        call_command('init_roles', stdout=StringIO())
        self.assertFalse(Role.objects.get(name='员工').is_deleted)


class AuthAPITests(APITestCase):
    """Tests for authentication API."""

    def setUp(self):
        """Set up test data."""
        self.role = Role.objects.create(name='员工')
        self.user = User.objects.create_user(
            username='testuser',
            name='张三',
            code='E001',
            password='testpass123',
            role=self.role
        )

    def test_login(self):
        """Test login endpoint."""
        response = self.client.post('/api/auth/login', {
            'username': 'testuser',
            'password': 'testpass123'
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('accessToken', response.data['data'])
        self.assertIn('refreshToken', response.data['data'])
        self.assertEqual(response.data['data']['user']['roleName'], '员工')

    def test_login_with_employee_code(self):
        response = self.client.post('/api/auth/login', {
            'username': 'E001',
            'password': 'testpass123'
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['user']['id'], self.user.id)

    def test_login_invalid_credentials(self):
        """Test login with invalid credentials."""
        response = self.client.post('/api/auth/login', {
            'username': 'testuser',
            'password': 'wrongpassword'
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 1001)

    def test_login_inactive_user(self):
        self.user.is_active = False
        self.user.save()
        response = self.client.post('/api/auth/login', {
            'username': 'testuser',
            'password': 'testpass123'
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 1004)

    def test_login_missing_password(self):
        response = self.client.post('/api/auth/login', {'username': 'testuser'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data['errors'])

    def test_token_authenticates_requests(self):
        login = self.client.post('/api/auth/login', {
            'username': 'testuser',
            'password': 'testpass123'
        })
        token = login.data['data']['accessToken']

        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = self.client.post('/api/auth/me')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['username'], 'testuser')

    def test_refresh(self):
        login = self.client.post('/api/auth/login', {
            'username': 'testuser',
            'password': 'testpass123'
        })
        response = self.client.post('/api/auth/refresh', {
            'refreshToken': login.data['data']['refreshToken']
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('accessToken', response.data['data'])

    def test_refresh_invalid_token(self):
        response = self.client.post('/api/auth/refresh', {'refreshToken': 'not-a-token'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 1003)

    def test_unauthenticated_request_rejected(self):
        response = self.client.post('/api/auth/me')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class UserOptionsAPITests(APITestCase):
    """Tests for the assignee picker endpoint."""

    def setUp(self):
        self.user = User.objects.create_user(username='alice', name='Alice', password='testpass123')
        self.other = User.objects.create_user(username='bob', name='Bob', password='testpass123')
        self.removed = User.objects.create_user(username='carol', name='Carol', password='testpass123')
        self.removed.soft_delete()
        self.client.force_authenticate(user=self.user)

    def test_lists_active_users_only(self):
        response = self.client.post('/api/auth/userOptions')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [row['id'] for row in response.data['data']]
        self.assertEqual(ids, [self.user.id, self.other.id])
