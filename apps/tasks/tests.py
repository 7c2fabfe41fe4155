"""
Tests for work tasks and schedules.
"""
from types import SimpleNamespace
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from apps.accounts.models import Role
from apps.notifications.models import Notification, NotificationModule, NotificationType
from apps.notifications.services import NotificationDispatcher
from config.exceptions import (
    NoPermission, PermissionDenied, ResourceNotFound, ValidationError,
)
from config.permissions import (
    can_access_item, can_delete_comment, can_modify_item,
    is_full_permission_role, is_notification_excluded_role, is_restricted_role,
)

from .kinds import ScheduleKind, WorkTaskKind
from .models import Schedule, ScheduleComment, WorkTask, WorkTaskComment
from .services import WorkItemService, unique_ids

User = get_user_model()


class PermissionPolicyTests(SimpleTestCase):
    """Tests for the role permission predicates."""

    def setUp(self):
        self.item = SimpleNamespace(creator_id=1, assigned_user_ids=[2, 3])

    def test_full_permission_roles(self):
        self.assertTrue(is_full_permission_role('系统管理员'))
        self.assertTrue(is_full_permission_role('公司管理者'))
        self.assertFalse(is_full_permission_role('员工'))
        self.assertFalse(is_full_permission_role(''))
        self.assertFalse(is_full_permission_role(None))

    def test_restricted_is_negation(self):
        for role_name in ['系统管理员', '公司管理者', '员工', '']:
            self.assertEqual(is_restricted_role(role_name), not is_full_permission_role(role_name))

    def test_explicit_role_collection(self):
        self.assertTrue(is_full_permission_role('主管', full_permission_roles=['主管']))
        self.assertFalse(is_full_permission_role('系统管理员', full_permission_roles=['主管']))

    @override_settings(FULL_PERMISSION_ROLE_NAMES=('总经理',))
    def test_reads_role_set_from_settings(self):
        self.assertTrue(is_full_permission_role('总经理'))
        self.assertFalse(is_full_permission_role('公司管理者'))

    def test_can_access_item(self):
        self.assertTrue(can_access_item(1, '员工', self.item))
        self.assertTrue(can_access_item(3, '员工', self.item))
        self.assertTrue(can_access_item(9, '公司管理者', self.item))
        self.assertFalse(can_access_item(9, '员工', self.item))

    def test_can_modify_item(self):
        self.assertTrue(can_modify_item(1, '员工', self.item))
        self.assertFalse(can_modify_item(2, '员工', self.item))
        self.assertTrue(can_modify_item(2, '员工', self.item, allow_assignee=True))
        self.assertTrue(can_modify_item(9, '系统管理员', self.item))
        self.assertFalse(can_modify_item(9, '员工', self.item, allow_assignee=True))

    def test_can_delete_comment(self):
        comment = SimpleNamespace(user_id=5)
        self.assertTrue(can_delete_comment(5, '员工', comment))
        self.assertTrue(can_delete_comment(6, '公司管理者', comment))
        self.assertFalse(can_delete_comment(6, '员工', comment))

    def test_notification_excluded_role(self):
        self.assertTrue(is_notification_excluded_role('系统管理员'))
        self.assertFalse(is_notification_excluded_role('公司管理者'))
        self.assertFalse(is_notification_excluded_role(''))

    def test_unique_ids_keeps_first_occurrence(self):
        self.assertEqual(unique_ids([3, 1, 3, 2, 1]), [3, 1, 2])


class WorkItemAPITestCase(APITestCase):
    """Shared users and helpers for the work item API tests."""

    def setUp(self):
        self.admin_role = Role.objects.create(name='系统管理员')
        self.manager_role = Role.objects.create(name='公司管理者')
        self.staff_role = Role.objects.create(name='员工')

        self.admin = self.make_user('admin', self.admin_role)
        self.manager = self.make_user('manager', self.manager_role)
        self.alice = self.make_user('alice', self.staff_role)
        self.bob = self.make_user('bob', self.staff_role)
        self.carol = self.make_user('carol', self.staff_role)

    def make_user(self, username, role):
        return User.objects.create_user(
            username=username, name=username.title(), password='testpass123', role=role
        )

    def post_as(self, user, url, data=None):
        self.client.force_authenticate(user=user)
        return self.client.post(url, data or {})

    def notifications_for(self, item_id, module, **filters):
        return Notification.objects.filter(
            module=module, related_id=item_id, is_deleted=False, **filters
        )


class WorkTaskAPITests(WorkItemAPITestCase):
    """Tests for the work task endpoints."""

    base_url = '/api/workTask/'

    def create_task(self, user, title='季度预算报告', assignees=(), description='整理本季度数据'):
        response = self.post_as(user, self.base_url + 'create', {
            'title': title,
            'description': description,
            'assignedUserIds': list(assignees),
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data['data']

    def list_ids(self, user, **body):
        response = self.post_as(user, self.base_url + 'list', body)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return [row['id'] for row in response.data['data']]

    # create

    def test_create_notifies_each_assignee(self):
        task = self.create_task(self.alice, assignees=[self.bob.id, self.carol.id])

        self.assertEqual(task['assignedUserIds'], [self.bob.id, self.carol.id])
        self.assertEqual(task['creatorId'], self.alice.id)
        self.assertEqual(task['status'], '未完成')

        notifications = self.notifications_for(task['id'], NotificationModule.WORK)
        self.assertEqual(
            sorted(notifications.values_list('recipient_id', flat=True)),
            sorted([self.bob.id, self.carol.id])
        )
        self.assertTrue(all(n.type == NotificationType.ASSIGNED for n in notifications))
        self.assertEqual(notifications.first().content, '您有新的工作任务：季度预算报告')

    def test_create_without_assignees_sends_nothing(self):
        task = self.create_task(self.alice, assignees=[])
        self.assertEqual(task['assignedUserIds'], [])
        self.assertFalse(self.notifications_for(task['id'], NotificationModule.WORK).exists())

    def test_create_skips_creator_and_excluded_role(self):
        task = self.create_task(self.alice, assignees=[self.alice.id, self.admin.id, self.bob.id])

        recipients = list(
            self.notifications_for(task['id'], NotificationModule.WORK)
            .values_list('recipient_id', flat=True)
        )
        self.assertEqual(recipients, [self.bob.id])

    def test_create_collapses_duplicate_assignees(self):
        task = self.create_task(self.alice, assignees=[self.bob.id, self.bob.id])
        self.assertEqual(task['assignedUserIds'], [self.bob.id])
        self.assertEqual(self.notifications_for(task['id'], NotificationModule.WORK).count(), 1)

    def test_create_rejects_unknown_assignee(self):
        response = self.post_as(self.alice, self.base_url + 'create', {
            'title': 'T',
            'description': 'D',
            'assignedUserIds': [999999],
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 4001)
        self.assertIn('999999', response.data['message'])
        self.assertFalse(WorkTask.objects.exists())

    def test_create_requires_title(self):
        response = self.post_as(self.alice, self.base_url + 'create', {
            'description': 'D',
            'assignedUserIds': [],
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('title', response.data['errors'])

    def test_create_survives_notification_failure(self):
        with mock.patch.object(NotificationDispatcher, '_dispatch', side_effect=RuntimeError('boom')):
            task = self.create_task(self.alice, assignees=[self.bob.id])

        self.assertTrue(WorkTask.objects.filter(id=task['id']).exists())
        self.assertFalse(Notification.objects.exists())

    # list

    def test_list_visibility_by_role(self):
        own = self.create_task(self.alice)
        assigned = self.create_task(self.manager, assignees=[self.alice.id])
        other = self.create_task(self.bob)

        self.assertEqual(sorted(self.list_ids(self.alice)), sorted([own['id'], assigned['id']]))
        self.assertEqual(self.list_ids(self.carol), [])
        self.assertEqual(
            sorted(self.list_ids(self.manager)),
            sorted([own['id'], assigned['id'], other['id']])
        )

    def test_keyword_does_not_widen_visibility(self):
        visible = self.create_task(self.alice, title='budget report')
        self.create_task(self.bob, title='team sync', description='budget review')
        self.create_task(self.bob, title='budget plan')

        self.assertEqual(self.list_ids(self.alice, keyword='budget'), [visible['id']])
        self.assertEqual(len(self.list_ids(self.manager, keyword='budget')), 3)

    def test_keyword_is_case_sensitive(self):
        self.create_task(self.alice, title='Budget report')
        lower = self.create_task(self.alice, title='budget plan')
        in_description = self.create_task(self.alice, title='plan', description='quarterly budget')
        self.create_task(self.alice, title='review', description='BUDGET numbers')

        self.assertEqual(
            sorted(self.list_ids(self.alice, keyword='budget')),
            sorted([lower['id'], in_description['id']])
        )
        self.assertEqual(len(self.list_ids(self.alice, keyword='Budget')), 1)

    def test_list_newest_first_with_status_filter(self):
        first = self.create_task(self.alice, title='first')
        second = self.create_task(self.alice, title='second')
        WorkTask.objects.filter(id=first['id']).update(status='进行中')

        self.assertEqual(self.list_ids(self.alice), [second['id'], first['id']])
        self.assertEqual(self.list_ids(self.alice, status='进行中'), [first['id']])

    def test_list_pagination(self):
        ids = [self.create_task(self.alice, title=f'task {n}')['id'] for n in range(12)]
        newest_first = list(reversed(ids))

        self.assertEqual(self.list_ids(self.alice), newest_first[:10])
        self.assertEqual(self.list_ids(self.alice, page=2, pageSize=5), newest_first[5:10])
        self.assertEqual(self.list_ids(self.alice, page=3, pageSize=5), newest_first[10:])
        self.assertEqual(self.list_ids(self.alice, pageSize=0), newest_first)

    def test_list_resolves_assigned_users(self):
        self.create_task(self.alice, assignees=[self.carol.id, self.bob.id])
        response = self.post_as(self.alice, self.base_url + 'list')
        row = response.data['data'][0]

        self.assertEqual(row['creator']['id'], self.alice.id)
        self.assertEqual([u['id'] for u in row['assignedUsers']], [self.carol.id, self.bob.id])

    def test_excludes_deleted_assignee_from_assigned_users(self):
        self.create_task(self.alice, assignees=[self.bob.id, self.carol.id])
        self.carol.soft_delete()
        response = self.post_as(self.alice, self.base_url + 'list')
        self.assertEqual([u['id'] for u in response.data['data'][0]['assignedUsers']], [self.bob.id])

    def test_excludes_deactivated_assignee_from_assigned_users(self):
        self.create_task(self.alice, assignees=[self.bob.id, self.carol.id])
        self.carol.is_active = False
        self.carol.save()

        response = self.post_as(self.alice, self.base_url + 'list')
        row = response.data['data'][0]
        self.assertEqual([u['id'] for u in row['assignedUsers']], [self.bob.id])
        self.assertEqual(row['assignedUserIds'], [self.bob.id, self.carol.id])

    # detail

    def test_detail_with_comments(self):
        task = self.create_task(self.alice, assignees=[self.bob.id])
        self.post_as(self.bob, self.base_url + 'comment/create', {'taskId': task['id'], 'content': '收到'})

        response = self.post_as(self.bob, self.base_url + 'detail', {'id': task['id']})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['id'], task['id'])
        self.assertEqual(set(data['assignedUserIds']), {self.bob.id})
        self.assertEqual(len(data['comments']), 1)
        self.assertEqual(data['comments'][0]['user']['role']['name'], '员工')

    def test_detail_no_permission(self):
        task = self.create_task(self.alice, assignees=[self.bob.id])
        response = self.post_as(self.carol, self.base_url + 'detail', {'id': task['id']})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], 3002)

    def test_detail_not_found(self):
        response = self.post_as(self.manager, self.base_url + 'detail', {'id': 424242})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 3001)

    def test_detail_requires_id(self):
        response = self.post_as(self.alice, self.base_url + 'detail', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    # update

    def test_update_by_creator(self):
        task = self.create_task(self.alice, assignees=[self.bob.id])
        response = self.post_as(self.alice, self.base_url + 'update', {
            'id': task['id'],
            'status': '进行中',
            'assignedUserIds': [self.carol.id, self.bob.id],
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['status'], '进行中')
        self.assertEqual(response.data['data']['assignedUserIds'], [self.carol.id, self.bob.id])

        updated = self.notifications_for(task['id'], NotificationModule.WORK, type=NotificationType.UPDATED)
        self.assertEqual(
            sorted(updated.values_list('recipient_id', flat=True)),
            sorted([self.carol.id, self.bob.id])
        )
        self.assertFalse(WorkTaskComment.objects.filter(item_id=task['id']).exists())

    def test_update_by_manager_notifies_creator(self):
        task = self.create_task(self.alice, assignees=[self.bob.id])
        self.post_as(self.manager, self.base_url + 'update', {'id': task['id'], 'status': '有风险'})

        updated = self.notifications_for(task['id'], NotificationModule.WORK, type=NotificationType.UPDATED)
        self.assertEqual(
            sorted(updated.values_list('recipient_id', flat=True)),
            sorted([self.bob.id, self.alice.id])
        )

    def test_update_by_assignee_denied(self):
        task = self.create_task(self.alice, assignees=[self.bob.id])
        response = self.post_as(self.bob, self.base_url + 'update', {'id': task['id'], 'status': '已完成'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], 3002)
        self.assertEqual(WorkTask.objects.get(id=task['id']).status, '未完成')

    def test_update_without_changes_is_noop(self):
        task = self.create_task(self.alice, assignees=[self.bob.id])
        before = WorkTask.objects.get(id=task['id']).updated_at

        response = self.post_as(self.alice, self.base_url + 'update', {'id': task['id']})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['assignedUserIds'], [self.bob.id])

        self.assertEqual(WorkTask.objects.get(id=task['id']).updated_at, before)
        self.assertFalse(
            self.notifications_for(task['id'], NotificationModule.WORK, type=NotificationType.UPDATED).exists()
        )

    # delete

    def test_delete_forbidden_for_restricted_role(self):
        task = self.create_task(self.alice)
        response = self.post_as(self.alice, self.base_url + 'delete', {'id': task['id']})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], 1010)
        self.assertFalse(WorkTask.objects.get(id=task['id']).is_deleted)

    def test_delete_cascades(self):
        task = self.create_task(self.alice, assignees=[self.bob.id])
        self.post_as(self.bob, self.base_url + 'comment/create', {'taskId': task['id'], 'content': 'ok'})

        response = self.post_as(self.manager, self.base_url + 'delete', {'id': task['id']})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['data'])

        self.assertTrue(WorkTask.objects.get(id=task['id']).is_deleted)
        self.assertFalse(WorkTaskComment.objects.filter(item_id=task['id'], is_deleted=False).exists())
        self.assertFalse(self.notifications_for(task['id'], NotificationModule.WORK).exists())
        self.assertEqual(self.list_ids(self.alice), [])

        detail = self.post_as(self.alice, self.base_url + 'detail', {'id': task['id']})
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_missing_item(self):
        response = self.post_as(self.manager, self.base_url + 'delete', {'id': 424242})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 3001)

    # comments

    def test_comment_create_notifies_other_members(self):
        task = self.create_task(self.alice, assignees=[self.bob.id, self.carol.id])
        response = self.post_as(self.bob, self.base_url + 'comment/create', {
            'taskId': task['id'],
            'content': '已开始处理',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['taskId'], task['id'])
        self.assertEqual(response.data['data']['userId'], self.bob.id)

        commented = self.notifications_for(task['id'], NotificationModule.WORK, type=NotificationType.COMMENTED)
        self.assertEqual(list(commented.values_list('recipient_id', flat=True)), [self.carol.id])

    def test_comment_create_requires_access(self):
        task = self.create_task(self.alice)
        response = self.post_as(self.carol, self.base_url + 'comment/create', {
            'taskId': task['id'],
            'content': 'hi',
        })
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], 3002)

    def test_comment_delete_permissions(self):
        task = self.create_task(self.alice, assignees=[self.bob.id])
        created = self.post_as(self.bob, self.base_url + 'comment/create', {
            'taskId': task['id'],
            'content': 'mine',
        })
        comment_id = created.data['data']['id']

        denied = self.post_as(self.alice, self.base_url + 'comment/delete', {'id': comment_id})
        self.assertEqual(denied.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(denied.data['code'], 3004)

        allowed = self.post_as(self.bob, self.base_url + 'comment/delete', {'id': comment_id})
        self.assertEqual(allowed.status_code, status.HTTP_200_OK)
        self.assertTrue(WorkTaskComment.objects.get(id=comment_id).is_deleted)

        again = self.post_as(self.bob, self.base_url + 'comment/delete', {'id': comment_id})
        self.assertEqual(again.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(again.data['code'], 3003)

    def test_comment_delete_by_manager(self):
        task = self.create_task(self.alice)
        created = self.post_as(self.alice, self.base_url + 'comment/create', {
            'taskId': task['id'],
            'content': 'note',
        })
        response = self.post_as(self.manager, self.base_url + 'comment/delete', {'id': created.data['data']['id']})
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class ScheduleAPITests(WorkItemAPITestCase):
    """Tests for the schedule endpoints."""

    base_url = '/api/schedule/'

    def create_schedule(self, user, title='周会', assignees=()):
        response = self.post_as(user, self.base_url + 'create', {
            'title': title,
            'description': '每周一上午',
            'assignedUserIds': list(assignees),
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data['data']

    def test_create_notifies_with_schedule_module(self):
        schedule = self.create_schedule(self.alice, assignees=[self.bob.id])
        notification = Notification.objects.get(related_id=schedule['id'])
        self.assertEqual(notification.module, NotificationModule.SCHEDULE)
        self.assertEqual(notification.content, '您有新的日程：周会')
        self.assertFalse(self.notifications_for(schedule['id'], NotificationModule.WORK).exists())

    def test_assignee_status_update_records_comment(self):
        schedule = self.create_schedule(self.alice, assignees=[self.bob.id, self.admin.id])

        response = self.post_as(self.bob, self.base_url + 'updateStatus', {
            'id': schedule['id'],
            'status': '进行中',
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['status'], '进行中')

        comment = ScheduleComment.objects.get(item_id=schedule['id'])
        self.assertTrue(comment.is_system)
        self.assertEqual(comment.user_id, self.bob.id)
        self.assertEqual(comment.content, '状态已从"未完成"更新为"进行中"')

        updated = self.notifications_for(schedule['id'], NotificationModule.SCHEDULE, type=NotificationType.UPDATED)
        self.assertEqual(list(updated.values_list('recipient_id', flat=True)), [self.alice.id])
        self.assertEqual(updated.first().content, '日程"周会"状态已更新为"进行中"')
        self.assertFalse(Notification.objects.filter(recipient=self.admin).exists())

    def test_same_status_skips_comment(self):
        schedule = self.create_schedule(self.alice, assignees=[self.bob.id])
        self.post_as(self.alice, self.base_url + 'updateStatus', {'id': schedule['id'], 'status': '未完成'})
        self.assertFalse(ScheduleComment.objects.filter(item_id=schedule['id']).exists())

    def test_update_status_requires_status(self):
        schedule = self.create_schedule(self.alice)
        response = self.post_as(self.alice, self.base_url + 'updateStatus', {'id': schedule['id']})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_status_no_permission(self):
        schedule = self.create_schedule(self.alice, assignees=[self.bob.id])
        response = self.post_as(self.carol, self.base_url + 'updateStatus', {
            'id': schedule['id'],
            'status': '已完成',
        })
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], 3102)

    def test_status_comment_failure_keeps_update(self):
        schedule = self.create_schedule(self.alice, assignees=[self.bob.id])
        with mock.patch.object(ScheduleComment.objects, 'create', side_effect=RuntimeError('boom')):
            response = self.post_as(self.bob, self.base_url + 'updateStatus', {
                'id': schedule['id'],
                'status': '有风险',
            })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Schedule.objects.get(id=schedule['id']).status, '有风险')

    def test_comment_uses_schedule_id(self):
        schedule = self.create_schedule(self.alice, assignees=[self.bob.id])
        response = self.post_as(self.alice, self.base_url + 'comment/create', {
            'scheduleId': schedule['id'],
            'content': '记得带材料',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['scheduleId'], schedule['id'])

    def test_detail_not_found_code(self):
        response = self.post_as(self.manager, self.base_url + 'detail', {'id': 424242})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 3101)

    def test_delete_forbidden_for_restricted_role(self):
        schedule = self.create_schedule(self.alice)
        response = self.post_as(self.alice, self.base_url + 'delete', {'id': schedule['id']})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], 1010)

    def test_statistics(self):
        self.create_schedule(self.alice, title='a')
        progressing = self.create_schedule(self.alice, title='b')
        risky = self.create_schedule(self.alice, title='c')
        done = self.create_schedule(self.alice, title='d')
        self.create_schedule(self.bob, title='hidden')
        Schedule.objects.filter(id=progressing['id']).update(status='进行中')
        Schedule.objects.filter(id=risky['id']).update(status='有风险')
        Schedule.objects.filter(id=done['id']).update(status='已完成')

        response = self.post_as(self.alice, self.base_url + 'statistics')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data'], {'pending': 1, 'inProgress': 1, 'atRisk': 1})

        response = self.post_as(self.manager, self.base_url + 'statistics')
        self.assertEqual(response.data['data']['pending'], 2)


class WorkItemServiceTests(WorkItemAPITestCase):
    """Direct service calls for behaviour not reachable over HTTP."""

    def test_schedule_comments_not_deletable(self):
        service = WorkItemService(ScheduleKind)
        with self.assertRaises(PermissionDenied) as ctx:
            service.delete_comment(self.manager.id, '公司管理者', 1)
        self.assertEqual(ctx.exception.get_codes(), 3103)

    def test_work_task_assignee_cannot_update(self):
        service = WorkItemService(WorkTaskKind)
        task = service.create_item(self.alice.id, 'T', 'D', [self.bob.id])
        with self.assertRaises(NoPermission) as ctx:
            service.update_item(self.bob.id, '员工', task.id, status='已完成')
        self.assertEqual(ctx.exception.get_codes(), 3002)

    def test_dispatch_rejects_unknown_operation(self):
        dispatcher = NotificationDispatcher(WorkTask, NotificationModule.WORK)
        with self.assertRaises(ValueError):
            dispatcher.dispatch(1, self.alice.id, [self.bob.id], 'archive')


class ErrorCodeTests(SimpleTestCase):
    """Business codes carry their registered message and HTTP status."""

    def test_registered_code_defaults(self):
        exc = ValidationError(code=4001)
        self.assertEqual(exc.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(exc.detail), '关联用户不存在')
        self.assertEqual(exc.get_codes(), 4001)

    def test_explicit_message_kept(self):
        exc = ResourceNotFound('日程不存在', code=3101)
        self.assertEqual(exc.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(str(exc.detail), '日程不存在')

    def test_status_follows_code_table(self):
        self.assertEqual(PermissionDenied(code=1010).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(str(PermissionDenied(code=3103).detail), '日程回复不允许删除')

    def test_unregistered_code_uses_class_defaults(self):
        exc = NoPermission(code='no_permission')
        self.assertEqual(exc.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(str(exc.detail), NoPermission.default_detail)
