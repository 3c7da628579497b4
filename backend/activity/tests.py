from unittest import mock

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from users.models import User
from .models import ActivityLog
from .tasks import log_activity, write_activity_log


class ActivityLogTaskTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email='admin@akwalodge.com',
            name='Admin',
            password='testpassword123',
            role='admin',
        )

    def test_log_activity_copies_user_identity(self):
        log_activity(self.user, "CREATE", "Promotion", 12, "Promotion created: Summer")

        log = ActivityLog.objects.get()
        self.assertEqual(log.user, self.user)
        self.assertEqual(log.user_name, "Admin")
        self.assertEqual(log.user_email, "admin@akwalodge.com")
        self.assertEqual(log.entity_id, "12")

    def test_write_failure_is_swallowed(self):
        with mock.patch.object(ActivityLog.objects, "create", side_effect=RuntimeError("db down")):
            with self.assertLogs("activity.tasks", level="ERROR"):
                write_activity_log(self.user.pk, "DELETE", "Promotion", 3, "Promotion deleted")

        self.assertFalse(ActivityLog.objects.exists())

    def test_queue_failure_is_swallowed(self):
        with mock.patch.object(write_activity_log, "delay", side_effect=ConnectionError("no broker")):
            with self.assertLogs("activity.tasks", level="ERROR"):
                log_activity(self.user, "UPDATE", "Room", 1, "Room updated")


class ActivityLogAPITests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@akwalodge.com',
            name='Admin',
            password='testpassword123',
            role='admin',
        )
        self.staff = User.objects.create_user(
            email='reception@akwalodge.com',
            name='Reception',
            password='testpassword123',
            role='staff',
        )
        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)

        log_activity(self.admin, "CREATE", "Promotion", 1, "Promotion created: Summer")
        log_activity(self.staff, "UPDATE", "Room", 2, "Room updated: Villa")
        log_activity(self.admin, "DELETE", "Promotion", 1, "Promotion deleted: Summer")

    def test_lists_newest_first(self):
        response = self.client.get(reverse('activity-log-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['logs'][0]['action'], "DELETE")

    def test_filters(self):
        response = self.client.get(reverse('activity-log-list'), {"entity_type": "Promotion"})
        self.assertEqual(response.data['total'], 2)

        response = self.client.get(reverse('activity-log-list'), {"user": self.staff.pk})
        self.assertEqual([log['description'] for log in response.data['logs']], ["Room updated: Villa"])

        response = self.client.get(reverse('activity-log-list'), {"action": "CREATE"})
        self.assertEqual(response.data['total'], 1)

    def test_paging(self):
        response = self.client.get(reverse('activity-log-list'), {"limit": 1, "offset": 1})
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(len(response.data['logs']), 1)
        self.assertEqual(response.data['logs'][0]['action'], "UPDATE")

    def test_bad_paging(self):
        response = self.client.get(reverse('activity-log-list'), {"limit": "many"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get(reverse('activity-log-list'), {"limit": -5})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get(reverse('activity-log-list'), {"limit": 0})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get(reverse('activity-log-list'), {"user": "abc"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_filter_options(self):
        response = self.client.get(reverse('activity-log-filters'))
        self.assertEqual(response.data['entity_types'], ["Promotion", "Room"])
        self.assertEqual(len(response.data['users']), 2)

    def test_requires_dashboard_user(self):
        response = APIClient().get(reverse('activity-log-list'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
