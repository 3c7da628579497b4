from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from activity.models import ActivityLog
from promotions.models import Promotion
from users.models import User
from .models import Announcement


class AnnouncementTests(TestCase):
    def setUp(self):
        self.now = timezone.now()
        self.admin = User.objects.create_user(
            email='admin@akwalodge.com',
            name='Admin',
            password='testpassword123',
            role='admin',
        )
        self.client = APIClient()
        self.promotion = Promotion.objects.create(
            name="Pool pass",
            discount_type="FIXED_AMOUNT",
            value=Decimal("5000"),
            scope="POOL",
            code="pool5",
            starts_at=self.now - timedelta(days=1),
            ends_at=self.now + timedelta(days=10),
        )

    def make_announcement(self, **overrides):
        fields = {
            "title": "Summer at the pool",
            "starts_at": self.now - timedelta(hours=1),
            "ends_at": self.now + timedelta(days=1),
        }
        fields.update(overrides)
        return Announcement.objects.create(**fields)

    def test_active_announcements_carry_promotion_label(self):
        self.make_announcement(promotion=self.promotion)

        response = self.client.get(reverse('announcement-active'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        bound = response.data[0]['promotion']
        self.assertEqual(bound["label"], "-5\u202f000 FCFA")
        self.assertEqual(bound['code'], "POOL5")

    def test_active_announcement_without_promotion(self):
        self.make_announcement()
        response = self.client.get(reverse('announcement-active'))
        self.assertIsNone(response.data[0]['promotion'])

    def test_active_excludes_out_of_window_and_inactive(self):
        self.make_announcement(title="Future", starts_at=self.now + timedelta(days=1), ends_at=self.now + timedelta(days=2))
        self.make_announcement(title="Hidden", is_active=False)
        self.make_announcement(title="Live")

        response = self.client.get(reverse('announcement-active'))

        self.assertEqual([a['title'] for a in response.data], ["Live"])

    def test_active_orders_pinned_first(self):
        self.make_announcement(title="Second", order=0)
        self.make_announcement(title="Pinned", order=5, is_pinned=True)
        self.make_announcement(title="First", order=-1)

        response = self.client.get(reverse('announcement-active'))

        self.assertEqual([a['title'] for a in response.data], ["Pinned", "First", "Second"])

    def test_active_position_filter(self):
        self.make_announcement(title="Home")
        self.make_announcement(title="Restaurant", position="RESTAURANT")

        response = self.client.get(reverse('announcement-active'), {"position": "RESTAURANT"})
        self.assertEqual([a['title'] for a in response.data], ["Restaurant"])

        response = self.client.get(reverse('announcement-active'), {"position": "ROOFTOP"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_binds_and_unbinds_promotion(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse('announcement-list'), {
            "title": "Pool week",
            "starts_at": self.now.isoformat(),
            "ends_at": (self.now + timedelta(days=7)).isoformat(),
            "promotion_id": self.promotion.id,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['promotion']['id'], self.promotion.id)
        announcement_id = response.data['id']

        # Bound: the promotion cannot be deleted
        response = self.client.delete(reverse('promotion-detail', args=[self.promotion.id]))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        response = self.client.patch(
            reverse('announcement-detail', args=[announcement_id]),
            {"promotion_id": None},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['promotion'])

        response = self.client.delete(reverse('promotion-detail', args=[self.promotion.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_rejects_window_ending_before_start(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse('announcement-list'), {
            "title": "Backwards",
            "starts_at": (self.now + timedelta(days=2)).isoformat(),
            "ends_at": self.now.isoformat(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_toggle(self):
        self.client.force_authenticate(user=self.admin)
        announcement = self.make_announcement()

        response = self.client.post(reverse('announcement-toggle', args=[announcement.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_active'])

    def test_toggle_pinned(self):
        self.client.force_authenticate(user=self.admin)
        announcement = self.make_announcement()

        response = self.client.post(reverse('announcement-toggle-pinned', args=[announcement.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['is_pinned'])
        self.assertTrue(ActivityLog.objects.filter(action="TOGGLE", description__startswith="Announcement pinned").exists())

        response = self.client.post(reverse('announcement-toggle-pinned', args=[announcement.id]))
        self.assertFalse(response.data['is_pinned'])

    def test_duplicate_creates_inactive_copy(self):
        self.client.force_authenticate(user=self.admin)
        announcement = self.make_announcement(promotion=self.promotion, position="EVENTS", is_pinned=True)

        response = self.client.post(reverse('announcement-duplicate', args=[announcement.id]))

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotEqual(response.data['id'], announcement.id)
        self.assertEqual(response.data['title'], "Summer at the pool (copy)")
        self.assertFalse(response.data['is_active'])
        self.assertEqual(response.data['position'], "EVENTS")
        self.assertEqual(response.data['promotion']['id'], self.promotion.id)
        self.assertEqual(Announcement.objects.count(), 2)
        announcement.refresh_from_db()
        self.assertTrue(announcement.is_active)
        self.assertTrue(ActivityLog.objects.filter(action="CREATE", entity_id=str(response.data['id'])).exists())

    def test_duplicate_keeps_title_within_length(self):
        self.client.force_authenticate(user=self.admin)
        announcement = self.make_announcement(title="x" * 150)

        response = self.client.post(reverse('announcement-duplicate', args=[announcement.id]))

        self.assertEqual(len(response.data['title']), 150)
        self.assertTrue(response.data['title'].endswith(" (copy)"))

    def test_stats(self):
        self.client.force_authenticate(user=self.admin)
        self.make_announcement(title="Live", is_pinned=True)
        self.make_announcement(title="Hidden", is_active=False, position="ROOMS")
        self.make_announcement(title="Past", starts_at=self.now - timedelta(days=5), ends_at=self.now - timedelta(days=1))

        response = self.client.get(reverse('announcement-stats'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['active'], 1)
        self.assertEqual(response.data['expired'], 1)
        self.assertEqual(response.data['pinned'], 1)
        self.assertEqual(response.data['by_position'], {"HOME": 2, "ROOMS": 1})

    def test_admin_list_requires_authentication(self):
        response = self.client.get(reverse('announcement-list'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
