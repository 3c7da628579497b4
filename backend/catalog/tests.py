from unittest import mock

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from activity.models import ActivityLog
from users.models import User
from .models import Room, Service


class SlugTests(TestCase):
    def test_slug_generated_from_name(self):
        room = Room.objects.create(name="Suite Royale", price=150000)
        self.assertEqual(room.slug, "suite-royale")

    @mock.patch("utils.slugs.time.time", return_value=1718000000)
    def test_colliding_slug_gets_timestamp(self, _):
        Room.objects.create(name="Suite Royale", price=150000)
        duplicate = Room.objects.create(name="Suite royale", price=160000)
        self.assertEqual(duplicate.slug, "suite-royale-1718000000")

    def test_slug_unique_per_model(self):
        Room.objects.create(name="Piscine", price=10000)
        service = Service.objects.create(name="Piscine", service_type="POOL")
        self.assertEqual(service.slug, "piscine")

    def test_slug_kept_on_rename(self):
        room = Room.objects.create(name="Bungalow", price=60000)
        room.name = "Bungalow Jardin"
        room.save()
        self.assertEqual(room.slug, "bungalow")


class CatalogAPITests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@akwalodge.com',
            name='Admin',
            password='testpassword123',
            role='admin',
        )
        self.client = APIClient()
        Room.objects.create(name="Villa", price=90000)
        Room.objects.create(name="Closed", price=10000, is_active=False)

    def test_public_sees_active_rooms_only(self):
        response = self.client.get(reverse('room-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r['name'] for r in response.data], ["Villa"])

    def test_dashboard_sees_all_rooms(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(reverse('room-list'))
        self.assertEqual([r['name'] for r in response.data], ["Closed", "Villa"])

    def test_public_cannot_create(self):
        response = self.client.post(reverse('room-list'), {"name": "Hack", "price": 1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_service_logs_activity(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse('service-list'), {
            "name": "Spa Akwa",
            "service_type": "WELLNESS",
            "price": 25000,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], "spa-akwa")
        self.assertTrue(ActivityLog.objects.filter(action="CREATE", entity_type="Service").exists())

    def test_retrieve_by_slug(self):
        response = self.client.get(reverse('room-detail', args=["villa"]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['price'], 90000)
