from django.test import TestCase
from django.urls import reverse
from django.conf import settings
from rest_framework.test import APIClient
from rest_framework import status
from users.models import User


class LoginTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email='Reception@AkwaLodge.com',
            name='Reception',
            password='testpassword123',
            role='staff',
        )
        self.client = APIClient()

    def test_email_is_stored_lowercase(self):
        self.assertEqual(self.user.email, 'reception@akwalodge.com')

    def test_login_sets_access_cookie(self):
        """Valid credentials return a refresh token and set the access cookie"""
        response = self.client.post(reverse('login'), {
            'email': 'reception@akwalodge.com',
            'password': 'testpassword123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Login successful')
        self.assertIn('refresh', response.data)
        self.assertIn(settings.SIMPLE_JWT["AUTH_COOKIE"], response.cookies)

    def test_access_cookie_authenticates_profile_request(self):
        self.client.post(reverse('login'), {
            'email': 'reception@akwalodge.com',
            'password': 'testpassword123',
        }, format='json')

        response = self.client.get(reverse('user-profile'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'reception@akwalodge.com')
        self.assertEqual(response.data['role'], 'staff')

    def test_login_wrong_password(self):
        response = self.client.post(reverse('login'), {
            'email': 'reception@akwalodge.com',
            'password': 'wrongpassword',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_inactive_account_cannot_login(self):
        self.user.is_active = False
        self.user.save()

        response = self.client.post(reverse('login'), {
            'email': 'reception@akwalodge.com',
            'password': 'testpassword123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_profile_requires_authentication(self):
        response = self.client.get(reverse('user-profile'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_clears_cookie(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(reverse('logout'), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.cookies[settings.SIMPLE_JWT["AUTH_COOKIE"]].value, '')
