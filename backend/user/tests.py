import uuid
from unittest import mock

import requests
from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import exceptions, status
from rest_framework.test import APIRequestFactory, APITestCase

from reviews.models import Review
from spots.models import Spot
from .authentication import SupabaseAuthentication
from .models import UserProfile

User = get_user_model()

SUPABASE_SETTINGS = {
    'SUPABASE_URL': 'https://project.supabase.co',
    'SUPABASE_ANON_KEY': 'anon-key',
}


def supabase_response(status_code=200, payload=None):
    response = mock.Mock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    return response


class UserProfileTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='user1', password='password123')

    def test_for_user_creates_profile_once(self):
        """Test that the profile is created on first access and reused afterwards."""
        profile = UserProfile.for_user(self.user)
        again = UserProfile.for_user(self.user)

        self.assertEqual(profile.id, again.id)
        self.assertEqual(UserProfile.objects.count(), 1)
        self.assertEqual(self.user.profile, profile)

    def test_str_falls_back_to_username(self):
        profile = UserProfile.for_user(self.user)
        self.assertEqual(str(profile), 'user1')

        profile.display_name = 'Kite Rider'
        self.assertEqual(str(profile), 'Kite Rider')


@override_settings(**SUPABASE_SETTINGS)
class SupabaseAuthenticationTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.auth = SupabaseAuthentication()
        self.supabase_id = uuid.uuid4()
        self.payload = {
            'id': str(self.supabase_id),
            'email': 'rider@example.com',
            'user_metadata': {'full_name': 'Rider One', 'avatar_url': 'https://cdn.example/avatar.png'},
        }

    def request_with(self, header=None):
        if header is None:
            return self.factory.get('/api/user/')
        return self.factory.get('/api/user/', HTTP_AUTHORIZATION=header)

    def test_missing_header_is_anonymous(self):
        with mock.patch('user.authentication.requests.get') as mock_get:
            self.assertIsNone(self.auth.authenticate(self.request_with()))
            mock_get.assert_not_called()

    @override_settings(SUPABASE_URL='', SUPABASE_ANON_KEY='')
    def test_disabled_without_configuration(self):
        with mock.patch('user.authentication.requests.get') as mock_get:
            self.assertIsNone(self.auth.authenticate(self.request_with('Bearer token')))
            mock_get.assert_not_called()

    @mock.patch('user.authentication.requests.get')
    def test_valid_token_creates_user_and_profile(self, mock_get):
        mock_get.return_value = supabase_response(payload=self.payload)

        user, token = self.auth.authenticate(self.request_with('Bearer good-token'))

        self.assertEqual(token, 'good-token')
        self.assertEqual(user.email, 'rider@example.com')
        self.assertFalse(user.has_usable_password())
        self.assertEqual(user.profile.supabase_id, self.supabase_id)
        self.assertEqual(user.profile.display_name, 'Rider One')
        self.assertEqual(user.profile.avatar_url, 'https://cdn.example/avatar.png')

        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], 'https://project.supabase.co/auth/v1/user')
        self.assertEqual(kwargs['headers']['Authorization'], 'Bearer good-token')
        self.assertEqual(kwargs['headers']['apikey'], 'anon-key')

    @mock.patch('user.authentication.requests.get')
    def test_known_account_reuses_profile(self, mock_get):
        mock_get.return_value = supabase_response(payload=self.payload)

        first_user, _ = self.auth.authenticate(self.request_with('Bearer good-token'))
        second_user, _ = self.auth.authenticate(self.request_with('Bearer good-token'))

        self.assertEqual(first_user.pk, second_user.pk)
        self.assertEqual(User.objects.count(), 1)
        self.assertEqual(UserProfile.objects.count(), 1)

    @mock.patch('user.authentication.requests.get')
    def test_rejected_token(self, mock_get):
        mock_get.return_value = supabase_response(status_code=401, payload={'msg': 'invalid JWT'})

        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self.request_with('Bearer bad-token'))
        self.assertFalse(User.objects.exists())

    @mock.patch('user.authentication.requests.get')
    def test_provider_unreachable(self, mock_get):
        mock_get.side_effect = requests.ConnectionError('connection refused')

        with self.assertLogs('user.authentication', level='ERROR'):
            with self.assertRaises(exceptions.AuthenticationFailed):
                self.auth.authenticate(self.request_with('Bearer good-token'))

    @mock.patch('user.authentication.requests.get')
    def test_non_json_user_payload(self, mock_get):
        response = supabase_response()
        response.json.side_effect = ValueError('Expecting value')
        mock_get.return_value = response

        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self.request_with('Bearer good-token'))
        self.assertFalse(User.objects.exists())

    @mock.patch('user.authentication.requests.get')
    def test_user_payload_not_an_object(self, mock_get):
        response = supabase_response()
        response.json.return_value = ['not', 'an', 'object']
        mock_get.return_value = response

        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self.request_with('Bearer good-token'))

    def test_malformed_header(self):
        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self.request_with('Bearer two parts'))


class UserAPITests(APITestCase):
    def setUp(self):
        self.user1 = User.objects.create_user(username='api_user1', password='password123', email='one@example.com')
        self.profile1 = UserProfile.objects.create(user=self.user1, display_name='One')

        self.user2 = User.objects.create_user(username='api_user2', password='password123', email='two@example.com')
        self.profile2 = UserProfile.objects.create(user=self.user2, bio='Foil rider', experience='advanced')

        self.client.force_authenticate(user=self.user1)

    def test_get_me(self):
        """Test retrieving the current user's profile via API."""
        response = self.client.get(reverse('me'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['username'], self.user1.username)
        self.assertEqual(response.data['email'], 'one@example.com')

    def test_patch_me(self):
        response = self.client.patch(reverse('me'), {'bio': 'Chasing thermals', 'experience': 'intermediate'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.profile1.refresh_from_db()
        self.assertEqual(self.profile1.bio, 'Chasing thermals')
        self.assertEqual(self.profile1.experience, 'intermediate')

    def test_patch_me_invalid_experience(self):
        response = self.client.patch(reverse('me'), {'experience': 'legend'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('experience', response.data['error'])

    def test_me_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('me'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_my_reviews(self):
        spot = Spot.objects.create(name='Test Bay', country='Spain', latitude=36.0, longitude=-5.6)
        Review.objects.create(user=self.profile1, spot=spot, content='Reliable wind all summer long')
        Review.objects.create(user=self.profile2, spot=spot, content='Crowded on weekends but fun')

        response = self.client.get(reverse('my_reviews'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['content'], 'Reliable wind all summer long')

    def test_public_profile(self):
        response = self.client.get(reverse('profile', args=[self.profile2.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['bio'], 'Foil rider')
        self.assertNotIn('email', response.data)

    def test_public_profile_not_found(self):
        response = self.client.get(reverse('profile', args=[uuid.uuid4()]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
