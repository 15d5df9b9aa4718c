"""
Tests for spot reviews and ratings.
"""
from unittest import mock

from django.contrib.auth import get_user_model
from django.db.models import QuerySet
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from reviews.models import Rating, Review
from reviews.services import RatingService
from spots.models import Spot
from user.models import UserProfile

User = get_user_model()

SCORES = {
    'wind_reliability': 5,
    'beginner_friendly': 3,
    'scenery': 4,
    'uncrowded': 2,
    'local_vibe': 4,
    'overall': 4,
}


class RatingServiceTestCase(TestCase):
    """Test cases for RatingService"""

    def setUp(self):
        self.spot = Spot.objects.create(name='Test Bay', country='Spain', latitude=36.0, longitude=-5.6)
        self.user = User.objects.create_user(username='rider', password='testpass123')
        self.profile = UserProfile.objects.create(user=self.user)

    def test_summarize_without_ratings(self):
        summary = RatingService.summarize(self.spot)

        self.assertEqual(summary['average_rating'], 0)
        self.assertEqual(summary['total_ratings'], 0)
        self.assertEqual(set(summary['rating_breakdown']), set(Rating.CRITERIA))
        self.assertTrue(all(value == 0 for value in summary['rating_breakdown'].values()))

    def test_summarize_averages_each_criterion(self):
        other = UserProfile.objects.create(user=User.objects.create_user(username='other', password='testpass123'))
        RatingService.upsert_rating(self.profile, self.spot, SCORES)
        RatingService.upsert_rating(other, self.spot, dict(SCORES, overall=3, uncrowded=3))

        summary = RatingService.summarize(self.spot)

        self.assertEqual(summary['total_ratings'], 2)
        self.assertAlmostEqual(summary['average_rating'], 3.5)
        self.assertAlmostEqual(summary['rating_breakdown']['uncrowded'], 2.5)
        self.assertAlmostEqual(summary['rating_breakdown']['wind_reliability'], 5)

    def test_upsert_replaces_previous_rating(self):
        first = RatingService.upsert_rating(self.profile, self.spot, SCORES)
        second = RatingService.upsert_rating(self.profile, self.spot, dict(SCORES, overall=1))

        self.assertEqual(first.id, second.id)
        self.assertEqual(Rating.objects.count(), 1)
        self.assertEqual(Rating.objects.get().overall, 1)


class ReviewAPITestCase(APITestCase):
    """Test cases for /api/reviews/"""

    def setUp(self):
        self.spot = Spot.objects.create(name='Test Bay', country='Spain', latitude=36.0, longitude=-5.6)
        self.other_spot = Spot.objects.create(name='Other Bay', country='Brazil', latitude=-3.0, longitude=-39.0)

        self.user = User.objects.create_user(username='author', password='testpass123')
        self.profile = UserProfile.objects.create(user=self.user, display_name='Author')
        self.stranger = User.objects.create_user(username='stranger', password='testpass123')

        self.list_url = reverse('reviews:review-list')

    def test_list_filtered_by_spot(self):
        Review.objects.create(user=self.profile, spot=self.spot, content='Great wind in the afternoon')
        Review.objects.create(user=self.profile, spot=self.other_spot, content='Warm water and flat lagoon')

        response = self.client.get(self.list_url, {'spot_id': self.spot.id})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['spot_name'], 'Test Bay')
        self.assertEqual(response.data[0]['user']['display_name'], 'Author')

    def test_create_review_as_current_user(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(self.list_url, {
            'spot': self.spot.id,
            'content': 'Consistent thermal wind every day',
            'visit_date': '2024-07-15',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        review = Review.objects.get()
        self.assertEqual(review.user, self.profile)
        self.assertEqual(str(review.visit_date), '2024-07-15')

    def test_create_requires_authentication(self):
        response = self.client.post(self.list_url, {
            'spot': self.spot.id,
            'content': 'Consistent thermal wind every day',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_short_review_rejected(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(self.list_url, {'spot': self.spot.id, 'content': 'Too short'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('content', response.data['error'])

    def test_duplicate_review_rejected(self):
        Review.objects.create(user=self.profile, spot=self.spot, content='Great wind in the afternoon')
        self.client.force_authenticate(user=self.user)

        response = self.client.post(self.list_url, {
            'spot': self.spot.id,
            'content': 'Second opinion on the same spot',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'You have already reviewed this spot')
        self.assertEqual(Review.objects.count(), 1)

    def test_concurrent_duplicate_review_rejected(self):
        """A duplicate that slips past the existence check hits the unique constraint"""
        Review.objects.create(user=self.profile, spot=self.spot, content='Great wind in the afternoon')
        self.client.force_authenticate(user=self.user)

        with mock.patch.object(QuerySet, 'exists', return_value=False):
            response = self.client.post(self.list_url, {
                'spot': self.spot.id,
                'content': 'Second opinion on the same spot',
            }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'You have already reviewed this spot')
        self.assertEqual(Review.objects.count(), 1)

    def test_only_author_can_edit_or_delete(self):
        review = Review.objects.create(user=self.profile, spot=self.spot, content='Great wind in the afternoon')
        detail_url = reverse('reviews:review-detail', args=[review.id])

        self.client.force_authenticate(user=self.stranger)
        response = self.client.patch(detail_url, {'content': 'Rewritten by a stranger'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.delete(detail_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.user)
        response = self.client.patch(detail_url, {'content': 'Even better in September'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        review.refresh_from_db()
        self.assertEqual(review.content, 'Even better in September')

        response = self.client.delete(detail_url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Review.objects.exists())


class RatingAPITestCase(APITestCase):
    """Test cases for /api/ratings/"""

    def setUp(self):
        self.spot = Spot.objects.create(name='Test Bay', country='Spain', latitude=36.0, longitude=-5.6)
        self.user = User.objects.create_user(username='rider', password='testpass123')
        self.url = reverse('reviews:rating-list')

    def test_create_then_update_rating(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(self.url, dict(SCORES, spot=self.spot.id), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.post(self.url, dict(SCORES, spot=self.spot.id, overall=2), format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['overall'], 2)

        self.assertEqual(Rating.objects.count(), 1)
        self.assertEqual(Rating.objects.get().user, UserProfile.objects.get(user=self.user))

    def test_rating_out_of_range_rejected(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(self.url, dict(SCORES, spot=self.spot.id, scenery=6), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('scenery', response.data['error'])

    def test_rating_requires_authentication(self):
        response = self.client.post(self.url, dict(SCORES, spot=self.spot.id), format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
