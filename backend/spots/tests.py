from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from reviews.models import Rating, Review
from user.models import UserProfile
from .choices import WindQuality
from .models import Spot, WindCondition
from .services import SpotCatalogService

User = get_user_model()


class SpotModelTests(TestCase):
    def setUp(self):
        self.spot = Spot.objects.create(
            name="Test Lagoon, Nowhere",
            country="Nowhere",
            latitude=20.0,
            longitude=10.0,
            kite_schools=[
                "Lagoon Kite Center|https://maps.example/lagoon|4.7|128",
                "Beach Shack",
            ],
        )

    def test_create_spot(self):
        """Test that a spot can be created successfully."""
        self.assertEqual(Spot.objects.count(), 1)
        self.assertEqual(self.spot.tags, [])

    def test_invalid_coordinates(self):
        """Test that invalid coordinates raise a ValueError during save."""
        spot = Spot(name="Bad Location", country="Nowhere", latitude=100.0, longitude=200.0)
        with self.assertRaises(ValueError):
            spot.save()

    def test_kite_school_entries(self):
        entries = self.spot.get_kite_school_entries()

        self.assertEqual(entries[0], {
            'name': "Lagoon Kite Center",
            'maps_url': "https://maps.example/lagoon",
            'rating': 4.7,
            'review_count': 128,
        })
        self.assertEqual(entries[1]['name'], "Beach Shack")
        self.assertIsNone(entries[1]['maps_url'])
        self.assertIsNone(entries[1]['rating'])

    def test_kite_school_entries_parse_fields_independently(self):
        self.spot.kite_schools = ["Bad Rating School|https://maps.example/bad|great|42"]

        entry = self.spot.get_kite_school_entries()[0]

        self.assertIsNone(entry['rating'])
        self.assertEqual(entry['review_count'], 42)


class SpotCatalogServiceTests(TestCase):
    fixtures = ['spots.json']

    def test_parse_month(self):
        self.assertEqual(SpotCatalogService.parse_month(7), 7)
        self.assertEqual(SpotCatalogService.parse_month("12"), 12)
        self.assertEqual(SpotCatalogService.parse_month("July"), 7)
        self.assertEqual(SpotCatalogService.parse_month(" march "), 3)

    def test_parse_month_errors(self):
        with self.assertRaisesMessage(ValueError, "Invalid month name"):
            SpotCatalogService.parse_month("Smarch")
        with self.assertRaisesMessage(ValueError, "Month must be between 1 and 12"):
            SpotCatalogService.parse_month("13")
        with self.assertRaisesMessage(ValueError, "Month must be between 1 and 12"):
            SpotCatalogService.parse_month("0")

    def test_spots_by_month_only_good_or_excellent(self):
        july = list(SpotCatalogService.get_spots_by_month(7))
        january = list(SpotCatalogService.get_spots_by_month(1))

        self.assertEqual([spot.name for spot in july], ["Tarifa, Spain"])
        self.assertEqual([spot.name for spot in january], ["Cabarete, Dominican Republic"])

    def test_spots_by_month_without_duplicates(self):
        WindCondition.objects.filter(spot_id=2, month=7).update(wind_quality=WindQuality.EXCELLENT)

        july = list(SpotCatalogService.get_spots_by_month(7))

        self.assertEqual([spot.id for spot in july], [1, 2])

    def test_search_spots(self):
        self.assertEqual(
            [spot.name for spot in SpotCatalogService.search_spots("spain")],
            ["Tarifa, Spain"],
        )
        self.assertEqual(
            [spot.name for spot in SpotCatalogService.search_spots("CABA")],
            ["Cabarete, Dominican Republic"],
        )
        self.assertFalse(SpotCatalogService.search_spots("atlantis").exists())

    def test_load_recommendation_catalog(self):
        spots, lookup = SpotCatalogService.load_recommendation_catalog(7)

        self.assertEqual([spot.id for spot in spots], [1, 2])
        self.assertEqual(spots[0].kite_schools[0].split('|')[0], "Rebels Tarifa Kiteschool")
        self.assertEqual(lookup(1, 7).wind_speed, 23)
        self.assertEqual(lookup(2, 7).wind_quality, "Moderate")
        self.assertIsNone(lookup(1, 8))

    def test_spot_details_without_ratings(self):
        details = SpotCatalogService.get_spot_details(Spot.objects.get(pk=1))

        self.assertEqual(details['average_rating'], 0)
        self.assertEqual(details['total_ratings'], 0)
        self.assertEqual(details['wind_conditions'].count(), 12)
        self.assertEqual(list(details['reviews']), [])


class SpotAPITests(APITestCase):
    fixtures = ['spots.json']

    def setUp(self):
        self.user = User.objects.create_user(username='rider', password='password123')
        self.profile = UserProfile.objects.create(user=self.user, display_name="Rider")
        self.tarifa = Spot.objects.get(pk=1)

    def test_list_spots(self):
        response = self.client.get(reverse('spots:spot-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry['name'] for entry in response.data], ["Tarifa, Spain", "Cabarete, Dominican Republic"])

    def test_retrieve_spot_with_wind_conditions(self):
        response = self.client.get(reverse('spots:spot-detail', args=[1]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['spot']['name'], "Tarifa, Spain")
        self.assertEqual([entry['month'] for entry in response.data['wind_conditions']], list(range(1, 13)))
        self.assertEqual(response.data['spot']['kite_school_entries'][0]['name'], "Rebels Tarifa Kiteschool")

    def test_retrieve_missing_spot(self):
        response = self.client.get(reverse('spots:spot-detail', args=[999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_spots_by_month_name(self):
        response = self.client.get(reverse('spots:spot-by-month', kwargs={'month': 'july'}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry['name'] for entry in response.data], ["Tarifa, Spain"])

    def test_spots_by_invalid_month(self):
        response = self.client.get(reverse('spots:spot-by-month', kwargs={'month': 'smarch'}))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], "Invalid month name")

        response = self.client.get(reverse('spots:spot-by-month', kwargs={'month': '13'}))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], "Month must be between 1 and 12")

    def test_search(self):
        url = reverse('spots:spot-search')

        response = self.client.get(url, {'q': 'dominican'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry['id'] for entry in response.data], [2])

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], "Search query is required")

    def test_wind_conditions(self):
        response = self.client.get(reverse('spots:spot-wind-conditions', args=[2]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 12)
        self.assertEqual(response.data[0]['wind_quality'], "Excellent")

    def test_details_with_reviews_and_ratings(self):
        other = User.objects.create_user(username='other', password='password123')
        other_profile = UserProfile.objects.create(user=other)
        Review.objects.create(user=self.profile, spot=self.tarifa, content="Windy every single day in July")
        Rating.objects.create(
            user=self.profile, spot=self.tarifa, wind_reliability=5, beginner_friendly=4,
            scenery=5, uncrowded=2, local_vibe=4, overall=5,
        )
        Rating.objects.create(
            user=other_profile, spot=self.tarifa, wind_reliability=4, beginner_friendly=3,
            scenery=4, uncrowded=1, local_vibe=5, overall=4,
        )

        response = self.client.get(reverse('spots:spot-details', args=[1]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_ratings'], 2)
        self.assertAlmostEqual(response.data['average_rating'], 4.5)
        self.assertAlmostEqual(response.data['rating_breakdown']['uncrowded'], 1.5)
        self.assertEqual(len(response.data['reviews']), 1)
        self.assertEqual(response.data['reviews'][0]['user']['display_name'], "Rider")

    def test_user_rating(self):
        url = reverse('spots:spot-user-rating', args=[1])

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(user=self.user)
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], "No rating found for this spot")

        Rating.objects.create(
            user=self.profile, spot=self.tarifa, wind_reliability=5, beginner_friendly=4,
            scenery=5, uncrowded=2, local_vibe=4, overall=5,
        )
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['overall'], 5)

    def test_user_rating_does_not_create_profile(self):
        newcomer = User.objects.create_user(username='newcomer', password='password123')
        self.client.force_authenticate(user=newcomer)

        response = self.client.get(reverse('spots:spot-user-rating', args=[1]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(UserProfile.objects.filter(user=newcomer).exists())

    def test_writes_require_staff(self):
        payload = {'name': "New Spot", 'country': "Spain", 'latitude': 36.0, 'longitude': -5.0}

        self.client.force_authenticate(user=self.user)
        response = self.client.post(reverse('spots:spot-list'), payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        admin = User.objects.create_user(username='admin', password='password123', is_staff=True)
        self.client.force_authenticate(user=admin)
        response = self.client.post(reverse('spots:spot-list'), payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.post(reverse('spots:spot-list'), dict(payload, latitude=95), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class MapboxTokenTests(APITestCase):
    @override_settings(MAPBOX_ACCESS_TOKEN='pk.test-token')
    def test_token_configured(self):
        response = self.client.get(reverse('spots:mapbox_token'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['token'], 'pk.test-token')

    @override_settings(MAPBOX_ACCESS_TOKEN='')
    def test_token_missing(self):
        response = self.client.get(reverse('spots:mapbox_token'))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Mapbox token not configured')
