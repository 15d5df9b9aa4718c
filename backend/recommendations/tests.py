"""
Tests for the recommendations module.
"""
from dataclasses import replace

from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from recommendations.dtos import (
    BudgetTier, SpotDTO, TemperatureBand, UserPreferences, WindConditionDTO,
)
from recommendations.scoring_service import (
    REGION_COUNTRIES, RecommendationScorer, budget_tier, temperature_band,
)
from recommendations.serializers import UserPreferencesSerializer


def make_preferences(**overrides):
    values = dict(
        wind_speed_min=15,
        wind_speed_max=25,
        temperature='warm',
        difficulty='all',
        budget='moderate',
        preferred_region='any',
        has_kite_schools=False,
        prefer_waves=False,
        food_options=False,
        culture=False,
        month=7,
    )
    values.update(overrides)
    return UserPreferences(**values)


def make_spot(spot_id, **overrides):
    values = dict(id=spot_id, name=f'Spot {spot_id}', country='Nowhere')
    values.update(overrides)
    return SpotDTO(**values)


def make_lookup(conditions):
    """(spot_id, month) lookup over a list of WindConditionDTO"""
    table = {(condition.spot_id, condition.month): condition for condition in conditions}
    return lambda spot_id, month: table.get((spot_id, month))


class BandingTestCase(SimpleTestCase):
    """Test cases for temperature and budget banding"""

    def test_temperature_band_boundaries(self):
        self.assertEqual(temperature_band(19.9), TemperatureBand.COLD)
        self.assertEqual(temperature_band(20), TemperatureBand.MODERATE)
        self.assertEqual(temperature_band(24.9), TemperatureBand.MODERATE)
        self.assertEqual(temperature_band(25.0), TemperatureBand.WARM)
        self.assertEqual(temperature_band(29.9), TemperatureBand.WARM)
        self.assertEqual(temperature_band(30), TemperatureBand.HOT)

    def test_budget_tier_boundaries(self):
        self.assertEqual(budget_tier(119.9), BudgetTier.BUDGET)
        self.assertEqual(budget_tier(120), BudgetTier.MODERATE)
        self.assertEqual(budget_tier(200), BudgetTier.MODERATE)
        self.assertEqual(budget_tier(200.1), BudgetTier.LUXURY)

    def test_region_table_is_read_only(self):
        with self.assertRaises(TypeError):
            REGION_COUNTRIES['antarctica'] = ('Antarctica',)


class RecommendationScorerTestCase(SimpleTestCase):
    """Test cases for RecommendationScorer"""

    def setUp(self):
        self.scorer = RecommendationScorer()

    def test_scenario_full_match(self):
        """Warm July spot with schools scores 0.75 with six reasons"""
        spot = make_spot(
            1,
            difficulty_level='All levels',
            average_school_cost=70,
            average_accommodation_cost=90,
            kite_schools=('Pro Center|https://maps.example/1',),
        )
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=24, wind_quality='Excellent', air_temp=27)
        preferences = make_preferences(has_kite_schools=True)

        results = self.scorer.score(preferences, [spot], make_lookup([condition]))

        self.assertEqual(len(results), 1)
        self.assertAlmostEqual(results[0].match_score, 0.75)
        self.assertEqual(results[0].reasons, [
            "Wind speed (24 knots) is within your preferred range",
            "Excellent wind quality for this month",
            "Warm temperatures (27°C) match your preference",
            "Difficulty level (All levels) matches your skill level",
            "Moderate pricing fits your preference",
            "Has 1 kite schools available",
        ])
        self.assertIs(results[0].wind_condition, condition)
        self.assertIs(results[0].spot, spot)

    def test_spot_without_condition_for_month_is_excluded(self):
        """A perfect spot with no record for the month never appears"""
        perfect = make_spot(
            1,
            country='Spain',
            difficulty_level='Beginner',
            average_school_cost=70,
            average_accommodation_cost=90,
            kite_schools=('School',),
            wave_size='Medium',
            food_options=('Tapas',),
            culture='Flamenco',
        )
        other = make_spot(2, difficulty_level='Beginner')
        conditions = [
            WindConditionDTO(spot_id=1, month=8, wind_speed=20, wind_quality='Excellent', air_temp=27),
            WindConditionDTO(spot_id=2, month=7, wind_speed=20, wind_quality='Excellent'),
        ]
        preferences = make_preferences(
            preferred_region='europe', has_kite_schools=True, prefer_waves=True,
            food_options=True, culture=True,
        )

        results = self.scorer.score(preferences, [perfect, other], make_lookup(conditions))

        self.assertEqual([scored.spot.id for scored in results], [2])

    def test_score_of_exactly_threshold_is_dropped(self):
        """0.15 (near range) + 0.15 (excellent) is not strictly above 0.30"""
        spot = make_spot(1)
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=28, wind_quality='Excellent')

        results = self.scorer.score(make_preferences(), [spot], make_lookup([condition]))

        self.assertEqual(results, [])

    def test_three_tenths_sum_is_dropped(self):
        """Good wind + temperature + difficulty add up to exactly 0.30"""
        spot = make_spot(1, difficulty_level='Beginner')
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Good', air_temp=27)

        scored = self.scorer.score_spot(make_preferences(), spot, condition)
        results = self.scorer.score(make_preferences(), [spot], make_lookup([condition]))

        self.assertEqual(len(scored.reasons), 3)
        self.assertEqual(scored.match_score, 0.3)
        self.assertEqual(results, [])

    def test_score_just_above_threshold_is_kept(self):
        spot = make_spot(1)
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=20, wind_quality='Good')

        results = self.scorer.score(make_preferences(), [spot], make_lookup([condition]))

        self.assertEqual(len(results), 1)
        self.assertAlmostEqual(results[0].match_score, 0.35)

    def test_wind_speed_boundaries(self):
        """Bounds are inclusive, 5 knots outside is close, 6 is nothing"""
        preferences = make_preferences()
        spot = make_spot(1)

        def wind_reason(speed):
            condition = WindConditionDTO(spot_id=1, month=7, wind_speed=speed, wind_quality='Poor')
            return self.scorer.score_spot(preferences, spot, condition)

        for speed in (15, 25):
            scored = wind_reason(speed)
            self.assertAlmostEqual(scored.match_score, 0.25)
            self.assertIn("within your preferred range", scored.reasons[0])

        for speed in (10, 30):
            scored = wind_reason(speed)
            self.assertAlmostEqual(scored.match_score, 0.15)
            self.assertIn("close to your preferred range", scored.reasons[0])

        for speed in (9, 31):
            scored = wind_reason(speed)
            self.assertEqual(scored.match_score, 0)
            self.assertEqual(scored.reasons, [])

    def test_fractional_wind_speed_in_reason(self):
        scored = self.scorer.score_spot(
            make_preferences(),
            make_spot(1),
            WindConditionDTO(spot_id=1, month=7, wind_speed=18.5, wind_quality='Moderate'),
        )
        self.assertEqual(scored.reasons, ["Wind speed (18.5 knots) is within your preferred range"])

    def test_temperature_matches_single_band(self):
        spot = make_spot(1)
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Poor', air_temp=24.9)

        moderate = self.scorer.score_spot(make_preferences(temperature='moderate'), spot, condition)
        warm = self.scorer.score_spot(make_preferences(temperature='warm'), spot, condition)

        self.assertEqual(moderate.reasons, ["Moderate temperatures (24.9°C) match your preference"])
        self.assertEqual(warm.reasons, [])

        condition = replace(condition, air_temp=25.0)
        warm = self.scorer.score_spot(make_preferences(temperature='warm'), spot, condition)
        self.assertEqual(warm.reasons, ["Warm temperatures (25°C) match your preference"])

    def test_missing_optional_fields_contribute_nothing(self):
        """Sparse spots never raise, rules are skipped instead"""
        spot = make_spot(1)
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Poor')
        preferences = make_preferences(
            preferred_region='europe', has_kite_schools=True, prefer_waves=True,
            food_options=True, culture=True,
        )

        scored = self.scorer.score_spot(preferences, spot, condition)

        self.assertEqual(scored.match_score, 0)
        self.assertEqual(scored.reasons, [])

    def test_unknown_preference_values_do_not_match(self):
        spot = make_spot(1, country='Spain', average_school_cost=70, average_accommodation_cost=90)
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Poor', air_temp=27)
        preferences = make_preferences(temperature='tropical', budget='free', preferred_region='mars')

        scored = self.scorer.score_spot(preferences, spot, condition)

        self.assertEqual(scored.reasons, [])

    def test_difficulty_substring_match(self):
        spot = make_spot(1, difficulty_level='Beginner to Intermediate')
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Poor')

        matched = self.scorer.score_spot(make_preferences(difficulty='intermediate'), spot, condition)
        missed = self.scorer.score_spot(make_preferences(difficulty='advanced'), spot, condition)

        self.assertEqual(matched.reasons, ["Difficulty level (Beginner to Intermediate) matches your skill level"])
        self.assertEqual(missed.reasons, [])

    def test_budget_tiers(self):
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Poor')
        cheap = make_spot(1, average_school_cost=50, average_accommodation_cost=40)
        expensive = make_spot(1, average_school_cost=150, average_accommodation_cost=100)
        half_known = make_spot(1, average_school_cost=50)

        self.assertEqual(
            self.scorer.score_spot(make_preferences(budget='budget'), cheap, condition).reasons,
            ["Budget-friendly pricing fits your preference"],
        )
        self.assertEqual(
            self.scorer.score_spot(make_preferences(budget='luxury'), expensive, condition).reasons,
            ["Luxury amenities and pricing match your preference"],
        )
        self.assertEqual(
            self.scorer.score_spot(make_preferences(budget='budget'), half_known, condition).reasons,
            [],
        )

    def test_region_match(self):
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Poor')
        spanish = make_spot(1, country='Spain')
        brazilian = make_spot(1, country='Brazil')
        preferences = make_preferences(preferred_region='europe')

        self.assertEqual(
            self.scorer.score_spot(preferences, spanish, condition).reasons,
            ["Located in your preferred europe region"],
        )
        self.assertEqual(self.scorer.score_spot(preferences, brazilian, condition).reasons, [])
        self.assertEqual(
            self.scorer.score_spot(make_preferences(preferred_region='any'), spanish, condition).reasons,
            [],
        )

    def test_kite_school_count_prefers_explicit_number(self):
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Poor')
        preferences = make_preferences(has_kite_schools=True)
        counted = make_spot(1, kite_schools=('A', 'B'), number_of_schools=45)
        uncounted = make_spot(1, kite_schools=('A', 'B'))
        no_schools = make_spot(1, number_of_schools=3)

        self.assertEqual(
            self.scorer.score_spot(preferences, counted, condition).reasons,
            ["Has 45 kite schools available"],
        )
        self.assertEqual(
            self.scorer.score_spot(preferences, uncounted, condition).reasons,
            ["Has 2 kite schools available"],
        )
        self.assertEqual(self.scorer.score_spot(preferences, no_schools, condition).reasons, [])

    def test_wave_preference_branches(self):
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Poor')
        medium = make_spot(1, wave_size='Small to Medium')
        strong = make_spot(1, wave_size='Strong')
        flat = make_spot(1, wave_size='Flat to Small on Bay')

        wave_riders = make_preferences(prefer_waves=True)
        flat_riders = make_preferences(prefer_waves=False)

        self.assertEqual(
            self.scorer.score_spot(wave_riders, medium, condition).reasons,
            ["Offers Small to Medium waves for riding"],
        )
        self.assertEqual(
            self.scorer.score_spot(wave_riders, strong, condition).reasons,
            ["Offers Strong waves for riding"],
        )
        self.assertEqual(self.scorer.score_spot(wave_riders, flat, condition).reasons, [])
        self.assertEqual(
            self.scorer.score_spot(flat_riders, flat, condition).reasons,
            ["Offers flat water conditions as preferred"],
        )
        self.assertEqual(self.scorer.score_spot(flat_riders, medium, condition).reasons, [])

    def test_food_and_culture_bonuses(self):
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=0, wind_quality='Poor')
        spot = make_spot(1, food_options=('Tapas',), culture='Moorish heritage')
        preferences = make_preferences(food_options=True, culture=True)

        scored = self.scorer.score_spot(preferences, spot, condition)

        self.assertAlmostEqual(scored.match_score, 0.10)
        self.assertEqual(scored.reasons, [
            "Variety of food options are available",
            "Rich cultural experiences and activities available",
        ])

    def test_results_sorted_and_limited(self):
        """Output is non-increasing and holds at most eight spots"""
        spots = []
        conditions = []
        for spot_id in range(1, 11):
            spots.append(make_spot(spot_id, difficulty_level='Beginner' if spot_id % 2 else None))
            conditions.append(WindConditionDTO(
                spot_id=spot_id, month=7, wind_speed=20,
                wind_quality='Excellent' if spot_id > 5 else 'Good',
            ))

        results = self.scorer.score(make_preferences(), spots, make_lookup(conditions))

        self.assertEqual(len(results), RecommendationScorer.MAX_RESULTS)
        scores = [scored.match_score for scored in results]
        self.assertEqual(scores, sorted(scores, reverse=True))
        for scored in results:
            self.assertGreater(scored.match_score, RecommendationScorer.MIN_MATCH_SCORE)

    def test_ties_keep_catalog_order(self):
        """Two spots at 0.45 come back in catalog order, every time"""
        first = make_spot(1, difficulty_level='Beginner')
        second = make_spot(2, difficulty_level='Beginner')
        best = make_spot(3, difficulty_level='Beginner')
        conditions = [
            WindConditionDTO(spot_id=1, month=7, wind_speed=20, wind_quality='Good'),
            WindConditionDTO(spot_id=2, month=7, wind_speed=20, wind_quality='Good'),
            WindConditionDTO(spot_id=3, month=7, wind_speed=20, wind_quality='Excellent'),
        ]
        lookup = make_lookup(conditions)

        runs = [self.scorer.score(make_preferences(), [first, second, best], lookup) for _ in range(3)]

        for results in runs:
            self.assertEqual([scored.spot.id for scored in results], [3, 1, 2])
            self.assertAlmostEqual(results[1].match_score, 0.45)
            self.assertEqual(results[1].match_score, results[2].match_score)
        self.assertEqual(runs[0], runs[1])
        self.assertEqual(runs[1], runs[2])

    def test_month_without_records_returns_empty(self):
        spot = make_spot(1)
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=20, wind_quality='Excellent')

        results = self.scorer.score(make_preferences(month=13), [spot], make_lookup([condition]))

        self.assertEqual(results, [])

    def test_inverted_range_only_loses_wind_credit(self):
        spot = make_spot(1)
        condition = WindConditionDTO(spot_id=1, month=7, wind_speed=20, wind_quality='Excellent')
        preferences = make_preferences(wind_speed_min=30, wind_speed_max=10)

        scored = self.scorer.score_spot(preferences, spot, condition)

        self.assertAlmostEqual(scored.match_score, 0.15)
        self.assertEqual(scored.reasons, ["Excellent wind quality for this month"])


class UserPreferencesSerializerTestCase(SimpleTestCase):
    """Test cases for the preference payload validation"""

    def test_defaults_are_filled(self):
        serializer = UserPreferencesSerializer(data={
            'wind_speed_min': 12,
            'wind_speed_max': 22,
            'temperature': 'hot',
            'budget': 'budget',
            'month': 1,
        })
        self.assertTrue(serializer.is_valid(), serializer.errors)

        preferences = serializer.to_preferences()
        self.assertEqual(preferences.difficulty, 'all')
        self.assertEqual(preferences.preferred_region, 'any')
        self.assertFalse(preferences.has_kite_schools)
        self.assertEqual(preferences.month, 1)

    def test_rejects_out_of_domain_values(self):
        base = {
            'wind_speed_min': 12,
            'wind_speed_max': 22,
            'temperature': 'hot',
            'budget': 'budget',
            'month': 1,
        }
        invalid_payloads = [
            {'month': 13},
            {'month': 0},
            {'temperature': 'tropical'},
            {'budget': 'free'},
            {'preferred_region': 'mars'},
            {'wind_speed_min': -1},
            {'wind_speed_min': 30},
        ]
        for overrides in invalid_payloads:
            serializer = UserPreferencesSerializer(data={**base, **overrides})
            self.assertFalse(serializer.is_valid(), overrides)


class GenerateRecommendationsAPITestCase(APITestCase):
    """Test cases for POST /api/recommendations/generate/"""

    fixtures = ['spots.json']

    def setUp(self):
        self.url = reverse('recommendations:generate_recommendations')
        self.payload = {
            'wind_speed_min': 15,
            'wind_speed_max': 25,
            'temperature': 'warm',
            'difficulty': 'all',
            'budget': 'moderate',
            'preferred_region': 'europe',
            'has_kite_schools': True,
            'prefer_waves': True,
            'food_options': False,
            'culture': False,
            'month': 7,
        }

    def test_generate_ranks_catalog(self):
        response = self.client.post(self.url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        recommendations = response.data['recommendations']
        self.assertEqual([entry['name'] for entry in recommendations], ['Tarifa, Spain', 'Cabarete, Dominican Republic'])

        tarifa = recommendations[0]
        self.assertAlmostEqual(tarifa['match_score'], 0.85)
        self.assertEqual(len(tarifa['reasons']), 8)
        self.assertEqual(tarifa['wind_condition']['month'], 7)
        self.assertEqual(tarifa['wind_condition']['wind_quality'], 'Good')
        self.assertAlmostEqual(recommendations[1]['match_score'], 0.50)

    def test_generate_returns_empty_list_when_nothing_matches(self):
        payload = dict(self.payload, wind_speed_min=40, wind_speed_max=50,
                       temperature='cold', budget='luxury', difficulty='expert',
                       has_kite_schools=False, prefer_waves=False)
        response = self.client.post(self.url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['recommendations'], [])

    def test_generate_rejects_invalid_payload(self):
        response = self.client.post(self.url, dict(self.payload, month=13), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('month', response.data['error'])

    def test_generate_rejects_inverted_wind_range(self):
        response = self.client.post(self.url, dict(self.payload, wind_speed_min=30), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)
