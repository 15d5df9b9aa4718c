"""
RecommendationScorer: rule based engine that ranks kitesurfing spots against
a rider's travel preferences for one calendar month.

Every rule is evaluated independently per spot and adds a fixed weight to an
additive match score. The weights, the inclusion threshold and the result
limit are part of the observable behaviour and are not configurable.
"""
import logging
from types import MappingProxyType
from typing import Callable, Iterable, List, Optional, Tuple

from spots.choices import WindQuality
from recommendations.dtos import (
    ALL_DIFFICULTIES, ANY_REGION, BudgetTier, ScoredSpot, SpotDTO,
    TemperatureBand, UserPreferences, WindConditionDTO,
)

logger = logging.getLogger(__name__)

WindConditionLookup = Callable[[int, int], Optional[WindConditionDTO]]
Contribution = Optional[Tuple[float, str]]


REGION_COUNTRIES = MappingProxyType({
    'caribbean': ('Dominican Republic', 'Cuba', 'Aruba', 'Jamaica', 'Puerto Rico'),
    'north-america': ('USA', 'Canada', 'Mexico'),
    'south-america': ('Brazil', 'Venezuela', 'Colombia', 'Peru', 'Chile', 'Argentina'),
    'europe': (
        'Spain', 'Portugal', 'France', 'Italy', 'Greece',
        'Croatia', 'Netherlands', 'Germany', 'United Kingdom', 'Ireland',
    ),
    'africa': ('South Africa', 'Morocco', 'Egypt', 'Tanzania', 'Kenya', 'Cape Verde'),
    'asia': ('Thailand', 'Philippines', 'Vietnam', 'Indonesia', 'Sri Lanka', 'Japan', 'South Korea'),
    'oceania': ('Australia', 'New Zealand', 'Fiji', 'French Polynesia'),
})


def temperature_band(air_temp: float) -> TemperatureBand:
    """Maps an air temperature in Celsius to exactly one band."""
    if air_temp < 20:
        return TemperatureBand.COLD
    if air_temp < 25:
        return TemperatureBand.MODERATE
    if air_temp < 30:
        return TemperatureBand.WARM
    return TemperatureBand.HOT


def budget_tier(total_cost_per_day: float) -> BudgetTier:
    """Maps a daily cost (school + accommodation) to exactly one tier."""
    if total_cost_per_day < 120:
        return BudgetTier.BUDGET
    if total_cost_per_day <= 200:
        return BudgetTier.MODERATE
    return BudgetTier.LUXURY


def _format_number(value: float) -> str:
    # 24.0 -> "24", 24.5 -> "24.5"
    return f"{value:g}"


class RecommendationScorer:
    """
    Algorithm Service: additive weighted rule evaluation.

    Pure and stateless; reads only its arguments and REGION_COUNTRIES, so one
    instance can be shared between requests.
    """

    WEIGHT_WIND_IN_RANGE = 0.25
    WEIGHT_WIND_NEAR_RANGE = 0.15
    WEIGHT_QUALITY_EXCELLENT = 0.15
    WEIGHT_QUALITY_GOOD = 0.10
    WEIGHT_TEMPERATURE = 0.10
    WEIGHT_DIFFICULTY = 0.10
    WEIGHT_BUDGET = 0.10
    WEIGHT_REGION = 0.10
    WEIGHT_KITE_SCHOOLS = 0.05
    WEIGHT_WAVES = 0.05
    WEIGHT_FOOD = 0.05
    WEIGHT_CULTURE = 0.05

    NEAR_RANGE_TOLERANCE = 5
    MIN_MATCH_SCORE = 0.30  # strict: a score of exactly 0.30 is dropped
    MAX_RESULTS = 8

    TEMPERATURE_REASONS = {
        TemperatureBand.COLD: "Cool temperatures ({temp}°C) match your preference",
        TemperatureBand.MODERATE: "Moderate temperatures ({temp}°C) match your preference",
        TemperatureBand.WARM: "Warm temperatures ({temp}°C) match your preference",
        TemperatureBand.HOT: "Hot temperatures ({temp}°C) match your preference",
    }

    BUDGET_REASONS = {
        BudgetTier.BUDGET: "Budget-friendly pricing fits your preference",
        BudgetTier.MODERATE: "Moderate pricing fits your preference",
        BudgetTier.LUXURY: "Luxury amenities and pricing match your preference",
    }

    def score(
        self,
        preferences: UserPreferences,
        spots: Iterable[SpotDTO],
        wind_condition_lookup: WindConditionLookup,
    ) -> List[ScoredSpot]:
        """
        Orchestrator method that ranks the catalog for the requested month.

        Steps:
        1. Skip spots without a wind condition for preferences.month
        2. Score every remaining spot rule by rule
        3. Keep spots scoring strictly above MIN_MATCH_SCORE
        4. Return the best MAX_RESULTS, highest score first

        Args:
            preferences: UserPreferences submitted by the rider
            spots: catalog spots, in catalog order
            wind_condition_lookup: (spot_id, month) -> WindConditionDTO or None

        Returns:
            List[ScoredSpot]: at most MAX_RESULTS entries; ties keep catalog order
        """
        results: List[ScoredSpot] = []
        evaluated = 0

        for spot in spots:
            condition = wind_condition_lookup(spot.id, preferences.month)
            if condition is None:
                continue

            evaluated += 1
            scored = self.score_spot(preferences, spot, condition)
            if scored.match_score > self.MIN_MATCH_SCORE:
                results.append(scored)

        # list.sort is stable, also with reverse=True
        results.sort(key=lambda scored: scored.match_score, reverse=True)

        logger.debug(
            f"Scored {evaluated} spots for month {preferences.month}, "
            f"{len(results)} above threshold"
        )
        return results[:self.MAX_RESULTS]

    def score_spot(self, preferences: UserPreferences, spot: SpotDTO, condition: WindConditionDTO) -> ScoredSpot:
        """
        Runs every rule in evaluation order and sums their contributions.

        Returns:
            ScoredSpot with the raw additive score and one reason per rule that fired
        """
        rules = (
            self._score_wind_speed,
            self._score_wind_quality,
            self._score_temperature,
            self._score_difficulty,
            self._score_budget,
            self._score_region,
            self._score_kite_schools,
            self._score_waves,
            self._score_food,
            self._score_culture,
        )

        match_score = 0.0
        reasons: List[str] = []
        for rule in rules:
            contribution = rule(preferences, spot, condition)
            if contribution is None:
                continue
            points, reason = contribution
            match_score += points
            reasons.append(reason)

        # weights have two decimals; 0.1 * 3 must compare equal to 0.30
        match_score = round(match_score, 2)
        return ScoredSpot(spot=spot, match_score=match_score, wind_condition=condition, reasons=reasons)

    # Rules

    def _score_wind_speed(self, preferences, spot, condition) -> Contribution:
        wind_speed = condition.wind_speed
        shown = _format_number(wind_speed)

        if preferences.wind_speed_min <= wind_speed <= preferences.wind_speed_max:
            return (
                self.WEIGHT_WIND_IN_RANGE,
                f"Wind speed ({shown} knots) is within your preferred range",
            )

        distance = min(
            abs(wind_speed - preferences.wind_speed_min),
            abs(wind_speed - preferences.wind_speed_max),
        )
        if distance <= self.NEAR_RANGE_TOLERANCE:
            return (
                self.WEIGHT_WIND_NEAR_RANGE,
                f"Wind speed ({shown} knots) is close to your preferred range",
            )
        return None

    def _score_wind_quality(self, preferences, spot, condition) -> Contribution:
        if condition.wind_quality == WindQuality.EXCELLENT:
            return self.WEIGHT_QUALITY_EXCELLENT, "Excellent wind quality for this month"
        if condition.wind_quality == WindQuality.GOOD:
            return self.WEIGHT_QUALITY_GOOD, "Good wind quality for this month"
        return None

    def _score_temperature(self, preferences, spot, condition) -> Contribution:
        if condition.air_temp is None:
            return None

        band = temperature_band(condition.air_temp)
        if band.value != preferences.temperature:
            return None
        reason = self.TEMPERATURE_REASONS[band].format(temp=_format_number(condition.air_temp))
        return self.WEIGHT_TEMPERATURE, reason

    def _score_difficulty(self, preferences, spot, condition) -> Contribution:
        if not spot.difficulty_level:
            return None

        wanted = preferences.difficulty
        if wanted == ALL_DIFFICULTIES or wanted.lower() in spot.difficulty_level.lower():
            return (
                self.WEIGHT_DIFFICULTY,
                f"Difficulty level ({spot.difficulty_level}) matches your skill level",
            )
        return None

    def _score_budget(self, preferences, spot, condition) -> Contribution:
        if spot.average_school_cost is None or spot.average_accommodation_cost is None:
            return None

        tier = budget_tier(spot.average_school_cost + spot.average_accommodation_cost)
        if tier.value != preferences.budget:
            return None
        return self.WEIGHT_BUDGET, self.BUDGET_REASONS[tier]

    def _score_region(self, preferences, spot, condition) -> Contribution:
        region = preferences.preferred_region
        if region == ANY_REGION:
            return None

        if spot.country in REGION_COUNTRIES.get(region, ()):
            return self.WEIGHT_REGION, f"Located in your preferred {region} region"
        return None

    def _score_kite_schools(self, preferences, spot, condition) -> Contribution:
        if not (preferences.has_kite_schools and spot.kite_schools):
            return None

        school_count = spot.number_of_schools or len(spot.kite_schools)
        return self.WEIGHT_KITE_SCHOOLS, f"Has {school_count} kite schools available"

    def _score_waves(self, preferences, spot, condition) -> Contribution:
        if not spot.wave_size:
            return None

        wave_size = spot.wave_size.lower()
        if preferences.prefer_waves:
            if 'strong' in wave_size or 'medium' in wave_size:
                return self.WEIGHT_WAVES, f"Offers {spot.wave_size} waves for riding"
        elif 'flat' in wave_size:
            return self.WEIGHT_WAVES, "Offers flat water conditions as preferred"
        return None

    def _score_food(self, preferences, spot, condition) -> Contribution:
        if preferences.food_options and spot.food_options:
            return self.WEIGHT_FOOD, "Variety of food options are available"
        return None

    def _score_culture(self, preferences, spot, condition) -> Contribution:
        if preferences.culture and spot.culture:
            return self.WEIGHT_CULTURE, "Rich cultural experiences and activities available"
        return None
