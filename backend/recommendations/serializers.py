"""
Serializers for the recommendations module.
"""
from rest_framework import serializers
from recommendations.dtos import (
    ALL_DIFFICULTIES, ANY_REGION, BudgetTier, TemperatureBand, UserPreferences,
)
from recommendations.scoring_service import REGION_COUNTRIES


class UserPreferencesSerializer(serializers.Serializer):
    """Validates the preference payload before it reaches the scorer"""
    wind_speed_min = serializers.FloatField(min_value=0)
    wind_speed_max = serializers.FloatField(min_value=0)
    temperature = serializers.ChoiceField(choices=[band.value for band in TemperatureBand])
    difficulty = serializers.CharField(required=False, default=ALL_DIFFICULTIES, max_length=50)
    budget = serializers.ChoiceField(choices=[tier.value for tier in BudgetTier])
    preferred_region = serializers.ChoiceField(
        choices=[ANY_REGION] + list(REGION_COUNTRIES.keys()),
        required=False,
        default=ANY_REGION,
    )
    has_kite_schools = serializers.BooleanField(required=False, default=False)
    prefer_waves = serializers.BooleanField(required=False, default=False)
    food_options = serializers.BooleanField(required=False, default=False)
    culture = serializers.BooleanField(required=False, default=False)
    month = serializers.IntegerField(min_value=1, max_value=12)

    def validate(self, attrs):
        if attrs['wind_speed_min'] > attrs['wind_speed_max']:
            raise serializers.ValidationError("wind_speed_min must not exceed wind_speed_max")
        return attrs

    def to_preferences(self) -> UserPreferences:
        return UserPreferences(**self.validated_data)


class WindConditionDTOSerializer(serializers.Serializer):
    """Serializer for WindConditionDTO"""
    month = serializers.IntegerField()
    wind_speed = serializers.FloatField()
    wind_quality = serializers.CharField()
    air_temp = serializers.FloatField(allow_null=True)
    water_temp = serializers.FloatField(allow_null=True)
    seasonal_notes = serializers.CharField(allow_null=True)


class ScoredSpotSerializer(serializers.Serializer):
    """Serializer for ScoredSpot DTO: spot fields plus score, reasons and wind"""
    id = serializers.IntegerField(source='spot.id')
    name = serializers.CharField(source='spot.name')
    country = serializers.CharField(source='spot.country')
    latitude = serializers.FloatField(source='spot.latitude', allow_null=True)
    longitude = serializers.FloatField(source='spot.longitude', allow_null=True)
    description = serializers.CharField(source='spot.description')
    wave_size = serializers.CharField(source='spot.wave_size', allow_null=True)
    temp_range = serializers.CharField(source='spot.temp_range')
    best_months = serializers.CharField(source='spot.best_months')
    tags = serializers.ListField(source='spot.tags', child=serializers.CharField())
    kite_schools = serializers.ListField(source='spot.kite_schools', child=serializers.CharField())
    number_of_schools = serializers.IntegerField(source='spot.number_of_schools', allow_null=True)
    difficulty_level = serializers.CharField(source='spot.difficulty_level', allow_null=True)
    food_options = serializers.ListField(source='spot.food_options', child=serializers.CharField())
    culture = serializers.CharField(source='spot.culture', allow_null=True)
    average_school_cost = serializers.FloatField(source='spot.average_school_cost', allow_null=True)
    average_accommodation_cost = serializers.FloatField(source='spot.average_accommodation_cost', allow_null=True)
    match_score = serializers.FloatField()
    reasons = serializers.ListField(child=serializers.CharField())
    wind_condition = WindConditionDTOSerializer()
