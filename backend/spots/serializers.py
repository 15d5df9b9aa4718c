"""
DRF Serializers for Spot and WindCondition models.
"""
from rest_framework import serializers
from .models import Spot, WindCondition


class WindConditionSerializer(serializers.ModelSerializer):
    """Serializer for monthly wind conditions"""

    class Meta:
        model = WindCondition
        fields = [
            'id',
            'spot',
            'month',
            'wind_speed',
            'wind_quality',
            'air_temp',
            'water_temp',
            'seasonal_notes',
        ]
        read_only_fields = ['id']


class SpotSerializer(serializers.ModelSerializer):
    """Full serializer for the Spot model"""

    kite_school_entries = serializers.SerializerMethodField()

    class Meta:
        model = Spot
        fields = [
            'id',
            'name',
            'country',
            'latitude',
            'longitude',
            'description',
            'wave_size',
            'temp_range',
            'best_months',
            'local_attractions',
            'tags',
            'windguru_code',
            'kite_schools',
            'kite_school_entries',
            'number_of_schools',
            'difficulty_level',
            'conditions',
            'accommodation_options',
            'food_options',
            'culture',
            'average_school_cost',
            'average_accommodation_cost',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_kite_school_entries(self, obj):
        return obj.get_kite_school_entries()

    def validate(self, attrs):
        latitude = attrs.get('latitude', getattr(self.instance, 'latitude', None))
        longitude = attrs.get('longitude', getattr(self.instance, 'longitude', None))
        if latitude is not None and not -90 <= latitude <= 90:
            raise serializers.ValidationError({'latitude': "Latitude must be between -90 and 90"})
        if longitude is not None and not -180 <= longitude <= 180:
            raise serializers.ValidationError({'longitude': "Longitude must be between -180 and 180"})
        return attrs


class SpotListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for map and list views"""

    class Meta:
        model = Spot
        fields = [
            'id',
            'name',
            'country',
            'latitude',
            'longitude',
            'wave_size',
            'temp_range',
            'best_months',
            'difficulty_level',
            'tags',
        ]


class SpotWithWindConditionsSerializer(serializers.Serializer):
    """Spot together with its twelve monthly records"""

    spot = SpotSerializer()
    wind_conditions = WindConditionSerializer(many=True)


class SpotDetailsSerializer(serializers.Serializer):
    """Serializer for the aggregated spot detail page"""

    spot = SpotSerializer()
    wind_conditions = WindConditionSerializer(many=True)
    reviews = serializers.SerializerMethodField()
    average_rating = serializers.FloatField()
    total_ratings = serializers.IntegerField()
    rating_breakdown = serializers.DictField(child=serializers.FloatField())

    def get_reviews(self, obj):
        from reviews.serializers import ReviewSerializer
        return ReviewSerializer(obj['reviews'], many=True).data
