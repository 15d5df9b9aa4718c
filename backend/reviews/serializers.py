"""
Serializers for spot reviews and ratings.
"""
from rest_framework import serializers
from reviews.models import Review, Rating
from user.serializers import PublicProfileSerializer


class ReviewSerializer(serializers.ModelSerializer):
    user = PublicProfileSerializer(read_only=True)
    spot_name = serializers.CharField(source='spot.name', read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'user', 'spot', 'spot_name', 'content', 'visit_date', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']
        # One review per (user, spot) is enforced by the view
        validators = []

    def validate_content(self, value):
        value = value.strip()
        if len(value) < 10:
            raise serializers.ValidationError("Review must be at least 10 characters")
        return value

    def validate_spot(self, value):
        if self.instance is not None and value != self.instance.spot:
            raise serializers.ValidationError("A review cannot be moved to another spot")
        return value


class RatingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Rating
        fields = [
            'id', 'user', 'spot',
            'wind_reliability', 'beginner_friendly', 'scenery',
            'uncrowded', 'local_vibe', 'overall',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'user', 'created_at', 'updated_at']
        validators = []

