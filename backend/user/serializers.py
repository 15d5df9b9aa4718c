from rest_framework import serializers
from .models import UserProfile


class UserProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    email = serializers.CharField(source="user.email", read_only=True)

    class Meta:
        model = UserProfile
        fields = [
            "id",
            "username",
            "email",
            "display_name",
            "avatar_url",
            "bio",
            "experience",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]


class PublicProfileSerializer(serializers.ModelSerializer):
    """Profile as other riders see it, without the email address"""
    username = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = UserProfile
        fields = [
            "id",
            "username",
            "display_name",
            "avatar_url",
            "bio",
            "experience",
        ]
