import uuid

from django.conf import settings
from django.db import models


class Experience(models.TextChoices):
    BEGINNER = 'beginner', 'Beginner'
    INTERMEDIATE = 'intermediate', 'Intermediate'
    ADVANCED = 'advanced', 'Advanced'
    EXPERT = 'expert', 'Expert'


class UserProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile"
    )
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    supabase_id = models.UUIDField(unique=True, null=True, blank=True,
                                   help_text="Subject of the Supabase access token")
    display_name = models.CharField(max_length=100, blank=True, default="")
    avatar_url = models.URLField(max_length=500, blank=True, null=True)
    bio = models.TextField(max_length=200, blank=True, default="")
    experience = models.CharField(max_length=20, choices=Experience.choices, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_profile'

    def __str__(self):
        return self.display_name or self.user.username

    @classmethod
    def for_user(cls, user) -> "UserProfile":
        """Profile of a Django user, created on first access."""
        profile, _ = cls.objects.get_or_create(user=user)
        return profile
