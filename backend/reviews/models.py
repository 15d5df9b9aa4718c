import uuid
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from spots.models import Spot
from user.models import UserProfile


class Review(models.Model):
    """
    Written review of a spot. A user can review each spot once.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(UserProfile, on_delete=models.CASCADE, related_name='reviews')
    spot = models.ForeignKey(Spot, on_delete=models.CASCADE, related_name='reviews')
    content = models.TextField(help_text="Review text, at least 10 characters")
    visit_date = models.DateField(null=True, blank=True, help_text="When the reviewer kited there")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reviews_review'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['spot', 'created_at'], name='reviews_spot_created_idx'),
        ]
        unique_together = ('user', 'spot')

    def __str__(self):
        return f"Review by {self.user.user.username} for {self.spot.name}"


RATING_VALIDATORS = [MinValueValidator(1), MaxValueValidator(5)]


class Rating(models.Model):
    """
    Star ratings (1-5) of a spot across six criteria.
    Aggregated by RatingService.summarize() for the spot detail page.
    """
    CRITERIA = (
        'wind_reliability',
        'beginner_friendly',
        'scenery',
        'uncrowded',
        'local_vibe',
        'overall',
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(UserProfile, on_delete=models.CASCADE, related_name='ratings')
    spot = models.ForeignKey(Spot, on_delete=models.CASCADE, related_name='ratings')
    wind_reliability = models.PositiveSmallIntegerField(validators=RATING_VALIDATORS)
    beginner_friendly = models.PositiveSmallIntegerField(validators=RATING_VALIDATORS)
    scenery = models.PositiveSmallIntegerField(validators=RATING_VALIDATORS)
    uncrowded = models.PositiveSmallIntegerField(validators=RATING_VALIDATORS)
    local_vibe = models.PositiveSmallIntegerField(validators=RATING_VALIDATORS)
    overall = models.PositiveSmallIntegerField(validators=RATING_VALIDATORS)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reviews_rating'
        unique_together = ('user', 'spot')

    def __str__(self):
        return f"Rating by {self.user.user.username} for {self.spot.name} - {self.overall}/5"
