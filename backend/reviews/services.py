"""
Rating aggregation and upsert logic for spot ratings.
"""
import logging
from typing import Dict

from django.db.models import Avg, Count

from spots.models import Spot
from user.models import UserProfile
from .models import Rating

logger = logging.getLogger(__name__)


class RatingService:
    """
    Domain Service for spot ratings.
    """

    @staticmethod
    def summarize(spot: Spot) -> Dict:
        """
        Averages every rating criterion for a spot.

        Args:
            spot: Spot to summarize

        Returns:
            Dict with average_rating (mean of overall), total_ratings and
            rating_breakdown (criterion -> mean). All zeros without ratings.
        """
        aggregates = Rating.objects.filter(spot=spot).aggregate(
            total=Count('id'),
            **{f'avg_{field}': Avg(field) for field in Rating.CRITERIA}
        )

        total = aggregates['total'] or 0
        breakdown = {
            field: round(float(aggregates[f'avg_{field}'] or 0), 2)
            for field in Rating.CRITERIA
        }

        return {
            'average_rating': breakdown['overall'],
            'total_ratings': total,
            'rating_breakdown': breakdown,
        }

    @staticmethod
    def upsert_rating(profile: UserProfile, spot: Spot, scores: Dict[str, int]) -> Rating:
        """
        Creates the rider's rating for a spot or overwrites the previous one.

        Args:
            profile: Rating author
            spot: Rated spot
            scores: criterion -> 1..5

        Returns:
            The saved Rating
        """
        rating, created = Rating.objects.update_or_create(
            user=profile,
            spot=spot,
            defaults={field: scores[field] for field in Rating.CRITERIA},
        )
        action = "Created" if created else "Updated"
        logger.info(f"{action} rating of spot {spot.id} by profile {profile.id}")
        return rating
