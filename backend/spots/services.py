"""
Domain services for the spots app: catalog queries and the month based
views of the catalog used by the map, the list and the recommendation engine.
"""
import calendar
import logging
from typing import Callable, Dict, List, Optional, Tuple, Union

from django.db.models import Q, QuerySet

from recommendations.dtos import SpotDTO, WindConditionDTO
from .choices import WindQuality
from .models import Spot, WindCondition

logger = logging.getLogger(__name__)

MONTH_NAMES = [calendar.month_name[number] for number in range(1, 13)]


class SpotCatalogService:
    """
    Domain Service that encapsulates catalog queries.
    Views talk to this API rather than to the ORM directly.
    """

    GOOD_WIND = (WindQuality.GOOD, WindQuality.EXCELLENT)

    @staticmethod
    def parse_month(value: Union[str, int]) -> int:
        """
        Accepts a month number (1-12) or an English month name.

        Args:
            value: e.g. 7, "7", "July", "july"

        Returns:
            Month number between 1 and 12

        Raises:
            ValueError: unknown month name or number out of range
        """
        text = str(value).strip()

        if text.isdigit():
            month = int(text)
        else:
            lowered = [name.lower() for name in MONTH_NAMES]
            if text.lower() not in lowered:
                raise ValueError("Invalid month name")
            month = lowered.index(text.lower()) + 1

        if not 1 <= month <= 12:
            raise ValueError("Month must be between 1 and 12")
        return month

    @staticmethod
    def get_spots_by_month(month: int) -> QuerySet:
        """
        Spots that have Good or Excellent wind in the given month.

        Args:
            month: Month number (1-12)

        Returns:
            QuerySet of Spot objects in catalog order
        """
        return Spot.objects.filter(
            wind_conditions__month=month,
            wind_conditions__wind_quality__in=SpotCatalogService.GOOD_WIND,
        ).distinct().order_by('id')

    @staticmethod
    def search_spots(query: str) -> QuerySet:
        """Case-insensitive substring match on spot name or country."""
        return Spot.objects.filter(
            Q(name__icontains=query) | Q(country__icontains=query)
        ).order_by('id')

    @staticmethod
    def load_recommendation_catalog(month: int) -> Tuple[List[SpotDTO], Callable[[int, int], Optional[WindConditionDTO]]]:
        """
        Reads the whole catalog plus the wind conditions of one month and
        hands them over as plain records.

        Args:
            month: Month number requested by the rider

        Returns:
            (spots in id order, lookup(spot_id, month) -> WindConditionDTO or None)
        """
        spots = [SpotDTO.from_model(spot) for spot in Spot.objects.order_by('id')]
        conditions: Dict[Tuple[int, int], WindConditionDTO] = {
            (condition.spot_id, condition.month): WindConditionDTO.from_model(condition)
            for condition in WindCondition.objects.filter(month=month)
        }

        logger.info(f"Loaded {len(spots)} spots and {len(conditions)} wind conditions for month {month}")

        def lookup(spot_id: int, requested_month: int) -> Optional[WindConditionDTO]:
            return conditions.get((spot_id, requested_month))

        return spots, lookup

    @staticmethod
    def get_spot_details(spot: Spot) -> Dict:
        """
        Aggregates everything the spot detail page shows.

        Returns:
            Dict with spot, wind_conditions, reviews, average_rating,
            total_ratings and rating_breakdown keys
        """
        from reviews.services import RatingService

        summary = RatingService.summarize(spot)
        reviews = spot.reviews.select_related('user__user').order_by('-created_at')

        return {
            'spot': spot,
            'wind_conditions': spot.wind_conditions.order_by('month'),
            'reviews': reviews,
            'average_rating': summary['average_rating'],
            'total_ratings': summary['total_ratings'],
            'rating_breakdown': summary['rating_breakdown'],
        }
