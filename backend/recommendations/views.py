"""
Views for the recommendations module.
"""
import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from recommendations.scoring_service import RecommendationScorer
from recommendations.serializers import ScoredSpotSerializer, UserPreferencesSerializer
from spots.services import SpotCatalogService

logger = logging.getLogger(__name__)


class GenerateRecommendationsView(APIView):
    """
    API endpoint for ranking spots against a rider's preferences.

    POST /api/recommendations/generate/
    Body:
    {
        "wind_speed_min": 15,
        "wind_speed_max": 25,
        "temperature": "warm",
        "difficulty": "all",
        "budget": "moderate",
        "preferred_region": "any",
        "has_kite_schools": true,
        "prefer_waves": false,
        "food_options": false,
        "culture": false,
        "month": 7
    }
    """
    permission_classes = [AllowAny]
    scorer = RecommendationScorer()

    def post(self, request):
        """Generate recommendations for the submitted preferences"""
        serializer = UserPreferencesSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        preferences = serializer.to_preferences()
        spots, lookup = SpotCatalogService.load_recommendation_catalog(preferences.month)
        recommendations = self.scorer.score(preferences, spots, lookup)

        logger.info(f"Generated {len(recommendations)} recommendations for month {preferences.month}")
        return Response(
            {'recommendations': ScoredSpotSerializer(recommendations, many=True).data},
            status=status.HTTP_200_OK
        )
