"""
API views for spots app endpoints.
"""
import logging

from django.conf import settings
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Spot
from .serializers import (
    SpotSerializer, SpotListSerializer, SpotDetailsSerializer,
    SpotWithWindConditionsSerializer, WindConditionSerializer,
)
from .services import SpotCatalogService

logger = logging.getLogger(__name__)


class SpotViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Spot CRUD operations and catalog queries.
    Reads are public, writes are staff only.
    """
    queryset = Spot.objects.all().order_by('id')
    serializer_class = SpotSerializer
    lookup_value_regex = r'\d+'

    def get_permissions(self):
        if self.action in ('create', 'update', 'partial_update', 'destroy'):
            return [IsAdminUser()]
        if self.action == 'user_rating':
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_serializer_class(self):
        """Use lightweight serializer for list views"""
        if self.action in ('list', 'by_month', 'search'):
            return SpotListSerializer
        return SpotSerializer

    def retrieve(self, request, *args, **kwargs):
        """Spot with all of its monthly wind conditions"""
        spot = self.get_object()
        serializer = SpotWithWindConditionsSerializer({
            'spot': spot,
            'wind_conditions': spot.wind_conditions.order_by('month'),
        })
        return Response(serializer.data)

    @action(detail=False, methods=['get'], url_path=r'month/(?P<month>[^/.]+)')
    def by_month(self, request, month=None):
        """
        Spots with Good or Excellent wind in a month.

        Path parameters:
        - month: number (1-12) or English month name
        """
        try:
            month_number = SpotCatalogService.parse_month(month)
        except ValueError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        spots = SpotCatalogService.get_spots_by_month(month_number)
        serializer = SpotListSerializer(spots, many=True)
        return Response(serializer.data)

    @action(detail=False, methods=['get'])
    def search(self, request):
        """
        Search spots by name or country.

        Query parameters:
        - q: str (required)
        """
        query = request.query_params.get('q', '').strip()
        if not query:
            return Response(
                {'error': 'Search query is required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        spots = SpotCatalogService.search_spots(query)
        serializer = SpotListSerializer(spots, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['get'], url_path='wind-conditions')
    def wind_conditions(self, request, pk=None):
        """Monthly wind conditions of one spot"""
        spot = self.get_object()
        serializer = WindConditionSerializer(spot.wind_conditions.order_by('month'), many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['get'])
    def details(self, request, pk=None):
        """Spot, wind conditions, reviews and rating statistics"""
        spot = self.get_object()
        details = SpotCatalogService.get_spot_details(spot)
        serializer = SpotDetailsSerializer(details)
        return Response(serializer.data)

    @action(detail=True, methods=['get'], url_path='ratings/user')
    def user_rating(self, request, pk=None):
        """The current user's rating for this spot"""
        from reviews.models import Rating
        from reviews.serializers import RatingSerializer

        spot = self.get_object()
        rating = Rating.objects.filter(user__user=request.user, spot=spot).first()
        if rating is None:
            return Response(
                {'error': 'No rating found for this spot'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(RatingSerializer(rating).data)


class MapboxTokenView(APIView):
    """
    Hands the public Mapbox token to the map client.

    GET /api/mapbox-token/
    """
    permission_classes = [AllowAny]

    def get(self, request):
        token = getattr(settings, 'MAPBOX_ACCESS_TOKEN', '')
        if not token:
            logger.error("MAPBOX_ACCESS_TOKEN is not configured")
            return Response(
                {'error': 'Mapbox token not configured'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({'token': token})
