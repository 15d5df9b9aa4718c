"""
Views for spot reviews and ratings.
"""
import logging

from django.db import IntegrityError, transaction
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from reviews.models import Review, Rating
from reviews.serializers import ReviewSerializer, RatingSerializer
from reviews.services import RatingService
from user.models import UserProfile

logger = logging.getLogger(__name__)


class ReviewViewSet(viewsets.ModelViewSet):
    """
    ViewSet for spot reviews.
    Anyone can read, signed in riders write, only the author edits or deletes.
    """
    queryset = Review.objects.select_related('user__user', 'spot')
    serializer_class = ReviewSerializer

    def get_permissions(self):
        if self.action in ('list', 'retrieve'):
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_queryset(self):
        """Filter reviews by spot if spot_id is provided"""
        queryset = Review.objects.select_related('user__user', 'spot').order_by('-created_at')
        spot_id = self.request.query_params.get('spot_id')
        if spot_id:
            if not spot_id.isdigit():
                return queryset.none()
            queryset = queryset.filter(spot_id=spot_id)
        return queryset

    def create(self, request, *args, **kwargs):
        profile = UserProfile.for_user(request.user)
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        spot = serializer.validated_data['spot']
        duplicate = Response(
            {'error': 'You have already reviewed this spot'},
            status=status.HTTP_400_BAD_REQUEST
        )
        if Review.objects.filter(user=profile, spot=spot).exists():
            return duplicate

        try:
            with transaction.atomic():
                serializer.save(user=profile)
        except IntegrityError:
            # concurrent create won the unique (user, spot) race
            return duplicate

        logger.info(f"Profile {profile.id} reviewed spot {spot.id}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        review = self.get_object()
        if review.user.user_id != request.user.id:
            return Response(
                {'error': 'You can only edit your own reviews'},
                status=status.HTTP_403_FORBIDDEN
            )
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        review = self.get_object()
        if review.user.user_id != request.user.id:
            return Response(
                {'error': 'You can only delete your own reviews'},
                status=status.HTTP_403_FORBIDDEN
            )
        return super().destroy(request, *args, **kwargs)


class RatingViewSet(mixins.CreateModelMixin, viewsets.GenericViewSet):
    """
    POST /api/ratings/ creates the caller's rating of a spot or replaces it.
    """
    queryset = Rating.objects.all()
    serializer_class = RatingSerializer
    permission_classes = [IsAuthenticated]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        profile = UserProfile.for_user(request.user)
        spot = serializer.validated_data.pop('spot')
        existed = Rating.objects.filter(user=profile, spot=spot).exists()
        rating = RatingService.upsert_rating(profile, spot, serializer.validated_data)

        return Response(
            RatingSerializer(rating).data,
            status=status.HTTP_200_OK if existed else status.HTTP_201_CREATED
        )
