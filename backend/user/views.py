from rest_framework import status
from rest_framework.generics import get_object_or_404
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from reviews.serializers import ReviewSerializer
from .models import UserProfile
from .serializers import PublicProfileSerializer, UserProfileSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        profile = UserProfile.for_user(request.user)
        serializer = UserProfileSerializer(profile)
        return Response(serializer.data)

    def patch(self, request):
        profile = UserProfile.for_user(request.user)
        serializer = UserProfileSerializer(profile, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer.save()
        return Response(serializer.data)


class MyReviewsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        profile = UserProfile.for_user(request.user)
        reviews = profile.reviews.select_related('spot', 'user__user').order_by('-created_at')
        serializer = ReviewSerializer(reviews, many=True)
        return Response(serializer.data)


class ProfileView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, id):
        profile = get_object_or_404(UserProfile, id=id)
        serializer = PublicProfileSerializer(profile)
        return Response(serializer.data)
