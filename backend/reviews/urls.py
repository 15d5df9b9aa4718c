"""
URL configuration for the reviews app.
"""
from rest_framework.routers import DefaultRouter
from reviews.views import ReviewViewSet, RatingViewSet

router = DefaultRouter()
router.register(r'reviews', ReviewViewSet, basename='review')
router.register(r'ratings', RatingViewSet, basename='rating')

app_name = 'reviews'

urlpatterns = router.urls
