from django.urls import path
from .views import MeView, MyReviewsView, ProfileView

urlpatterns = [
    path("user/", MeView.as_view(), name="me"),
    path("user/reviews/", MyReviewsView.as_view(), name="my_reviews"),
    path("users/<uuid:id>/", ProfileView.as_view(), name="profile"),
]
