"""
URL configuration for the recommendations module.
"""
from django.urls import path
from recommendations.views import GenerateRecommendationsView

app_name = 'recommendations'

urlpatterns = [
    path('generate/', GenerateRecommendationsView.as_view(), name='generate_recommendations'),
]
