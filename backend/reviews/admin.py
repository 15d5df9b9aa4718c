"""
Admin configuration for reviews and ratings.
"""
from django.contrib import admin
from reviews.models import Review, Rating


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ['user', 'spot', 'visit_date', 'created_at']
    list_filter = ['created_at']
    search_fields = ['user__user__username', 'spot__name', 'content']
    readonly_fields = ['id', 'created_at', 'updated_at']


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ['user', 'spot', 'overall', 'wind_reliability', 'updated_at']
    list_filter = ['overall']
    search_fields = ['user__user__username', 'spot__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
