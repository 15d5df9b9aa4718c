from django.contrib import admin
from .models import Spot, WindCondition


class WindConditionInline(admin.TabularInline):
    model = WindCondition
    extra = 0
    ordering = ['month']


@admin.register(Spot)
class SpotAdmin(admin.ModelAdmin):
    """
    Admin interface for the spot catalog.
    Monthly wind conditions are edited inline.
    """
    list_display = ['name', 'country', 'difficulty_level', 'wave_size', 'created_at']
    list_filter = ['country', 'difficulty_level']
    search_fields = ['name', 'country', 'windguru_code']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [WindConditionInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'name', 'country', 'description')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude', 'windguru_code')
        }),
        ('Kiting', {
            'fields': ('difficulty_level', 'wave_size', 'conditions', 'kite_schools', 'number_of_schools')
        }),
        ('Travel', {
            'fields': (
                'temp_range', 'best_months', 'local_attractions', 'culture',
                'accommodation_options', 'food_options',
                'average_school_cost', 'average_accommodation_cost',
            )
        }),
        ('Metadata', {
            'fields': ('tags',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(WindCondition)
class WindConditionAdmin(admin.ModelAdmin):
    list_display = ['spot', 'month', 'wind_speed', 'wind_quality', 'air_temp']
    list_filter = ['month', 'wind_quality']
    search_fields = ['spot__name']
