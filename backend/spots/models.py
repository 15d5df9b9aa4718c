from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .choices import WindQuality


class Spot(models.Model):
    """
    Kitesurfing destination - primary catalog entity.
    Holds static descriptive data; monthly conditions live in WindCondition.
    """

    # Basic Information
    name = models.CharField(max_length=255, help_text="Display name, usually 'Place, Country'")
    country = models.CharField(max_length=120, help_text="Country name, matched against the region table")

    # Coordinates
    latitude = models.FloatField(help_text="Latitude in decimal degrees")
    longitude = models.FloatField(help_text="Longitude in decimal degrees")

    # Description
    description = models.TextField(blank=True, default="")
    wave_size = models.CharField(
        max_length=120,
        blank=True,
        null=True,
        help_text="Free text descriptor: Flat, Small, Medium, Strong, Varied..."
    )
    temp_range = models.CharField(max_length=60, blank=True, default="", help_text="Temperature range in Celsius")
    best_months = models.CharField(max_length=60, blank=True, default="", help_text="e.g. 'Dec-Mar'")
    local_attractions = models.TextField(blank=True, default="")
    tags = models.JSONField(default=list, blank=True)

    # Forecast Integration
    windguru_code = models.CharField(max_length=20, blank=True, null=True)

    # Kiting Infrastructure
    kite_schools = models.JSONField(
        default=list,
        blank=True,
        help_text="List of 'name|mapsUrl|rating|reviewCount' strings"
    )
    number_of_schools = models.PositiveIntegerField(null=True, blank=True)
    difficulty_level = models.CharField(max_length=120, blank=True, null=True)
    conditions = models.JSONField(default=list, blank=True)

    # Travel
    accommodation_options = models.JSONField(default=list, blank=True)
    food_options = models.JSONField(default=list, blank=True)
    culture = models.TextField(blank=True, null=True)
    average_school_cost = models.FloatField(null=True, blank=True, help_text="Average daily lesson cost")
    average_accommodation_cost = models.FloatField(null=True, blank=True, help_text="Average nightly stay cost")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'spots_spot'
        ordering = ['id']
        indexes = [
            models.Index(fields=['country'], name='spots_spot_country_idx'),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        """
        Overridden save method to ensure coordinates are valid.
        """
        if not (-90 <= self.latitude <= 90 and -180 <= self.longitude <= 180):
            raise ValueError("Invalid coordinates: latitude must be -90 to 90, longitude must be -180 to 180")

        super().save(*args, **kwargs)

    def get_kite_school_entries(self):
        """
        Splits the pipe-delimited kite school strings into dictionaries.

        Returns:
            List of dicts with name, maps_url, rating and review_count keys
        """
        entries = []
        for raw in self.kite_schools or []:
            parts = [part.strip() for part in str(raw).split('|')]
            entry = {
                'name': parts[0],
                'maps_url': parts[1] if len(parts) > 1 and parts[1] else None,
                'rating': None,
                'review_count': None,
            }
            if len(parts) > 2 and parts[2]:
                try:
                    entry['rating'] = float(parts[2])
                except ValueError:
                    entry['rating'] = None
            if len(parts) > 3 and parts[3]:
                try:
                    entry['review_count'] = int(parts[3])
                except ValueError:
                    entry['review_count'] = None
            entries.append(entry)
        return entries


class WindCondition(models.Model):
    """
    Average wind and temperature data for a spot in one calendar month.
    A spot without a record for a month is treated as unknown for that month.
    """
    spot = models.ForeignKey(Spot, on_delete=models.CASCADE, related_name='wind_conditions')
    month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)],
        help_text="1-12 for Jan-Dec"
    )
    wind_speed = models.FloatField(help_text="Average wind speed in knots")
    wind_quality = models.CharField(
        max_length=10,
        choices=WindQuality.choices,
        help_text="Poor, Moderate, Good, Excellent"
    )
    air_temp = models.FloatField(null=True, blank=True, help_text="Average air temperature in Celsius")
    water_temp = models.FloatField(null=True, blank=True, help_text="Average water temperature in Celsius")
    seasonal_notes = models.TextField(blank=True, null=True)

    class Meta:
        db_table = 'spots_wind_condition'
        ordering = ['spot', 'month']
        unique_together = [['spot', 'month']]
        indexes = [
            models.Index(fields=['month', 'wind_quality'], name='spots_wc_month_quality_idx'),
        ]

    def __str__(self):
        return f"{self.spot.name} - month {self.month}: {self.wind_speed} kn ({self.wind_quality})"
