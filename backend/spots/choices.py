"""
Choice enumerations shared by the spot models and the recommendation engine.
"""
from django.db import models


class WindQuality(models.TextChoices):
    """Enumeration for monthly wind quality"""
    POOR = 'Poor', 'Poor'
    MODERATE = 'Moderate', 'Moderate'
    GOOD = 'Good', 'Good'
    EXCELLENT = 'Excellent', 'Excellent'
