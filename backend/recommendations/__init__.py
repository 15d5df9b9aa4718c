"""
Recommendations Module Summary
==============================

Ranks kitesurfing spots against a rider's travel preferences for one month.

Key Features Implemented:
1. RecommendationScorer - additive weighted rule scoring (scoring_service.py)
2. DTOs decoupling the scorer from the ORM (dtos.py)
3. POST /api/recommendations/generate/ endpoint with payload validation

The module owns no models; the catalog is read through spots.services.
"""
