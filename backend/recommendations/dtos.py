"""
Data Transfer Objects (DTOs) for preference input and scored results in the recommendation system.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


ANY_REGION = 'any'
ALL_DIFFICULTIES = 'all'


class TemperatureBand(Enum):
    """Air temperature buckets a rider can ask for"""
    COLD = 'cold'
    MODERATE = 'moderate'
    WARM = 'warm'
    HOT = 'hot'


class BudgetTier(Enum):
    """Daily spending tiers (lessons + accommodation)"""
    BUDGET = 'budget'
    MODERATE = 'moderate'
    LUXURY = 'luxury'


@dataclass(frozen=True)
class UserPreferences:
    """
    Travel preferences submitted by a rider.
    Enum-like fields keep their wire strings; unknown values simply never match.
    """
    wind_speed_min: float
    wind_speed_max: float
    temperature: str
    difficulty: str
    budget: str
    preferred_region: str
    has_kite_schools: bool
    prefer_waves: bool
    food_options: bool
    culture: bool
    month: int


@dataclass(frozen=True)
class WindConditionDTO:
    """Wind and temperature averages for one spot in one month"""
    spot_id: int
    month: int
    wind_speed: float
    wind_quality: str
    air_temp: Optional[float] = None
    water_temp: Optional[float] = None
    seasonal_notes: Optional[str] = None

    @classmethod
    def from_model(cls, condition) -> 'WindConditionDTO':
        return cls(
            spot_id=condition.spot_id,
            month=condition.month,
            wind_speed=condition.wind_speed,
            wind_quality=condition.wind_quality,
            air_temp=condition.air_temp,
            water_temp=condition.water_temp,
            seasonal_notes=condition.seasonal_notes,
        )


@dataclass(frozen=True)
class SpotDTO:
    """
    Read-only snapshot of a catalog spot.
    Every attribute a scoring rule depends on is optional; a rule whose
    attribute is missing contributes nothing.
    """
    id: int
    name: str
    country: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    description: str = ''
    wave_size: Optional[str] = None
    temp_range: str = ''
    best_months: str = ''
    local_attractions: str = ''
    tags: Tuple[str, ...] = ()
    windguru_code: Optional[str] = None
    kite_schools: Tuple[str, ...] = ()
    number_of_schools: Optional[int] = None
    difficulty_level: Optional[str] = None
    conditions: Tuple[str, ...] = ()
    accommodation_options: Tuple[str, ...] = ()
    food_options: Tuple[str, ...] = ()
    culture: Optional[str] = None
    average_school_cost: Optional[float] = None
    average_accommodation_cost: Optional[float] = None

    @classmethod
    def from_model(cls, spot) -> 'SpotDTO':
        return cls(
            id=spot.id,
            name=spot.name,
            country=spot.country,
            latitude=spot.latitude,
            longitude=spot.longitude,
            description=spot.description,
            wave_size=spot.wave_size,
            temp_range=spot.temp_range,
            best_months=spot.best_months,
            local_attractions=spot.local_attractions,
            tags=tuple(spot.tags or ()),
            windguru_code=spot.windguru_code,
            kite_schools=tuple(spot.kite_schools or ()),
            number_of_schools=spot.number_of_schools,
            difficulty_level=spot.difficulty_level,
            conditions=tuple(spot.conditions or ()),
            accommodation_options=tuple(spot.accommodation_options or ()),
            food_options=tuple(spot.food_options or ()),
            culture=spot.culture,
            average_school_cost=spot.average_school_cost,
            average_accommodation_cost=spot.average_accommodation_cost,
        )


@dataclass
class ScoredSpot:
    """
    Spot with its computed match score.
    Returned by RecommendationScorer.score().
    """
    spot: SpotDTO
    match_score: float
    wind_condition: WindConditionDTO
    reasons: List[str] = field(default_factory=list)
