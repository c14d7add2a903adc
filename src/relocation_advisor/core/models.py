"""Validated value types for relocation preferences, destinations and match results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import List, Optional

from relocation_advisor.core.config import COST_TIER_MAX, COST_TIER_MIN, IMPORTANCE_MAX, RATING_MAX
from relocation_advisor.core.errors import ValidationError


class Climate(Enum):
    MEDITERRANEAN = "Mediterranean"
    TROPICAL = "Tropical"
    SUBTROPICAL = "Subtropical"
    ARID = "Arid"
    TEMPERATE = "Temperate"
    OCEANIC = "Oceanic"
    CONTINENTAL = "Continental"
    POLAR = "Polar"


def _check_number(name: str, value: object, low: float, high: float) -> None:
    # bool is a subclass of int but never a valid rating
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not low <= value <= high:
        raise ValidationError(f"{name} must be between {low:g} and {high:g}, got {value!r}")


def _check_int(name: str, value: object, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ValidationError(f"{name} must be between {low} and {high}, got {value!r}")


def _check_label(name: str, value: object) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string, got {value!r}")


@dataclass(frozen=True)
class BudgetRange:
    """Acceptable cost-of-living band, expressed in cost tiers."""

    low: float
    high: float
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        _check_number("budget.low", self.low, COST_TIER_MIN, COST_TIER_MAX)
        _check_number("budget.high", self.high, COST_TIER_MIN, COST_TIER_MAX)
        if self.low > self.high:
            raise ValidationError(f"budget range is inverted: {self.low:g} > {self.high:g}")

    def contains(self, tier: float) -> bool:
        return self.low <= tier <= self.high


@dataclass(frozen=True)
class Preferences:
    budget: BudgetRange
    climate_preference: str
    healthcare_importance: int
    lgbtq_friendly: bool
    safety_importance: int

    def __post_init__(self) -> None:
        if not isinstance(self.budget, BudgetRange):
            raise ValidationError(f"budget must be a BudgetRange, got {self.budget!r}")
        _check_label("climate_preference", self.climate_preference)
        _check_int("healthcare_importance", self.healthcare_importance, 0, IMPORTANCE_MAX)
        if not isinstance(self.lgbtq_friendly, bool):
            raise ValidationError(f"lgbtq_friendly must be a boolean, got {self.lgbtq_friendly!r}")
        _check_int("safety_importance", self.safety_importance, 0, IMPORTANCE_MAX)


@dataclass(frozen=True)
class Healthcare:
    quality: float
    cost: float

    def __post_init__(self) -> None:
        _check_number("healthcare.quality", self.quality, 0, RATING_MAX)
        _check_number("healthcare.cost", self.cost, COST_TIER_MIN, COST_TIER_MAX)


@dataclass(frozen=True)
class Destination:
    name: str
    cost_of_living: float
    climate: str
    healthcare: Healthcare
    safety: float
    lgbtq_friendly: float

    def __post_init__(self) -> None:
        _check_label("name", self.name)
        _check_number("cost_of_living", self.cost_of_living, COST_TIER_MIN, COST_TIER_MAX)
        _check_label("climate", self.climate)
        if not isinstance(self.healthcare, Healthcare):
            raise ValidationError(f"healthcare must be a Healthcare record, got {self.healthcare!r}")
        _check_number("safety", self.safety, 0, RATING_MAX)
        _check_number("lgbtq_friendly", self.lgbtq_friendly, 0, RATING_MAX)


@dataclass(frozen=True)
class CriterionScore:
    name: str
    credit: float
    weight: float
    points: float
    reason: str


@dataclass
class MatchResult:
    destination: str
    score: float
    criteria: List[CriterionScore] = field(default_factory=list)

    @property
    def reasons(self) -> List[str]:
        return [criterion.reason for criterion in self.criteria if criterion.weight > 0]
