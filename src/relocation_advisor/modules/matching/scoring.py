"""Match scoring between a user's relocation preferences and a destination.

Every criterion produces a credit in [0, 1]. A credit of 0.5 is neutral; the
criterion moves the score up or down by ``weight * (credit - 0.5)``. Budget,
climate and LGBTQ friendliness carry fixed weights because preferences have no
importance field for them, while healthcare and safety are weighted by the
user's importance (0-10). The sum is scaled against the largest possible total
weight, so a criterion the user does not care about pulls the score toward the
neutral midpoint rather than inflating it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, List, Optional

from relocation_advisor.core.config import (
    COST_TIER_MAX,
    COST_TIER_MIN,
    DEFAULT_BUDGET_WEIGHT,
    DEFAULT_CLIMATE_MISMATCH_CREDIT,
    DEFAULT_CLIMATE_WEIGHT,
    DEFAULT_LGBTQ_WEIGHT,
    IMPORTANCE_MAX,
    RATING_MAX,
)
from relocation_advisor.core.errors import ValidationError
from relocation_advisor.core.models import CriterionScore, Destination, MatchResult, Preferences
from relocation_advisor.core.normalization import build_destination, build_preferences, climate_category

SCORE_MIN = 0.0
SCORE_MAX = 100.0
NEUTRAL_CREDIT = 0.5
SCORE_PRECISION = 2


@dataclass(frozen=True)
class MatchWeights:
    budget: float = DEFAULT_BUDGET_WEIGHT
    climate: float = DEFAULT_CLIMATE_WEIGHT
    lgbtq: float = DEFAULT_LGBTQ_WEIGHT
    climate_mismatch_credit: float = DEFAULT_CLIMATE_MISMATCH_CREDIT
    # credit lost per tier outside the budget range
    budget_over_decay: float = 0.35
    budget_under_decay: float = 0.15
    healthcare_quality_share: float = 0.8

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValidationError(f"{item.name} must be a finite number, got {value!r}")
        for name in ("budget", "climate", "lgbtq"):
            if getattr(self, name) < 0:
                raise ValidationError(f"{name} weight must not be negative")
        # a climate mismatch must always cost something
        if self.climate <= 0:
            raise ValidationError("climate weight must be positive")
        if not 0.0 <= self.climate_mismatch_credit < 1.0:
            raise ValidationError("climate_mismatch_credit must be in [0, 1)")
        if not 0.0 <= self.healthcare_quality_share <= 1.0:
            raise ValidationError("healthcare_quality_share must be between 0 and 1")
        if self.budget_over_decay < 0 or self.budget_under_decay < 0:
            raise ValidationError("budget decay must not be negative")
        # the mismatch penalty has to survive rounding to SCORE_PRECISION
        penalty = (SCORE_MAX - SCORE_MIN) * self.climate * (1.0 - self.climate_mismatch_credit) / self.max_total
        if penalty < 10 ** -SCORE_PRECISION:
            raise ValidationError("climate mismatch penalty is too small to lower the score")

    @property
    def max_total(self) -> float:
        return self.budget + self.climate + self.lgbtq + 2 * IMPORTANCE_MAX


def clamp(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    return max(low, min(high, value))


def budget_credit(preferences: Preferences, destination: Destination, weights: MatchWeights) -> float:
    budget = preferences.budget
    tier = destination.cost_of_living
    if budget.contains(tier):
        return 1.0
    if tier > budget.high:
        return clamp(1.0 - (tier - budget.high) * weights.budget_over_decay, 0.0, 1.0)
    return clamp(1.0 - (budget.low - tier) * weights.budget_under_decay, 0.0, 1.0)


def climate_credit(preferences: Preferences, destination: Destination, weights: MatchWeights) -> float:
    wanted = climate_category(preferences.climate_preference)
    actual = climate_category(destination.climate)
    if wanted is not None and wanted is actual:
        return 1.0
    return weights.climate_mismatch_credit


def healthcare_credit(destination: Destination, weights: MatchWeights) -> float:
    healthcare = destination.healthcare
    quality = healthcare.quality / RATING_MAX
    affordability = (COST_TIER_MAX - healthcare.cost) / (COST_TIER_MAX - COST_TIER_MIN)
    share = weights.healthcare_quality_share
    return share * quality + (1.0 - share) * affordability


def safety_credit(destination: Destination) -> float:
    return destination.safety / RATING_MAX


def lgbtq_credit(destination: Destination) -> float:
    return destination.lgbtq_friendly / RATING_MAX


def _criterion(name: str, credit: float, weight: float, max_total: float, reason: str) -> CriterionScore:
    points = (SCORE_MAX - SCORE_MIN) * weight * (credit - NEUTRAL_CREDIT) / max_total
    return CriterionScore(name=name, credit=round(credit, 4), weight=weight, points=points, reason=reason)


def _evaluate(preferences: Preferences, destination: Destination, weights: MatchWeights) -> List[CriterionScore]:
    max_total = weights.max_total

    budget = budget_credit(preferences, destination, weights)
    if budget >= 1.0:
        budget_reason = "Cost of living within budget"
    elif destination.cost_of_living > preferences.budget.high:
        budget_reason = "Cost of living above budget"
    else:
        budget_reason = "Cost of living below budget"

    climate = climate_credit(preferences, destination, weights)
    climate_reason = (
        f"Climate matches ({destination.climate})" if climate >= 1.0 else f"Climate mismatch ({destination.climate})"
    )

    lgbtq_weight = weights.lgbtq if preferences.lgbtq_friendly else 0.0
    return [
        _criterion("budget", budget, weights.budget, max_total, budget_reason),
        _criterion("climate", climate, weights.climate, max_total, climate_reason),
        _criterion(
            "healthcare",
            healthcare_credit(destination, weights),
            float(preferences.healthcare_importance),
            max_total,
            f"Healthcare quality {destination.healthcare.quality:g}/{RATING_MAX}",
        ),
        _criterion(
            "safety",
            safety_credit(destination),
            float(preferences.safety_importance),
            max_total,
            f"Safety {destination.safety:g}/{RATING_MAX}",
        ),
        _criterion(
            "lgbtq_friendly",
            lgbtq_credit(destination),
            lgbtq_weight,
            max_total,
            f"LGBTQ+ friendliness {destination.lgbtq_friendly:g}/{RATING_MAX}",
        ),
    ]


def _aggregate(criteria: List[CriterionScore]) -> float:
    midpoint = (SCORE_MIN + SCORE_MAX) / 2
    return round(clamp(midpoint + sum(criterion.points for criterion in criteria)), SCORE_PRECISION)


def score_breakdown(preferences: Any, destination: Any, weights: Optional[MatchWeights] = None) -> MatchResult:
    """Score a destination and keep the per-criterion contributions."""
    preferences = build_preferences(preferences)
    destination = build_destination(destination)
    weights = weights or MatchWeights()
    criteria = _evaluate(preferences, destination, weights)
    return MatchResult(destination=destination.name, score=_aggregate(criteria), criteria=criteria)


def calculate_match_score(preferences: Any, destination: Any, weights: Optional[MatchWeights] = None) -> float:
    """Return how well ``destination`` fits ``preferences`` on a 0-100 scale.

    Plain mappings are validated into ``Preferences``/``Destination`` first;
    malformed input raises ``ValidationError`` and never yields a score.
    """
    return score_breakdown(preferences, destination, weights).score
