"""Normalization helpers for budgets, climate labels, input records and response meta."""

from __future__ import annotations

import math
import os
import re
from bisect import bisect_left
from typing import Any, Dict, List, Mapping, Optional, Tuple

from relocation_advisor.core.config import COST_TIER_MAX, COST_TIER_MIN
from relocation_advisor.core.errors import ValidationError
from relocation_advisor.core.models import BudgetRange, Climate, Destination, Healthcare, Preferences

DEFAULT_LOCALE = os.getenv("RELOCATION_ADVISOR_LOCALE", "en-US")
DEFAULT_CURRENCY = os.getenv("RELOCATION_ADVISOR_CURRENCY", "EUR")

# Upper bound of monthly cost (in DEFAULT_CURRENCY) for tiers 1..4; above the last bound is tier 5.
MONTHLY_COST_TIER_BOUNDS: Tuple[float, ...] = (1500.0, 2500.0, 3500.0, 5000.0)

BUDGET_BAND_NAMES: Dict[str, int] = {
    "low": 1,
    "medium": 3,
    "moderate": 3,
    "high": 5,
}

_RANGE_SEPARATOR = re.compile(r"\s*(?:-|–|—|\bto\b)\s*")
_AMOUNT_NOISE = re.compile(r"[\s,$€£]")
_CLIMATES = {climate.value.casefold(): climate for climate in Climate}


def normalize_currency(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_CURRENCY
    return value.strip().upper()


def normalize_locale(value: Optional[str]) -> str:
    return value.strip() if value else DEFAULT_LOCALE


def build_meta(currency: Optional[str] = None) -> Dict[str, Any]:
    return {
        "locale": normalize_locale(DEFAULT_LOCALE),
        "currency": normalize_currency(currency),
        "score_min": 0,
        "score_max": 100,
    }


def normalize_climate(label: str) -> str:
    return " ".join(label.split()).casefold()


def climate_category(label: str) -> Optional[Climate]:
    """Return the vocabulary entry for ``label``, or None when it is out of vocabulary."""
    return _CLIMATES.get(normalize_climate(label))


def amount_to_tier(amount: float) -> int:
    if not math.isfinite(amount):
        raise ValidationError(f"budget amount must be finite, got {amount!r}")
    if amount < 0:
        raise ValidationError(f"budget amount must not be negative, got {amount:g}")
    return bisect_left(MONTHLY_COST_TIER_BOUNDS, amount) + COST_TIER_MIN


def _parse_bound(raw: str, text: str) -> Tuple[float, bool]:
    token = raw.strip().casefold()
    if token in BUDGET_BAND_NAMES:
        return float(BUDGET_BAND_NAMES[token]), True
    try:
        amount = float(_AMOUNT_NOISE.sub("", token))
    except ValueError as exc:
        raise ValidationError(f"budget {text!r} is not a recognised range") from exc
    if not math.isfinite(amount):
        raise ValidationError(f"budget {text!r} is not a recognised range")
    return amount, False


def parse_budget(value: Any) -> BudgetRange:
    """Parse a budget description into a tier range.

    Accepts ``"2000-3000"`` style monthly amounts, ``"2-3"`` cost tiers (both
    bounds at most the top tier), a single value, or named bands such as
    ``"low-medium"``. Numbers are read as tiers only when every numeric bound
    fits the tier scale and as monthly amounts only when none of them is a
    valid tier, so a range such as ``"4-6"`` is rejected as ambiguous.
    """
    if isinstance(value, BudgetRange):
        return value
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(f"budget must be a range description, got {value!r}")
    text = str(value).strip()
    if not text:
        raise ValidationError("budget must not be empty")

    parts = _RANGE_SEPARATOR.split(text, maxsplit=1)
    if any(not part.strip() for part in parts):
        raise ValidationError(f"budget {text!r} is not a recognised range")
    bounds = [_parse_bound(part, text) for part in parts]
    if bounds[0][0] > bounds[-1][0] and bounds[0][1] == bounds[-1][1]:
        raise ValidationError(f"budget range {text!r} is inverted")

    numeric = [amount for amount, named in bounds if not named]
    as_tiers = all(amount <= COST_TIER_MAX for amount in numeric)
    if not as_tiers and any(COST_TIER_MIN <= amount <= COST_TIER_MAX for amount in numeric):
        raise ValidationError(f"budget {text!r} mixes cost tiers and monthly amounts")
    tiers: List[float] = []
    for amount, named in bounds:
        if named:
            tiers.append(amount)
        elif as_tiers:
            if amount < COST_TIER_MIN:
                raise ValidationError(f"budget tier must be at least {COST_TIER_MIN}, got {amount:g}")
            tiers.append(amount)
        else:
            tiers.append(float(amount_to_tier(amount)))
    return BudgetRange(low=tiers[0], high=tiers[-1], label=text)


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _require(data: Mapping[str, Any], fields: Mapping[str, Tuple[str, ...]], record: str) -> Dict[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{record} must be a mapping, got {type(data).__name__}")
    values = {name: _pick(data, *keys) for name, keys in fields.items()}
    missing = sorted(name for name, value in values.items() if value is None)
    if missing:
        raise ValidationError(f"{record} is missing required fields: {', '.join(missing)}")
    return values


_PREFERENCE_FIELDS = {
    "budget": ("budget",),
    "climate_preference": ("climate_preference", "climatePreference"),
    "healthcare_importance": ("healthcare_importance", "healthcareImportance"),
    "lgbtq_friendly": ("lgbtq_friendly", "lgbtqFriendly"),
    "safety_importance": ("safety_importance", "safetyImportance"),
}

_DESTINATION_FIELDS = {
    "name": ("name",),
    "cost_of_living": ("cost_of_living", "costOfLiving"),
    "climate": ("climate",),
    "healthcare": ("healthcare",),
    "safety": ("safety",),
    "lgbtq_friendly": ("lgbtq_friendly", "lgbtqFriendly"),
}

_HEALTHCARE_FIELDS = {
    "quality": ("quality",),
    "cost": ("cost",),
}


def build_preferences(data: Any) -> Preferences:
    if isinstance(data, Preferences):
        return data
    values = _require(data, _PREFERENCE_FIELDS, "preferences")
    values["budget"] = parse_budget(values["budget"])
    return Preferences(**values)


def build_healthcare(data: Any) -> Healthcare:
    if isinstance(data, Healthcare):
        return data
    return Healthcare(**_require(data, _HEALTHCARE_FIELDS, "destination.healthcare"))


def build_destination(data: Any) -> Destination:
    if isinstance(data, Destination):
        return data
    values = _require(data, _DESTINATION_FIELDS, "destination")
    values["healthcare"] = build_healthcare(values["healthcare"])
    return Destination(**values)
