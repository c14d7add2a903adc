"""Rank candidate destinations for one user by match score."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from relocation_advisor.core.errors import ValidationError
from relocation_advisor.core.models import MatchResult
from relocation_advisor.core.normalization import build_preferences
from relocation_advisor.modules.matching.scoring import MatchWeights, score_breakdown

LOG = logging.getLogger(__name__)


def rank_destinations(
    preferences: Any,
    destinations: Iterable[Any],
    *,
    weights: Optional[MatchWeights] = None,
    skip_invalid: bool = False,
    limit: Optional[int] = None,
) -> List[MatchResult]:
    if limit is not None and limit < 0:
        raise ValidationError(f"limit must not be negative, got {limit}")
    preferences = build_preferences(preferences)
    weights = weights or MatchWeights()

    results: List[MatchResult] = []
    for index, destination in enumerate(destinations):
        try:
            results.append(score_breakdown(preferences, destination, weights))
        except ValidationError as exc:
            if not skip_invalid:
                raise ValidationError(f"destination #{index}: {exc}") from exc
            LOG.warning("Skipping destination #%d: %s", index, exc)

    results.sort(key=lambda result: (-result.score, result.destination))
    LOG.debug("Ranked %d destinations", len(results))
    if limit is not None:
        return results[:limit]
    return results
