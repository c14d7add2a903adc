"""Export helpers for match results."""

from __future__ import annotations

from typing import Any, Dict, List

from relocation_advisor.core.models import CriterionScore, MatchResult


def _serialize_criterion(criterion: CriterionScore) -> Dict[str, Any]:
    return {
        "name": criterion.name,
        "credit": criterion.credit,
        "weight": criterion.weight,
        "points": round(criterion.points, 2),
        "reason": criterion.reason,
    }


def serialize_match_result(result: MatchResult) -> Dict[str, Any]:
    return {
        "destination": result.destination,
        "score": result.score,
        "breakdown": [_serialize_criterion(criterion) for criterion in result.criteria],
        "reasons": result.reasons,
    }


def serialize_ranking(results: List[MatchResult]) -> Dict[str, Any]:
    return {
        "items": [
            {"rank": position, **serialize_match_result(result)}
            for position, result in enumerate(results, start=1)
        ],
        "total": len(results),
    }
