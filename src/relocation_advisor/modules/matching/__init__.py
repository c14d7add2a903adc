"""Matching module."""

from relocation_advisor.modules.matching.ranking import rank_destinations
from relocation_advisor.modules.matching.scoring import MatchWeights, calculate_match_score, score_breakdown

__all__ = ["MatchWeights", "calculate_match_score", "rank_destinations", "score_breakdown"]
