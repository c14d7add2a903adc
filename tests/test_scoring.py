import copy
import dataclasses

import pytest

from relocation_advisor.core.errors import ValidationError
from relocation_advisor.core.normalization import build_destination, build_preferences
from relocation_advisor.modules.matching.scoring import MatchWeights, calculate_match_score, score_breakdown


def test_calculates_match_score(preferences_dict, destination_dict):
    score = calculate_match_score(preferences_dict, destination_dict)
    assert score > 0
    assert score <= 100
    assert score == pytest.approx(87.04)


def test_penalizes_mismatched_climate(preferences_dict, make_destination):
    match_score = calculate_match_score(preferences_dict, make_destination())
    mismatch_score = calculate_match_score(preferences_dict, make_destination(climate="Tropical"))
    assert mismatch_score < match_score
    assert mismatch_score == pytest.approx(72.04)


def test_climate_mismatch_is_not_disqualifying(preferences_dict, make_destination):
    mismatch_score = calculate_match_score(preferences_dict, make_destination(climate="Tropical"))
    assert mismatch_score > 50


def test_unknown_climate_scores_as_mismatch(preferences_dict, make_destination):
    tropical = calculate_match_score(preferences_dict, make_destination(climate="Tropical"))
    unknown = calculate_match_score(preferences_dict, make_destination(climate="Savanna"))
    assert unknown == tropical


def test_unknown_climate_never_matches_itself(make_preferences, make_destination):
    preferences = make_preferences(climatePreference="Savanna")
    same_label = calculate_match_score(preferences, make_destination(climate="Savanna"))
    other_label = calculate_match_score(preferences, make_destination(climate="Tropical"))
    assert same_label == other_label


def test_climate_match_ignores_case_and_spacing(preferences_dict, make_destination):
    exact = calculate_match_score(preferences_dict, make_destination())
    loose = calculate_match_score(preferences_dict, make_destination(climate="  mediterranean "))
    assert loose == exact


def test_scoring_is_deterministic(preferences_dict, destination_dict):
    scores = {calculate_match_score(preferences_dict, destination_dict) for _ in range(5)}
    assert len(scores) == 1


def test_inputs_are_not_mutated(preferences_dict, destination_dict):
    preferences_before = copy.deepcopy(preferences_dict)
    destination_before = copy.deepcopy(destination_dict)
    calculate_match_score(preferences_dict, destination_dict)
    assert preferences_dict == preferences_before
    assert destination_dict == destination_before


def test_value_types_are_frozen(preferences_dict, destination_dict):
    preferences = build_preferences(preferences_dict)
    destination = build_destination(destination_dict)
    with pytest.raises(dataclasses.FrozenInstanceError):
        preferences.safety_importance = 0
    with pytest.raises(dataclasses.FrozenInstanceError):
        destination.safety = 0


def test_accepts_value_types(preferences_dict, destination_dict):
    preferences = build_preferences(preferences_dict)
    destination = build_destination(destination_dict)
    assert calculate_match_score(preferences, destination) == calculate_match_score(
        preferences_dict, destination_dict
    )


@pytest.mark.parametrize("quality", [0, 3, 7, 10])
def test_zero_healthcare_importance_removes_healthcare(make_preferences, make_destination, quality):
    preferences = make_preferences(healthcareImportance=0)
    baseline = calculate_match_score(preferences, make_destination(healthcare={"quality": 5, "cost": 3}))
    varied = calculate_match_score(preferences, make_destination(healthcare={"quality": quality, "cost": 1}))
    assert varied == baseline


def test_zero_safety_importance_removes_safety(make_preferences, make_destination):
    preferences = make_preferences(safetyImportance=0)
    scores = {calculate_match_score(preferences, make_destination(safety=safety)) for safety in (0, 4, 9, 10)}
    assert len(scores) == 1


def test_safety_importance_raises_score_for_safe_destination(make_preferences, make_destination):
    destination = make_destination(safety=9)
    scores = [
        calculate_match_score(make_preferences(safetyImportance=importance), destination)
        for importance in range(11)
    ]
    assert scores == sorted(scores)
    assert scores[-1] > scores[0]


def test_safety_importance_lowers_score_for_unsafe_destination(make_preferences, make_destination):
    destination = make_destination(safety=2)
    scores = [
        calculate_match_score(make_preferences(safetyImportance=importance), destination)
        for importance in range(11)
    ]
    assert scores == sorted(scores, reverse=True)
    assert scores[-1] < scores[0]


@pytest.mark.parametrize("importance", [0, 10])
def test_boundary_importance_stays_in_range(make_preferences, make_destination, importance):
    preferences = make_preferences(healthcareImportance=importance, safetyImportance=importance)
    for destination in (
        make_destination(),
        make_destination(safety=0, lgbtqFriendly=0, healthcare={"quality": 0, "cost": 5}),
        make_destination(safety=10, lgbtqFriendly=10, healthcare={"quality": 10, "cost": 1}),
    ):
        score = calculate_match_score(preferences, destination)
        assert 0 <= score <= 100


def test_best_and_worst_cases_span_the_scale(make_preferences, make_destination):
    preferences = make_preferences(budget="1-1", healthcareImportance=10, safetyImportance=10)
    best = make_destination(
        costOfLiving=1, safety=10, lgbtqFriendly=10, healthcare={"quality": 10, "cost": 1}
    )
    worst = make_destination(
        costOfLiving=5,
        climate="Polar",
        safety=0,
        lgbtqFriendly=0,
        healthcare={"quality": 0, "cost": 5},
    )
    assert calculate_match_score(preferences, best) == 100
    assert 0 <= calculate_match_score(preferences, worst) < 10


def test_unflagged_lgbtq_preference_is_neutral(make_preferences, make_destination):
    preferences = make_preferences(lgbtqFriendly=False)
    scores = {calculate_match_score(preferences, make_destination(lgbtqFriendly=rating)) for rating in (0, 5, 10)}
    assert len(scores) == 1


def test_flagged_lgbtq_preference_rewards_friendly_destination(preferences_dict, make_destination):
    friendly = calculate_match_score(preferences_dict, make_destination(lgbtqFriendly=10))
    hostile = calculate_match_score(preferences_dict, make_destination(lgbtqFriendly=1))
    assert friendly > hostile


def test_budget_credit_decays_outside_range(make_preferences, make_destination):
    preferences = make_preferences(budget="1-2")
    scores = [calculate_match_score(preferences, make_destination(costOfLiving=tier)) for tier in (2, 3, 4, 5)]
    assert scores == sorted(scores, reverse=True)
    assert len(set(scores)) == 4


def test_cheaper_than_budget_is_a_milder_miss(make_preferences, make_destination):
    over = calculate_match_score(make_preferences(budget="1-2"), make_destination(costOfLiving=4))
    under = calculate_match_score(make_preferences(budget="4-5"), make_destination(costOfLiving=2))
    assert under > over


def test_lower_importance_never_beats_full_information(make_preferences, make_destination):
    destination = make_destination(safety=10, healthcare={"quality": 10, "cost": 1})
    informed = calculate_match_score(make_preferences(healthcareImportance=10, safetyImportance=10), destination)
    indifferent = calculate_match_score(make_preferences(healthcareImportance=0, safetyImportance=0), destination)
    assert indifferent < informed


def test_breakdown_matches_score(preferences_dict, destination_dict):
    result = score_breakdown(preferences_dict, destination_dict)
    assert result.destination == "Test City"
    assert result.score == calculate_match_score(preferences_dict, destination_dict)
    assert [criterion.name for criterion in result.criteria] == [
        "budget",
        "climate",
        "healthcare",
        "safety",
        "lgbtq_friendly",
    ]
    assert 50 + sum(criterion.points for criterion in result.criteria) == pytest.approx(result.score, abs=0.01)
    assert "Climate matches (Mediterranean)" in result.reasons


def test_breakdown_omits_reasons_for_unweighted_criteria(make_preferences, destination_dict):
    result = score_breakdown(make_preferences(lgbtqFriendly=False, healthcareImportance=0), destination_dict)
    names = {criterion.name for criterion in result.criteria if criterion.weight == 0}
    assert names == {"lgbtq_friendly", "healthcare"}
    assert not any(reason.startswith("Healthcare") for reason in result.reasons)


def test_custom_weights_change_climate_penalty(preferences_dict, make_destination):
    mismatch = make_destination(climate="Arid")
    mild = calculate_match_score(preferences_dict, mismatch, MatchWeights(climate_mismatch_credit=0.75))
    harsh = calculate_match_score(preferences_dict, mismatch, MatchWeights(climate_mismatch_credit=0.0))
    assert mild > harsh


@pytest.mark.parametrize(
    "kwargs",
    [
        {"climate": 0},
        {"budget": -1},
        {"climate_mismatch_credit": 1.0},
        {"healthcare_quality_share": 1.5},
        {"budget_over_decay": -0.1},
    ],
)
def test_invalid_weights_rejected(kwargs):
    with pytest.raises(ValidationError):
        MatchWeights(**kwargs)


def test_invalid_input_never_yields_a_score(make_preferences, destination_dict):
    with pytest.raises(ValidationError):
        calculate_match_score(make_preferences(safetyImportance=11), destination_dict)


@pytest.mark.parametrize("budget", ["nan", "inf", "nan-nan", "4-6"])
def test_unparseable_budget_never_yields_a_score(make_preferences, destination_dict, budget):
    with pytest.raises(ValidationError):
        calculate_match_score(make_preferences(budget=budget), destination_dict)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"budget": float("nan")},
        {"lgbtq": float("inf")},
        {"climate": float("nan")},
        {"climate_mismatch_credit": float("nan")},
        {"budget_under_decay": float("inf")},
        {"budget": True},
    ],
)
def test_non_finite_weights_rejected(kwargs):
    with pytest.raises(ValidationError, match="finite"):
        MatchWeights(**kwargs)


@pytest.mark.parametrize("kwargs", [{"climate_mismatch_credit": 0.9999}, {"climate": 0.001}])
def test_climate_penalty_must_survive_rounding(kwargs):
    with pytest.raises(ValidationError, match="too small"):
        MatchWeights(**kwargs)


def test_smallest_allowed_climate_penalty_still_lowers_score(preferences_dict, make_destination):
    weights = MatchWeights(climate_mismatch_credit=0.995)
    match = calculate_match_score(preferences_dict, make_destination(), weights)
    mismatch = calculate_match_score(preferences_dict, make_destination(climate="Tropical"), weights)
    assert mismatch < match
