"""FastAPI entrypoint for the Relocation Advisor."""

from __future__ import annotations

from typing import Dict

from fastapi import FastAPI, HTTPException

from relocation_advisor.adapters.io.exports import serialize_match_result, serialize_ranking
from relocation_advisor.api.schemas import MatchScorePayload, RecommendationsPayload
from relocation_advisor.core.errors import ValidationError
from relocation_advisor.core.normalization import build_meta
from relocation_advisor.modules.matching.ranking import rank_destinations
from relocation_advisor.modules.matching.scoring import score_breakdown

app = FastAPI(title="Relocation Advisor API")


@app.get("/api/health")
def health() -> Dict[str, object]:
    return {"status": "ok", "meta": build_meta()}


@app.post("/api/match-score")
def match_score(payload: MatchScorePayload) -> Dict[str, object]:
    try:
        result = score_breakdown(payload.preferences.model_dump(), payload.destination.model_dump())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return serialize_match_result(result)


@app.post("/api/recommendations")
def recommendations(payload: RecommendationsPayload) -> Dict[str, object]:
    try:
        results = rank_destinations(
            payload.preferences.model_dump(),
            [destination.model_dump() for destination in payload.destinations],
            limit=payload.limit,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    response = serialize_ranking(results)
    response["meta"] = build_meta()
    return response
