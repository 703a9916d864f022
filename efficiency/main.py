from __future__ import annotations

import logging

from fastapi import FastAPI

from efficiency.analysis import analyze_shanten, evaluate_discard, rank_discards
from efficiency.config import settings
from efficiency.schemas import (
    DiscardEvaluationRequest,
    DiscardEvaluationResponse,
    DiscardsRequest,
    DiscardsResponse,
    ShantenRequest,
    ShantenResponse,
)
from efficiency.validators import (
    validate_discards_request,
    validate_evaluation_request,
    validate_shanten_request,
)

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Riichi Efficiency Trainer API", version="0.1.0")


@app.get("/")
def root() -> dict[str, str]:
    return {
        "message": "Riichi Efficiency Trainer API",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/v1/shanten", response_model=ShantenResponse)
def shanten(req: ShantenRequest) -> ShantenResponse:
    parsed = validate_shanten_request(req)
    logger.info("Shanten request: hand=%s", req.hand)
    result = analyze_shanten(parsed.tiles, req.rules, parsed.discards, parsed.dora_indicators)
    return ShantenResponse(status="ok", result=result)


@app.post("/api/v1/discards", response_model=DiscardsResponse)
def discards(req: DiscardsRequest) -> DiscardsResponse:
    parsed = validate_discards_request(req)
    logger.info("Discards request: hand=%s lookahead=%s", req.hand, req.lookahead)
    result = rank_discards(
        parsed.tiles,
        req.rules,
        parsed.discards,
        parsed.dora_indicators,
        lookahead=req.lookahead,
        terms=req.terms_display.value,
    )
    return DiscardsResponse(status="ok", result=result)


@app.post("/api/v1/discards/evaluate", response_model=DiscardEvaluationResponse)
def evaluate(req: DiscardEvaluationRequest) -> DiscardEvaluationResponse:
    parsed, discard = validate_evaluation_request(req)
    logger.info("Evaluate request: hand=%s discard=%s", req.hand, req.discard)
    result = evaluate_discard(
        parsed.tiles,
        discard,
        req.rules,
        parsed.discards,
        parsed.dora_indicators,
        terms=req.terms_display.value,
    )
    return DiscardEvaluationResponse(status="ok", result=result)

