from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, conint

from efficiency.config import settings


class TermsDisplay(str, Enum):
    english = "english"
    japanese = "japanese"


TileCode = str


class RuleSet(BaseModel):
    allow_kokushi: bool = Field(default_factory=lambda: settings.allow_kokushi)
    allow_chiitoitsu: bool = Field(default_factory=lambda: settings.allow_chiitoitsu)

    model_config = ConfigDict(frozen=True)


class ShantenRequest(BaseModel):
    hand: str
    rules: RuleSet = Field(default_factory=RuleSet)
    discards: list[TileCode] = Field(default_factory=list)
    dora_indicators: list[TileCode] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ShantenAnalysis(BaseModel):
    tiles_count: int
    shanten: int
    waits: list[TileCode] = Field(default_factory=list)
    waits_table: list[int] = Field(default_factory=list)
    tiles_improving_shanten: list[TileCode] = Field(default_factory=list)
    available_tiles: int = 0
    finishing_tiles: list[TileCode] = Field(default_factory=list)
    discards_reducing_shanten: list[TileCode] = Field(default_factory=list)


class ShantenResponse(BaseModel):
    status: Literal["ok"]
    result: ShantenAnalysis


class DiscardsRequest(BaseModel):
    hand: str
    discards: list[TileCode] = Field(default_factory=list)
    dora_indicators: list[TileCode] = Field(default_factory=list)
    # None picks two-ply up to settings.two_ply_max_shanten, single-ply above
    lookahead: Literal[1, 2] | None = None
    terms_display: TermsDisplay = Field(default_factory=lambda: TermsDisplay(settings.terms_display))
    rules: RuleSet = Field(default_factory=RuleSet)

    model_config = ConfigDict(extra="forbid")


class WeightedDiscardItem(BaseModel):
    tile: TileCode
    tiles_improving_shanten: list[TileCode]
    score: conint(ge=0)


class DiscardScoresItem(BaseModel):
    tiles: list[TileCode] = Field(default_factory=list)
    score: int = 0


class DiscardRanking(BaseModel):
    shanten: int
    lookahead: Literal[1, 2]
    discards: list[WeightedDiscardItem] = Field(default_factory=list)
    best: DiscardScoresItem
    explanation: list[str] = Field(default_factory=list)


class DiscardsResponse(BaseModel):
    status: Literal["ok"]
    result: DiscardRanking


class DiscardEvaluationRequest(BaseModel):
    hand: str
    discard: TileCode
    discards: list[TileCode] = Field(default_factory=list)
    dora_indicators: list[TileCode] = Field(default_factory=list)
    terms_display: TermsDisplay = Field(default_factory=lambda: TermsDisplay(settings.terms_display))
    rules: RuleSet = Field(default_factory=RuleSet)

    model_config = ConfigDict(extra="forbid")


class DiscardEvaluation(BaseModel):
    discarded: TileCode
    score: int
    best: DiscardScoresItem
    is_best_discard: bool
    better_discards: list[TileCode] = Field(default_factory=list)
    lookahead: Literal[1, 2]
    previous_shanten: int
    shanten: int
    went_back_in_shanten: bool
    potential_furiten: bool = False
    waits: list[TileCode] = Field(default_factory=list)
    waits_available: int = 0
    furiten: bool = False
    explanation: list[str] = Field(default_factory=list)


class DiscardEvaluationResponse(BaseModel):
    status: Literal["ok"]
    result: DiscardEvaluation

