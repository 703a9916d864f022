from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from fastapi import HTTPException

from efficiency.notation import parse_hand_string, tile_from_input, tile_to_code
from efficiency.schemas import DiscardEvaluationRequest, DiscardsRequest, ShantenRequest
from efficiency.tiles import HAND_SIZE, Tile


@dataclass
class ParsedHand:
    tiles: list[Tile]
    discards: list[Tile]
    dora_indicators: list[Tile]


def validate_tile(code: str) -> Tile:
    try:
        return tile_from_input(code)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid tile code: {code}") from exc


def validate_hand(hand: str) -> list[Tile]:
    try:
        return parse_hand_string(hand)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _parse(hand: str, discards: list[str], dora_indicators: list[str]) -> ParsedHand:
    parsed = ParsedHand(
        tiles=validate_hand(hand),
        discards=[validate_tile(code) for code in discards],
        dora_indicators=[validate_tile(code) for code in dora_indicators],
    )

    tile_counts = Counter(parsed.tiles + parsed.discards + parsed.dora_indicators)
    for tile, count in tile_counts.items():
        if count >= 5:
            raise HTTPException(status_code=422, detail=f"Tile appears 5+ times: {tile_to_code(tile)}")
    return parsed


def _require_full_hand(parsed: ParsedHand) -> None:
    if len(parsed.tiles) != HAND_SIZE:
        raise HTTPException(
            status_code=422,
            detail=f"Discard analysis needs 14 tiles (13 + drawn tile), got {len(parsed.tiles)}",
        )


def validate_shanten_request(req: ShantenRequest) -> ParsedHand:
    return _parse(req.hand, req.discards, req.dora_indicators)


def validate_discards_request(req: DiscardsRequest) -> ParsedHand:
    parsed = _parse(req.hand, req.discards, req.dora_indicators)
    _require_full_hand(parsed)
    return parsed


def validate_evaluation_request(req: DiscardEvaluationRequest) -> tuple[ParsedHand, Tile]:
    parsed = _parse(req.hand, req.discards, req.dora_indicators)
    _require_full_hand(parsed)
    discard = validate_tile(req.discard)
    if discard not in parsed.tiles:
        raise HTTPException(status_code=422, detail="Could not find the given tile in the hand")
    return parsed, discard
