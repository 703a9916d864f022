from __future__ import annotations

import logging

from efficiency.config import settings
from efficiency.notation import describe_tiles, tile_name, tile_to_code, tiles_to_codes, tiles_to_string
from efficiency.schemas import (
    DiscardEvaluation,
    DiscardRanking,
    DiscardScoresItem,
    RuleSet,
    ShantenAnalysis,
    WeightedDiscardItem,
)
from efficiency.shanten import calculate_shanten
from efficiency.tiles import HAND_SIZE, Tile
from efficiency.ukeire import (
    DiscardScores,
    WeightedDiscard,
    build_visible_tiles,
    calculate_best_discards_ukeire1,
    calculate_best_discards_ukeire2,
    filter_tiles_finishing_hand,
    filter_tiles_improving_shanten,
    find_potentially_available_tile_count,
    get_best_discard_scores,
    get_discard_score,
    get_discards_reducing_shanten,
    has_furiten_waits,
    has_potential_for_furiten,
)

logger = logging.getLogger(__name__)


def _scores_item(scores: DiscardScores) -> DiscardScoresItem:
    return DiscardScoresItem(tiles=tiles_to_codes(scores.tiles), score=scores.score)


def _discard_items(discards: list[WeightedDiscard]) -> list[WeightedDiscardItem]:
    return [
        WeightedDiscardItem(
            tile=tile_to_code(d.tile),
            tiles_improving_shanten=tiles_to_codes(d.tiles_improving_shanten),
            score=d.score,
        )
        for d in discards
    ]


def _explanation(discards: list[WeightedDiscard], terms: str) -> list[str]:
    lines = []
    for d in discards:
        name = tile_name(d.tile, terms)
        lines.append(f"{name[0].upper()}{name[1:]}: {describe_tiles(d.tiles_improving_shanten, terms)} (score {d.score})")
    return lines


def _resolve_lookahead(shanten: int, lookahead: int | None) -> int:
    if lookahead is not None:
        return lookahead
    # two-ply cost grows fast with shanten
    return 2 if shanten <= settings.two_ply_max_shanten else 1


def _ranking(tiles: list[Tile], shanten: int, visible: list[int], rules: RuleSet, lookahead: int) -> list[WeightedDiscard]:
    if lookahead == 1:
        return calculate_best_discards_ukeire1(tiles, shanten, visible, rules)
    return calculate_best_discards_ukeire2(tiles, shanten, visible, rules)


def analyze_shanten(
    tiles: list[Tile],
    rules: RuleSet,
    discards: list[Tile] | None = None,
    dora_indicators: list[Tile] | None = None,
) -> ShantenAnalysis:
    """Shanten and waits of a 13-tile hand, or of a 14-tile hand whose last tile was just drawn."""
    result = calculate_shanten(tiles, rules)
    analysis = ShantenAnalysis(
        tiles_count=len(tiles),
        shanten=result.shanten,
        waits=tiles_to_codes(result.wait_tiles),
        waits_table=list(result.waits),
    )
    visible = build_visible_tiles(tiles, discards or [], dora_indicators or [])

    if len(tiles) == HAND_SIZE:
        closed_shanten = calculate_shanten(tiles[: HAND_SIZE - 1], rules).shanten
        if result.shanten < closed_shanten:
            reducing = get_discards_reducing_shanten(tiles, closed_shanten, rules)
            analysis.discards_reducing_shanten = tiles_to_codes(reducing)
        return analysis

    if result.shanten > 0:
        improving = filter_tiles_improving_shanten(tiles, result.wait_tiles, result.shanten, rules)
        analysis.tiles_improving_shanten = tiles_to_codes(improving)
        analysis.available_tiles = find_potentially_available_tile_count(visible, improving)
    else:
        finishing = filter_tiles_finishing_hand(tiles, result.wait_tiles, rules)
        analysis.finishing_tiles = tiles_to_codes(finishing)
        analysis.available_tiles = find_potentially_available_tile_count(visible, finishing)
    return analysis


def rank_discards(
    tiles: list[Tile],
    rules: RuleSet,
    discards: list[Tile] | None = None,
    dora_indicators: list[Tile] | None = None,
    lookahead: int | None = None,
    terms: str = "english",
) -> DiscardRanking:
    shanten = calculate_shanten(tiles, rules).shanten
    lookahead = _resolve_lookahead(shanten, lookahead)
    visible = build_visible_tiles(tiles, discards or [], dora_indicators or [])
    ranking = _ranking(tiles, shanten, visible, rules, lookahead)
    logger.debug("ranked %d discards for %s at shanten %d", len(ranking), tiles_to_string(sorted(tiles)), shanten)
    return DiscardRanking(
        shanten=shanten,
        lookahead=lookahead,
        discards=_discard_items(ranking),
        best=_scores_item(get_best_discard_scores(ranking)),
        explanation=_explanation(ranking, terms),
    )


def evaluate_discard(
    tiles: list[Tile],
    discard: Tile,
    rules: RuleSet,
    discards: list[Tile] | None = None,
    dora_indicators: list[Tile] | None = None,
    terms: str = "english",
) -> DiscardEvaluation:
    """Judge one discard from a 14-tile hand against the discard ranking."""
    discards = list(discards or [])
    dora_indicators = list(dora_indicators or [])

    full_hand_shanten = calculate_shanten(tiles, rules).shanten
    visible = build_visible_tiles(tiles, discards, dora_indicators)
    lookahead = _resolve_lookahead(full_hand_shanten, None)
    ranking = _ranking(tiles, full_hand_shanten, visible, rules, lookahead)
    best = get_best_discard_scores(ranking)

    remaining = list(tiles)
    remaining.remove(discard)
    discards.append(discard)

    after = calculate_shanten(remaining, rules)
    went_back = after.shanten > full_hand_shanten
    is_best = discard in best.tiles
    evaluation = DiscardEvaluation(
        discarded=tile_to_code(discard),
        score=get_discard_score(ranking, discard),
        best=_scores_item(best),
        is_best_discard=is_best,
        better_discards=[] if is_best or went_back else tiles_to_codes(best.tiles),
        lookahead=lookahead,
        previous_shanten=full_hand_shanten,
        shanten=after.shanten,
        went_back_in_shanten=went_back,
        explanation=_explanation(ranking, terms),
    )

    if after.shanten > 0:
        evaluation.potential_furiten = has_potential_for_furiten(after.waits, discards)
    else:
        waits = filter_tiles_finishing_hand(remaining, after.wait_tiles, rules)
        visible_after = build_visible_tiles(remaining, discards, dora_indicators)
        evaluation.waits = tiles_to_codes(waits)
        evaluation.waits_available = find_potentially_available_tile_count(visible_after, waits)
        evaluation.furiten = has_furiten_waits(waits, discards)
    return evaluation
