from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from efficiency.notation import tiles_to_string
from efficiency.schemas import RuleSet
from efficiency.shanten import calculate_shanten
from efficiency.tiles import (
    EMPTY_TILE,
    HAND_SIZE,
    Tile,
    empty_table,
    make_frequency_table,
    tile_index,
)

logger = logging.getLogger(__name__)

COPIES_PER_TILE = 4


@dataclass
class WeightedDiscard:
    tile: Tile
    tiles_improving_shanten: list[Tile] = field(default_factory=list)
    score: int = 0


@dataclass
class DiscardScores:
    tiles: list[Tile] = field(default_factory=list)
    score: int = 0


def _require_closed_hand(tiles: list[Tile], size: int, caller: str) -> None:
    if len(tiles) != size or EMPTY_TILE in tiles:
        raise ValueError(f"{caller} expected a hand with {size} tiles, got {tiles_to_string(tiles)!r}")


def build_visible_tiles(
    hand: Iterable[Tile],
    discards: Iterable[Tile] = (),
    dora_indicators: Iterable[Tile] = (),
) -> list[int]:
    """Tiles whose location the seat knows: own hand, discards, revealed indicators."""
    table = empty_table()
    for tile in hand:
        if tile != EMPTY_TILE:
            table[tile_index(tile)] += 1
    for tile in list(discards) + list(dora_indicators):
        table[tile_index(tile)] += 1
    return table


def find_potentially_available_tile_count(visible_tiles: list[int], tiles: Iterable[Tile]) -> int:
    result = 0
    previous = EMPTY_TILE
    for tile in tiles:
        if tile == previous:
            continue
        result += COPIES_PER_TILE - visible_tiles[tile_index(tile)]
        previous = tile
    return result


def _filter_extensions(hand_tiles: list[Tile], tiles: Iterable[Tile], rules: RuleSet, below: int) -> list[Tile]:
    extended = list(hand_tiles) + [EMPTY_TILE]
    result = []
    for tile in tiles:
        extended[-1] = tile
        if calculate_shanten(extended, rules).shanten < below:
            result.append(tile)
    return result


def filter_tiles_improving_shanten(
    hand_tiles: list[Tile], tiles: Iterable[Tile], current_shanten: int, rules: RuleSet
) -> list[Tile]:
    _require_closed_hand(hand_tiles, HAND_SIZE - 1, "filter_tiles_improving_shanten")
    return _filter_extensions(hand_tiles, tiles, rules, current_shanten)


def filter_tiles_finishing_hand(hand_tiles: list[Tile], tiles: Iterable[Tile], rules: RuleSet) -> list[Tile]:
    _require_closed_hand(hand_tiles, HAND_SIZE - 1, "filter_tiles_finishing_hand")
    return _filter_extensions(hand_tiles, tiles, rules, 0)


def _distinct_discards(hand_tiles: list[Tile]) -> Iterator[tuple[Tile, list[Tile]]]:
    full_hand = sorted(hand_tiles)
    previous = EMPTY_TILE
    for i, tile in enumerate(full_hand):
        if tile == previous:
            continue
        previous = tile
        yield tile, full_hand[:i] + full_hand[i + 1 :]


def get_discards_reducing_shanten(hand_tiles: list[Tile], current_shanten: int, rules: RuleSet) -> list[Tile]:
    _require_closed_hand(hand_tiles, HAND_SIZE, "get_discards_reducing_shanten")
    return [
        tile
        for tile, reduced in _distinct_discards(hand_tiles)
        if calculate_shanten(reduced, rules).shanten < current_shanten
    ]


def _sort_weighted_discards(weighted_discards: list[WeightedDiscard]) -> None:
    # stable: equal scores keep hand order
    weighted_discards.sort(key=lambda discard: discard.score, reverse=True)


def _same_shanten_discards(
    hand_tiles: list[Tile], minimal_shanten: int, rules: RuleSet
) -> Iterator[tuple[Tile, list[Tile], list[Tile]]]:
    for tile, reduced in _distinct_discards(hand_tiles):
        result = calculate_shanten(reduced, rules)
        if result.shanten != minimal_shanten:
            continue
        improving = filter_tiles_improving_shanten(reduced, result.wait_tiles, minimal_shanten, rules)
        yield tile, reduced, improving


def calculate_best_discards_ukeire1(
    hand_tiles: list[Tile], minimal_shanten: int, visible_tiles: list[int], rules: RuleSet
) -> list[WeightedDiscard]:
    _require_closed_hand(hand_tiles, HAND_SIZE, "calculate_best_discards_ukeire1")

    possible_discards = []
    for tile, _, improving in _same_shanten_discards(hand_tiles, minimal_shanten, rules):
        available = find_potentially_available_tile_count(visible_tiles, improving)
        if available > 0:
            possible_discards.append(WeightedDiscard(tile=tile, tiles_improving_shanten=improving, score=available))

    _sort_weighted_discards(possible_discards)
    return possible_discards


@contextmanager
def _drawn_tile(hand: list[Tile], visible_tiles: list[int], tile: Tile) -> Iterator[list[Tile]]:
    index = tile_index(tile)
    hand.append(tile)
    visible_tiles[index] += 1
    try:
        yield hand
    finally:
        visible_tiles[index] -= 1
        hand.pop()


def calculate_best_discards_ukeire2(
    hand_tiles: list[Tile], minimal_shanten: int, visible_tiles: list[int], rules: RuleSet
) -> list[WeightedDiscard]:
    _require_closed_hand(hand_tiles, HAND_SIZE, "calculate_best_discards_ukeire2")

    if minimal_shanten <= 0:
        return calculate_best_discards_ukeire1(hand_tiles, minimal_shanten, visible_tiles, rules)

    visible = list(visible_tiles)
    possible_discards = []
    for tile, reduced, improving in _same_shanten_discards(hand_tiles, minimal_shanten, rules):
        score = 0
        for drawn in improving:
            available = COPIES_PER_TILE - visible[tile_index(drawn)]
            if available <= 0:
                continue
            with _drawn_tile(reduced, visible, drawn) as extended:
                next_discards = calculate_best_discards_ukeire1(extended, minimal_shanten - 1, visible, rules)
            if next_discards:
                score += next_discards[0].score * available
        logger.debug("ukeire2 discard %s: score %d over %s", tiles_to_string([tile]), score, tiles_to_string(improving))
        possible_discards.append(WeightedDiscard(tile=tile, tiles_improving_shanten=improving, score=score))

    _sort_weighted_discards(possible_discards)
    return possible_discards


def get_best_discard_scores(best_discards: list[WeightedDiscard]) -> DiscardScores:
    if not best_discards:
        return DiscardScores()
    result = DiscardScores(score=best_discards[0].score)
    for discard in best_discards:
        if discard.score < result.score:
            break
        result.tiles.append(discard.tile)
    return result


def get_discard_score(best_discards: list[WeightedDiscard], tile: Tile) -> int:
    for discard in best_discards:
        if discard.tile == tile:
            return discard.score
    return 0


def has_furiten_waits(waits: Iterable[Tile], discards: Iterable[Tile]) -> bool:
    discards_table = make_frequency_table(discards)
    return any(discards_table[tile_index(tile)] > 0 for tile in waits)


def has_potential_for_furiten(waits_table: Iterable[int], discards: Iterable[Tile]) -> bool:
    waits_table = list(waits_table)
    return any(waits_table[tile_index(tile)] > 1 for tile in discards)
