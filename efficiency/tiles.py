from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable


class Suit(IntEnum):
    MAN = 0
    PIN = 1
    SOU = 2
    HONOR = 3


@dataclass(frozen=True, order=True)
class Tile:
    suit: Suit
    value: int


# Unfilled hand slot, never a real tile.
EMPTY_TILE = Tile(Suit.HONOR, 0)

HAND_SIZE = 14
SUIT_WIDTH = 10
TABLE_SIZE = 37
NUMERIC_LIMIT = 30

SUIT_OFFSETS = {
    Suit.MAN: 0,
    Suit.PIN: 10,
    Suit.SOU: 20,
    Suit.HONOR: 30,
}

# Position of an index inside its numeric suit block, -1 for honors.
SUIT_POSITION: tuple[int, ...] = tuple(i % SUIT_WIDTH if i < NUMERIC_LIMIT else -1 for i in range(TABLE_SIZE))

TERMINALS_AND_HONORS_INDICES = (0, 8, 10, 18, 20, 28, 30, 31, 32, 33, 34, 35, 36)


def is_valid_tile(tile: Tile) -> bool:
    if tile.suit == Suit.HONOR:
        return 1 <= tile.value <= 7
    return 1 <= tile.value <= 9


def tile_index(tile: Tile) -> int:
    return SUIT_OFFSETS[tile.suit] + tile.value - 1


def tile_from_index(index: int) -> Tile:
    if not 0 <= index < TABLE_SIZE or SUIT_POSITION[index] == 9:
        raise ValueError(f"Index {index} does not map to a tile")
    if index < NUMERIC_LIMIT:
        return Tile(Suit(index // SUIT_WIDTH), index % SUIT_WIDTH + 1)
    return Tile(Suit.HONOR, index - NUMERIC_LIMIT + 1)


ALL_TILES: tuple[Tile, ...] = tuple(
    Tile(suit, value) for suit in Suit for value in range(1, 8 if suit == Suit.HONOR else 10)
)


def empty_table() -> list[int]:
    return [0] * TABLE_SIZE


def make_frequency_table(tiles: Iterable[Tile]) -> list[int]:
    tiles = list(tiles)
    table = empty_table()
    for tile in tiles:
        if tile == EMPTY_TILE:
            raise ValueError(f"Incorrect tile in shanten calculation: {tiles}")
        table[tile_index(tile)] += 1
    return table


def frequency_table_to_tiles(table: Iterable[int]) -> list[Tile]:
    return [tile_from_index(i) for i, count in enumerate(table) if count > 0]


def make_hand(tiles: Iterable[Tile]) -> list[Tile]:
    hand = list(tiles)
    if len(hand) == HAND_SIZE - 1:
        hand.append(EMPTY_TILE)
    if len(hand) != HAND_SIZE:
        raise ValueError(f"A hand holds 13 or 14 tiles, got {len(hand)}")
    return sort_hand(hand)


def sort_hand(hand: list[Tile]) -> list[Tile]:
    if hand[HAND_SIZE - 1] == EMPTY_TILE:
        return sorted(hand[: HAND_SIZE - 1]) + [EMPTY_TILE]
    return sorted(hand)


def closed_tiles(hand: list[Tile]) -> list[Tile]:
    return [tile for tile in hand if tile != EMPTY_TILE]
