from __future__ import annotations

import re
from itertools import groupby
from typing import Iterable

from efficiency.tiles import Suit, Tile, is_valid_tile, tile_index

SUIT_LETTERS = {"m": Suit.MAN, "p": Suit.PIN, "s": Suit.SOU, "z": Suit.HONOR}
LETTER_BY_SUIT = {suit: letter for letter, suit in SUIT_LETTERS.items()}

HAND_GROUP_RE = re.compile(r"([0-9]+)([mpsz])")
HAND_RE = re.compile(r"^(?:[0-9]+[mpsz])+$")
TILE_CODE_RE = re.compile(r"^([1-9])([mpsz])$")
RED_FIVE_RE = re.compile(r"^5([mps])r$")

# Letter codes used by score sheets: winds then dragons.
HONOR_LETTERS = {"E": 1, "S": 2, "W": 3, "N": 4, "P": 5, "F": 6, "C": 7}

TILE_NAMES = {
    "east": 1,
    "south": 2,
    "west": 3,
    "north": 4,
    "white": 5,
    "green": 6,
    "red": 7,
    "ton": 1,
    "nan": 2,
    "shaa": 3,
    "pei": 4,
    "haku": 5,
    "hatsu": 6,
    "chun": 7,
}

SUIT_NAMES = {"man": Suit.MAN, "wan": Suit.MAN, "pin": Suit.PIN, "sou": Suit.SOU}

VALUE_NAMES = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ii": 1,
    "ryan": 2,
    "san": 3,
    "suu": 4,
    "uu": 5,
    "rou": 6,
    "chii": 7,
    "paa": 8,
    "kyuu": 9,
    "ichi": 1,
    "ni": 2,
    "yon": 4,
    "go": 5,
    "roku": 6,
    "nana": 7,
    "hachi": 8,
    "kyu": 9,
}
VALUE_NAMES.update({str(value): value for value in range(1, 10)})

_NUMERIC_ENGLISH = ["one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
_NUMERIC_JAPANESE = ["ii", "ryan", "san", "suu", "uu", "rou", "chii", "paa", "kyuu"]
_HONOR_ENGLISH = ["east wind", "south wind", "west wind", "north wind", "white dragon", "green dragon", "red dragon"]
_HONOR_JAPANESE = ["ton", "nan", "shaa", "pei", "haku", "hatsu", "chun"]


def _make_tile(suit: Suit, value: int) -> Tile:
    tile = Tile(suit, value)
    if not is_valid_tile(tile):
        raise ValueError(f"Invalid tile: {value}{LETTER_BY_SUIT[suit]}")
    return tile


def parse_tiles(text: str) -> list[Tile]:
    compact = "".join(text.split())
    if not HAND_RE.fullmatch(compact):
        raise ValueError(f"Invalid hand string: {text!r}, expected digits followed by m, p, s or z")
    tiles = []
    for digits, letter in HAND_GROUP_RE.findall(compact):
        suit = SUIT_LETTERS[letter]
        tiles.extend(_make_tile(suit, int(digit)) for digit in digits)
    return tiles


def parse_hand_string(text: str) -> list[Tile]:
    tiles = parse_tiles(text)
    if len(tiles) not in (13, 14):
        raise ValueError(f"A hand must have 13 or 14 tiles, got {len(tiles)}")
    return tiles


def tile_from_input(text: str) -> Tile:
    raw = text.strip()
    if raw in HONOR_LETTERS:
        return Tile(Suit.HONOR, HONOR_LETTERS[raw])

    lowered = raw.lower()
    red_five = RED_FIVE_RE.fullmatch(lowered)
    if red_five:
        return Tile(SUIT_LETTERS[red_five.group(1)], 5)

    code = TILE_CODE_RE.fullmatch(lowered)
    if code:
        return _make_tile(SUIT_LETTERS[code.group(2)], int(code.group(1)))

    parts = lowered.split()
    if len(parts) == 2 and parts[0] in VALUE_NAMES and parts[1] in SUIT_NAMES:
        return Tile(SUIT_NAMES[parts[1]], VALUE_NAMES[parts[0]])

    if lowered in TILE_NAMES:
        return Tile(Suit.HONOR, TILE_NAMES[lowered])

    raise ValueError(
        f"{text!r} is not a tile, use a digit followed by m, p, s or z, or a tile name "
        '(e.g. "7z", "red" and "chun" all mean the red dragon)'
    )


def tile_to_code(tile: Tile) -> str:
    return f"{tile.value}{LETTER_BY_SUIT[tile.suit]}"


def tiles_to_codes(tiles: Iterable[Tile]) -> list[str]:
    return [tile_to_code(tile) for tile in tiles]


def tiles_to_string(tiles: Iterable[Tile]) -> str:
    """Compact mpsz notation, e.g. 123m44p."""
    result = ""
    for suit, group in groupby(tiles, key=lambda t: t.suit):
        result += "".join(str(t.value) for t in group) + LETTER_BY_SUIT[suit]
    return result


def _suit_name(suit: Suit, terms: str) -> str:
    if suit == Suit.MAN:
        return "wan" if terms == "japanese" else "man"
    return {Suit.PIN: "pin", Suit.SOU: "sou"}[suit]


def tile_name(tile: Tile, terms: str = "english") -> str:
    if tile.suit == Suit.HONOR:
        names = _HONOR_JAPANESE if terms == "japanese" else _HONOR_ENGLISH
        return names[tile_index(tile) - 30]
    if terms == "japanese":
        return f"{_NUMERIC_JAPANESE[tile.value - 1]} {_suit_name(tile.suit, terms)}"
    return f"{_NUMERIC_ENGLISH[tile.value - 1]} of {_suit_name(tile.suit, terms)}"


def describe_tiles(tiles: Iterable[Tile], terms: str = "english") -> str:
    """Readable listing such as "1, 2, 3 man, east wind"."""
    parts = []
    for suit, group in groupby(tiles, key=lambda t: t.suit):
        group = list(group)
        if suit == Suit.HONOR:
            parts.extend(tile_name(tile, terms) for tile in group)
        else:
            parts.append(", ".join(str(tile.value) for tile in group) + " " + _suit_name(suit, terms))
    return ", ".join(parts)
