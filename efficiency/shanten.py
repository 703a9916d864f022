from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

from efficiency.schemas import RuleSet
from efficiency.tiles import (
    NUMERIC_LIMIT,
    SUIT_POSITION,
    TABLE_SIZE,
    TERMINALS_AND_HONORS_INDICES,
    Tile,
    empty_table,
    frequency_table_to_tiles,
    make_frequency_table,
)

MAX_SHANTEN = 8
# Flag written into the best waits table for tiles taken from a decomposition.
WAIT_FLAG = 2


@dataclass(frozen=True)
class ShantenResult:
    shanten: int
    waits: tuple[int, ...]

    @property
    def wait_tiles(self) -> list[Tile]:
        return frequency_table_to_tiles(self.waits)


def _absorb(target: list[int], addition: list[int]) -> None:
    for i, count in enumerate(addition):
        if count > 0 and target[i] < WAIT_FLAG:
            target[i] = WAIT_FLAG


class ShantenCalculator:
    """Backtracking search over one hand.

    `hand_table` and `waits_table` are mutated while descending and restored on
    the way back, so a calculator is built per query and thrown away.
    """

    def __init__(self, hand_table: list[int]) -> None:
        self.hand_table = list(hand_table)
        self.waits_table = empty_table()
        self.complete_sets = 0
        self.pair = 0
        self.partial_sets = 0
        self.best_shanten = MAX_SHANTEN
        self.best_waits = empty_table()

    def result(self) -> ShantenResult:
        return ShantenResult(shanten=self.best_shanten, waits=tuple(self.best_waits))

    def _record(self, shanten: int, waits: list[int]) -> bool:
        if shanten < self.best_shanten:
            self.best_shanten = shanten
            self.best_waits = empty_table()
        elif shanten != self.best_shanten:
            return False
        _absorb(self.best_waits, waits)
        return True

    def _replace(self, shanten: int, waits: list[int]) -> None:
        # a shape that ties or beats the best so far owns the waits table
        if shanten > self.best_shanten:
            return
        self.best_shanten = shanten
        self.best_waits = empty_table()
        _absorb(self.best_waits, waits)

    def _append_single_tiles_left(self) -> None:
        best = self.best_waits
        for i, count in enumerate(self.hand_table):
            if count != 1:
                continue
            # a second copy makes a pair
            best[i] = max(best[i], 1)
            position = SUIT_POSITION[i]
            if position < 0:
                continue
            if position >= 1:
                best[i - 1] = max(best[i - 1], 1)
            if position >= 2:
                best[i - 2] = max(best[i - 2], 1)
            if position <= 7:
                best[i + 1] = max(best[i + 1], 1)
            if position <= 6:
                best[i + 2] = max(best[i + 2], 1)

    def _remove_potential_sets(self, i: int) -> None:
        hand = self.hand_table
        waits = self.waits_table
        while i < TABLE_SIZE and hand[i] == 0:
            i += 1

        if i >= TABLE_SIZE:
            shanten = MAX_SHANTEN - self.complete_sets * 2 - self.partial_sets - self.pair
            if self._record(shanten, waits):
                self._append_single_tiles_left()
            return

        # four groups plus a pair is the most a standard hand holds
        if self.complete_sets + self.partial_sets < 4:
            position = SUIT_POSITION[i]

            if hand[i] == 2:
                self.partial_sets += 1
                hand[i] -= 2
                waits[i] += 1
                try:
                    self._remove_potential_sets(i)
                finally:
                    waits[i] -= 1
                    hand[i] += 2
                    self.partial_sets -= 1

            # edge or side wait
            if position >= 0 and hand[i + 1] != 0:
                low_end = position == 0
                high_end = position == 7
                self.partial_sets += 1
                hand[i] -= 1
                hand[i + 1] -= 1
                if not low_end:
                    waits[i - 1] += 1
                if not high_end:
                    waits[i + 2] += 1
                try:
                    self._remove_potential_sets(i)
                finally:
                    if not low_end:
                        waits[i - 1] -= 1
                    if not high_end:
                        waits[i + 2] -= 1
                    hand[i] += 1
                    hand[i + 1] += 1
                    self.partial_sets -= 1

            # closed wait
            if 0 <= position <= 7 and hand[i + 2] != 0:
                self.partial_sets += 1
                hand[i] -= 1
                hand[i + 2] -= 1
                waits[i + 1] += 1
                try:
                    self._remove_potential_sets(i)
                finally:
                    waits[i + 1] -= 1
                    hand[i] += 1
                    hand[i + 2] += 1
                    self.partial_sets -= 1

        self._remove_potential_sets(i + 1)

    def _remove_completed_sets(self, i: int) -> None:
        hand = self.hand_table
        while i < TABLE_SIZE and hand[i] == 0:
            i += 1

        if i >= TABLE_SIZE:
            self._remove_potential_sets(0)
            return

        if hand[i] >= 3:
            self.complete_sets += 1
            hand[i] -= 3
            try:
                self._remove_completed_sets(i)
            finally:
                hand[i] += 3
                self.complete_sets -= 1

        if i < NUMERIC_LIMIT and hand[i + 1] != 0 and hand[i + 2] != 0:
            self.complete_sets += 1
            hand[i] -= 1
            hand[i + 1] -= 1
            hand[i + 2] -= 1
            try:
                self._remove_completed_sets(i)
            finally:
                hand[i] += 1
                hand[i + 1] += 1
                hand[i + 2] += 1
                self.complete_sets -= 1

        self._remove_completed_sets(i + 1)

    def calculate_standard(self) -> int:
        earlier_shanten, earlier_waits = self.best_shanten, self.best_waits
        self.best_shanten = MAX_SHANTEN
        self.best_waits = empty_table()

        hand = self.hand_table
        for i in range(TABLE_SIZE):
            if hand[i] < 2:
                continue
            self.pair += 1
            hand[i] -= 2
            self.waits_table[i] += 1
            try:
                self._remove_completed_sets(0)
            finally:
                self.waits_table[i] -= 1
                hand[i] += 2
                self.pair -= 1

        self._remove_completed_sets(0)
        standard_shanten = self.best_shanten
        if earlier_shanten < standard_shanten:
            self.best_shanten, self.best_waits = earlier_shanten, earlier_waits
        return standard_shanten

    def calculate_chiitoitsu(self) -> int:
        waits = empty_table()
        pair_count = 0
        unique_count = 0
        for i, count in enumerate(self.hand_table):
            if count == 0:
                continue
            unique_count += 1
            if count >= 2:
                pair_count += 1
            else:
                waits[i] += 2

        shanten = 6 - pair_count + max(0, 7 - unique_count)
        self._replace(shanten, waits)
        return shanten

    def calculate_kokushi(self) -> int:
        waits = empty_table()
        unique_count = 0
        have_pair = False
        for i in TERMINALS_AND_HONORS_INDICES:
            count = self.hand_table[i]
            if count == 0:
                waits[i] += 2
                continue
            unique_count += 1
            if count >= 2:
                have_pair = True
            else:
                waits[i] += 1

        shanten = 13 - unique_count - int(have_pair)
        if shanten < self.best_shanten and have_pair:
            # the pair is already there, a second copy of another orphan does not help
            for i in TERMINALS_AND_HONORS_INDICES:
                if waits[i] == 1:
                    waits[i] = 0
        self._replace(shanten, waits)
        return shanten


@lru_cache(maxsize=200000)
def _calculate_cached(table: tuple[int, ...], allow_kokushi: bool, allow_chiitoitsu: bool) -> ShantenResult:
    calculator = ShantenCalculator(list(table))

    if allow_chiitoitsu:
        calculator.calculate_chiitoitsu()
        if calculator.best_shanten < 0:
            return calculator.result()

    if allow_kokushi:
        # three or fewer tiles from kokushi cannot be beaten by a standard hand
        if calculator.calculate_kokushi() < 3:
            return calculator.result()

    calculator.calculate_standard()
    return calculator.result()


def calculate_shanten_from_table(table: Iterable[int], rules: RuleSet) -> ShantenResult:
    table = tuple(table)
    if len(table) != TABLE_SIZE:
        raise ValueError(f"Frequency table must have {TABLE_SIZE} slots, got {len(table)}")
    return _calculate_cached(table, rules.allow_kokushi, rules.allow_chiitoitsu)


def calculate_shanten(tiles: Iterable[Tile], rules: RuleSet) -> ShantenResult:
    return calculate_shanten_from_table(make_frequency_table(tiles), rules)
