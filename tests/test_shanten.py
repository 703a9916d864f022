import pytest

from efficiency.notation import parse_tiles
from efficiency.schemas import RuleSet
from efficiency.shanten import MAX_SHANTEN, ShantenCalculator, calculate_shanten
from efficiency.tiles import EMPTY_TILE, TERMINALS_AND_HONORS_INDICES, Suit, Tile, make_frequency_table


def all_rules() -> RuleSet:
    return RuleSet(allow_kokushi=True, allow_chiitoitsu=True)


def standard_only() -> RuleSet:
    return RuleSet(allow_kokushi=False, allow_chiitoitsu=False)


def test_calculator_defaults():
    calculator = ShantenCalculator(make_frequency_table([]))
    assert calculator.complete_sets == 0
    assert calculator.pair == 0
    assert calculator.partial_sets == 0
    assert calculator.best_shanten == MAX_SHANTEN
    assert calculator.best_waits == [0] * 37


def test_example_hand_one_shanten():
    result = calculate_shanten(parse_tiles("123456789m1334p"), all_rules())
    assert result.shanten == 1
    assert result.wait_tiles == parse_tiles("123456p")


def test_example_hand_two_shanten():
    result = calculate_shanten(parse_tiles("122456789m1369p"), all_rules())
    assert result.shanten == 2
    assert result.wait_tiles == parse_tiles("1234m2456789p")


def test_tenpai_hand_waits_on_both_pairs():
    result = calculate_shanten(parse_tiles("123456789m1122p"), all_rules())
    assert result.shanten == 0
    assert result.wait_tiles == parse_tiles("12p")


def test_complete_standard_hand():
    result = calculate_shanten(parse_tiles("123m456p789s11122z"), all_rules())
    assert result.shanten == -1


def test_seven_pairs_short_circuits_standard_search():
    tiles = parse_tiles("1122m3344p5566s77z")
    result = calculate_shanten(tiles, all_rules())
    assert result.shanten == -1
    assert result.waits == (0,) * 37


def test_seven_pairs_disabled_falls_back_to_standard_shape():
    tiles = parse_tiles("1122m3344p5566s77z")
    result = calculate_shanten(tiles, RuleSet(allow_kokushi=True, allow_chiitoitsu=False))
    assert result.shanten == 3
    assert result.wait_tiles


def test_seven_pairs_counts_four_of_a_kind_once():
    calculator = ShantenCalculator(make_frequency_table(parse_tiles("1111m2233p4455s6z")))
    assert calculator.calculate_chiitoitsu() == 2


def test_thirteen_orphans_thirteen_sided_wait():
    result = calculate_shanten(parse_tiles("19m19p19s1234567z"), all_rules())
    assert result.shanten == 0
    assert result.wait_tiles == parse_tiles("19m19p19s1234567z")


def test_thirteen_orphans_with_pair_only_waits_on_missing_tile():
    result = calculate_shanten(parse_tiles("119m19p19s123456z"), all_rules())
    assert result.shanten == 0
    assert result.wait_tiles == parse_tiles("7z")


def test_thirteen_orphans_disabled():
    result = calculate_shanten(parse_tiles("19m19p19s1234567z"), RuleSet(allow_kokushi=False, allow_chiitoitsu=True))
    assert result.shanten > 0


def test_thirteen_orphans_waits_only_cover_orphans():
    calculator = ShantenCalculator(make_frequency_table(parse_tiles("19m19p19s1234567z")))
    assert calculator.calculate_kokushi() == 0
    assert {i for i, flag in enumerate(calculator.best_waits) if flag} == set(TERMINALS_AND_HONORS_INDICES)


def test_sentinel_tile_is_rejected():
    with pytest.raises(ValueError):
        calculate_shanten(parse_tiles("123456789m112p") + [EMPTY_TILE], all_rules())


@pytest.mark.parametrize(
    "text",
    [
        "123456789m1334p",
        "122456789m1369p",
        "19m19p19s1234567z",
        "147m258p369s1234z",
        "1112345678999m",
        "1122334455667z",
        "135m246p79s12345z",
    ],
)
def test_shanten_is_bounded_and_waits_are_flags(text):
    tiles = parse_tiles(text)
    for rules in (all_rules(), standard_only()):
        result = calculate_shanten(tiles, rules)
        assert -1 <= result.shanten <= MAX_SHANTEN
        if len(tiles) == 13:
            assert result.shanten >= 0
        assert set(result.waits) <= {0, 1, 2}
        assert result.waits[9] == result.waits[19] == result.waits[29] == 0


def test_shanten_is_deterministic():
    tiles = parse_tiles("122456789m1369p")
    first = ShantenCalculator(make_frequency_table(tiles))
    second = ShantenCalculator(make_frequency_table(tiles))
    first.calculate_standard()
    second.calculate_standard()
    assert first.result() == second.result()
    assert calculate_shanten(tiles, all_rules()) == calculate_shanten(list(reversed(tiles)), all_rules())


def test_search_restores_hand_table():
    table = make_frequency_table(parse_tiles("122456789m1369p"))
    calculator = ShantenCalculator(table)
    calculator.calculate_standard()
    assert calculator.hand_table == table
    assert calculator.waits_table == [0] * 37
    assert calculator.complete_sets == calculator.partial_sets == calculator.pair == 0


def test_shape_tie_keeps_only_standard_waits():
    tiles = parse_tiles("25789m58p77s2455z")
    calculator = ShantenCalculator(make_frequency_table(tiles))
    assert calculator.calculate_chiitoitsu() == 4
    assert calculator.calculate_standard() == 4

    result = calculate_shanten(tiles, all_rules())
    assert result.shanten == 4
    assert result == calculator.result()
    assert result.wait_tiles == parse_tiles("1234567m3456789p7s245z")
    # lone tiles only seven pairs would wait on
    assert Tile(Suit.MAN, 8) not in result.wait_tiles
    assert Tile(Suit.MAN, 9) not in result.wait_tiles


def test_earlier_shape_survives_worse_standard_search():
    calculator = ShantenCalculator(make_frequency_table(parse_tiles("19m19p19s1234567z")))
    assert calculator.calculate_chiitoitsu() == 6
    assert calculator.calculate_standard() == 8
    assert calculator.best_shanten == 6
    assert set(calculator.result().wait_tiles) == set(parse_tiles("19m19p19s1234567z"))
