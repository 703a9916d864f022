from efficiency.analysis import analyze_shanten, evaluate_discard, rank_discards
from efficiency.notation import parse_hand_string, parse_tiles
from efficiency.schemas import RuleSet
from efficiency.tiles import Suit, Tile


def rules() -> RuleSet:
    return RuleSet(allow_kokushi=True, allow_chiitoitsu=True)


def test_analyze_shanten_lists_improving_tiles():
    result = analyze_shanten(parse_hand_string("123456789m1334p"), rules())
    assert result.tiles_count == 13
    assert result.shanten == 1
    assert result.waits == ["1p", "2p", "3p", "4p", "5p", "6p"]
    assert result.tiles_improving_shanten == ["1p", "2p", "3p", "4p", "5p", "6p"]
    assert result.available_tiles == 20
    assert result.finishing_tiles == []


def test_analyze_shanten_counts_discards_and_indicators():
    result = analyze_shanten(
        parse_hand_string("123456789m1334p"),
        rules(),
        discards=parse_tiles("2p"),
        dora_indicators=parse_tiles("5p"),
    )
    assert result.available_tiles == 18


def test_analyze_shanten_tenpai_hand_reports_finishing_tiles():
    result = analyze_shanten(parse_hand_string("123456789m1122p"), rules())
    assert result.shanten == 0
    assert result.finishing_tiles == ["1p", "2p"]
    assert result.available_tiles == 4
    assert result.tiles_improving_shanten == []


def test_analyze_shanten_full_hand_reports_discards_reducing_shanten():
    result = analyze_shanten(parse_hand_string("123456789m11343z"), rules())
    assert result.tiles_count == 14
    assert result.shanten == 0
    assert result.discards_reducing_shanten == ["4z"]


def test_rank_discards_two_ply():
    result = rank_discards(parse_hand_string("123456789m11234z"), rules())
    assert result.shanten == 1
    assert result.lookahead == 2
    assert [d.tile for d in result.discards] == ["2z", "3z", "4z"]
    assert result.best.tiles == ["2z", "3z", "4z"]
    assert result.best.score == 30
    assert result.explanation[0] == "South wind: east wind, west wind, north wind (score 30)"


def test_rank_discards_single_ply_in_japanese_terms():
    result = rank_discards(parse_hand_string("123456789m11234z"), rules(), lookahead=1, terms="japanese")
    assert [d.score for d in result.discards] == [8, 8, 8]
    assert result.explanation[2] == "Pei: ton, nan, shaa (score 8)"


def test_evaluate_best_discard():
    result = evaluate_discard(parse_hand_string("123456789m11234z"), Tile(Suit.HONOR, 2), rules())
    assert result.discarded == "2z"
    assert result.score == 30
    assert result.is_best_discard
    assert result.better_discards == []
    assert result.previous_shanten == 1
    assert result.shanten == 1
    assert not result.went_back_in_shanten
    assert not result.potential_furiten


def test_evaluate_discard_going_back_in_shanten():
    result = evaluate_discard(parse_hand_string("123456789m11234z"), Tile(Suit.MAN, 1), rules())
    assert result.score == 0
    assert not result.is_best_discard
    assert result.went_back_in_shanten
    assert result.shanten == 2
    assert result.better_discards == []


def test_evaluate_discard_flags_potential_furiten():
    result = evaluate_discard(parse_hand_string("123456789m11234z"), Tile(Suit.HONOR, 2), rules(), discards=parse_tiles("1z"))
    assert result.potential_furiten


def test_evaluate_discard_reaching_tenpai():
    result = evaluate_discard(parse_hand_string("123456789m11225p"), Tile(Suit.PIN, 5), rules())
    assert result.score == 4
    assert result.is_best_discard
    assert result.shanten == 0
    assert result.waits == ["1p", "2p"]
    assert result.waits_available == 4
    assert not result.furiten


def test_evaluate_discard_reaching_furiten_tenpai():
    result = evaluate_discard(parse_hand_string("123456789m11225p"), Tile(Suit.PIN, 5), rules(), discards=parse_tiles("1p"))
    assert result.score == 3
    assert result.waits == ["1p", "2p"]
    assert result.waits_available == 3
    assert result.furiten


def test_rank_discards_defaults_to_single_ply_far_from_tenpai():
    result = rank_discards(parse_hand_string("13579m2468p1357s9s"), rules())
    assert result.shanten == 3
    assert result.lookahead == 1
    assert result.discards


def test_evaluate_discard_reports_lookahead_used():
    near = evaluate_discard(parse_hand_string("123456789m11234z"), Tile(Suit.HONOR, 2), rules())
    assert near.lookahead == 2
    far = evaluate_discard(parse_hand_string("13579m2468p1357s9s"), Tile(Suit.MAN, 1), rules())
    assert far.lookahead == 1
