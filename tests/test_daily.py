from datetime import date

import pytest

from daily15.daily import SeededRandom, daily_seed, puzzle_number, share_text
from daily15.daily.seeded_random import MODULUS


def _draws(seed, n=500):
    rng = SeededRandom(seed)
    return [rng.next() for _ in range(n)]


@pytest.mark.parametrize("seed", [1, 42, 20250115, 1_700_000_000_000, MODULUS - 1])
def test_same_seed_gives_same_sequence(seed):
    assert _draws(seed) == _draws(seed)


@pytest.mark.parametrize("seed", [0, -1, -5, -(MODULUS - 1), 1, 7, MODULUS, MODULUS - 1, 2 * MODULUS, 1_700_000_000_000])
def test_values_stay_in_unit_interval(seed):
    assert all(0.0 <= value < 1.0 for value in _draws(seed, 2000))


def test_first_draw_matches_park_miller_step():
    assert SeededRandom(1).next() == (16807 - 1) / (MODULUS - 1)


def test_zero_seed_is_remapped_away_from_absorbing_state():
    # 0 -> MODULUS - 1, whose first step lands on MODULUS - 16807
    assert SeededRandom(0).next() == (MODULUS - 16807 - 1) / (MODULUS - 1)
    assert SeededRandom(MODULUS).next() == SeededRandom(0).next()


def test_negative_seed_keeps_sign_of_remainder():
    assert _draws(-5, 10) == _draws(MODULUS - 6, 10)


@pytest.mark.parametrize("seed", [-(MODULUS - 1), -(MODULUS - 1) - 2 * MODULUS])
def test_negative_seed_never_lands_on_zero_state(seed):
    rng = SeededRandom(seed)
    assert rng._state != 0
    assert _draws(seed, 10) == _draws(0, 10)


def test_choice_uses_one_draw_per_pick():
    options = ["a", "b", "c", "d"]
    rng = SeededRandom(99)
    reference = SeededRandom(99)
    for _ in range(50):
        assert rng.choice(options) == options[int(reference.next() * len(options))]


def test_choice_rejects_empty_sequence():
    with pytest.raises(ValueError):
        SeededRandom(1).choice([])


def test_daily_seed_encodes_date():
    assert daily_seed(date(2025, 1, 15)) == 2025 * 10000 + 1 * 100 + 15
    assert daily_seed(date(2025, 12, 31)) == 20251231


def test_puzzle_number_counts_from_epoch():
    assert puzzle_number(today=date(2025, 9, 19)) == 1
    assert puzzle_number(today=date(2025, 9, 20)) == 2
    assert puzzle_number(today=date(2026, 9, 19)) == 366
    assert puzzle_number(date(2024, 2, 28), today=date(2024, 3, 1)) == 3


def test_share_text_format():
    assert share_text(42, 7) == "Daily15.xyz #7\nSolved in 42 moves."
