import logging
import random
from datetime import date

import pytest

from daily15.effects import SLIDING_CELEBRATION, RecordingEffects
from daily15.sliding import ManualClock, Phase, SlidingBoard, SlidingPuzzleGame, rank

IDENTITY_3 = [1, 2, 3, 4, 5, 6, 7, 8, None]
IDENTITY_4 = list(range(1, 16)) + [None]


@pytest.fixture
def effects():
    return RecordingEffects()


@pytest.fixture
def clock():
    return ManualClock()


def _layout_with_empty_at(size, position):
    tiles = list(range(1, size * size)) + [None]
    last = size * size - 1
    tiles[position], tiles[last] = tiles[last], tiles[position]
    return tiles


def test_daily_board_is_reproducible_for_a_date(effects):
    day = date(2025, 1, 15)
    first = SlidingPuzzleGame("daily15", effects=effects, today=day)
    second = SlidingPuzzleGame("daily15", effects=effects, today=day)
    assert first.seed == 20250115
    assert first.shuffle_path == second.shuffle_path
    assert first.tiles == second.tiles
    assert first.phase == Phase.PLAYING
    assert first.move_count == 0
    assert not first.solved


def test_daily_reset_restores_same_board(effects):
    game = SlidingPuzzleGame("daily15", effects=effects, today=date(2025, 3, 1))
    original = game.tiles
    game.move(game.valid_moves()[0])
    game.reset()
    assert game.tiles == original
    assert game.move_count == 0


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        SlidingPuzzleGame("sixteen")


def test_from_tiles_size_must_match_mode():
    with pytest.raises(ValueError):
        SlidingPuzzleGame.from_tiles(IDENTITY_3, mode="daily15")


def test_solved_layout_reports_solved_without_moves(effects):
    game = SlidingPuzzleGame.from_tiles(IDENTITY_3, effects=effects)
    assert game.mode == "quickplay"
    assert game.solved
    assert game.move_count == 0
    assert effects.celebrations == []
    assert not game.move(5)
    assert not game.move(7)


@pytest.mark.parametrize("size", [3, 4])
def test_non_adjacent_moves_are_no_ops_for_every_empty_position(size, clock):
    for position in range(size * size):
        tiles = _layout_with_empty_at(size, position)
        game = SlidingPuzzleGame.from_tiles(tiles, effects=RecordingEffects(), ticks=clock)
        er, ec = divmod(position, size)
        for index in range(-1, size * size + 1):
            r, c = divmod(index, size)
            if 0 <= index < size * size and abs(r - er) + abs(c - ec) == 1:
                continue
            assert not game.move(index)
            assert game.tiles == tiles
            assert game.move_count == 0
        game.close()


def test_adjacent_move_swaps_and_counts(effects, clock):
    game = SlidingPuzzleGame.from_tiles([1, 2, 3, 4, None, 5, 7, 8, 6], effects=effects, ticks=clock)
    assert game.move(5)
    assert game.tiles == [1, 2, 3, 4, 5, None, 7, 8, 6]
    assert game.move_count == 1
    assert game.move_tile(2, 2)
    assert game.solved
    assert game.move_count == 2


def test_completion_celebrates_once(effects, clock):
    game = SlidingPuzzleGame.from_tiles([1, 2, 3, 4, 5, 6, 7, None, 8], effects=effects, ticks=clock)
    assert game.move(8)
    assert game.solved
    assert game.phase == Phase.SOLVED
    assert effects.celebrations == [SLIDING_CELEBRATION]
    assert not game.move(7)
    assert not game.move(5)
    assert len(effects.celebrations) == 1


def test_random_play_keeps_invariants(effects):
    game = SlidingPuzzleGame("daily15", effects=effects, today=date(2025, 6, 1))
    rng = random.Random(0)
    previous = 0
    for _ in range(400):
        options = game.valid_moves()
        if not options:
            break
        assert game.move(rng.choice(options))
        assert game.tiles.count(None) == 1
        assert game.move_count == previous + 1
        assert game.solved == (game.tiles == IDENTITY_4)
        previous = game.move_count


def test_share_copies_daily_result(effects):
    tiles = list(range(1, 15)) + [None, 15]
    game = SlidingPuzzleGame.from_tiles(tiles, effects=effects, today=date(2025, 9, 19))
    assert game.share() is None
    assert game.move(15)
    text = game.share()
    assert text == "Daily15.xyz #1\nSolved in 1 moves."
    assert effects.clipboard == [text]
    assert game.snapshot()["rank"] == "Grandmaster"


@pytest.mark.parametrize(
    "moves,label",
    [(0, "Grandmaster"), (59, "Grandmaster"), (60, "Grandmaster"), (61, "Master"), (80, "Master"),
     (81, "Expert"), (100, "Expert"), (140, "Scholar"), (141, "Novice"), (10_000, "Novice")],
)
def test_rank_tiers(moves, label):
    assert rank(moves) == label


def test_quickplay_waits_for_start(effects, clock):
    game = SlidingPuzzleGame("quickplay", effects=effects, ticks=clock)
    assert game.phase == Phase.WAITING
    assert game.time_left == 60
    assert clock.active == 0
    for index in range(9):
        assert not game.move(index)
    assert game.move_count == 0


def test_quickplay_times_out(effects, clock):
    game = SlidingPuzzleGame("quickplay", effects=effects, ticks=clock)
    assert game.start_round(seed=123)
    assert game.phase == Phase.PLAYING
    assert clock.active == 1

    clock.advance(59)
    assert game.time_left == 1
    assert game.phase == Phase.PLAYING

    clock.advance(1)
    assert game.time_left == 0
    assert game.phase == Phase.TIMED_OUT
    assert not game.solved
    assert clock.active == 0

    tiles = game.tiles
    assert all(not game.move(index) for index in range(9))
    assert game.tiles == tiles

    clock.advance(5)
    assert game.time_left == 0


def test_move_before_expiring_tick_is_accepted(effects, clock):
    game = SlidingPuzzleGame("quickplay", effects=effects, ticks=clock)
    game.start_round(seed=7)
    clock.advance(59)
    assert game.move(game.valid_moves()[0])
    clock.advance(1)
    assert not game.move(game.board.neighbours(game.board.empty_index)[0])


def test_solving_stops_countdown(effects, clock):
    game = SlidingPuzzleGame.from_tiles([1, 2, 3, 4, 5, 6, 7, None, 8], effects=effects, ticks=clock)
    assert game.phase == Phase.PLAYING
    clock.advance(12)
    assert game.move(8)
    assert clock.active == 0
    clock.advance(10)
    assert game.time_left == 48
    assert game.snapshot()["phase"] == "solved"


def test_reset_and_close_cancel_countdown(effects, clock):
    game = SlidingPuzzleGame("quickplay", effects=effects, ticks=clock)
    game.start_round(seed=1)
    clock.advance(5)
    game.reset()
    assert clock.active == 0
    assert game.phase == Phase.WAITING
    assert game.time_left == 60

    game.start_round(seed=2)
    assert clock.active == 1
    game.close()
    assert clock.active == 0
    clock.advance(3)
    assert game.time_left == 60


def test_again_after_solve_starts_new_round(effects, clock):
    game = SlidingPuzzleGame.from_tiles([1, 2, 3, 4, 5, 6, 7, None, 8], effects=effects, ticks=clock)
    game.move(8)
    assert game.start_round(seed=3)
    assert game.phase == Phase.PLAYING
    assert game.move_count == 0
    assert game.time_left == 60


def test_daily_mode_has_no_round_or_clock(effects):
    game = SlidingPuzzleGame("daily15", effects=effects, today=date(2025, 1, 15))
    assert not game.start_round()
    assert game.time_left is None


def test_snapshot_exposes_state(effects, clock):
    game = SlidingPuzzleGame("quickplay", effects=effects, ticks=clock)
    snap = game.snapshot()
    assert set(snap) == {"mode", "size", "tiles", "moves", "solved", "phase", "time_left",
                         "puzzle_number", "rank", "elapsed"}
    assert snap["phase"] == "waiting"
    assert snap["puzzle_number"] is None
    assert snap["elapsed"] is None
    assert snap["tiles"].count(None) == 1


def test_from_tiles_skips_the_shuffle(monkeypatch, caplog, effects):
    def fail(*args, **kwargs):
        raise AssertionError("shuffle should not run")

    monkeypatch.setattr(SlidingBoard, "shuffle", fail)
    with caplog.at_level(logging.INFO, logger="daily15.sliding.core"):
        game = SlidingPuzzleGame.from_tiles(list(range(1, 15)) + [None, 15], effects=effects)
    assert game.seed is None
    assert game.shuffle_path == []
    assert game.phase == Phase.PLAYING
    assert game.tiles == list(range(1, 15)) + [None, 15]
    assert "new board from seed" not in caplog.text
    assert "board set directly" in caplog.text
