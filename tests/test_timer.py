from daily15.sliding import Countdown, ManualClock, Phase, SlidingPuzzleGame
from daily15.effects import RecordingEffects


class LeakySource:
    """Keeps firing callbacks after cancel, like a queued timer event"""

    def __init__(self):
        self.callbacks = []
        self.cancelled = 0

    def schedule(self, interval, callback):
        self.callbacks.append(callback)
        return self

    def cancel(self):
        self.cancelled += 1

    def fire_all(self):
        for callback in list(self.callbacks):
            callback()


def test_countdown_expires_once():
    clock = ManualClock()
    expired = []
    countdown = Countdown(3, clock, lambda: expired.append(True))
    countdown.start()
    assert countdown.running
    clock.advance(2)
    assert countdown.remaining == 1
    assert expired == []
    clock.advance(4)
    assert countdown.remaining == 0
    assert expired == [True]
    assert not countdown.running


def test_restart_keeps_a_single_schedule():
    clock = ManualClock()
    countdown = Countdown(10, clock, lambda: None)
    countdown.start()
    countdown.start()
    countdown.start()
    assert clock.active == 1
    clock.advance(1)
    assert countdown.remaining == 9


def test_rewind_restores_full_time():
    clock = ManualClock()
    countdown = Countdown(5, clock, lambda: None)
    countdown.start()
    clock.advance(3)
    countdown.rewind()
    assert countdown.remaining == 5
    assert not countdown.running
    assert clock.active == 0


def test_stale_ticks_after_stop_are_dropped():
    source = LeakySource()
    expired = []
    countdown = Countdown(2, source, lambda: expired.append(True))
    countdown.start()
    countdown.stop()
    source.fire_all()
    source.fire_all()
    assert countdown.remaining == 2
    assert expired == []


def test_stale_ticks_after_restart_do_not_double_count():
    source = LeakySource()
    countdown = Countdown(10, source, lambda: None)
    countdown.start()
    countdown.start()
    source.fire_all()
    assert countdown.remaining == 9


def test_game_ignores_ticks_from_previous_round():
    source = LeakySource()
    game = SlidingPuzzleGame("quickplay", effects=RecordingEffects(), ticks=source)
    game.start_round(seed=11)
    game.reset()
    source.fire_all()
    assert game.phase == Phase.WAITING
    assert game.time_left == 60

    game.start_round(seed=12)
    source.fire_all()
    assert game.time_left == 59
    assert game.phase == Phase.PLAYING
