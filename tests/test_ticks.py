import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from daily15.visualization.ticks import PygameTickSource  # noqa: E402


@pytest.fixture
def source():
    pygame.init()
    source = PygameTickSource()
    yield source
    source.close()
    pygame.quit()


def test_cancelled_event_type_is_reused(source):
    first = source.schedule(1000.0, lambda: None)
    first.cancel()
    second = source.schedule(1000.0, lambda: None)
    assert second.event_type == first.event_type

    third = source.schedule(1000.0, lambda: None)
    assert third.event_type != second.event_type


def test_repeated_rounds_do_not_allocate_new_types(source):
    seen = set()
    for _ in range(50):
        timer = source.schedule(1000.0, lambda: None)
        seen.add(timer.event_type)
        timer.cancel()
    assert len(seen) == 1


def test_stale_handle_cannot_cancel_reused_type(source):
    calls = []
    old = source.schedule(1000.0, lambda: calls.append("old"))
    old.cancel()
    new = source.schedule(1000.0, lambda: calls.append("new"))
    old.cancel()
    assert source.dispatch(pygame.event.Event(new.event_type))
    assert calls == ["new"]


def test_dispatch_ignores_foreign_events(source):
    assert not source.dispatch(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a))
