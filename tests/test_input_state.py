import pytest

from arena.input_state import (
    Direction,
    InputState,
    InputQueue,
    pointer_to_world,
    translate_key,
)


@pytest.mark.parametrize("name, direction", [
    ("w", Direction.UP),
    ("W", Direction.UP),
    ("ArrowUp", Direction.UP),
    ("s", Direction.DOWN),
    ("down", Direction.DOWN),
    ("a", Direction.LEFT),
    ("arrowleft", Direction.LEFT),
    ("d", Direction.RIGHT),
    ("right", Direction.RIGHT),
])
def test_translate_key(name, direction):
    assert translate_key(name) is direction


def test_unknown_keys_ignored():
    state = InputState()
    state.queue.key_down("q")
    state.queue.key_down("shift")
    assert len(state.queue) == 0
    snap = state.snapshot()
    assert snap.pressed == frozenset()
    assert snap.axis() == (0.0, 0.0)


def test_keys_latch_until_released():
    state = InputState()
    state.queue.key_down("d")
    assert state.snapshot().is_pressed(Direction.RIGHT)
    # no new events: still held
    assert state.snapshot().is_pressed(Direction.RIGHT)
    state.queue.key_up("d")
    assert not state.snapshot().is_pressed(Direction.RIGHT)


def test_synonym_keys_share_a_direction():
    state = InputState()
    state.queue.key_down("w")
    state.queue.key_down("arrowup")
    state.queue.key_up("arrowup")
    assert state.snapshot().is_pressed(Direction.UP)
    state.queue.key_up("w")
    assert not state.snapshot().is_pressed(Direction.UP)


def test_opposite_keys_cancel():
    state = InputState()
    for key in ("a", "d", "w"):
        state.queue.key_down(key)
    assert state.snapshot().axis() == (0.0, -1.0)


def test_events_applied_in_arrival_order():
    state = InputState()
    state.queue.key_down("s")
    state.queue.key_up("s")
    state.queue.key_down("s")
    assert state.snapshot().is_pressed(Direction.DOWN)


def test_shots_use_pointer_position_at_request_time():
    state = InputState()
    q = state.queue
    q.pointer_move(10, 20)
    q.pointer_down()
    q.pointer_up()
    q.pointer_move(30, 40)
    q.key_down("space")
    snap = state.snapshot()
    assert snap.shots == ((10.0, 20.0), (30.0, 40.0))
    assert snap.pointer == (30.0, 40.0)
    assert snap.pointer_down is False


def test_shots_are_consumed_once():
    state = InputState()
    state.queue.fire()
    assert len(state.snapshot().shots) == 1
    assert state.snapshot().shots == ()


def test_pointer_button_flag():
    state = InputState()
    state.queue.pointer_down()
    assert state.snapshot().pointer_down is True
    state.queue.pointer_up()
    assert state.snapshot().pointer_down is False


def test_release_all():
    state = InputState()
    state.queue.key_down("a")
    state.queue.pointer_down()
    state.snapshot()
    state.release_all()
    assert not state.is_pressed(Direction.LEFT)
    assert state.pointer_down is False


def test_queue_drain_empties():
    q = InputQueue()
    q.fire()
    q.pointer_move(1, 2)
    assert len(q.drain()) == 2
    assert q.drain() == []


def test_pointer_to_world_scales_by_display_ratio():
    # surface displayed at half size
    assert pointer_to_world(100, 50, (400, 300), (800, 600)) == (200.0, 100.0)


def test_pointer_to_world_flips_bottom_left_origin():
    assert pointer_to_world(0, 0, (800, 600), (800, 600), flip_y=True) == (0.0, 600.0)
    assert pointer_to_world(10, 590, (800, 600), (800, 600), flip_y=True) == (10.0, 10.0)


def test_pointer_to_world_tolerates_off_surface_points():
    assert pointer_to_world(-50, 900, (800, 600), (800, 600)) == (-50.0, 900.0)
