"""
Input handling
--------------
Platform callbacks (arcade window, agent harness, tests) never touch game state
directly. They push events into an InputQueue; once per tick the InputState
drains the queue in arrival order and hands the simulation an immutable
InputSnapshot.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional, Set, Tuple, Union


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Platform key name -> logical direction (WASD plus arrow-key synonyms)
KEY_BINDINGS: Dict[str, Direction] = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
}

FIRE_KEYS = frozenset({"space", " "})


def translate_key(name: str) -> Optional[Direction]:
    """Map a platform key name to a direction, None for unbound keys"""
    return KEY_BINDINGS.get(name.lower())


def is_fire_key(name: str) -> bool:
    return name.lower() in FIRE_KEYS


def pointer_to_world(
    x: float,
    y: float,
    displayed_size: Tuple[float, float],
    native_size: Tuple[float, float],
    flip_y: bool = False,
) -> Tuple[float, float]:
    """
    Remap pointer coordinates from the displayed surface into world space.

    The world uses a top-left origin; pass flip_y=True when the platform
    reports pointer positions with a bottom-left origin (arcade/pyglet).
    """
    dw, dh = displayed_size
    nw, nh = native_size
    sx = nw / dw if dw > 0 else 1.0
    sy = nh / dh if dh > 0 else 1.0
    if flip_y:
        y = dh - y
    return x * sx, y * sy


# ----------------------------
# Events
# ----------------------------

@dataclass(frozen=True)
class KeyEvent:
    direction: Direction
    key: str
    pressed: bool


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerButton:
    pressed: bool


@dataclass(frozen=True)
class FireRequest:
    pass


InputEvent = Union[KeyEvent, PointerMove, PointerButton, FireRequest]


class InputQueue:
    """FIFO of input events written by platform callbacks"""

    def __init__(self):
        self._events: Deque[InputEvent] = deque()

    def __len__(self):
        return len(self._events)

    def key_down(self, name: str):
        """Key press; fire keys also request a shot"""
        direction = translate_key(name)
        if direction is not None:
            self._events.append(KeyEvent(direction, name.lower(), True))
        if is_fire_key(name):
            self._events.append(FireRequest())

    def key_up(self, name: str):
        direction = translate_key(name)
        if direction is not None:
            self._events.append(KeyEvent(direction, name.lower(), False))

    def pointer_move(self, x: float, y: float):
        self._events.append(PointerMove(float(x), float(y)))

    def pointer_down(self):
        """Pointer press; also requests a shot"""
        self._events.append(PointerButton(True))
        self._events.append(FireRequest())

    def pointer_up(self):
        self._events.append(PointerButton(False))

    def fire(self):
        self._events.append(FireRequest())

    def drain(self) -> List[InputEvent]:
        events = list(self._events)
        self._events.clear()
        return events


# ----------------------------
# Snapshot / latched state
# ----------------------------

@dataclass(frozen=True)
class InputSnapshot:
    """Consistent view of the input for one tick"""
    pressed: frozenset = frozenset()
    pointer_x: float = 0.0
    pointer_y: float = 0.0
    pointer_down: bool = False
    # Pointer position in effect for every shot requested during the tick
    shots: Tuple[Tuple[float, float], ...] = ()

    def is_pressed(self, direction: Direction) -> bool:
        return direction in self.pressed

    def axis(self) -> Tuple[float, float]:
        """Raw movement axis from the held directions; opposite keys cancel"""
        mx = float(self.is_pressed(Direction.RIGHT)) - float(self.is_pressed(Direction.LEFT))
        my = float(self.is_pressed(Direction.DOWN)) - float(self.is_pressed(Direction.UP))
        return mx, my

    @property
    def pointer(self) -> Tuple[float, float]:
        return self.pointer_x, self.pointer_y


class InputState:
    """Latched input state, updated only when a snapshot is taken"""

    def __init__(self):
        self.queue = InputQueue()
        # A direction stays held while any of its bound keys is down
        self._held: Dict[Direction, Set[str]] = {d: set() for d in Direction}
        self.pointer_x = 0.0
        self.pointer_y = 0.0
        self.pointer_down = False

    def is_pressed(self, direction: Direction) -> bool:
        return bool(self._held[direction])

    def release_all(self):
        for keys in self._held.values():
            keys.clear()
        self.pointer_down = False

    def snapshot(self) -> InputSnapshot:
        """Drain queued events in order and return the tick's snapshot"""
        shots = []
        for event in self.queue.drain():
            if isinstance(event, KeyEvent):
                if event.pressed:
                    self._held[event.direction].add(event.key)
                else:
                    self._held[event.direction].discard(event.key)
            elif isinstance(event, PointerMove):
                self.pointer_x, self.pointer_y = event.x, event.y
            elif isinstance(event, PointerButton):
                self.pointer_down = event.pressed
            elif isinstance(event, FireRequest):
                shots.append((self.pointer_x, self.pointer_y))

        return InputSnapshot(
            pressed=frozenset(d for d in Direction if self._held[d]),
            pointer_x=self.pointer_x,
            pointer_y=self.pointer_y,
            pointer_down=self.pointer_down,
            shots=tuple(shots),
        )
