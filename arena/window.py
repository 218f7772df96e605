"""
Arcade front-end: the interactive window.

The window is only a collaborator: callbacks push events into the session's
input queue, on_update pumps the frame scheduler, on_draw paints the latest
Frame. World coordinates are y-down, arcade is y-up, so y is flipped here.
"""

from __future__ import annotations

import arcade

from .input_state import pointer_to_world
from .renderer import BACKGROUND, Frame, Circle, Line, Polygon
from .session import Session, SessionState, TextHud, score_text

# arcade key symbol -> platform key name understood by the input layer
KEY_NAMES = {
    arcade.key.W: "w",
    arcade.key.A: "a",
    arcade.key.S: "s",
    arcade.key.D: "d",
    arcade.key.UP: "up",
    arcade.key.DOWN: "down",
    arcade.key.LEFT: "left",
    arcade.key.RIGHT: "right",
    arcade.key.SPACE: "space",
}

HUD_C = (220, 220, 220)
OVERLAY_C = (0, 0, 0, 170)


class ArenaWindow(arcade.Window):
    """Arcade window for playing a Session"""

    def __init__(self, session: Session, title: str = "Arena"):
        cfg = session.config
        super().__init__(cfg.width, cfg.height, title)
        self.session = session
        self.hud = session.hud if isinstance(session.hud, TextHud) else TextHud(cfg.player_health)
        session.hud = self.hud
        self.background_color = BACKGROUND

    # ----------------------------
    # Coordinates
    # ----------------------------

    def _flip(self, y: float) -> float:
        return self.session.config.height - y

    def _to_world(self, x: float, y: float):
        cfg = self.session.config
        return pointer_to_world(x, y, self.get_size(), (cfg.width, cfg.height), flip_y=True)

    # ----------------------------
    # Input callbacks
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        if symbol in (arcade.key.ENTER, arcade.key.RETURN) and not self.session.running:
            self.session.start()
            return

        name = KEY_NAMES.get(symbol)
        if name is not None:
            self.session.input.queue.key_down(name)

    def on_key_release(self, symbol: int, modifiers: int):
        name = KEY_NAMES.get(symbol)
        if name is not None:
            self.session.input.queue.key_up(name)

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        self.session.input.queue.pointer_move(*self._to_world(x, y))

    def on_mouse_drag(self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int):
        self.on_mouse_motion(x, y, dx, dy)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if not self.session.running:
            self.session.start()
            return
        queue = self.session.input.queue
        queue.pointer_move(*self._to_world(x, y))
        queue.pointer_down()

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int):
        self.session.input.queue.pointer_up()

    # ----------------------------
    # Frame pacing / drawing
    # ----------------------------

    def on_update(self, delta_time: float):
        self.session.scheduler.pump(self.session.clock())

    def on_draw(self):
        self.clear()
        frame = self.session.frame or self.session.render()
        self.draw_frame(frame)
        self.draw_hud()

        if self.session.state is SessionState.IDLE:
            self.draw_overlay("ARENA", "WASD to move, mouse to aim, click or Space to shoot",
                              "Press Enter or click to start")
        elif self.session.state is SessionState.ENDED:
            self.draw_overlay("GAME OVER", score_text(self.hud.final_score or 0),
                              "Press Enter or click to restart")

    def draw_frame(self, frame: Frame):
        for shape in frame.shapes:
            if isinstance(shape, Line):
                arcade.draw_line(shape.x1, self._flip(shape.y1), shape.x2, self._flip(shape.y2),
                                 shape.color, shape.width)
            elif isinstance(shape, Circle):
                y = self._flip(shape.y)
                if shape.fill is not None:
                    arcade.draw_circle_filled(shape.x, y, shape.radius, shape.fill)
                if shape.outline is not None:
                    arcade.draw_circle_outline(shape.x, y, shape.radius, shape.outline)
            elif isinstance(shape, Polygon):
                points = [(x, self._flip(y)) for x, y in shape.points]
                arcade.draw_polygon_filled(points, shape.fill)

    def draw_hud(self):
        arcade.draw_text(self.hud.score, 12, self.height - 28, HUD_C, 14)
        arcade.draw_text(self.hud.health, 12, self.height - 50, HUD_C, 14)

    def draw_overlay(self, title: str, line1: str, line2: str):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, OVERLAY_C)
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text(title, cx, cy + 40, HUD_C, 36, anchor_x="center")
        arcade.draw_text(line1, cx, cy, HUD_C, 16, anchor_x="center")
        arcade.draw_text(line2, cx, cy - 30, HUD_C, 14, anchor_x="center")


def play(session: Session):
    """Open the window and run the arcade event loop until it closes"""
    window = ArenaWindow(session)
    arcade.run()
    return window
