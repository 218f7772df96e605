import pytest

from arena.config import GameConfig
from arena.session import FrameScheduler, Session, SessionState, TextHud, health_text, score_text

from conftest import make_bullet, make_enemy


def test_hud_text():
    assert score_text(0) == "Score: 0"
    assert health_text(100) == "Health: 100"
    assert health_text(87.6) == "Health: 87"
    assert health_text(-8) == "Health: 0"


def test_text_hud_starts_from_configured_health():
    hud = TextHud(player_health=250.0)
    assert (hud.score, hud.health) == ("Score: 0", "Health: 250")
    assert hud.final_score is None


def test_text_hud_follows_session(clock):
    hud = TextHud()
    session = Session(GameConfig.from_dict({"player_health": 40.0}), seed=3, hud=hud, clock=clock)
    session.start()
    assert hud.health == "Health: 40"

    session.world.player.health = 1
    session.world.enemies.append(make_enemy(session.world.player.x, session.world.player.y))
    clock.now += 0.01
    session.scheduler.pump(clock.now)
    assert hud.health == "Health: 0"
    assert hud.final_score == 0


def test_new_session_is_idle(session):
    assert session.state is SessionState.IDLE
    assert not session.running
    assert not session.scheduler.pending


def test_start_resets_and_schedules(session, hud, clock):
    clock.now = 5.0
    session.start()
    assert session.state is SessionState.RUNNING
    assert session.scheduler.pending
    assert session.last_time == 5.0
    assert hud.last == ("Score: 0", "Health: 100")
    assert session.frame is not None


def test_zero_delta_first_frame_changes_nothing(session, hud, clock):
    session.start()
    world = session.world
    counts = (len(world.bullets), len(world.enemies), world.score)

    assert session.scheduler.pump(clock.now)

    assert (len(world.bullets), len(world.enemies), world.score) == counts
    assert hud.last == ("Score: 0", "Health: 100")
    assert session.world.spawn_interval == 1000


def test_loop_reschedules_while_running(session, clock):
    session.start()
    for i in range(1, 20):
        clock.now = i / 60
        assert session.scheduler.pump(clock.now)
        assert session.scheduler.pending


def test_pump_without_request_does_nothing(session):
    assert not session.scheduler.pump(1.0)


def test_delta_is_clamped(session, clock):
    session.start(now=0.0)
    session.input.queue.key_down("d")
    x0 = session.world.player.x

    # a 10 second stall only advances 50 ms
    session.scheduler.pump(10.0)
    assert session.world.player.x == pytest.approx(x0 + 220 * 0.05)
    assert session.last_time == 10.0


def test_fire_while_running_creates_bullets(session):
    session.start(now=0.0)
    p = session.world.player
    session.input.queue.pointer_move(p.x + 50, p.y)
    session.input.queue.pointer_down()
    session.scheduler.pump(0.0)
    assert len(session.world.bullets) == 1
    assert session.world.bullets[0].vx == 1500.0


def test_fire_before_start_is_ignored(session):
    session.input.queue.fire()
    session.input.queue.key_down("space")
    assert session.step(0.01).shots == 0
    session.start(now=0.0)
    session.scheduler.pump(0.0)
    assert session.world.bullets == []


def test_step_when_not_running_is_noop(session):
    events = session.step(0.05)
    assert events.shots == 0
    assert session.world.spawn_timer == 0.0


def test_defeat_ends_session(session, hud):
    session.start(now=0.0)
    world = session.world
    world.player.health = 10
    world.score = 40
    world.enemies.append(make_enemy(world.player.x, world.player.y))

    session.scheduler.pump(0.01)

    assert session.state is SessionState.ENDED
    assert not session.scheduler.pending
    assert hud.final_scores == [40]
    assert hud.last == ("Score: 40", "Health: 0")

    # the loop stays stopped
    assert not session.scheduler.pump(0.02)


def test_kill_updates_hud(session, hud):
    session.start(now=0.0)
    session.world.enemies.append(make_enemy(100, 100, hp=1))
    session.world.bullets.append(make_bullet(100, 100))
    session.scheduler.pump(0.01)
    assert hud.last == ("Score: 10", "Health: 100")


def test_restart_after_defeat(session, hud):
    session.start(now=0.0)
    world = session.world
    world.player.health = 1
    world.enemies.append(make_enemy(world.player.x, world.player.y))
    world.bullets.append(make_bullet(10, 10))
    world.spawn_interval = 500.0
    world.score = 70
    session.scheduler.pump(0.01)
    assert session.state is SessionState.ENDED

    session.restart(now=1.0)

    assert session.state is SessionState.RUNNING
    assert session.scheduler.pending
    assert world.enemies == [] and world.bullets == []
    assert world.score == 0
    assert world.player.health == 100
    assert (world.player.x, world.player.y) == (400, 300)
    assert world.spawn_timer == 0.0
    assert world.spawn_interval == 1000.0
    assert hud.last == ("Score: 0", "Health: 100")
    assert session.games_played == 2


def test_sessions_are_independent(config):
    a = Session(config, seed=1)
    b = Session(config, seed=1)
    a.start(now=0.0)
    b.start(now=0.0)
    a.world.score = 50
    a.input.queue.key_down("w")
    a.scheduler.pump(0.05)
    b.scheduler.pump(0.05)
    assert b.world.score == 0
    assert b.world.player.y == 300


def test_verbose_logging(config, capsys):
    s = Session(config, verbose=1)
    s.start(now=0.0)
    s.world.player.health = 1
    s.world.enemies.append(make_enemy(s.world.player.x, s.world.player.y))
    s.scheduler.pump(0.01)
    out = capsys.readouterr().out
    assert "[Session] Game 1 started" in out
    assert "[Session] Game over - final score 0" in out


def test_frame_scheduler_calls_tick_once_per_request():
    calls = []
    scheduler = FrameScheduler(calls.append)
    scheduler.request_frame()
    scheduler.request_frame()
    assert scheduler.pump(1.0)
    assert not scheduler.pump(2.0)
    assert calls == [1.0]


def test_frame_scheduler_cancel():
    calls = []
    scheduler = FrameScheduler(calls.append)
    scheduler.request_frame()
    scheduler.cancel()
    assert not scheduler.pump(1.0)
    assert calls == []
