from emojilink.components.deferred_action import DeferredAction
from emojilink.events.bus import EventBus
from emojilink.systems.scheduler import SchedulerSystem
from emojilink.utils.game_state import advance_generation
from emojilink.world import create_world
from tests.helpers import drive_ticks


def _scheduler():
    bus = EventBus()
    world = create_world(bus)
    return bus, world, SchedulerSystem(world, bus)


def test_action_fires_once_delay_has_elapsed():
    bus, world, scheduler = _scheduler()
    fired = []
    scheduler.schedule(0.2, lambda: fired.append("clear"))
    drive_ticks(bus, count=3, dt=0.05)
    assert fired == []
    drive_ticks(bus, count=1, dt=0.05)
    assert fired == ["clear"]
    drive_ticks(bus, count=10, dt=0.05)
    assert fired == ["clear"]
    assert not list(world.get_component(DeferredAction))


def test_actions_fire_in_due_then_scheduling_order():
    bus, _, scheduler = _scheduler()
    fired = []
    scheduler.schedule(0.3, lambda: fired.append("late"))
    scheduler.schedule(0.1, lambda: fired.append("early"))
    scheduler.schedule(0.1, lambda: fired.append("early-second"))
    drive_ticks(bus, count=1, dt=1.0)
    assert fired == ["early", "early-second", "late"]


def test_stale_generation_is_dropped():
    bus, world, scheduler = _scheduler()
    fired = []
    scheduler.schedule(0.1, lambda: fired.append("stale"))
    advance_generation(world)
    scheduler.schedule(0.1, lambda: fired.append("fresh"))
    drive_ticks(bus, count=1, dt=0.2)
    assert fired == ["fresh"]
    assert not list(world.get_component(DeferredAction))


def test_interval_action_repeats_and_catches_up():
    bus, _, scheduler = _scheduler()
    fired = []
    scheduler.schedule(1.0, lambda: fired.append(scheduler.now), label="countdown", interval=1.0)
    drive_ticks(bus, count=1, dt=0.5)
    assert fired == []
    drive_ticks(bus, count=1, dt=3.0)
    assert len(fired) == 3
    assert scheduler.time_until("countdown") == 0.5


def test_cancel_and_cancel_all():
    bus, _, scheduler = _scheduler()
    fired = []
    first = scheduler.schedule(0.1, lambda: fired.append("a"), label="a")
    scheduler.schedule(0.1, lambda: fired.append("b"), label="b")
    scheduler.schedule(0.1, lambda: fired.append("c"), label="c")
    assert scheduler.cancel(first)
    assert not scheduler.cancel(first)
    assert scheduler.cancel_all(label="b") == 1
    assert [action.label for action in scheduler.pending()] == ["c"]
    drive_ticks(bus, count=1, dt=0.2)
    assert fired == ["c"]
    assert scheduler.cancel_all() == 0


def test_callback_may_schedule_followup():
    bus, _, scheduler = _scheduler()
    fired = []

    def first():
        fired.append("first")
        scheduler.schedule(0.3, lambda: fired.append("second"))

    scheduler.schedule(0.2, first)
    drive_ticks(bus, count=4, dt=0.05)
    assert fired == ["first"]
    drive_ticks(bus, count=6, dt=0.05)
    assert fired == ["first", "second"]


def test_time_until_unknown_label_is_none():
    _, _, scheduler = _scheduler()
    assert scheduler.time_until("countdown") is None
