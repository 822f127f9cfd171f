# tests/test_scheduler.py
from __future__ import annotations

from ctxmenu.utils.scheduler import Scheduler


def test_runs_only_due_timers_in_order(clock):
    sched = Scheduler(clock)
    fired = []
    sched.call_later(200, lambda: fired.append("late"))
    sched.call_later(100, lambda: fired.append("early"))

    assert sched.run_due() == 0
    clock.advance(100)
    assert sched.run_due() == 1
    clock.advance(100)
    sched.run_due()
    assert fired == ["early", "late"]
    assert sched.pending == 0


def test_cancel_is_idempotent_and_safe_after_firing(clock):
    sched = Scheduler(clock)
    fired = []
    cancelled = sched.call_later(50, lambda: fired.append("x"))
    cancelled.cancel()
    cancelled.cancel()

    done = sched.call_later(0, lambda: fired.append("y"))
    sched.run_due()
    done.cancel()

    clock.advance(100)
    sched.run_due()
    assert fired == ["y"]
    assert done.fired and not done.active
    assert not cancelled.active and not cancelled.fired


def test_negative_delay_runs_on_next_tick(clock):
    sched = Scheduler(clock)
    fired = []
    sched.call_later(-10, lambda: fired.append(1))
    assert sched.run_due() == 1


def test_clear_cancels_everything(clock):
    sched = Scheduler(clock)
    handles = [sched.call_later(10, lambda: None) for _ in range(3)]
    assert sched.pending == 3
    sched.clear()
    assert sched.pending == 0
    assert not any(h.active for h in handles)
