"""Integration tests driving the engine through long operation sequences."""

import random
import threading

import pytest

from ticketq.data_models.ticket import Priority, Ticket
from ticketq.engine.scheduler import SchedulingEngine


def random_session(engine: SchedulingEngine, rng: random.Random, steps: int) -> None:
    next_id = 0
    for _ in range(steps):
        op = rng.choice(["enqueue", "enqueue", "dispatch", "finish", "remove", "undo"])
        if op == "enqueue":
            priority = rng.choice([Priority.NORMAL, Priority.URGENT])
            engine.enqueue(
                Ticket(id=f"t{next_id}", name="Customer", request_type="Soporte", priority=priority)
            )
            next_id += 1
        elif op == "dispatch":
            engine.dispatch_next()
        elif op == "finish":
            engine.finish_service("checked")
        elif op == "remove":
            waiting = engine.waiting_tickets()
            target = rng.choice(waiting).id if waiting else "missing"
            engine.remove_waiting(target)
        else:
            engine.undo_last()


@pytest.mark.parametrize("seed", [1, 7, 42, 1234])
def test_invariants_hold_for_random_sessions(seed):
    """Test that no operation sequence breaks the engine invariants."""
    rng = random.Random(seed)
    engine = SchedulingEngine()
    for _ in range(20):
        random_session(engine, rng, steps=10)
        assert engine.check_invariants() == []
        assert engine.consecutive_normal_served >= 0


@pytest.mark.parametrize("seed", [3, 99])
def test_full_unwind_after_random_session(seed):
    """Test that undoing every logged action empties the engine."""
    rng = random.Random(seed)
    engine = SchedulingEngine()
    random_session(engine, rng, steps=150)

    while engine.undo_last():
        assert engine.check_invariants() == []

    assert engine.queue_length() == 0
    assert engine.in_service_ticket() is None
    assert engine.history_all() == []


def test_concurrent_callers_keep_state_consistent():
    """Test that operations from several threads never corrupt the state."""
    engine = SchedulingEngine()
    errors = []

    def worker(worker_id: int) -> None:
        rng = random.Random(worker_id)
        try:
            for i in range(200):
                engine.enqueue(
                    Ticket(
                        id=f"w{worker_id}-{i}",
                        name="Customer",
                        request_type="Soporte",
                        priority=rng.choice(["normal", "urgent"]),
                    )
                )
                if engine.dispatch_next():
                    engine.finish_service("ok")
                if rng.random() < 0.2:
                    engine.undo_last()
        except Exception as exc:  # surfaced through the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert engine.check_invariants() == []
