from __future__ import annotations

import threading

from core.dialogue_state import DialogueStateStore, SlotType


def test_set_peek_take_clears_slot() -> None:
    store = DialogueStateStore()
    store.set("u1", SlotType.AWAITING_TASK)
    assert store.peek("u1").slot_type == SlotType.AWAITING_TASK
    # peek does not consume
    assert store.peek("u1") is not None

    slot = store.take("u1")
    assert slot is not None and slot.user_id == "u1"
    assert store.take("u1") is None
    assert store.peek("u1") is None


def test_set_overwrites_existing_slot() -> None:
    store = DialogueStateStore()
    first = store.set("u1")
    second = store.set("u1")
    assert len(store) == 1
    assert store.peek("u1") == second
    assert first.user_id == second.user_id


def test_slots_are_per_user() -> None:
    store = DialogueStateStore()
    store.set("alice")
    assert store.take("bob") is None
    assert store.take("alice") is not None


def test_user_lock_is_stable_per_user() -> None:
    store = DialogueStateStore()
    assert store.user_lock("u1") is store.user_lock("u1")
    assert store.user_lock("u1") is not store.user_lock("u2")
    with store.user_lock("u1"):
        store.set("u1")
        assert store.take("u1") is not None


def test_concurrent_take_hands_slot_to_exactly_one_caller() -> None:
    store = DialogueStateStore()
    store.set("u1")
    barrier = threading.Barrier(16)
    taken = []
    lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        slot = store.take("u1")
        with lock:
            taken.append(slot)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert len(taken) == 16
    assert sum(1 for slot in taken if slot is not None) == 1


def test_no_expiry_by_default() -> None:
    now = [0.0]
    store = DialogueStateStore(clock=lambda: now[0])
    store.set("u1")
    now[0] = 10_000_000.0
    assert store.take("u1") is not None


def test_expired_slot_is_treated_as_absent() -> None:
    now = [100.0]
    store = DialogueStateStore(ttl_seconds=60, clock=lambda: now[0])
    store.set("u1")
    now[0] = 150.0
    assert store.peek("u1") is not None
    now[0] = 161.0
    assert store.take("u1") is None
    assert len(store) == 0
