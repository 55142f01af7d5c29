from assistant.prompts import SYSTEM_PROMPT
from assistant.session import Session, SessionStore, TravelInfo


class ManualClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_new_session_is_seeded_with_system_instruction(store):
    sess = store.get_or_create("abc")
    assert sess.messages == [{"role": "system", "content": SYSTEM_PROMPT}]
    assert sess.travel_info == TravelInfo()
    assert "abc" in store


def test_get_or_create_returns_same_session(store):
    assert store.get_or_create("a") is store.get_or_create("a")
    assert store.get_or_create("a") is not store.get_or_create("b")
    assert len(store) == 2


def test_append_creates_session_lazily(store):
    store.append("new", {"role": "user", "content": "hi"})
    sess = store.get("new")
    assert [m["role"] for m in sess.messages] == ["system", "user"]


def test_prune_keeps_system_and_ten_most_recent():
    sess = Session.seeded()
    for i in range(20):
        sess.add("user", f"m{i}")
    assert len(sess.messages) == 21
    dropped = sess.prune()
    assert dropped == 10
    assert len(sess.messages) == 11
    assert sess.messages[0]["role"] == "system"
    assert [m["content"] for m in sess.messages[1:]] == [f"m{i}" for i in range(10, 20)]


def test_prune_is_noop_at_twenty_messages():
    sess = Session.seeded()
    for i in range(19):
        sess.add("user", f"m{i}")
    assert sess.prune() == 0
    assert len(sess.messages) == 20


def test_store_prune_unknown_key(store):
    assert store.prune("missing") == 0


def test_idle_sessions_are_evicted():
    clock = ManualClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    store.get_or_create("old")
    clock.now = 30
    store.get_or_create("recent")
    clock.now = 75
    store.get_or_create("recent")
    assert "old" not in store
    assert "recent" in store


def test_least_recently_used_session_is_evicted_over_capacity():
    store = SessionStore(max_sessions=2)
    store.get_or_create("a")
    store.get_or_create("b")
    store.get_or_create("a")
    store.get_or_create("c")
    assert "b" not in store
    assert "a" in store and "c" in store


def test_delete(store):
    store.get_or_create("x")
    assert store.delete("x") is True
    assert store.delete("x") is False


def test_session_in_the_middle_of_a_turn_is_not_evicted():
    clock = ManualClock()
    store = SessionStore(ttl_seconds=60, max_sessions=1, clock=clock)
    busy = store.get_or_create("busy")
    with busy.lock:
        clock.now = 100
        store.get_or_create("new")
        assert store.get("busy") is busy
        assert "new" in store
    store.get_or_create("new")
    assert "busy" not in store
