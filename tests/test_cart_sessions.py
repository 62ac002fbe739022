from conftest import RecordingDispatcher
from services.cart_sessions import CartSessionRegistry


def _registry(idle_minutes=60):
    dispatcher = RecordingDispatcher()
    return CartSessionRegistry(dispatcher_factory=lambda: dispatcher, idle_minutes=idle_minutes), dispatcher


def test_unknown_session_gets_fresh_cart():
    registry, _ = _registry()

    session = registry.get_or_create("made-up")

    assert session.session_id != "made-up"
    assert session.cart.is_empty
    assert len(registry) == 1


def test_same_id_returns_same_cart():
    registry, _ = _registry()
    first = registry.get_or_create(None)
    first.cart.add_item({"id": "p1", "name": "Pan", "price": 1000, "image": ""})

    again = registry.get_or_create(first.session_id)

    assert again is first
    assert again.cart.count == 1


def test_sessions_do_not_share_carts_or_latches():
    registry, dispatcher = _registry()
    a = registry.get_or_create(None)
    b = registry.get_or_create(None)
    a.cart.add_item({"id": "p1", "name": "Pan", "price": 1000, "image": ""})

    assert b.cart.is_empty
    assert a.submitter is not b.submitter
    assert a.submitter.dispatcher is dispatcher


def test_idle_sessions_are_dropped():
    registry, _ = _registry(idle_minutes=0)
    old = registry.get_or_create(None)
    old.last_seen -= 1

    fresh = registry.get_or_create(old.session_id)

    assert fresh is not old
    assert len(registry) == 1


def test_drop():
    registry, _ = _registry()
    s = registry.get_or_create(None)
    registry.drop(s.session_id)

    assert len(registry) == 0
