import threading
import time
from datetime import timedelta

from jose import jwt

from clubhub.api.routes.auth import create_access_token
from clubhub.core.auth_state import (
    SIGNED_IN,
    SIGNED_OUT,
    AuthState,
    get_auth_state,
    init_auth_state,
    shutdown_auth_state,
)


def _in(seconds):
    return int(time.time()) + seconds


def test_subscribe_and_unsubscribe():
    state = AuthState()
    seen = []
    unsubscribe = state.subscribe(
        lambda event, user_id, jti, exp: seen.append((event, user_id))
    )
    assert state.listener_count == 1

    state.emit(SIGNED_IN, "user-1", "jti-1", _in(60))
    unsubscribe()
    state.emit(SIGNED_IN, "user-2", "jti-2", _in(60))

    assert seen == [(SIGNED_IN, "user-1")]
    assert state.listener_count == 0


def test_signed_out_event_revokes_token_id():
    state = init_auth_state()
    try:
        state.emit(SIGNED_IN, "user-1", "jti-1", _in(60))
        assert not state.is_revoked("jti-1")
        state.emit(SIGNED_OUT, "user-1", "jti-1", _in(60))
        assert state.is_revoked("jti-1")
    finally:
        shutdown_auth_state()


def test_expired_token_is_not_retained():
    state = init_auth_state()
    try:
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-60))
        claims = jwt.get_unverified_claims(token)
        state.emit(SIGNED_OUT, "user-1", claims["jti"], claims["exp"])

        assert state.revoked_count == 0
        assert not state.is_revoked(claims["jti"])
    finally:
        shutdown_auth_state()


def test_revoked_ids_are_pruned_once_expired():
    state = AuthState()
    state.revoke("short-lived", _in(1))
    state.revoke("long-lived", _in(3600))
    assert state.revoked_count == 2

    # Simulate time passing by backdating the stored expiry
    state._revoked["short-lived"] = _in(-1)
    assert not state.is_revoked("short-lived")
    assert state.is_revoked("long-lived")
    assert state.revoked_count == 1


def test_init_is_idempotent_and_shutdown_resets():
    first = init_auth_state()
    try:
        assert init_auth_state() is first
        assert first.listener_count == 1
        first.revoke("jti-1", _in(60))
    finally:
        shutdown_auth_state()

    assert first.listener_count == 0
    fresh = get_auth_state()
    try:
        assert fresh is not first
        assert not fresh.is_revoked("jti-1")
    finally:
        shutdown_auth_state()


def test_concurrent_lazy_init_creates_one_state():
    shutdown_auth_state()
    barrier = threading.Barrier(8)
    states = []

    def worker():
        barrier.wait()
        states.append(get_auth_state())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    try:
        assert len({id(state) for state in states}) == 1
        assert states[0].listener_count == 1
    finally:
        shutdown_auth_state()
