"""Process-wide authentication state.

Holds the listeners that react to sign-in/sign-out events and the revoked
token ids. A revoked id is kept only until its token expires, after which the
signature check rejects the token anyway. The state is created by
``init_auth_state`` on application startup and cleared by
``shutdown_auth_state`` on shutdown.
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

AuthListener = Callable[[str, str, str, int], None]  # (event, user_id, jti, exp)


class AuthState:
    """Auth event hub plus token revocation list."""

    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: Dict[int, AuthListener] = {}
        self._next_id = 0
        self._revoked: Dict[str, int] = {}  # jti -> exp (unix seconds)

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener and return the function that unregisters it."""
        with self._lock:
            listener_id = self._next_id
            self._next_id += 1
            self._listeners[listener_id] = listener

        def unsubscribe() -> None:
            with self._lock:
                self._listeners.pop(listener_id, None)

        return unsubscribe

    def emit(self, event: str, user_id: str, jti: str, exp: int) -> None:
        with self._lock:
            listeners = list(self._listeners.values())
        for listener in listeners:
            listener(event, user_id, jti, exp)

    def _prune(self, now: float) -> None:
        # Caller holds self._lock
        expired = [jti for jti, exp in self._revoked.items() if exp <= now]
        for jti in expired:
            del self._revoked[jti]

    def revoke(self, jti: str, exp: int) -> None:
        """Remember a token id until its expiry time.

        Args:
            jti: Token id to revoke.
            exp: Expiry of the token as a unix timestamp. Already expired
                tokens are not stored.
        """
        now = time.time()
        with self._lock:
            self._prune(now)
            if exp > now:
                self._revoked[jti] = exp

    def is_revoked(self, jti: Optional[str]) -> bool:
        with self._lock:
            self._prune(time.time())
            return jti in self._revoked

    @property
    def revoked_count(self) -> int:
        with self._lock:
            return len(self._revoked)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()
            self._revoked.clear()


_state: Optional[AuthState] = None
_state_lock = threading.Lock()
_unsubscribers = []


def _on_auth_event(event: str, user_id: str, jti: str, exp: int) -> None:
    if event == SIGNED_OUT:
        get_auth_state().revoke(jti, exp)
    logger.info("Auth event %s for user %s", event, user_id)


def init_auth_state() -> AuthState:
    """Create the process-wide state and subscribe the built-in listener."""
    global _state
    if _state is None:
        with _state_lock:
            if _state is None:
                state = AuthState()
                _unsubscribers.append(state.subscribe(_on_auth_event))
                _state = state
                logger.info("Auth state initialized")
    return _state


def shutdown_auth_state() -> None:
    """Unsubscribe listeners and drop all state."""
    global _state
    with _state_lock:
        while _unsubscribers:
            _unsubscribers.pop()()
        if _state is not None:
            _state.clear()
            _state = None
            logger.info("Auth state shut down")


def get_auth_state() -> AuthState:
    """Return the current state, initializing it lazily outside app startup."""
    state = _state
    return state if state is not None else init_auth_state()
