# Overview: Service-layer operations for session; encapsulates session state and unit selection.

"""
Session Token Management Service

WHY: Track who is logged in and which business unit each session is
working in. Session state is ephemeral: it lives in a SessionRegistry held
on app.extensions and is gone after a restart, like the original UI state
that reset on page reload.

LIFECYCLE:
    LoggedOut -> AwaitingUnitSelection -> Active
- login creates a session; a user with exactly one unit is Active at once
- select_unit moves AwaitingUnitSelection -> Active (or switches units)
- revoke_session (logout) discards user and selection together
- editing a user can push their live sessions back to AwaitingUnitSelection

SECURITY FEATURES:
- Cryptographically secure random tokens (32 bytes)
- Registry keyed by SHA-256 of the token; plaintext is never kept
- 24-hour absolute timeout, 8-hour idle timeout
- The user row is re-read on every validation, so role, unit and
  permission edits apply on the next request
"""

import secrets
import hashlib
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from flask import current_app

from ..extensions import db
from ..models import User
from ..scopes import Specific, Unset
from . import unit_access_service
from kitchen.time_utils import utcnow, to_utc_z


# Configuration constants
SESSION_ABSOLUTE_TIMEOUT = timedelta(hours=24)  # Maximum session length
SESSION_IDLE_TIMEOUT = timedelta(hours=8)        # One kitchen shift

REGISTRY_EXTENSION_KEY = "kitchen_sessions"


@dataclass(frozen=True)
class SessionState:
    user_id: int
    selection: object
    created_at: datetime
    last_used_at: datetime
    expires_at: datetime

    @property
    def awaiting_unit_selection(self) -> bool:
        return isinstance(self.selection, Unset)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "active_unit_id": self.selection.to_value(),
            "awaiting_unit_selection": self.awaiting_unit_selection,
            "created_at": to_utc_z(self.created_at),
            "last_used_at": to_utc_z(self.last_used_at),
            "expires_at": to_utc_z(self.expires_at),
        }


class SessionRegistry:
    """
    In-process session store.

    Each state is immutable; every change swaps in a new SessionState under
    the lock so concurrent requests never see a half-updated session.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: dict[str, SessionState] = {}

    def add(self, token_hash: str, state: SessionState) -> None:
        with self._lock:
            self._sessions[token_hash] = state

    def get(self, token_hash: str) -> SessionState | None:
        with self._lock:
            return self._sessions.get(token_hash)

    def update(self, token_hash: str, **changes) -> SessionState | None:
        with self._lock:
            state = self._sessions.get(token_hash)
            if state is None:
                return None
            state = replace(state, **changes)
            self._sessions[token_hash] = state
            return state

    def reconcile(self, token_hash: str, reconcile, **changes) -> tuple[SessionState, SessionState] | None:
        """
        Replace the selection with reconcile(selection) and apply changes,
        reading and writing under one lock hold.

        Returns (previous, current) states, or None for an unknown session.
        """
        with self._lock:
            previous = self._sessions.get(token_hash)
            if previous is None:
                return None
            state = replace(previous, selection=reconcile(previous.selection), **changes)
            self._sessions[token_hash] = state
            return previous, state

    def remove(self, token_hash: str) -> bool:
        with self._lock:
            return self._sessions.pop(token_hash, None) is not None

    def for_user(self, user_id: int) -> dict[str, SessionState]:
        with self._lock:
            return {h: s for h, s in self._sessions.items() if s.user_id == user_id}

    def remove_for_user(self, user_id: int) -> int:
        with self._lock:
            doomed = [h for h, s in self._sessions.items() if s.user_id == user_id]
            for token_hash in doomed:
                del self._sessions[token_hash]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


@dataclass
class SessionContext:
    """
    Complete session context returned by validate_session.

    Contains the freshly loaded user and the session's unit selection.
    """
    user: User
    state: SessionState
    token_hash: str

    @property
    def selection(self):
        return self.state.selection

    @property
    def awaiting_unit_selection(self) -> bool:
        return self.state.awaiting_unit_selection


def get_registry() -> SessionRegistry:
    return current_app.extensions[REGISTRY_EXTENSION_KEY]


def generate_token() -> str:
    """
    Generate cryptographically secure random token.

    Returns 64-character hex string (32 bytes of entropy).
    """
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    """Hash token for registry keys using SHA-256."""
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


def create_session(user: User) -> tuple[SessionState, str]:
    """
    Create a new session for user.

    Applies the login selection rule: a user with exactly one concrete
    unit starts Active on it, anyone else starts awaiting a selection.

    Returns (state, plaintext_token).
    """
    plaintext_token = generate_token()
    now = utcnow()

    state = SessionState(
        user_id=user.id,
        selection=unit_access_service.initial_selection(user),
        created_at=now,
        last_used_at=now,
        expires_at=now + SESSION_ABSOLUTE_TIMEOUT,
    )
    get_registry().add(hash_token(plaintext_token), state)

    return state, plaintext_token


def validate_session(token: str) -> SessionContext | None:
    """
    Validate token and return the session context.

    Returns None for unknown, expired or idle sessions, and for sessions
    whose user no longer exists (those are discarded).
    """
    registry = get_registry()
    token_hash = hash_token(token)
    state = registry.get(token_hash)
    if state is None:
        return None

    now = utcnow()
    if now > state.expires_at or now - state.last_used_at > SESSION_IDLE_TIMEOUT:
        registry.remove(token_hash)
        return None

    user = db.session.query(User).filter_by(id=state.user_id).first()
    if user is None:
        registry.remove(token_hash)
        return None

    # Unit assignments may have changed since the last request
    result = registry.reconcile(
        token_hash,
        lambda selection: unit_access_service.reconcile_selection(user, selection),
        last_used_at=now,
    )
    if result is None:
        return None
    state = result[1]

    return SessionContext(user=user, state=state, token_hash=token_hash)


def select_unit(context: SessionContext, selection) -> SessionState:
    """
    Switch the session to selection (Global or Specific).

    Raises UnitAccessError when the user may not select it.
    """
    unit_access_service.validate_selection(
        context.user, selection, unit_access_service.get_all_units()
    )
    state = get_registry().update(context.token_hash, selection=selection)
    if state is None:
        raise ValueError("Session no longer exists")
    context.state = state
    return state


def revoke_session(token: str) -> bool:
    """Logout: discard the session (user and selection together)."""
    return get_registry().remove(hash_token(token))


def revoke_user_sessions(user_id: int) -> int:
    """Discard every live session of a user, e.g. when the user is deleted."""
    return get_registry().remove_for_user(user_id)


def reconcile_user_sessions(user: User) -> int:
    """
    Re-apply unit rules to a user's live sessions after their record changed.

    Returns the number of sessions whose selection changed.
    """
    registry = get_registry()
    changed = 0
    for token_hash in registry.for_user(user.id):
        result = registry.reconcile(
            token_hash,
            lambda selection: unit_access_service.reconcile_selection(user, selection),
        )
        if result is not None and result[0].selection != result[1].selection:
            changed += 1
    return changed


def active_unit_id(selection) -> str | None:
    """Concrete unit id for a Specific selection, else None."""
    if isinstance(selection, Specific):
        return selection.unit_id
    return None


def init_app(app) -> None:
    app.extensions[REGISTRY_EXTENSION_KEY] = SessionRegistry()

