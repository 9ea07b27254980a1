"""
Session lifecycle for the router.

A session moves through three states::

    UNAUTHENTICATED -> AUTHENTICATED_NO_PROFILE -> AUTHENTICATED_WITH_ROLE

Credentials are accepted before the profile row is readable, so the middle
state is real and the router treats it like an anonymous session for every
role-gated screen. Each sign-in and sign-out bumps ``generation``; async work
captures the generation it started under and its result is dropped when the
session has moved on.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from donorlink.config import PROFILE_FETCH_ATTEMPTS, PROFILE_FETCH_BACKOFF_SECONDS
from donorlink.core.access import default_screen, navigation_items, resolve_screen
from donorlink.core.roles import UserRole

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_NO_PROFILE = "authenticated_no_profile"
    AUTHENTICATED_WITH_ROLE = "authenticated_with_role"


@dataclass(frozen=True)
class Session:
    authenticated: bool = False
    role: Optional[UserRole] = None
    user_id: Optional[str] = None
    generation: int = 0

    @property
    def state(self) -> SessionState:
        if not self.authenticated:
            return SessionState.UNAUTHENTICATED
        if self.role is None:
            return SessionState.AUTHENTICATED_NO_PROFILE
        return SessionState.AUTHENTICATED_WITH_ROLE


def _profile_role(profile):
    if isinstance(profile, dict):
        return UserRole.parse(profile.get("role"))
    return UserRole.parse(getattr(profile, "role", None))


class SessionManager:
    def __init__(self):
        self._session = Session()
        self._screen = default_screen(None)
        self._nav_key = None
        self._nav_items = []
        self.profile = None

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def screen(self) -> str:
        return self._screen

    def sign_in(self, user_id: str) -> Session:
        self._session = Session(
            authenticated=True,
            user_id=user_id,
            generation=self._session.generation + 1,
        )
        self.profile = None
        return self._session

    def apply_profile(self, generation: int, profile) -> bool:
        """Attach a loaded profile if it still belongs to the live session."""
        current = self._session
        if generation != current.generation or not current.authenticated:
            logger.info(
                "Dropping stale profile result (generation %s, current %s)",
                generation, current.generation,
            )
            return False

        role = _profile_role(profile)
        if role is None:
            logger.warning("Profile for user %s has no usable role", current.user_id)
            return False

        self._session = replace(current, role=role)
        self.profile = profile
        return True

    def sign_out(self) -> Session:
        self._session = Session(generation=self._session.generation + 1)
        self.profile = None
        self._screen = default_screen(None)
        return self._session

    def navigate(self, requested: str):
        decision = resolve_screen(self._session, requested)
        self._screen = decision.screen
        return decision

    @property
    def nav_items(self):
        key = (self._session.role, self._session.authenticated)
        if key != self._nav_key:
            self._nav_items = navigation_items(*key)
            self._nav_key = key
        return self._nav_items


async def load_profile(
    manager: SessionManager,
    fetch,
    attempts: int = PROFILE_FETCH_ATTEMPTS,
    backoff: float = PROFILE_FETCH_BACKOFF_SECONDS,
    sleep=asyncio.sleep,
):
    """Fetch the signed-in user's profile and attach it to ``manager``.

    ``fetch(user_id)`` may be sync or async and returns ``None`` while the
    profile row is not visible yet. Missing rows are retried up to
    ``attempts`` times with exponential backoff. Returns the applied profile,
    or ``None`` when the row never appeared or the session changed meanwhile.
    """
    ticket = manager.session
    if not ticket.authenticated:
        return None

    for attempt in range(1, attempts + 1):
        if manager.session.generation != ticket.generation:
            logger.info("Session changed while loading profile for %s", ticket.user_id)
            return None

        profile = fetch(ticket.user_id)
        if inspect.isawaitable(profile):
            profile = await profile

        if profile is not None:
            if manager.apply_profile(ticket.generation, profile):
                return profile
            return None

        if attempt < attempts:
            delay = backoff * (2 ** (attempt - 1))
            logger.debug("Profile %s not found, retrying in %.2fs", ticket.user_id, delay)
            await sleep(delay)

    logger.warning("Profile %s not found after %d attempts", ticket.user_id, attempts)
    return None
