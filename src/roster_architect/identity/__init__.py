"""Identity providers: asynchronous sources of the current user id."""

from __future__ import annotations

import logging
from typing import AsyncIterator, Optional, Protocol
from uuid import uuid4


logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    def current_identity(self) -> AsyncIterator[Optional[str]]: ...


class StaticIdentityProvider:
    """Yields a preconfigured user id, or ``None`` when there is none."""

    def __init__(self, identity: Optional[str]):
        self.identity = identity

    async def current_identity(self) -> AsyncIterator[Optional[str]]:
        yield self.identity


class AnonymousIdentityProvider:
    """Issues one random id per provider, like an anonymous sign-in."""

    def __init__(self) -> None:
        self._identity: Optional[str] = None

    async def current_identity(self) -> AsyncIterator[Optional[str]]:
        if self._identity is None:
            self._identity = f"anon-{uuid4().hex}"
        yield self._identity


async def acquire_identity(provider: IdentityProvider) -> Optional[str]:
    """Take the first value the provider yields; an empty stream means no user."""

    async for identity in provider.current_identity():
        return identity
    logger.info("Identity provider yielded nothing; continuing signed out")
    return None


__all__ = [
    "AnonymousIdentityProvider",
    "IdentityProvider",
    "StaticIdentityProvider",
    "acquire_identity",
]
