"""
Session Service - Admin session tokens and credential checks.

This module provides the session registry used to gate upload endpoints.
Stores are interchangeable: an in-process dict for single-instance
deployments and tests, or Redis when several API instances share sessions.
"""

import logging
import secrets
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional

import redis

from services.exceptions import Unauthorized

logger = logging.getLogger(__name__)

# Redis key prefix for session tokens
SESSION_KEY_PREFIX = 'session:'


class CredentialVerifier(ABC):
    """Decides whether a supplied password grants admin access."""

    @abstractmethod
    def verify(self, password: Optional[str]) -> bool:
        raise NotImplementedError


class StaticPasswordVerifier(CredentialVerifier):
    """Single shared secret compared by exact equality."""

    def __init__(self, secret: str):
        self._secret = secret

    def verify(self, password: Optional[str]) -> bool:
        if not isinstance(password, str):
            return False
        return secrets.compare_digest(password.encode('utf-8'), self._secret.encode('utf-8'))


class SessionStore(ABC):
    """
    Registry of valid admin session tokens.

    Subclasses provide the storage primitives; login/logout/authorize are
    shared. Tokens never expire unless a ttl is given.
    """

    def __init__(self, verifier: CredentialVerifier, ttl_seconds: Optional[int] = None):
        """
        Initialize session store.

        Args:
            verifier: Credential check applied on login
            ttl_seconds: Token lifetime in seconds; None keeps tokens until logout
        """
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        self.verifier = verifier
        self.ttl_seconds = ttl_seconds

    @abstractmethod
    def _save(self, token: str) -> None:
        """Mark token as valid."""

    @abstractmethod
    def _exists(self, token: str) -> bool:
        """Check whether token is currently valid."""

    @abstractmethod
    def _discard(self, token: str) -> None:
        """Forget token; no error if unknown."""

    @staticmethod
    def _new_token() -> str:
        # Time component keeps tokens ordered, random part makes them unguessable
        return f"{time.time_ns():x}{secrets.token_hex(8)}"

    def login(self, password: Optional[str]) -> str:
        """
        Authenticate and issue a fresh session token.

        Raises:
            Unauthorized: If the password is rejected
        """
        if not self.verifier.verify(password):
            logger.warning("Rejected admin login attempt")
            raise Unauthorized("Invalid password")

        token = self._new_token()
        while self._exists(token):
            token = self._new_token()

        self._save(token)
        logger.info(f"Admin session created: {token[:8]}...")
        return token

    def logout(self, token: Optional[str]) -> None:
        if not token:
            return
        self._discard(token)
        logger.info(f"Admin session closed: {token[:8]}...")

    def authorize(self, token: Optional[str]) -> bool:
        if not token:
            return False
        return self._exists(token)


class InMemorySessionStore(SessionStore):
    """Process-local store; all sessions are lost on restart."""

    def __init__(self, verifier: CredentialVerifier, ttl_seconds: Optional[int] = None):
        super().__init__(verifier, ttl_seconds)
        # token -> expiry timestamp (None = never)
        self._sessions: Dict[str, Optional[float]] = {}

    def _save(self, token: str) -> None:
        expires_at = time.monotonic() + self.ttl_seconds if self.ttl_seconds is not None else None
        self._sessions[token] = expires_at

    def _exists(self, token: str) -> bool:
        if token not in self._sessions:
            return False
        expires_at = self._sessions[token]
        if expires_at is not None and time.monotonic() >= expires_at:
            self._sessions.pop(token, None)
            logger.debug(f"Session expired: {token[:8]}...")
            return False
        return True

    def _discard(self, token: str) -> None:
        self._sessions.pop(token, None)

    def __len__(self) -> int:
        return len(self._sessions)


class RedisSessionStore(SessionStore):
    """Store shared across API instances through Redis."""

    def __init__(self, verifier: CredentialVerifier, client: redis.Redis,
                 ttl_seconds: Optional[int] = None):
        super().__init__(verifier, ttl_seconds)
        self.client = client

    @classmethod
    def from_url(cls, verifier: CredentialVerifier, redis_url: str,
                 ttl_seconds: Optional[int] = None) -> 'RedisSessionStore':
        client = redis.Redis.from_url(redis_url, decode_responses=True)
        return cls(verifier, client, ttl_seconds)

    def _key(self, token: str) -> str:
        return f"{SESSION_KEY_PREFIX}{token}"

    def _save(self, token: str) -> None:
        self.client.set(self._key(token), '1', ex=self.ttl_seconds)

    def _exists(self, token: str) -> bool:
        return bool(self.client.exists(self._key(token)))

    def _discard(self, token: str) -> None:
        self.client.delete(self._key(token))


def create_session_store(backend: str, password: str, redis_url: Optional[str] = None,
                         ttl_seconds: Optional[int] = None) -> SessionStore:
    """
    Build the configured session store.

    Args:
        backend: 'memory' or 'redis'
        password: Shared admin password
        redis_url: Redis connection URL (required for 'redis')
        ttl_seconds: Optional session lifetime

    Returns:
        SessionStore instance
    """
    verifier = StaticPasswordVerifier(password)

    if backend == 'memory':
        return InMemorySessionStore(verifier, ttl_seconds)
    if backend == 'redis':
        if not redis_url:
            raise ValueError("redis_url is required for the redis session backend")
        return RedisSessionStore.from_url(verifier, redis_url, ttl_seconds)

    raise ValueError(f"Unsupported session backend: {backend}")
