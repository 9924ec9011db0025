"""
Keyed in-memory stores used around the engine by a serving layer.

Both stores own their state and read time from an injected clock, so tests
and callers never depend on module-level maps or on process lifetime.
"""

import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Tuple
from pydantic import BaseModel

from .exceptions import InvalidInputError
from .utils.logging_utils import get_logger

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class RateLimitStatus(BaseModel):
    """Outcome of a rate-limit check."""
    allowed: bool
    remaining: int
    total: int
    reset_time: datetime


class RateLimiter:
    """
    Per-key daily request counter.

    Counts reset at local midnight of the injected clock.

    Example:
        >>> limiter = RateLimiter(max_requests=10)
        >>> status = limiter.check("203.0.113.7")
        >>> if status.allowed:
        ...     limiter.increment("203.0.113.7")
    """

    def __init__(self, max_requests: int = 10, clock: Optional[Clock] = None):
        if max_requests < 1:
            raise InvalidInputError(f"max_requests must be at least 1, got {max_requests}")

        self.max_requests = max_requests
        self._clock = clock or datetime.now
        self._counts: Dict[Tuple[str, str], int] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config, clock: Optional[Clock] = None) -> "RateLimiter":
        """
        Build a limiter from the 'rate_limit' section of a Config.

        Example:
            >>> limiter = RateLimiter.from_config(get_config())
        """
        section = config.get_stage_config('rate_limit')
        return cls(max_requests=section.get('max_requests', 10), clock=clock)

    def _bucket(self, key: str) -> Tuple[str, str]:
        return key, self._clock().date().isoformat()

    def _next_midnight(self) -> datetime:
        now = self._clock()
        return datetime.combine(now.date() + timedelta(days=1), datetime.min.time(), now.tzinfo)

    def check(self, key: str) -> RateLimitStatus:
        """Report whether one more request from ``key`` is allowed today."""
        with self._lock:
            count = self._counts.get(self._bucket(key), 0)

        allowed = count < self.max_requests
        return RateLimitStatus(
            allowed=allowed,
            remaining=self.max_requests - count - 1 if allowed else 0,
            total=self.max_requests,
            reset_time=self._next_midnight()
        )

    def increment(self, key: str) -> int:
        """Record a request from ``key``; returns today's count."""
        bucket = self._bucket(key)
        with self._lock:
            # Buckets from previous days are dead weight
            today = bucket[1]
            for stale in [b for b in self._counts if b[1] != today]:
                del self._counts[stale]

            self._counts[bucket] = self._counts.get(bucket, 0) + 1
            return self._counts[bucket]

    def remaining(self, key: str) -> int:
        """Requests left for ``key`` today."""
        with self._lock:
            count = self._counts.get(self._bucket(key), 0)
        return max(0, self.max_requests - count)

    def reset(self) -> None:
        """Forget all counts."""
        with self._lock:
            self._counts.clear()
        logger.info("Rate limit counters reset")


class ConversationMemory:
    """
    Per-session conversation history with sliding expiry.

    A session expires ``ttl_seconds`` after its last append. Only the most
    recent ``max_turns`` turns are kept.

    Example:
        >>> memory = ConversationMemory(ttl_seconds=1800)
        >>> memory.append("session-1", "user", "Which region sold most?")
        >>> memory.history("session-1")
        [{'role': 'user', 'content': 'Which region sold most?'}]
    """

    def __init__(
        self,
        ttl_seconds: float = 3600,
        max_turns: int = 20,
        clock: Optional[Clock] = None
    ):
        if ttl_seconds <= 0:
            raise InvalidInputError(f"ttl_seconds must be positive, got {ttl_seconds}")
        if max_turns < 1:
            raise InvalidInputError(f"max_turns must be at least 1, got {max_turns}")

        self.ttl = timedelta(seconds=ttl_seconds)
        self.max_turns = max_turns
        self._clock = clock or datetime.now
        self._sessions: Dict[str, Tuple[datetime, List[Dict[str, str]]]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config, clock: Optional[Clock] = None) -> "ConversationMemory":
        """Build a memory from the 'memory' section of a Config."""
        section = config.get_stage_config('memory')
        return cls(
            ttl_seconds=section.get('ttl_seconds', 3600),
            max_turns=section.get('max_turns', 20),
            clock=clock
        )

    def _is_expired(self, touched: datetime, now: datetime) -> bool:
        return now - touched >= self.ttl

    def append(self, session_id: str, role: str, content: str) -> None:
        """Add a turn to a session, starting a fresh one if it expired."""
        now = self._clock()
        with self._lock:
            touched, turns = self._sessions.get(session_id, (now, []))
            if self._is_expired(touched, now):
                turns = []
            turns = (turns + [{'role': role, 'content': content}])[-self.max_turns:]
            self._sessions[session_id] = (now, turns)

    def history(self, session_id: str) -> List[Dict[str, str]]:
        """Turns of a live session, oldest first; empty if unknown or expired."""
        now = self._clock()
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return []
            touched, turns = entry
            if self._is_expired(touched, now):
                del self._sessions[session_id]
                return []
            return [dict(turn) for turn in turns]

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        """Drop expired sessions; returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [sid for sid, (touched, _) in self._sessions.items()
                       if self._is_expired(touched, now)]
            for sid in expired:
                del self._sessions[sid]

        if expired:
            logger.debug(f"Purged {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
