"""Rate limiting for the login endpoint.

Sliding window per client key. Counters live in Redis when ``REDIS_URL`` is
configured so every worker shares them; otherwise each process keeps its own
counters in memory, which multiplies the effective limit by the number of
workers.

The in-memory path uses ``threading.Lock``; the critical section is a few dict
operations and does not block the event loop meaningfully.
"""

import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock

import redis

from agenda.config import settings

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Rate limit configuration."""

    max_requests: int = 5
    window_seconds: int = 60
    block_seconds: int = 300


@dataclass
class RateLimitState:
    """State for a single key (in-memory fallback)."""

    requests: list[float] = field(default_factory=list)
    blocked_until: float = 0.0


class RateLimiter:
    """Rate limiter with Redis support and in-memory fallback."""

    def __init__(self, config: RateLimitConfig | None = None, namespace: str = "rl") -> None:
        self.config = config or RateLimitConfig()
        self.namespace = namespace
        self._local_state: dict[str, RateLimitState] = defaultdict(RateLimitState)
        self._lock = Lock()
        self._redis: redis.Redis | None = None

        if settings.redis_url:
            try:
                self._redis = redis.from_url(settings.redis_url, decode_responses=True)
                self._redis.ping()
            except redis.RedisError as exc:
                logger.warning("Redis unavailable, rate limiting in memory: %s", exc)
                self._redis = None

    def is_allowed(self, key: str) -> tuple[bool, int]:
        """Return ``(allowed, retry_after_seconds)`` for the given key."""
        if self._redis:
            return self._is_allowed_redis(key)
        return self._is_allowed_local(key)

    def _keys(self, key: str) -> tuple[str, str]:
        return f"{self.namespace}:{key}", f"{self.namespace}_block:{key}"

    def _is_allowed_redis(self, key: str) -> tuple[bool, int]:
        now = time.time()
        rl_key, block_key = self._keys(key)

        try:
            blocked_until = self._redis.get(block_key)
            if blocked_until:
                remaining = int(float(blocked_until) - now)
                if remaining > 0:
                    return False, remaining

            pipe = self._redis.pipeline()
            pipe.zadd(rl_key, {str(now): now})
            pipe.zremrangebyscore(rl_key, 0, now - self.config.window_seconds)
            pipe.zcard(rl_key)
            pipe.expire(rl_key, self.config.window_seconds * 2)
            results = pipe.execute()

            if results[2] > self.config.max_requests:
                self._redis.setex(block_key, self.config.block_seconds, str(now + self.config.block_seconds))
                return False, self.config.block_seconds

            return True, 0
        except redis.RedisError as exc:
            logger.warning("Redis error during rate limiting, falling back to local: %s", exc)
            return self._is_allowed_local(key)

    def _is_allowed_local(self, key: str) -> tuple[bool, int]:
        now = time.time()
        with self._lock:
            state = self._local_state[key]
            if state.blocked_until > now:
                return False, int(state.blocked_until - now)

            window_start = now - self.config.window_seconds
            state.requests = [ts for ts in state.requests if ts >= window_start]

            if len(state.requests) >= self.config.max_requests:
                state.blocked_until = now + self.config.block_seconds
                return False, self.config.block_seconds

            state.requests.append(now)
            return True, 0

    def reset(self, key: str) -> None:
        """Reset rate limit state for a key."""
        if self._redis:
            try:
                self._redis.delete(*self._keys(key))
            except redis.RedisError as exc:
                logger.warning("Redis error during reset, ignoring: %s", exc)

        with self._lock:
            self._local_state.pop(key, None)

    def close(self) -> None:
        """Close Redis connection."""
        if self._redis:
            self._redis.close()


login_rate_limiter = RateLimiter(
    RateLimitConfig(
        max_requests=settings.login_rate_limit,
        window_seconds=settings.login_rate_window_seconds,
        block_seconds=settings.login_block_seconds,
    ),
    namespace="rl_login",
)
