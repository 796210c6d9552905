"""
Hybrid in-memory + Redis rate limiting utilities
Counters live in process memory and are mirrored to Redis periodically when it is configured
"""

import logging
import time
from threading import Lock
from typing import Optional

import redis
from fastapi import HTTPException, Request

from .config import Settings

logger = logging.getLogger(__name__)

# Configuration
MEMORY_CACHE_SYNC_INTERVAL = 10  # Sync to Redis every 10 seconds
MEMORY_CACHE_CLEANUP_INTERVAL = 60  # Clean up expired entries every 60 seconds


def connect_redis(redis_url: str) -> Optional[redis.Redis]:
    """Connect to Redis; returns None (memory-only limiting) when the server is unreachable"""
    if "@" in redis_url:
        url_parts = redis_url.split("@")
        protocol = url_parts[0].split(":")[0]
        masked_url = f"{protocol}:****@{url_parts[1]}"
    else:
        masked_url = "****"
    logger.info(f"📡 Using Redis URL connection: {masked_url}")

    try:
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
            max_connections=20,
        )
        client.ping()
        logger.info("✅ Redis connected successfully via URL")
        return client
    except redis.RedisError as e:
        logger.error(f"❌ Failed to connect to Redis via URL: {e}")
        logger.warning("⚠️ Rate limiting falls back to in-memory counters for this process")
        return None


class HybridRateLimiter:
    """Fixed-window counters kept in memory, mirrored to Redis every few seconds"""

    def __init__(self, redis_client: Optional[redis.Redis] = None):
        self.redis_client = redis_client
        # Format: {key: {'count': int, 'reset_time': int, 'last_redis_sync': int}}
        self.memory_cache: dict[str, dict] = {}
        self.cache_lock = Lock()
        self.last_cleanup_time = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "HybridRateLimiter":
        client = connect_redis(settings.redis_url) if settings.redis_url else None
        return cls(client)

    def cleanup_expired_cache(self, current_time: int) -> None:
        """Remove expired entries from memory cache"""
        if current_time - self.last_cleanup_time < MEMORY_CACHE_CLEANUP_INTERVAL:
            return

        expired_keys = [
            k for k, v in self.memory_cache.items() if current_time >= v.get("reset_time", 0)
        ]
        for k in expired_keys:
            del self.memory_cache[k]

        if expired_keys:
            logger.debug(f"🧹 Cleaned up {len(expired_keys)} expired rate limit entries")

        self.last_cleanup_time = current_time

    def _load_entry(self, key: str, window_seconds: int, current_time: int) -> dict:
        entry = {
            "count": 0,
            "reset_time": current_time + window_seconds,
            "last_redis_sync": current_time,
        }
        if self.redis_client is None:
            return entry

        try:
            redis_count = self.redis_client.get(key)
            redis_ttl = self.redis_client.ttl(key)
            if redis_count and redis_ttl > 0:
                entry["count"] = int(redis_count)
                entry["reset_time"] = current_time + redis_ttl
        except redis.RedisError as e:
            logger.warning(f"⚠️ Failed to load from Redis, using memory only: {e}")
        return entry

    def _sync(self, key: str, entry: dict, window_seconds: int, current_time: int) -> None:
        if self.redis_client is None:
            return
        if current_time - entry.get("last_redis_sync", 0) < MEMORY_CACHE_SYNC_INTERVAL:
            return

        try:
            self.redis_client.set(key, entry["count"], ex=window_seconds)
            entry["last_redis_sync"] = current_time
            logger.debug(f"📡 Synced {key} to Redis: {entry['count']}")
        except redis.RedisError as e:
            logger.warning(f"⚠️ Failed to sync to Redis: {e}")

    def check(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int, int]:
        """
        Count one request against key.

        Returns:
            Tuple of (is_allowed, current_count, ttl_seconds)
        """
        current_time = int(time.time())

        with self.cache_lock:
            self.cleanup_expired_cache(current_time)

            if key not in self.memory_cache:
                self.memory_cache[key] = self._load_entry(key, window_seconds, current_time)
            cache_entry = self.memory_cache[key]

            # Window expired
            if current_time >= cache_entry["reset_time"]:
                cache_entry["count"] = 0
                cache_entry["reset_time"] = current_time + window_seconds
                cache_entry["last_redis_sync"] = 0

            is_allowed = cache_entry["count"] < limit
            if is_allowed:
                cache_entry["count"] += 1

            self._sync(key, cache_entry, window_seconds, current_time)

            ttl = cache_entry["reset_time"] - current_time
            return is_allowed, cache_entry["count"], max(0, ttl)

    def reset(self) -> None:
        with self.cache_lock:
            self.memory_cache.clear()


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a per-IP rate limiter dependency with specific parameters

    Example usage:
        reset_rate_limit = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="password_reset")

        @router.post("/reset-password")
        async def reset_password(data: ResetPasswordRequest, _: None = Depends(reset_rate_limit)):
            ...
    """

    async def rate_limiter(request: Request) -> None:
        limiter: Optional[HybridRateLimiter] = request.app.state.rate_limiter
        if limiter is None:
            return

        key = f"{key_prefix}:{get_client_ip(request)}"
        is_allowed, current_count, ttl = limiter.check(key, limit, window_seconds)

        if not is_allowed:
            logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
            raise HTTPException(
                status_code=429,
                detail="Zbyt wiele prób. Spróbuj ponownie później.",
                headers={"Retry-After": str(ttl)},
            )

        request.state.rate_limit_remaining = limit - current_count

    return rate_limiter


# Shared limits for the credential endpoints
login_rate_limit = create_rate_limiter(limit=10, window_seconds=60, key_prefix="login")
admin_login_rate_limit = create_rate_limiter(limit=10, window_seconds=60, key_prefix="admin_login")
validate_key_rate_limit = create_rate_limiter(limit=10, window_seconds=60, key_prefix="validate_key")
password_reset_rate_limit = create_rate_limiter(
    limit=5, window_seconds=3600, key_prefix="password_reset"
)
