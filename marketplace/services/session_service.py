# marketplace/services/session_service.py
import json
import secrets

import redis

from marketplace.utils.retry import redis_retry
from marketplace.utils.settings import REDIS_URL, SESSION_TTL_SECONDS
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class SessionService:
    """
    Server-side sessions kept in Redis.
    The cookie only carries an opaque id; the payload lives under session:<id>
    and expires on its own after the TTL.
    """

    def __init__(self, url: str | None = None, ttl: int = SESSION_TTL_SECONDS):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(session_id: str) -> str:
        return f"session:{session_id}"

    @redis_retry()
    def create(self, data: dict) -> str:
        session_id = secrets.token_urlsafe(32)
        self.redis.set(self._key(session_id), json.dumps(data), ex=self.ttl)
        logger.info(f"Session opened for user {data.get('user_id')}")
        return session_id

    @redis_retry()
    def get(self, session_id: str) -> dict | None:
        raw = self.redis.get(self._key(session_id))
        return json.loads(raw) if raw else None

    @redis_retry()
    def update(self, session_id: str, data: dict) -> bool:
        # keepttl: the session still expires at its original deadline
        return bool(self.redis.set(self._key(session_id), json.dumps(data), xx=True, keepttl=True))

    @redis_retry()
    def destroy(self, session_id: str) -> bool:
        return bool(self.redis.delete(self._key(session_id)))

    def ping(self) -> bool:
        return bool(self.redis.ping())
