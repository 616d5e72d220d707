# order_api/services/rate_limit_service.py
import time
import uuid

import redis
from redis.exceptions import RedisError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from order_api.utils.settings import REDIS_URL, RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS
from order_api.utils.logging import get_logger

logger = get_logger(__name__)

#LUA przesuwane okno na sorted secie, atomowo
#usuń stare wpisy, policz, dodaj nowy tylko jeśli jest miejsce
_SLIDING_WINDOW_LUA = """
local now = tonumber(ARGV[1])
local window = tonumber(ARGV[2])
redis.call('ZREMRANGEBYSCORE', KEYS[1], 0, now - window)
if redis.call('ZCARD', KEYS[1]) >= tonumber(ARGV[3]) then
    return 0
end
redis.call('ZADD', KEYS[1], now, ARGV[4])
redis.call('PEXPIRE', KEYS[1], window)
return 1
"""


#limiter siedzi na ścieżce każdego requestu, więc krótkie czekanie
def limiter_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_exception_type(RedisError),
    )


class RateLimitService:
    """
    -limit requestów per IP w przesuwanym oknie
    -stan w redisie wspólny dla wszystkich workerów
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
    ):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.max_requests = max_requests
        self.window_ms = window_seconds * 1000

    @limiter_retry()
    def _hit(self, key: str) -> bool:
        now_ms = int(time.time() * 1000)
        res = self.redis.eval(
            _SLIDING_WINDOW_LUA,
            1,
            key,
            now_ms,
            self.window_ms,
            self.max_requests,
            f"{now_ms}:{uuid.uuid4().hex}",
        )
        return bool(res)

    def allow(self, client_ip: str) -> bool:
        key = f"ratelimit:{client_ip}"
        try:
            return self._hit(key)
        except RedisError as e:
            # redis niedostępny po retry - przepuszczamy request
            logger.warning(f"Rate limiter unavailable for {client_ip}: {e}")
            return True
