"""
用户存储抽象：内存 / Redis 可选。
配置 REDIS_URL 时使用 Redis，多进程与重启后用户数据不丢失；未配置则使用内存。

所有追加操作在单个用户的互斥锁内完成，奖励的"检查后追加"因此不会重复。
"""
import logging
import threading
from typing import Callable, Dict, List, Optional
import redis
from tourguide.core.exceptions import UserNotFoundError
from tourguide.models import Provider, User, UserPreferences, UserReward, VisitedLocation

logger = logging.getLogger(__name__)


def _append_visited_location(user: User, visited_location: VisitedLocation) -> bool:
    user.visited_locations = [*user.visited_locations, visited_location]
    user.latest_location_timestamp = visited_location.time_visited
    return True


class MemoryUserStore:
    """内存用户存储（默认）。"""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._user_locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def _locked_user(self, user_name: str):
        with self._lock:
            user = self._users.get(user_name)
            if user is None:
                raise UserNotFoundError(user_name)
            return user, self._user_locks[user_name]

    def get(self, user_name: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_name)

    def list_all(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def add(self, user: User) -> None:
        with self._lock:
            if user.user_name in self._users:
                logger.warning("User %s already exists, ignoring add", user.user_name)
                return
            self._users[user.user_name] = user
            self._user_locks[user.user_name] = threading.Lock()

    def append_visited_location(self, user_name: str, visited_location: VisitedLocation) -> User:
        user, lock = self._locked_user(user_name)
        with lock:
            _append_visited_location(user, visited_location)
            return user

    def append_reward(self, user_name: str, reward: UserReward) -> bool:
        user, lock = self._locked_user(user_name)
        with lock:
            if user.has_reward_for(reward.attraction.attraction_name):
                return False
            user.user_rewards = [*user.user_rewards, reward]
            return True

    def set_trip_deals(self, user_name: str, providers: List[Provider]) -> User:
        user, lock = self._locked_user(user_name)
        with lock:
            user.trip_deals = list(providers)
            return user

    def set_preferences(self, user_name: str, preferences: UserPreferences) -> User:
        user, lock = self._locked_user(user_name)
        with lock:
            user.user_preferences = preferences
            return user


class RedisUserStore:
    """Redis 用户存储（配置 REDIS_URL 时使用）。"""

    USER_INDEX_KEY = "users"

    def __init__(self, redis_url: str, lock_timeout_seconds: float = 10):
        self._redis_url = redis_url
        self._lock_timeout = lock_timeout_seconds
        self._client = None

    def _get_client(self):
        if self._client is None:
            try:
                self._client = redis.from_url(
                    self._redis_url,
                    decode_responses=True,
                )
            except Exception as e:
                logger.error("Redis connection failed: %s", e)
                raise
        return self._client

    def _key(self, user_name: str) -> str:
        return f"user:{user_name}"

    def _lock(self, user_name: str):
        return self._get_client().lock(
            f"user-lock:{user_name}",
            timeout=self._lock_timeout,
            blocking_timeout=self._lock_timeout,
        )

    def _update(self, user_name: str, mutate: Callable[[User], bool]) -> User:
        """在用户锁内读取、修改并写回；mutate 返回 False 时不写回"""
        client = self._get_client()
        with self._lock(user_name):
            raw = client.get(self._key(user_name))
            if not raw:
                raise UserNotFoundError(user_name)
            user = User.model_validate_json(raw)
            if mutate(user) is not False:
                client.set(self._key(user_name), user.model_dump_json())
            return user

    def get(self, user_name: str) -> Optional[User]:
        raw = self._get_client().get(self._key(user_name))
        if not raw:
            return None
        return User.model_validate_json(raw)

    def list_all(self) -> List[User]:
        client = self._get_client()
        names = sorted(client.smembers(self.USER_INDEX_KEY))
        if not names:
            return []
        raws = client.mget([self._key(name) for name in names])
        return [User.model_validate_json(raw) for raw in raws if raw]

    def add(self, user: User) -> None:
        client = self._get_client()
        if not client.set(self._key(user.user_name), user.model_dump_json(), nx=True):
            logger.warning("User %s already exists, ignoring add", user.user_name)
            return
        client.sadd(self.USER_INDEX_KEY, user.user_name)

    def append_visited_location(self, user_name: str, visited_location: VisitedLocation) -> User:
        return self._update(user_name, lambda user: _append_visited_location(user, visited_location))

    def append_reward(self, user_name: str, reward: UserReward) -> bool:
        added = []

        def _mutate(user: User) -> bool:
            if user.has_reward_for(reward.attraction.attraction_name):
                return False
            user.user_rewards = [*user.user_rewards, reward]
            added.append(reward)
            return True

        self._update(user_name, _mutate)
        return bool(added)

    def set_trip_deals(self, user_name: str, providers: List[Provider]) -> User:
        def _mutate(user: User) -> bool:
            user.trip_deals = list(providers)
            return True

        return self._update(user_name, _mutate)

    def set_preferences(self, user_name: str, preferences: UserPreferences) -> User:
        def _mutate(user: User) -> bool:
            user.user_preferences = preferences
            return True

        return self._update(user_name, _mutate)


def make_user_store(redis_url: Optional[str]):
    """根据配置返回内存或 Redis 存储。"""
    if not redis_url or not redis_url.strip():
        return MemoryUserStore()
    return RedisUserStore(redis_url.strip())
