"""
用户管理服务
委托给内存或 Redis 用户存储，供追踪协调器与奖励引擎使用。
"""
import logging
from typing import List, Optional
from tourguide.models import (
    Provider,
    User,
    UserLocation,
    UserPreferences,
    UserReward,
    VisitedLocation,
)
from tourguide.services.user_store import MemoryUserStore

logger = logging.getLogger(__name__)


class UserService:
    """用户管理服务（委托给内存或 Redis 存储）"""

    def __init__(self, store=None):
        self._store = store if store is not None else MemoryUserStore()

    def get_user_by_username(self, user_name: str) -> Optional[User]:
        return self._store.get(user_name)

    def get_all_users(self) -> List[User]:
        return self._store.list_all()

    def add_user(self, user: User):
        self._store.add(user)

    def add_to_visited_locations(self, visited_location: VisitedLocation, user_name: str) -> User:
        """追加位置记录，返回更新后的用户，便于后续计算奖励"""
        return self._store.append_visited_location(user_name, visited_location)

    def add_user_reward(self, user_name: str, reward: UserReward) -> bool:
        """追加奖励；该景点已有奖励时不追加并返回 False"""
        added = self._store.append_reward(user_name, reward)
        if not added:
            logger.debug(
                "Reward for %s already granted to %s, skipped",
                reward.attraction.attraction_name, user_name,
            )
        return added

    def set_trip_deals(self, user_name: str, providers: List[Provider]) -> User:
        return self._store.set_trip_deals(user_name, providers)

    def update_user_preferences(self, user_name: str, preferences: UserPreferences) -> User:
        return self._store.set_preferences(user_name, preferences)

    def get_all_current_locations(self) -> List[UserLocation]:
        """所有用户最近一次的位置（没有位置记录的用户不返回）"""
        locations = []
        for user in self._store.list_all():
            last = user.get_last_visited_location()
            if last is not None:
                locations.append(UserLocation(user_id=user.user_id, location=last.location))
        return locations
