"""
TourGuide 服务
对外提供用户、位置、奖励、附近景点和旅行报价相关的操作，
位置追踪委托给追踪协调器，周期性追踪由后台追踪器完成。
"""
import logging
from typing import List, Optional, Sequence
from tourguide.core.config import settings
from tourguide.models import (
    NearbyAttraction,
    Provider,
    User,
    UserLocation,
    UserPreferences,
    UserReward,
    VisitedLocation,
)
from tourguide.utils.geo import get_distance

logger = logging.getLogger(__name__)


class TourGuideService:
    def __init__(
        self,
        gps_service,
        rewards_service,
        user_service,
        trip_service,
        coordinator,
        tracker,
        nearby_attractions_limit: int = None,
    ):
        self.gps_service = gps_service
        self.rewards_service = rewards_service
        self.user_service = user_service
        self.trip_service = trip_service
        self.coordinator = coordinator
        self.tracker = tracker
        self.nearby_attractions_limit = (
            nearby_attractions_limit if nearby_attractions_limit is not None else settings.NEARBY_ATTRACTIONS_LIMIT
        )
        self._closed = False

    def get_user_rewards(self, user_name: str) -> Optional[List[UserReward]]:
        user = self.get_user(user_name)
        if user is None:
            logger.debug("get_user_rewards: user not found with name %s", user_name)
            return None
        return list(user.user_rewards)

    def get_user_location(self, user_name: str) -> Optional[VisitedLocation]:
        """有位置记录时返回最近一次位置，否则实时获取"""
        user = self.get_user(user_name)
        if user is None:
            logger.debug("get_user_location: user not found with name %s", user_name)
            return None
        last = user.get_last_visited_location()
        if last is not None:
            return last
        return self.track_user_location(user)

    def get_user(self, user_name: str) -> Optional[User]:
        return self.user_service.get_user_by_username(user_name)

    def get_all_users(self) -> List[User]:
        return self.user_service.get_all_users()

    def add_user(self, user: User):
        self.user_service.add_user(user)

    def update_user_preferences(self, user_name: str, preferences: UserPreferences) -> Optional[User]:
        if self.get_user(user_name) is None:
            logger.debug("update_user_preferences: user not found with name %s", user_name)
            return None
        return self.user_service.update_user_preferences(user_name, preferences)

    def get_trip_deals(self, user_name: str) -> Optional[List[Provider]]:
        user = self.get_user(user_name)
        if user is None:
            logger.debug("get_trip_deals: user not found with name %s", user_name)
            return None
        providers = self.trip_service.get_trip_deals(user)
        self.user_service.set_trip_deals(user_name, providers)
        return providers

    def track_user_location(self, user: User) -> VisitedLocation:
        return self.coordinator.track_one(user)

    def track_all_user_locations(self, users: Sequence[User] = None):
        self.coordinator.track_all(self._users_or_all(users))

    def track_all_user_locations_and_process(self, users: Sequence[User] = None):
        self.coordinator.track_all_and_process(self._users_or_all(users))

    def calculate_rewards(self, users: Sequence[User] = None):
        self.coordinator.calculate_rewards_bulk(self._users_or_all(users))

    def get_all_current_locations(self) -> List[UserLocation]:
        return self.user_service.get_all_current_locations()

    def get_nearby_attractions(self, visited_location: VisitedLocation) -> List[NearbyAttraction]:
        """
        离给定位置最近的景点（默认 5 个，景点不足时全部返回）。
        按 (距离, 名称, ID) 排序，距离相同的景点不会被合并。
        """
        origin = visited_location.location
        ranked = sorted(
            ((get_distance(a.location, origin), a) for a in self.gps_service.get_attractions()),
            key=lambda item: (item[0], item[1].attraction_name, str(item[1].attraction_id)),
        )
        nearest = ranked[:self.nearby_attractions_limit]
        if len(nearest) < self.nearby_attractions_limit:
            logger.debug("get_nearby_attractions: catalog has fewer than %d attractions", self.nearby_attractions_limit)

        return [
            NearbyAttraction(
                attraction_name=attraction.attraction_name,
                attraction_latitude=attraction.location.latitude,
                attraction_longitude=attraction.location.longitude,
                user_latitude=origin.latitude,
                user_longitude=origin.longitude,
                distance=distance,
                reward_points=self.rewards_service.get_reward_value(attraction, visited_location.user_id),
            )
            for distance, attraction in nearest
        ]

    def shutdown(self):
        """停止后台追踪并释放线程池，进程结束时调用一次"""
        if self._closed:
            return
        self._closed = True
        self.tracker.stop_tracking()
        self.coordinator.shutdown()
        self.gps_service.close()

    def _users_or_all(self, users: Optional[Sequence[User]]) -> Sequence[User]:
        return self.get_all_users() if users is None else users
