"""
奖励计算服务

用户的每条位置记录与每个景点逐一比对，距离在阈值内且该景点尚未奖励过时，
向奖励积分服务查询积分并追加奖励。去重由用户存储在单用户锁内完成，
同一用户的多次并发计算不会产生重复奖励。
"""
import logging
from uuid import UUID
from tourguide.core.config import settings
from tourguide.core.exceptions import ProviderUnavailableError
from tourguide.models import Attraction, Location, User, UserReward, VisitedLocation
from tourguide.utils.geo import get_distance

logger = logging.getLogger(__name__)


class RewardsService:
    def __init__(
        self,
        gps_service,
        reward_central,
        user_service,
        proximity_buffer: float = None,
        attraction_proximity_range: float = None,
    ):
        self.gps_service = gps_service
        self.reward_central = reward_central
        self.user_service = user_service
        self.default_proximity_buffer = (
            proximity_buffer if proximity_buffer is not None else settings.DEFAULT_PROXIMITY_BUFFER_MILES
        )
        self.proximity_buffer = self.default_proximity_buffer
        self.attraction_proximity_range = (
            attraction_proximity_range
            if attraction_proximity_range is not None
            else settings.ATTRACTION_PROXIMITY_RANGE_MILES
        )

    def set_proximity_buffer(self, proximity_buffer: float):
        self.proximity_buffer = proximity_buffer

    def set_default_proximity_buffer(self):
        self.proximity_buffer = self.default_proximity_buffer

    def calculate_rewards(self, user: User):
        """为用户计算新获得的景点奖励"""
        # 以存储中的最新数据为准，调用方持有的可能是旧快照
        current = self.user_service.get_user_by_username(user.user_name) or user
        visited_locations = list(current.visited_locations)
        rewarded = {r.attraction.attraction_name for r in current.user_rewards}

        for attraction in self.gps_service.get_attractions():
            if attraction.attraction_name in rewarded:
                continue
            for visited_location in visited_locations:
                if self.near_attraction(visited_location, attraction):
                    reward = UserReward(
                        visited_location=visited_location,
                        attraction=attraction,
                        reward_points=self.get_reward_value(attraction, current.user_id),
                    )
                    self.user_service.add_user_reward(current.user_name, reward)
                    break

    def is_within_attraction_proximity(self, attraction: Attraction, location: Location) -> bool:
        return get_distance(attraction.location, location) <= self.attraction_proximity_range

    def near_attraction(self, visited_location: VisitedLocation, attraction: Attraction) -> bool:
        return get_distance(attraction.location, visited_location.location) <= self.proximity_buffer

    def get_reward_value(self, attraction: Attraction, user_id: UUID) -> int:
        try:
            return self.reward_central.get_attraction_reward_points(attraction.attraction_id, user_id)
        except Exception as e:
            raise ProviderUnavailableError(
                "rewards", f"reward points unavailable for {attraction.attraction_name}: {e}"
            ) from e
