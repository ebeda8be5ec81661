"""
旅行报价服务
"""
import logging
from typing import List
from tourguide.core.exceptions import ProviderUnavailableError
from tourguide.models import Provider, User

logger = logging.getLogger(__name__)


class TripService:
    def __init__(self, trip_pricer, api_key: str):
        self.trip_pricer = trip_pricer
        self.api_key = api_key

    def get_trip_deals(self, user: User) -> List[Provider]:
        """按用户偏好报价，累计奖励积分用于抵扣"""
        cumulative_reward_points = sum(r.reward_points for r in user.user_rewards)
        preferences = user.user_preferences
        try:
            providers = self.trip_pricer.get_price(
                self.api_key,
                user.user_id,
                preferences.number_of_adults,
                preferences.number_of_children,
                preferences.trip_duration,
                cumulative_reward_points,
            )
        except Exception as e:
            raise ProviderUnavailableError("trip-pricer", f"quote failed for {user.user_name}: {e}") from e
        logger.debug("Quoted %d trip deals for %s", len(providers), user.user_name)
        return providers
