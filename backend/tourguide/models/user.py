"""
用户数据模型
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field
from tourguide.models.attraction import Attraction
from tourguide.models.location import Location, VisitedLocation
from tourguide.models.trip import Provider

INT_MAX = 2 ** 31 - 1


class UserPreferences(BaseModel):
    attraction_proximity: int = INT_MAX
    currency: str = "USD"
    lower_price_point: float = 0
    high_price_point: float = INT_MAX
    trip_duration: int = 1
    ticket_quantity: int = 1
    number_of_adults: int = 1
    number_of_children: int = 0


class UserReward(BaseModel):
    visited_location: VisitedLocation
    attraction: Attraction
    reward_points: int = 0

    model_config = ConfigDict(frozen=True)


class UserLocation(BaseModel):
    """用户最近一次的位置"""
    user_id: UUID
    location: Location


class User(BaseModel):
    """
    用户

    visited_locations / user_rewards 只通过用户存储追加，
    追加时整体替换列表（copy-on-write），读取方拿到的快照不会被并发修改。
    """
    user_id: UUID
    user_name: str
    phone_number: str = ""
    email_address: str = ""
    latest_location_timestamp: Optional[datetime] = None
    visited_locations: List[VisitedLocation] = Field(default_factory=list)
    user_rewards: List[UserReward] = Field(default_factory=list)
    user_preferences: UserPreferences = Field(default_factory=UserPreferences)
    trip_deals: List[Provider] = Field(default_factory=list)

    def get_last_visited_location(self) -> Optional[VisitedLocation]:
        visited = self.visited_locations
        return visited[-1] if visited else None

    def has_reward_for(self, attraction_name: str) -> bool:
        return any(r.attraction.attraction_name == attraction_name for r in self.user_rewards)
