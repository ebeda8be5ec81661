"""
景点数据模型
"""
from uuid import UUID
from pydantic import BaseModel, ConfigDict
from tourguide.models.location import Location


class Attraction(BaseModel):
    attraction_name: str
    city: str
    state: str
    attraction_id: UUID
    location: Location

    model_config = ConfigDict(frozen=True)


class NearbyAttraction(BaseModel):
    """附近景点（按距离计算的投影，不持久化）"""
    attraction_name: str
    attraction_latitude: float
    attraction_longitude: float
    user_latitude: float
    user_longitude: float
    distance: float  # 英里
    reward_points: int
