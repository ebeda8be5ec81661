"""
位置数据模型
"""
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict


class Location(BaseModel):
    latitude: float
    longitude: float

    model_config = ConfigDict(frozen=True)


class VisitedLocation(BaseModel):
    """用户在某一时刻的位置记录，创建后不可修改"""
    user_id: UUID
    location: Location
    time_visited: datetime

    model_config = ConfigDict(frozen=True)
