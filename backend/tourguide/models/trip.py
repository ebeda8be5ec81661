"""
旅行报价数据模型
"""
from uuid import UUID
from pydantic import BaseModel, ConfigDict


class Provider(BaseModel):
    name: str
    price: float
    trip_id: UUID

    model_config = ConfigDict(frozen=True)
