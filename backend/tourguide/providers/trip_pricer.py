"""
旅行报价服务模拟
"""
import random
import uuid
from typing import List
from tourguide.models import Provider
from tourguide.providers._latency import simulate_latency

PROVIDER_NAMES = (
    "Holiday Travels",
    "Enterprize Ventures Limited",
    "Sunny Days",
    "FlyAway Trips",
    "United Partners Vacations",
    "Dream Trips",
    "Live Free",
    "Dancing Waves Cruselines and Partners",
    "AdventureCo",
    "Cure-Your-Blues",
)

DEALS_PER_QUOTE = 5


class TripPricer:
    def __init__(self, max_latency_ms: int = 0):
        self.max_latency_ms = max_latency_ms

    def get_price(
        self,
        api_key: str,
        user_id: uuid.UUID,
        adults: int,
        children: int,
        nights_stay: int,
        rewards_points: int,
    ) -> List[Provider]:
        """返回若干家供应商的报价，奖励积分直接抵扣价格"""
        if not api_key:
            raise ValueError("api_key is required")
        simulate_latency(self.max_latency_ms)

        providers = []
        for name in random.sample(PROVIDER_NAMES, DEALS_PER_QUOTE):
            multiple = random.randint(100, 700)
            children_discount = children / 3
            price = multiple * adults + multiple * children_discount * nights_stay + 0.99 - rewards_points
            providers.append(Provider(name=name, price=max(price, 0.0), trip_id=uuid.uuid4()))
        return providers
