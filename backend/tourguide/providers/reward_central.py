"""
奖励积分服务模拟
"""
import random
from uuid import UUID
from tourguide.providers._latency import simulate_latency


class RewardCentral:
    def __init__(self, max_latency_ms: int = 0):
        self.max_latency_ms = max_latency_ms

    def get_attraction_reward_points(self, attraction_id: UUID, user_id: UUID) -> int:
        simulate_latency(self.max_latency_ms)
        return random.randint(1, 1000)
