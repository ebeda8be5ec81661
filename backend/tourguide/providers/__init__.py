"""
外部服务的本地模拟实现（定位 / 奖励积分 / 旅行报价）
"""
from tourguide.providers.gps_util import GpsUtil
from tourguide.providers.reward_central import RewardCentral
from tourguide.providers.trip_pricer import TripPricer

__all__ = ["GpsUtil", "RewardCentral", "TripPricer"]
