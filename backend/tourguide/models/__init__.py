"""
数据模型
"""
from tourguide.models.location import Location, VisitedLocation
from tourguide.models.attraction import Attraction, NearbyAttraction
from tourguide.models.trip import Provider
from tourguide.models.user import User, UserLocation, UserPreferences, UserReward

__all__ = [
    "Location",
    "VisitedLocation",
    "Attraction",
    "NearbyAttraction",
    "Provider",
    "User",
    "UserLocation",
    "UserPreferences",
    "UserReward",
]
