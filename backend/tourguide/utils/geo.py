"""
地理距离计算：球面余弦定理，结果为英里
"""
import math
from tourguide.models.location import Location

STATUTE_MILES_PER_NAUTICAL_MILE = 1.15077945


def get_distance(loc1: Location, loc2: Location) -> float:
    """两点间的大圆距离（英里）"""
    if loc1.latitude == loc2.latitude and loc1.longitude == loc2.longitude:
        return 0.0
    lat1 = math.radians(loc1.latitude)
    lon1 = math.radians(loc1.longitude)
    lat2 = math.radians(loc2.latitude)
    lon2 = math.radians(loc2.longitude)

    cos_angle = (math.sin(lat1) * math.sin(lat2)
                 + math.cos(lat1) * math.cos(lat2) * math.cos(lon1 - lon2))
    # 浮点误差可能使结果略大于 1
    angle = math.acos(max(-1.0, min(1.0, cos_angle)))

    nautical_miles = 60 * math.degrees(angle)
    return STATUTE_MILES_PER_NAUTICAL_MILE * nautical_miles
