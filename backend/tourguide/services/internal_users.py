"""
内部测试用户
测试模式下在内存中生成用户及其位置历史，代替外部用户数据。
"""
import logging
import random
import uuid
from datetime import datetime, timedelta
from tourguide.models import Location, User, VisitedLocation
from tourguide.providers.gps_util import LATITUDE_LIMIT

logger = logging.getLogger(__name__)

LOCATION_HISTORY_SIZE = 3


def initialize_internal_users(user_service, count: int):
    for i in range(count):
        user_name = f"internalUser{i}"
        user = User(
            user_id=uuid.uuid4(),
            user_name=user_name,
            phone_number="000",
            email_address=f"{user_name}@tourGuide.com",
        )
        generate_user_location_history(user)
        user_service.add_user(user)
    logger.debug("Created %d internal test users.", count)


def generate_user_location_history(user: User):
    history = [
        VisitedLocation(
            user_id=user.user_id,
            location=Location(latitude=_random_latitude(), longitude=_random_longitude()),
            time_visited=_random_time(),
        )
        for _ in range(LOCATION_HISTORY_SIZE)
    ]
    user.visited_locations = [*user.visited_locations, *history]
    user.latest_location_timestamp = history[-1].time_visited


def _random_longitude() -> float:
    return random.uniform(-180, 180)


def _random_latitude() -> float:
    return random.uniform(-LATITUDE_LIMIT, LATITUDE_LIMIT)


def _random_time() -> datetime:
    return datetime.now() - timedelta(days=random.randrange(30))
