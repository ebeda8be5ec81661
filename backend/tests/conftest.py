import uuid
import pytest
from tourguide.core.bootstrap import build_tour_guide_service
from tourguide.core.config import Settings
from tourguide.models import User
from tourguide.providers import GpsUtil
from tests.fakes import CountingRewardCentral


def make_settings(**overrides) -> Settings:
    values = dict(
        TEST_MODE=False,
        INTERNAL_USER_NUMBER=0,
        TRACKING_POOL_SIZE=8,
        REWARDS_POOL_SIZE=8,
        REWARDS_BULK_TIMEOUT_SECONDS=30,
        TRACKING_POLLING_INTERVAL_SECONDS=300,
        PROVIDER_LATENCY_MS=0,
        GPS_SERVICE_URL="",
        REDIS_URL="",
    )
    values.update(overrides)
    return Settings(**values)


def make_user(user_name: str = "jon") -> User:
    return User(
        user_id=uuid.uuid4(),
        user_name=user_name,
        phone_number="000",
        email_address=f"{user_name}@tourGuide.com",
    )


@pytest.fixture
def gps_util():
    return GpsUtil()


@pytest.fixture
def reward_central():
    return CountingRewardCentral()


@pytest.fixture
def service_factory():
    """构建 TourGuideService（默认不启动后台追踪器），测试结束时统一关闭"""
    created = []

    def _build(**kwargs):
        settings_overrides = kwargs.pop("settings", {})
        kwargs.setdefault("start_tracker", False)
        service = build_tour_guide_service(make_settings(**settings_overrides), **kwargs)
        created.append(service)
        return service

    yield _build
    for service in created:
        service.shutdown()
