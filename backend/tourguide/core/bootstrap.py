"""
服务装配：创建外部服务适配器、线程池和后台追踪器，并管理它们的生命周期。
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from tourguide.core.config import Settings, settings as default_settings
from tourguide.providers import GpsUtil, RewardCentral, TripPricer
from tourguide.providers.remote_gps import RemoteGpsUtil
from tourguide.services.gps_service import GpsService
from tourguide.services.internal_users import initialize_internal_users
from tourguide.services.rewards_service import RewardsService
from tourguide.services.tour_guide_service import TourGuideService
from tourguide.services.tracker import Tracker
from tourguide.services.tracking_coordinator import TrackingCoordinator
from tourguide.services.trip_service import TripService
from tourguide.services.user_service import UserService
from tourguide.services.user_store import MemoryUserStore, make_user_store

logger = logging.getLogger(__name__)


def make_gps_util(settings: Settings):
    """配置 GPS_SERVICE_URL 时使用远程定位服务，否则使用本地模拟"""
    if settings.GPS_SERVICE_URL.strip():
        return RemoteGpsUtil(settings.GPS_SERVICE_URL.strip(), timeout=settings.PROVIDER_TIMEOUT_SECONDS)
    return GpsUtil(max_latency_ms=settings.PROVIDER_LATENCY_MS)


def build_tour_guide_service(
    settings: Settings = None,
    gps_util=None,
    reward_central=None,
    trip_pricer=None,
    user_store=None,
    internal_user_number: int = None,
    start_tracker: bool = True,
) -> TourGuideService:
    settings = settings or default_settings

    gps_service = GpsService(gps_util or make_gps_util(settings))
    store = user_store if user_store is not None else make_user_store(settings.REDIS_URL)
    logger.info("User store: %s", "memory" if isinstance(store, MemoryUserStore) else "redis")
    user_service = UserService(store)
    rewards_service = RewardsService(
        gps_service,
        reward_central or RewardCentral(max_latency_ms=settings.PROVIDER_LATENCY_MS),
        user_service,
        proximity_buffer=settings.DEFAULT_PROXIMITY_BUFFER_MILES,
        attraction_proximity_range=settings.ATTRACTION_PROXIMITY_RANGE_MILES,
    )
    trip_service = TripService(
        trip_pricer or TripPricer(max_latency_ms=settings.PROVIDER_LATENCY_MS),
        settings.TRIP_PRICER_API_KEY,
    )

    if settings.TEST_MODE:
        logger.info("TestMode enabled")
        count = settings.INTERNAL_USER_NUMBER if internal_user_number is None else internal_user_number
        logger.debug("Initializing users")
        initialize_internal_users(user_service, count)
        logger.debug("Finished initializing users")

    executor = ThreadPoolExecutor(
        max_workers=settings.TRACKING_POOL_SIZE,
        thread_name_prefix="tracking",
    )
    coordinator = TrackingCoordinator(
        gps_service,
        user_service,
        rewards_service,
        executor,
        rewards_pool_size=settings.REWARDS_POOL_SIZE,
        rewards_timeout_seconds=settings.REWARDS_BULK_TIMEOUT_SECONDS,
    )
    tracker = Tracker(
        coordinator,
        user_service,
        polling_interval_seconds=settings.TRACKING_POLLING_INTERVAL_SECONDS,
    )
    service = TourGuideService(
        gps_service,
        rewards_service,
        user_service,
        trip_service,
        coordinator,
        tracker,
        nearby_attractions_limit=settings.NEARBY_ATTRACTIONS_LIMIT,
    )
    if start_tracker:
        tracker.start_tracking()
    return service
