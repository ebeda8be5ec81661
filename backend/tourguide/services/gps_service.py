"""
定位服务适配器
统一外部定位服务的调用方式，失败时抛出 ProviderUnavailableError。
"""
import logging
import threading
from typing import List, Optional
from uuid import UUID
from tourguide.core.exceptions import ProviderUnavailableError
from tourguide.models import Attraction, VisitedLocation

logger = logging.getLogger(__name__)


class GpsService:
    """定位服务：获取用户当前位置，以及景点目录（进程生命周期内不变，首次获取后缓存）"""

    def __init__(self, gps_util):
        self._gps_util = gps_util
        self._attractions: Optional[List[Attraction]] = None
        self._lock = threading.Lock()

    def get_user_location(self, user_id: UUID) -> VisitedLocation:
        try:
            return self._gps_util.get_user_location(user_id)
        except Exception as e:
            raise ProviderUnavailableError("gps", f"location lookup failed for {user_id}: {e}") from e

    def get_attractions(self) -> List[Attraction]:
        if self._attractions is None:
            with self._lock:
                if self._attractions is None:
                    try:
                        self._attractions = list(self._gps_util.get_attractions())
                    except Exception as e:
                        raise ProviderUnavailableError("gps", f"attraction catalog unavailable: {e}") from e
                    logger.info("Attraction catalog cached: %d attractions", len(self._attractions))
        return list(self._attractions)

    def close(self):
        """释放外部定位服务持有的连接（如 HTTP 会话）"""
        close = getattr(self._gps_util, "close", None)
        if callable(close):
            close()
