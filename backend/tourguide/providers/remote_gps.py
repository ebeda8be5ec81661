"""
远程定位服务客户端（配置 GPS_SERVICE_URL 时使用）
"""
import logging
from typing import List, Optional
from uuid import UUID
import requests
from tourguide.models import Attraction, VisitedLocation

logger = logging.getLogger(__name__)


class RemoteGpsUtil:
    """通过 HTTP 调用独立部署的定位服务"""

    def __init__(self, base_url: str, timeout: float = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _get(self, path: str):
        response = self._session.get(f"{self.base_url}{path}", timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_attractions(self) -> List[Attraction]:
        data = self._get("/attractions")
        logger.info("Loaded %d attractions from %s", len(data), self.base_url)
        return [Attraction.model_validate(item) for item in data]

    def get_user_location(self, user_id: UUID) -> VisitedLocation:
        return VisitedLocation.model_validate(self._get(f"/users/{user_id}/location"))

    def close(self):
        self._session.close()
