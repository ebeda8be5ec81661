import uuid
from datetime import datetime
from unittest.mock import MagicMock
import pytest
from tourguide.core.exceptions import ProviderUnavailableError
from tourguide.providers.remote_gps import RemoteGpsUtil
from tourguide.services.gps_service import GpsService
from tests.fakes import StaticGpsUtil, make_attraction


def test_attraction_catalog_is_cached():
    gps_util = StaticGpsUtil([make_attraction("A", 1, 1), make_attraction("B", 2, 2)])
    gps_service = GpsService(gps_util)

    assert len(gps_service.get_attractions()) == 2
    assert len(gps_service.get_attractions()) == 2
    assert gps_util.catalog_calls == 1


def test_location_failure_becomes_provider_error():
    gps_util = StaticGpsUtil([])
    user_id = uuid.uuid4()
    gps_util.failing.add(user_id)

    with pytest.raises(ProviderUnavailableError) as exc_info:
        GpsService(gps_util).get_user_location(user_id)
    assert exc_info.value.provider == "gps"


def test_remote_gps_util_passes_timeout():
    user_id = uuid.uuid4()
    session = MagicMock()
    session.get.return_value.json.return_value = {
        "user_id": str(user_id),
        "location": {"latitude": 10.5, "longitude": -20.25},
        "time_visited": datetime(2024, 5, 1, 12, 0).isoformat(),
    }
    gps_util = RemoteGpsUtil("http://gps.local/", timeout=3, session=session)

    visited_location = gps_util.get_user_location(user_id)

    session.get.assert_called_once_with(f"http://gps.local/users/{user_id}/location", timeout=3)
    assert visited_location.user_id == user_id
    assert visited_location.location.latitude == 10.5


def test_remote_gps_http_error_becomes_provider_error():
    session = MagicMock()
    session.get.return_value.raise_for_status.side_effect = RuntimeError("503 Service Unavailable")
    gps_service = GpsService(RemoteGpsUtil("http://gps.local", session=session))

    with pytest.raises(ProviderUnavailableError):
        gps_service.get_attractions()
