from fastapi.testclient import TestClient
import main


def test_health_reports_tracker_and_users(monkeypatch):
    monkeypatch.setattr(main.settings, "TEST_MODE", True)
    monkeypatch.setattr(main.settings, "INTERNAL_USER_NUMBER", 3)

    with TestClient(main.app) as client:
        response = client.get("/health")
        service = main.app.state.tour_guide_service

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "tracker_running": True, "users": 3}
    # 退出 lifespan 后追踪器和线程池已释放
    assert not service.tracker.is_running
    assert service.coordinator.is_shutdown


def test_root():
    with TestClient(main.app) as client:
        assert client.get("/").json()["message"] == "TourGuide API"
