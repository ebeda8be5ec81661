"""
后台位置追踪器
服务启动时开启，按固定间隔为所有用户执行一次位置追踪，直到收到停止信号。
"""
import logging
import threading
import time
from tourguide.core.config import settings

logger = logging.getLogger(__name__)


class Tracker:
    def __init__(self, coordinator, user_service, polling_interval_seconds: float = None):
        self.coordinator = coordinator
        self.user_service = user_service
        self.polling_interval = (
            polling_interval_seconds
            if polling_interval_seconds is not None
            else settings.TRACKING_POLLING_INTERVAL_SECONDS
        )
        self._stop_event = threading.Event()
        self._thread = None
        self._lock = threading.Lock()

    def start_tracking(self):
        with self._lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self.run, name="tracker", daemon=True)
            self._thread.start()
        logger.info("Tracker started, polling every %ss", self.polling_interval)

    def stop_tracking(self, timeout: float = None):
        """停止追踪：不再开始新的轮次，已提交的单用户任务不取消"""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("Tracker stopped")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self):
        # wait 在收到停止信号时立即返回 True
        while not self._stop_event.wait(self.polling_interval):
            try:
                self.track_once()
            except Exception as e:
                # 本轮失败（如用户存储暂时不可用）不结束循环，等待下一轮
                logger.error("Tracker round failed: %s", e)

    def track_once(self):
        users = self.user_service.get_all_users()
        logger.debug("Begin tracker. Tracking %d users.", len(users))
        started = time.monotonic()
        for user in users:
            if self._stop_event.is_set():
                logger.debug("Tracker stop requested, skipping remaining users")
                return
            try:
                self.coordinator.track_one(user)
            except Exception as e:
                logger.error("Tracker: failed to track %s: %s", user.user_name, e)
        logger.debug("Tracker time elapsed: %.2f seconds.", time.monotonic() - started)
