"""
位置追踪协调器

每个用户一个任务，在有界线程池中执行：获取位置 -> 追加位置记录 -> 计算奖励，
单个任务内部严格按顺序执行，不同用户之间无顺序保证。
批量操作等待全部任务结束，单个用户的失败只记录日志，不影响其他用户，也不向调用方抛出。
"""
import logging
import threading
import time
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor, wait
from functools import partial
from typing import Callable, List, Sequence, Tuple
from tourguide.core.config import settings
from tourguide.models import User, VisitedLocation

logger = logging.getLogger(__name__)


class TrackingCoordinator:
    """位置追踪协调器，持有追踪线程池（由外部创建并注入）"""

    def __init__(
        self,
        gps_service,
        user_service,
        rewards_service,
        executor: ThreadPoolExecutor,
        rewards_pool_size: int = None,
        rewards_timeout_seconds: float = None,
    ):
        self.gps_service = gps_service
        self.user_service = user_service
        self.rewards_service = rewards_service
        self._executor = executor
        self.rewards_pool_size = (
            rewards_pool_size if rewards_pool_size is not None else settings.REWARDS_POOL_SIZE
        )
        self.rewards_timeout_seconds = (
            rewards_timeout_seconds
            if rewards_timeout_seconds is not None
            else settings.REWARDS_BULK_TIMEOUT_SECONDS
        )
        self._shutdown = False
        self._shutdown_lock = threading.Lock()

    def track_one(self, user: User) -> VisitedLocation:
        """
        同步获取用户当前位置并立即返回；
        追加位置记录和计算奖励在线程池中异步完成，不等待其结束。
        """
        visited_location = self.gps_service.get_user_location(user.user_id)
        future = self._executor.submit(self._record_and_reward, user, visited_location)
        future.add_done_callback(partial(self._log_background_failure, user.user_name))
        return visited_location

    def track_all(self, users: Sequence[User]):
        """获取所有用户的位置并追加到位置记录，等待全部完成（不计算奖励）"""
        self._run_batch("track_all", self._track, users)

    def track_all_and_process(self, users: Sequence[User]):
        """获取所有用户的位置、追加位置记录并计算奖励，等待全部完成"""
        self._run_batch("track_all_and_process", self._track_and_process, users)

    def calculate_rewards_bulk(self, users: Sequence[User]):
        """
        使用独立的大线程池为所有用户计算奖励。
        线程池随本次调用创建和销毁；超时后直接返回，未完成的任务被放弃。
        """
        if not users:
            return
        started = time.monotonic()
        executor = ThreadPoolExecutor(
            max_workers=self.rewards_pool_size,
            thread_name_prefix="rewards-bulk",
        )
        try:
            futures = [
                (user.user_name, executor.submit(self.rewards_service.calculate_rewards, user))
                for user in users
            ]
            done, not_done = wait([f for _, f in futures], timeout=self.rewards_timeout_seconds)
        finally:
            # 不等待运行中的任务，排队中的任务直接取消
            executor.shutdown(wait=False, cancel_futures=True)

        if not_done:
            logger.warning(
                "calculate_rewards_bulk: timed out after %.0fs, %d of %d task(s) abandoned",
                self.rewards_timeout_seconds, len(not_done), len(futures),
            )
        failed = sum(
            1 for user_name, future in futures
            if future in done and not self._collect("calculate_rewards_bulk", user_name, future)
        )
        logger.debug(
            "calculate_rewards_bulk: %d user(s) in %.2fs, %d failed",
            len(futures), time.monotonic() - started, failed,
        )

    def shutdown(self, wait: bool = True):
        """释放追踪线程池，可重复调用"""
        with self._shutdown_lock:
            if self._shutdown:
                return
            self._shutdown = True
        logger.info("Shutting down tracking executor")
        self._executor.shutdown(wait=wait, cancel_futures=True)

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    def _track(self, user: User) -> User:
        visited_location = self.gps_service.get_user_location(user.user_id)
        return self.user_service.add_to_visited_locations(visited_location, user.user_name)

    def _track_and_process(self, user: User):
        updated = self._track(user)
        self.rewards_service.calculate_rewards(updated)

    def _record_and_reward(self, user: User, visited_location: VisitedLocation):
        updated = self.user_service.add_to_visited_locations(visited_location, user.user_name)
        self.rewards_service.calculate_rewards(updated)

    def _run_batch(self, name: str, task: Callable[[User], object], users: Sequence[User]):
        if not users:
            return
        if self._shutdown:
            logger.warning("%s: tracking executor is shut down, %d user(s) skipped", name, len(users))
            return
        started = time.monotonic()
        logger.debug("%s: creating futures for %d user(s)", name, len(users))
        futures: List[Tuple[str, Future]] = [
            (user.user_name, self._executor.submit(task, user)) for user in users
        ]
        failed = sum(1 for user_name, future in futures if not self._collect(name, user_name, future))
        logger.debug(
            "%s: done, %d user(s) in %.2fs, %d failed",
            name, len(futures), time.monotonic() - started, failed,
        )

    @staticmethod
    def _collect(name: str, user_name: str, future: Future) -> bool:
        """等待单个任务结束，失败只记录日志"""
        try:
            future.result()
            return True
        except CancelledError:
            logger.error("%s: wait interrupted for %s, task was cancelled", name, user_name)
        except Exception as e:
            logger.error("%s: task failed for %s: %s", name, user_name, e)
        return False

    @staticmethod
    def _log_background_failure(user_name: str, future: Future):
        if future.cancelled():
            logger.warning("track_one: background update cancelled for %s", user_name)
            return
        error = future.exception()
        if error is not None:
            logger.error("track_one: background update failed for %s: %s", user_name, error)
