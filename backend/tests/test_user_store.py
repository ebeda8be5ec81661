import threading
from datetime import datetime
from unittest.mock import MagicMock
import pytest
from tourguide.core.exceptions import UserNotFoundError
from tourguide.models import Location, User, UserReward, VisitedLocation
from tourguide.services.user_store import MemoryUserStore, RedisUserStore, make_user_store
from tests.conftest import make_user
from tests.fakes import make_attraction


def _visited(user, latitude=1.0):
    return VisitedLocation(
        user_id=user.user_id,
        location=Location(latitude=latitude, longitude=2.0),
        time_visited=datetime.now(),
    )


def test_make_user_store():
    assert isinstance(make_user_store(""), MemoryUserStore)
    assert isinstance(make_user_store(None), MemoryUserStore)
    assert isinstance(make_user_store("redis://localhost:6379/0"), RedisUserStore)


def test_memory_store_ignores_duplicate_add():
    store = MemoryUserStore()
    first = make_user("jon")
    store.add(first)
    store.add(make_user("jon"))

    assert store.get("jon") is first
    assert len(store.list_all()) == 1


def test_memory_store_unknown_user_on_append():
    store = MemoryUserStore()
    with pytest.raises(UserNotFoundError):
        store.append_visited_location("ghost", _visited(make_user("ghost")))


def test_memory_store_concurrent_appends():
    store = MemoryUserStore()
    users = [make_user(f"u{i}") for i in range(10)]
    for user in users:
        store.add(user)

    def _append(user):
        for i in range(50):
            store.append_visited_location(user.user_name, _visited(user, latitude=i))

    threads = [threading.Thread(target=_append, args=(u,)) for u in users for _ in range(2)]
    for t in threads:
        t.start()
    # 追加进行中读取全量快照不会出错
    while any(t.is_alive() for t in threads):
        for user in store.list_all():
            list(user.visited_locations)
    for t in threads:
        t.join()

    assert all(len(u.visited_locations) == 100 for u in store.list_all())


def test_memory_store_reward_dedup_under_contention():
    store = MemoryUserStore()
    user = make_user()
    store.add(user)
    attraction = make_attraction("A", 0, 0)
    reward = UserReward(visited_location=_visited(user), attraction=attraction, reward_points=10)
    results = []
    barrier = threading.Barrier(16)

    def _add():
        barrier.wait()
        results.append(store.append_reward(user.user_name, reward))

    threads = [threading.Thread(target=_add) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert len(store.get(user.user_name).user_rewards) == 1


def _redis_store(stored_user: User = None):
    store = RedisUserStore("redis://localhost:6379/0")
    client = MagicMock()
    client.get.return_value = stored_user.model_dump_json() if stored_user else None
    store._client = client
    return store, client


def test_redis_store_add_registers_user():
    store, client = _redis_store()
    client.set.return_value = True
    user = make_user("jon")

    store.add(user)

    client.set.assert_called_once_with("user:jon", user.model_dump_json(), nx=True)
    client.sadd.assert_called_once_with("users", "jon")


def test_redis_store_append_visited_location_under_lock():
    user = make_user("jon")
    store, client = _redis_store(user)
    visited_location = _visited(user)

    updated = store.append_visited_location("jon", visited_location)

    client.lock.assert_called_once()
    assert client.lock.call_args.args[0] == "user-lock:jon"
    key, raw = client.set.call_args.args
    assert key == "user:jon"
    assert User.model_validate_json(raw).visited_locations == [visited_location]
    assert updated.visited_locations == [visited_location]


def test_redis_store_skips_duplicate_reward():
    user = make_user("jon")
    attraction = make_attraction("A", 0, 0)
    reward = UserReward(visited_location=_visited(user), attraction=attraction, reward_points=5)
    user.user_rewards = [reward]
    store, client = _redis_store(user)

    assert store.append_reward("jon", reward) is False
    client.set.assert_not_called()


def test_redis_store_unknown_user():
    store, _ = _redis_store()
    assert store.get("ghost") is None
    with pytest.raises(UserNotFoundError):
        store.append_visited_location("ghost", _visited(make_user("ghost")))
