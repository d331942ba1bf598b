import pytest
from unittest.mock import MagicMock, patch
from nottoday.settings import settings
from nottoday.store.depth_repo import load_depth_state, save_depth_state
from nottoday.store.kv import MemoryStore, RedisStore, get_store
from nottoday.store.models import DepthState


def _store(depth=None, pull=None):
    data = {}
    if depth is not None:
        data[settings.DEPTH_KEY] = depth
    if pull is not None:
        data[settings.PULL_COUNT_KEY] = pull
    return MemoryStore(data)


def test_load_valid_state():
    assert load_depth_state(_store("2", "14")) == DepthState(depth=2, pullCount=14)


@pytest.mark.parametrize("depth,pull", [
    (None, None),
    ("1", None),
    (None, "7"),
    ("", "7"),
])
def test_missing_keys_yield_defaults(depth, pull):
    assert load_depth_state(_store(depth, pull)) == DepthState()


@pytest.mark.parametrize("depth,pull", [
    ("abc", "3"),
    ("1", "NaN"),
    ("1.5", "3"),
    ("4", "30"),
    ("-1", "3"),
    ("1", "-2"),
])
def test_corrupt_values_yield_defaults(depth, pull):
    assert load_depth_state(_store(depth, pull)) == DepthState()


@patch("nottoday.store.depth_repo.log")
def test_corrupt_value_is_logged(mock_log):
    load_depth_state(_store("x", "1"))
    mock_log.assert_called_once()
    assert mock_log.call_args.kwargs["event"] == "depth_state_corrupt"


def test_unreachable_store_yields_defaults():
    store = MagicMock()
    store.get.side_effect = ConnectionError("refused")
    assert load_depth_state(store) == DepthState()


def test_save_writes_decimal_strings_together():
    store = MagicMock()
    assert save_depth_state(store, DepthState(depth=3, pullCount=21)) is True
    store.set_many.assert_called_once_with({
        settings.DEPTH_KEY: "3",
        settings.PULL_COUNT_KEY: "21",
    })


@patch("nottoday.store.depth_repo.log")
def test_save_failure_is_swallowed_and_logged(mock_log):
    store = MagicMock()
    store.set_many.side_effect = ConnectionError("refused")
    assert save_depth_state(store, DepthState(depth=1, pullCount=5)) is False
    assert mock_log.call_args.kwargs["event"] == "depth_state_save_failed"


def test_memory_round_trip():
    store = MemoryStore()
    save_depth_state(store, DepthState(depth=2, pullCount=13))
    assert load_depth_state(store) == DepthState(depth=2, pullCount=13)


def test_redis_store_uses_mset():
    r = MagicMock()
    r.get.return_value = "2"
    store = RedisStore(r)
    assert store.get("k") == "2"
    store.set_many({"a": "1", "b": "2"})
    r.mset.assert_called_once_with({"a": "1", "b": "2"})


def test_get_store_memory_backend():
    with patch.object(settings, "STORE_BACKEND", "memory"):
        assert isinstance(get_store(), MemoryStore)


@patch("nottoday.store.redis_conn.get_redis")
def test_get_store_redis_backend(mock_get_redis):
    with patch.object(settings, "STORE_BACKEND", "redis"):
        store = get_store()
    assert isinstance(store, RedisStore)
    mock_get_redis.assert_called_once()
