"""
ChannelRegistry 测试

运行: uv run pytest tests/modules/events/test_registry.py -v
"""

import threading

import pytest

from autobus.modules.events import ChannelRegistry, InvalidChannelError, ReentrantDispatchError
from autobus.modules.events.registry import NO_PERSISTENT_EVENT


@pytest.fixture
def registry() -> ChannelRegistry:
    return ChannelRegistry()


def test_listeners_for_creates_channel(registry: ChannelRegistry):
    """测试首次访问时创建频道"""
    listeners = registry.listeners_for("X")

    assert listeners == []
    assert registry.list_channels() == ["X"]


def test_listeners_for_returns_same_list(registry: ChannelRegistry):
    """测试同一频道返回同一个列表"""
    assert registry.listeners_for("X") is registry.listeners_for("X")
    assert registry.listeners_for("X") is not registry.listeners_for("Y")


@pytest.mark.parametrize("channel", [None, "", b"X"])
def test_invalid_channel(registry: ChannelRegistry, channel):
    """测试非法频道"""
    with pytest.raises(InvalidChannelError):
        registry.listeners_for(channel)


def test_find_does_not_create(registry: ChannelRegistry):
    """测试 find 不创建频道"""
    assert registry.find("X") is None
    assert registry.list_channels() == []


def test_new_channel_has_no_persistent_data(registry: ChannelRegistry):
    """测试新频道没有持久数据，None 与"没有持久事件"不同"""
    state = registry.get("X")
    assert state.persistent_data is NO_PERSISTENT_EVENT
    assert not state.has_persistent_data()

    state.persistent_data = None
    assert state.has_persistent_data()


def test_channel_lock_not_reentrant(registry: ChannelRegistry):
    """测试同线程重入频道锁抛出错误"""
    state = registry.get("X")

    with state.locked():
        assert state.is_held_by_current_thread()
        with pytest.raises(ReentrantDispatchError):
            with state.locked():
                pass

    assert not state.is_held_by_current_thread()


def test_channel_locks_are_independent(registry: ChannelRegistry):
    """测试不同频道的锁互不影响"""
    x = registry.get("X")
    y = registry.get("Y")

    with x.locked():
        with y.locked():
            assert x.is_held_by_current_thread()
            assert y.is_held_by_current_thread()


def test_concurrent_channel_creation(registry: ChannelRegistry):
    """测试并发创建同一频道只得到一个实例"""
    results = []
    barrier = threading.Barrier(10)

    def create():
        barrier.wait(5)
        results.append(registry.get("X"))

    threads = [threading.Thread(target=create) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(5)

    assert len(results) == 10
    assert all(state is results[0] for state in results)
