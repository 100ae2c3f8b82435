"""
频道注册表

维护 频道名 -> ChannelState 的映射，ChannelState 持有该频道的监听器列表、
最近一次持久事件的数据以及独立的频道锁。

锁约定:
- 映射本身由 _channels_lock 保护，只在查找 / 首次创建频道时持有
- 每个频道有自己的锁，不同频道之间的操作互不阻塞
- 频道锁不可在同一线程内重入，重入会抛出 ReentrantDispatchError
"""

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from autobus.modules.events.errors import InvalidChannelError, ReentrantDispatchError
from autobus.modules.events.listener import BusListener

# 频道尚未发出过持久事件（与"持久事件不携带数据"即 None 区分）
NO_PERSISTENT_EVENT = object()


def validate_channel(channel: Any) -> str:
    """校验频道名，非空字符串原样返回"""
    if not isinstance(channel, str) or not channel:
        raise InvalidChannelError(channel)
    return channel


class ChannelState:
    """单个频道的状态"""

    def __init__(self, name: str):
        self.name = name
        self.listeners: List[BusListener] = []
        self.persistent_data: Any = NO_PERSISTENT_EVENT
        self._lock = threading.Lock()
        self._owner: Optional[int] = None

    def has_persistent_data(self) -> bool:
        return self.persistent_data is not NO_PERSISTENT_EVENT

    def is_held_by_current_thread(self) -> bool:
        # 只有持锁线程会把自己的 ident 写入 _owner，因此无需加锁读取
        return self._owner == threading.get_ident()

    @contextmanager
    def locked(self) -> Iterator["ChannelState"]:
        """
        进入频道临界区

        Raises:
            ReentrantDispatchError: 当前线程已持有该频道锁
        """
        if self.is_held_by_current_thread():
            raise ReentrantDispatchError(self.name)
        with self._lock:
            self._owner = threading.get_ident()
            try:
                yield self
            finally:
                self._owner = None


class ChannelRegistry:
    """线程安全的频道注册表，频道在首次订阅或首次发布时惰性创建，永不删除"""

    def __init__(self):
        self._channels: Dict[str, ChannelState] = {}
        self._channels_lock = threading.Lock()

    def get(self, channel: str) -> ChannelState:
        """
        获取频道状态，不存在时创建

        Raises:
            InvalidChannelError: 频道为 None、空字符串或不是字符串
        """
        validate_channel(channel)
        with self._channels_lock:
            state = self._channels.get(channel)
            if state is None:
                state = ChannelState(channel)
                self._channels[channel] = state
            return state

    def listeners_for(self, channel: str) -> List[BusListener]:
        """获取（必要时创建）频道的监听器列表，返回的是注册表持有的列表本身"""
        return self.get(channel).listeners

    def find(self, channel: str) -> Optional[ChannelState]:
        """查找频道状态，不创建"""
        validate_channel(channel)
        with self._channels_lock:
            return self._channels.get(channel)

    def list_channels(self) -> List[str]:
        with self._channels_lock:
            return list(self._channels.keys())
