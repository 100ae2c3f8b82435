"""
事件总线

核心功能:
- 按频道发布/订阅，频道之间完全独立
- 类型过滤：只把运行时类型完全相同的数据投递给类型化监听器，
  ANY_DATA 监听器接受任何数据（包括 None）
- 持久事件：每个频道缓存最近一次持久事件，新订阅者在 subscribe 返回前收到它
- 预处理器：监听器带有预处理器时，由预处理器决定如何/是否通知监听器
- 诊断日志开关

使用示例:
    bus = Bus()
    bus.subscribe("location", CallbackListener(on_location, Location))
    bus.emit_persistent("location", Location(latitude=40.4, longitude=-3.7))

线程模型:
    同一频道上的 subscribe / unsubscribe / emit 串行执行，频道锁在整个通知
    循环期间持有；不同频道互不阻塞。监听器回调中在同一线程对正在分发的频道
    再次调用这些方法会抛出 ReentrantDispatchError。

    监听器抛出的异常不会被捕获，会直接传播给 emit 的调用者，
    本轮分发中排在其后的监听器不会再被通知。
"""

from typing import Any, Callable, Iterable, List

from autobus.modules.events.errors import (
    DuplicateSubscriptionError,
    NilListenerError,
    NotSubscribedError,
)
from autobus.modules.events.listener import BusListener
from autobus.modules.events.payloads import BasePayload
from autobus.modules.events.registry import ChannelRegistry
from autobus.modules.logging import get_logger


class Bus:
    """
    事件总线

    通常每个应用只创建一个实例，通过构造参数显式传递给需要它的组件。
    """

    def __init__(self, logging_enabled: bool = True):
        """
        初始化事件总线

        Args:
            logging_enabled: 是否输出诊断日志（默认开启）
        """
        self._registry = ChannelRegistry()
        self._logging_enabled = logging_enabled
        self.logger = get_logger("Bus")

    # ==================== 日志 ====================

    def is_logging_enabled(self) -> bool:
        return self._logging_enabled

    def set_logging_enabled(self, enabled: bool) -> None:
        """开启或关闭诊断日志，不影响分发行为"""
        self._logging_enabled = bool(enabled)

    def _trace(self, level: str, build: Callable[[], str]) -> None:
        """日志关闭时不会调用 build，消息只在确实输出时才格式化"""
        if self._logging_enabled:
            self.logger.opt(lazy=True).log(level, "{}", build)

    @staticmethod
    def _describe_data(data: Any) -> str:
        if data is None:
            return "None"
        if isinstance(data, BasePayload):
            return str(data)
        return type(data).__qualname__

    # ==================== 订阅 ====================

    def subscribe(self, channel: str, listener: BusListener) -> None:
        """
        订阅频道

        如果该频道已有持久事件，会在返回前把它投递给该监听器（同样经过类型过滤和预处理器）。

        Args:
            channel: 频道名
            listener: 监听器

        Raises:
            NilListenerError: listener 为 None
            InvalidChannelError: 频道为 None 或空字符串
            DuplicateSubscriptionError: 监听器已订阅该频道
            ReentrantDispatchError: 在该频道的分发回调中调用
        """
        if listener is None:
            raise NilListenerError(channel)
        state = self._registry.get(channel)

        with state.locked():
            if any(existing is listener for existing in state.listeners):
                raise DuplicateSubscriptionError(channel)

            state.listeners.append(listener)
            self._trace("INFO", lambda: f"监听器订阅频道: {channel} ({listener.describe_expectation()})")

            if state.has_persistent_data():
                self._dispatch(channel, state.persistent_data, [listener])

    def unsubscribe(self, channel: str, listener: BusListener) -> None:
        """
        取消订阅

        Raises:
            NilListenerError: listener 为 None
            InvalidChannelError: 频道为 None 或空字符串
            NotSubscribedError: 监听器未订阅该频道
            ReentrantDispatchError: 在该频道的分发回调中调用
        """
        if listener is None:
            raise NilListenerError(channel)
        state = self._registry.get(channel)

        with state.locked():
            for i, existing in enumerate(state.listeners):
                if existing is listener:
                    del state.listeners[i]
                    break
            else:
                raise NotSubscribedError(channel)

            self._trace("INFO", lambda: f"监听器取消订阅频道: {channel} ({listener.describe_expectation()})")

    # ==================== 发布 ====================

    def emit(self, channel: str, data: Any = None) -> None:
        """
        发布事件

        Args:
            channel: 频道名
            data: 事件数据，None 表示不携带数据（只有 ANY_DATA 监听器会收到）
        """
        self._emit(channel, data, persistent=False)

    def emit_persistent(self, channel: str, data: Any = None) -> None:
        """
        发布持久事件

        数据会缓存为该频道的最新持久事件，之后订阅的监听器在订阅时立即收到，
        直到被下一次持久事件覆盖。
        """
        self._emit(channel, data, persistent=True)

    def _emit(self, channel: str, data: Any, persistent: bool) -> None:
        state = self._registry.get(channel)
        self._trace(
            "INFO",
            lambda: f"[{channel}] 发布{'持久' if persistent else ''}事件: {self._describe_data(data)}",
        )

        with state.locked():
            if persistent:
                state.persistent_data = data
            if not state.listeners:
                self._trace("DEBUG", lambda: f"频道 {channel} 没有监听器")
                return
            # 按加锁时刻的监听器快照分发
            self._dispatch(channel, data, list(state.listeners))

    def _dispatch(self, channel: str, data: Any, listeners: Iterable[BusListener]) -> None:
        """在频道锁内逐个通知监听器，按订阅顺序"""
        for listener in listeners:
            if not listener.accepts(data):
                self._trace(
                    "INFO",
                    lambda: f"[{channel}] 跳过监听器，期望 {listener.describe_expectation()}，"
                    f"收到: {self._describe_data(data)}",
                )
                continue

            if listener.has_preprocessor():
                listener.preprocessor(listener, data)
                self._trace("INFO", lambda: f"[{channel}] 已通知监听器的预处理器 ({listener.describe_expectation()})")
            else:
                listener.notify_event(data)
                self._trace("INFO", lambda: f"[{channel}] 已通知监听器 ({listener.describe_expectation()})")

    # ==================== 查询 ====================

    def get_listeners(self, channel: str) -> List[BusListener]:
        """
        获取频道的监听器列表副本（按订阅顺序）

        Raises:
            InvalidChannelError: 频道为 None 或空字符串
        """
        state = self._registry.get(channel)
        with state.locked():
            return list(state.listeners)

    def get_listeners_count(self, channel: str) -> int:
        """获取频道的监听器数量，未知频道返回 0"""
        state = self._registry.find(channel)
        if state is None:
            return 0
        with state.locked():
            return len(state.listeners)

    def has_persistent_event(self, channel: str) -> bool:
        """频道是否已发出过持久事件（包括不携带数据的持久事件）"""
        state = self._registry.find(channel)
        if state is None:
            return False
        with state.locked():
            return state.has_persistent_data()

    def list_channels(self) -> List[str]:
        """列出所有已创建的频道"""
        return self._registry.list_channels()
