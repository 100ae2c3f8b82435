"""
事件总线错误类型

所有错误都是同步的前置条件失败，属于调用方的编程错误，总线不做任何重试。
"""

from typing import Optional


class BusError(ValueError):
    """事件总线错误基类"""

    def __init__(self, message: str, channel: Optional[str] = None):
        self.channel = channel
        super().__init__(message)


class InvalidChannelError(BusError):
    """频道为 None、空字符串或不是字符串"""

    def __init__(self, channel=None):
        super().__init__("Channel must not be null", channel=channel)


class NilListenerError(BusError):
    """需要监听器的地方传入了 None"""

    def __init__(self, channel: Optional[str] = None):
        super().__init__("Listener must not be null", channel=channel)


class NilBusError(BusError):
    """BusObservable 构造时传入了 None 作为总线"""

    def __init__(self, channel: Optional[str] = None):
        super().__init__("Bus must not be null", channel=channel)


class DuplicateSubscriptionError(BusError):
    """监听器已订阅该频道"""

    def __init__(self, channel: str):
        super().__init__(f"Listener already subscribed to channel: {channel}", channel=channel)


class NotSubscribedError(BusError):
    """取消订阅一个未订阅该频道的监听器"""

    def __init__(self, channel: str):
        super().__init__(f"Trying to unsubscribe non-subscribed listener from channel: {channel}", channel=channel)


class ReentrantDispatchError(BusError, RuntimeError):
    """
    在同一线程中，监听器（或预处理器）回调里对正在分发的频道再次调用
    subscribe / unsubscribe / emit。

    频道锁在整个通知循环期间持有，重入会死锁，因此直接报错。
    """

    def __init__(self, channel: str):
        super().__init__(f"Reentrant call on channel being dispatched: {channel}", channel=channel)
