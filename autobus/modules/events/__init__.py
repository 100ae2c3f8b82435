"""
autobus 事件系统模块

包含 Bus 事件总线、监听器契约、预处理器和 BusObservable。
"""

from .errors import (
    BusError,
    DuplicateSubscriptionError,
    InvalidChannelError,
    NilBusError,
    NilListenerError,
    NotSubscribedError,
    ReentrantDispatchError,
)
from .event_bus import Bus
from .listener import ANY_DATA, AnyDataListener, BusListener, CallbackListener, Preprocessor
from .observable import BusObservable
from .payloads import BasePayload
from .preprocessors import EventLoopPreprocessor, ExecutorPreprocessor
from .registry import ChannelRegistry

__all__ = [
    "ANY_DATA",
    "AnyDataListener",
    "BasePayload",
    "Bus",
    "BusError",
    "BusListener",
    "BusObservable",
    "CallbackListener",
    "ChannelRegistry",
    "DuplicateSubscriptionError",
    "EventLoopPreprocessor",
    "ExecutorPreprocessor",
    "InvalidChannelError",
    "NilBusError",
    "NilListenerError",
    "NotSubscribedError",
    "Preprocessor",
    "ReentrantDispatchError",
]
