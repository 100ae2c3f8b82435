"""
autobus - 进程内按频道发布/订阅的事件总线
"""

from autobus.modules.di import BusContext, create_bus_context
from autobus.modules.events import (
    ANY_DATA,
    AnyDataListener,
    BasePayload,
    Bus,
    BusError,
    BusListener,
    BusObservable,
    CallbackListener,
    DuplicateSubscriptionError,
    EventLoopPreprocessor,
    ExecutorPreprocessor,
    InvalidChannelError,
    NilBusError,
    NilListenerError,
    NotSubscribedError,
    Preprocessor,
    ReentrantDispatchError,
)

__version__ = "0.1.0"

__all__ = [
    "ANY_DATA",
    "AnyDataListener",
    "BasePayload",
    "Bus",
    "BusContext",
    "BusError",
    "BusListener",
    "BusObservable",
    "CallbackListener",
    "DuplicateSubscriptionError",
    "EventLoopPreprocessor",
    "ExecutorPreprocessor",
    "InvalidChannelError",
    "NilBusError",
    "NilListenerError",
    "NotSubscribedError",
    "Preprocessor",
    "ReentrantDispatchError",
    "create_bus_context",
]
