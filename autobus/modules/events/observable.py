"""
BusObservable - 绑定频道与总线

调用方不必在每次订阅/发布时重复频道名:

    location_changes = BusObservable("location", bus)
    location_changes.subscribe(listener)
    location_changes.emit_persistent(Location(latitude=40.4, longitude=-3.7))
"""

from typing import Generic, Optional, TypeVar

from autobus.modules.events.errors import NilBusError
from autobus.modules.events.event_bus import Bus
from autobus.modules.events.listener import BusListener
from autobus.modules.events.registry import validate_channel

T = TypeVar("T")


class BusObservable(Generic[T]):
    """由一条总线和一个固定频道定义的可观察对象"""

    def __init__(self, channel: str, bus: Bus):
        """
        Args:
            channel: 订阅和发布使用的频道
            bus: 订阅和发布发生的总线

        Raises:
            InvalidChannelError: 频道为 None 或空字符串（先于 bus 校验）
            NilBusError: bus 为 None
        """
        self._channel = validate_channel(channel)
        if bus is None:
            raise NilBusError(channel)
        self._bus = bus

    @property
    def channel(self) -> str:
        return self._channel

    @property
    def bus(self) -> Bus:
        return self._bus

    def subscribe(self, listener: BusListener[T]) -> None:
        self._bus.subscribe(self._channel, listener)

    def unsubscribe(self, listener: BusListener[T]) -> None:
        self._bus.unsubscribe(self._channel, listener)

    def emit(self, data: Optional[T] = None) -> None:
        self._bus.emit(self._channel, data)

    def emit_persistent(self, data: Optional[T] = None) -> None:
        self._bus.emit_persistent(self._channel, data)

    def __repr__(self) -> str:
        return f"BusObservable(channel={self._channel!r})"
