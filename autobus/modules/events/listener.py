"""
监听器与预处理器

BusListener 绑定一个期望的数据类型（或 ANY_DATA），事件总线只会把运行时类型
与之完全相同的数据交给它：子类实例不会匹配父类监听器。

使用示例:
    class LocationListener(BusListener[Location]):
        def __init__(self):
            super().__init__(Location)

        def notify_event(self, data: Location) -> None:
            print(data.latitude, data.longitude)

    bus.subscribe("location", LocationListener())

    # 不想写子类时使用 CallbackListener
    bus.subscribe("location", CallbackListener(on_location, Location))
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class _AnyData:
    """ANY_DATA 哨兵类型"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY_DATA"

    def __reduce__(self):
        return (_AnyData, ())


# 表示"接受任何数据，包括没有数据(None)"
ANY_DATA = _AnyData()


class Preprocessor(ABC):
    """
    预处理器基类

    在监听器被直接通知之前拦截通知。预处理器负责自行调用
    listener.notify_event(data)，可以调用零次、一次或多次，
    例如把通知转发到主线程或线程池执行。

    任何签名为 (listener, data) -> None 的可调用对象都可以作为预处理器使用，
    继承本类只是为了获得清晰的类型标注。
    """

    @abstractmethod
    def __call__(self, listener: "BusListener", data: Any) -> None:
        ...


PreprocessorType = Union[Preprocessor, Callable[["BusListener", Any], None]]


class BusListener(ABC, Generic[T]):
    """
    订阅频道并期望特定数据类型的监听器

    监听器以对象身份区分（不重写 __eq__ / __hash__），
    期望类型在构造后不可修改。
    """

    def __init__(self, expected_data_class: Any, preprocessor: Optional[PreprocessorType] = None):
        """
        Args:
            expected_data_class: 期望的数据类型，或 ANY_DATA 表示接受任何数据
            preprocessor: 可选的预处理器，拦截每一次通知

        Raises:
            TypeError: expected_data_class 既不是类也不是 ANY_DATA，或 preprocessor 不可调用
        """
        if expected_data_class is not ANY_DATA and not isinstance(expected_data_class, type):
            raise TypeError(f"expected_data_class 必须是类或 ANY_DATA，收到: {expected_data_class!r}")
        if preprocessor is not None and not callable(preprocessor):
            raise TypeError(f"preprocessor 必须是可调用对象，收到: {type(preprocessor).__name__}")
        self._expected_data_class = expected_data_class
        self._preprocessor = preprocessor

    @property
    def expected_data_class(self) -> Any:
        return self._expected_data_class

    @property
    def preprocessor(self) -> Optional[PreprocessorType]:
        return self._preprocessor

    def has_preprocessor(self) -> bool:
        return self._preprocessor is not None

    def accepts_any_data(self) -> bool:
        return self._expected_data_class is ANY_DATA

    def accepts(self, data: Any) -> bool:
        """
        判断数据是否应投递给该监听器

        规则：ANY_DATA 监听器接受一切（包括 None）；
        类型化监听器只接受运行时类型与期望类型完全相同的非 None 数据。
        """
        if self.accepts_any_data():
            return True
        if data is None:
            return False
        return type(data) is self._expected_data_class

    def describe_expectation(self) -> str:
        """用于诊断日志的期望类型描述"""
        if self.accepts_any_data():
            return "any data"
        return f"data: {self._expected_data_class.__qualname__}"

    @abstractmethod
    def notify_event(self, data: T) -> None:
        """频道上发出匹配的事件时调用"""


class AnyDataListener(BusListener[Any]):
    """接受任何数据（包括 None）的监听器"""

    def __init__(self, preprocessor: Optional[PreprocessorType] = None):
        super().__init__(ANY_DATA, preprocessor)

    @abstractmethod
    def notify_event(self, data: Any) -> None:
        """data 可能为 None，表示事件不携带数据"""


class CallbackListener(BusListener[T]):
    """把普通函数包装为监听器"""

    def __init__(
        self,
        callback: Callable[[T], None],
        expected_data_class: Any = ANY_DATA,
        preprocessor: Optional[PreprocessorType] = None,
    ):
        if not callable(callback):
            raise TypeError(f"callback 必须是可调用对象，收到: {type(callback).__name__}")
        super().__init__(expected_data_class, preprocessor)
        self.callback = callback

    def notify_event(self, data: T) -> None:
        self.callback(data)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"CallbackListener({name}, {self.describe_expectation()})"
