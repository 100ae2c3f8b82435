"""
事件 Payload 基类

事件数据可以是任意对象；继承 BasePayload 的 Pydantic 模型会在
事件总线的诊断日志中得到简洁易读的字符串表示。
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict


class BasePayload(BaseModel):
    """
    事件 Payload 基类

    默认不可变：持久事件会被缓存并重放给之后的订阅者，
    可变的 payload 会让后来者看到被修改过的数据。

    子类通过覆盖 _debug_fields() 自定义日志中显示的字段。
    """

    model_config = ConfigDict(frozen=True)

    def _debug_fields(self) -> List[str]:
        """返回需要在日志中显示的字段名列表，顺序即显示顺序"""
        return list(self.__class__.model_fields.keys())

    @staticmethod
    def _format_field_value(value: Any) -> str:
        if isinstance(value, str):
            # 限制字符串长度
            if len(value) > 50:
                return f'"{value[:47]}..."'
            return f'"{value}"'
        return str(value)

    def __str__(self) -> str:
        fields = ", ".join(
            f"{name}={self._format_field_value(getattr(self, name))}"
            for name in self._debug_fields()
            if hasattr(self, name)
        )
        return f"{self.__class__.__name__}({fields})"
