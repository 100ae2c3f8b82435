"""依赖注入模块"""

from .context import BusContext, create_bus_context

__all__ = ["BusContext", "create_bus_context"]
