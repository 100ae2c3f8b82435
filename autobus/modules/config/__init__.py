"""
autobus 配置模块
"""

from .schemas import AutobusConfig, BusConfig, LoggingConfig
from .service import ConfigService

__all__ = [
    "AutobusConfig",
    "BusConfig",
    "ConfigService",
    "LoggingConfig",
]
